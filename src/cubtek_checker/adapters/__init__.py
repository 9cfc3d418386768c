"""Adapters for external static analyzers."""

from .clang_tidy import DEFAULT_TIMEOUT, AnalyzerError, ClangTidyAdapter, ExternalAnalyzerAdapter

__all__ = [
    "DEFAULT_TIMEOUT",
    "AnalyzerError",
    "ClangTidyAdapter",
    "ExternalAnalyzerAdapter",
]
