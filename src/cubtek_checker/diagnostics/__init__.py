"""Diagnostic synthesis, range resolution and ordering."""

from .synthesizer import (
    DiagnosticSynthesizer,
    filter_and_sort,
    find_all_symbol_references,
    find_best_range,
)

__all__ = [
    "DiagnosticSynthesizer",
    "filter_and_sort",
    "find_all_symbol_references",
    "find_best_range",
]
