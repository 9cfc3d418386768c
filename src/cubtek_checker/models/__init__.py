"""Data models shared by rules, adapters and reporting layers."""

from .diagnostic import (
    SEVERITY_RANK,
    Diagnostic,
    DiagnosticSource,
    DiagnosticTag,
    Finding,
    LocationKind,
    Severity,
)
from .document import Position, Range, SourceDocument
from .rule import RuleMetadata

__all__ = [
    "SEVERITY_RANK",
    "Diagnostic",
    "DiagnosticSource",
    "DiagnosticTag",
    "Finding",
    "LocationKind",
    "Position",
    "Range",
    "RuleMetadata",
    "Severity",
    "SourceDocument",
]
