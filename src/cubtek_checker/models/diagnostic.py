"""Finding and diagnostic models shared across rules, adapters and reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from .document import Range


class Severity(str, Enum):
    """Diagnostic severity levels, most severe first."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"

    @property
    def rank(self) -> int:
        """Ordinal used for filtering and sorting; lower is more severe."""

        return SEVERITY_RANK[self]

    @classmethod
    def parse(cls, value: object) -> Optional["Severity"]:
        """Return the severity named by ``value`` or ``None`` when it is not recognised."""

        if isinstance(value, Severity):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "info":
                return cls.INFORMATION
            try:
                return cls(normalized)
            except ValueError:
                return None
        return None


SEVERITY_RANK = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFORMATION: 2,
    Severity.HINT: 3,
}


class DiagnosticTag(str, Enum):
    """UI hints attached to diagnostics."""

    UNNECESSARY = "unnecessary"
    DEPRECATED = "deprecated"


class DiagnosticSource(str, Enum):
    """Origin of a diagnostic."""

    LOCAL = "CubTEK"
    CLANG_TIDY = "CubTEK (clang-tidy)"


class LocationKind(str, Enum):
    """Kind of code construct a finding points at."""

    FUNCTION = "function"
    VARIABLE = "variable"
    CLASS = "class"
    STATEMENT = "statement"
    PREPROCESSOR = "preprocessor"
    INCLUDE = "include"
    TYPEDEF = "typedef"
    MACRO = "macro"
    PARAMETER = "parameter"
    COMMENT = "comment"
    OTHER = "other"


@dataclass(slots=True)
class Finding:
    """Raw rule output before severity and range resolution.

    A finding is located either by ``offset`` into the document text or by a
    zero-based ``line`` (and optional ``column``). ``identifier`` is the token the
    finding is about; when present it determines the width of the highlight.
    """

    rule_id: str
    message: str
    location_kind: LocationKind = LocationKind.STATEMENT
    offset: Optional[int] = None
    line: Optional[int] = None
    column: Optional[int] = None
    identifier: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Fully resolved, positioned issue ready for display or reporting."""

    range: Range
    message: str
    severity: Severity
    rule_id: str
    source: DiagnosticSource = DiagnosticSource.LOCAL
    tags: FrozenSet[DiagnosticTag] = frozenset()
    data: Dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    @property
    def line(self) -> int:
        return self.range.start.line

    @property
    def is_external(self) -> bool:
        return self.source is DiagnosticSource.CLANG_TIDY
