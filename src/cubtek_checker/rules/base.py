"""Base rule abstraction for the CubTEK checker."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping

from ..models import Finding, LocationKind, RuleMetadata, Severity, SourceDocument


class Rule(ABC):
    """A named check that produces findings for one document.

    ``enabled`` and ``severity`` are written by :class:`RuleRegistry` when
    configuration is applied. :meth:`check` only reads rule state.
    """

    metadata: RuleMetadata

    def __init__(self, metadata: RuleMetadata) -> None:
        self.metadata = metadata
        self.enabled = True
        self.severity: Severity = metadata.default_severity

    @property
    def id(self) -> str:
        return self.metadata.id

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def category(self) -> str:
        return self.metadata.category

    def reset(self) -> None:
        """Restore the compiled-in defaults before configuration is re-applied."""

        self.enabled = True
        self.severity = self.metadata.default_severity
        self.configure({})

    def configure(self, params: Mapping[str, Any]) -> None:
        """Apply rule-specific parameters. Rules without parameters ignore them."""

    @abstractmethod
    def check(self, document: SourceDocument) -> List[Finding]:
        """Analyze ``document`` and return findings for any violations."""

    # ------------------------------------------------------------------
    def _finding(
        self,
        message: str,
        *,
        offset: int,
        identifier: str | None = None,
        location_kind: LocationKind = LocationKind.STATEMENT,
        **data: Any,
    ) -> Finding:
        return Finding(
            rule_id=self.id,
            message=message,
            location_kind=location_kind,
            offset=offset,
            identifier=identifier,
            data=dict(data),
        )

    def __repr__(self) -> str:
        state = "enabled" if self.enabled else "disabled"
        return f"<{type(self).__name__} {self.id} {state} {self.severity.value}>"


__all__ = ["Rule"]
