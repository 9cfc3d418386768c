"""Rule that flags functions longer than a configured number of lines."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from ..analysis import clean_code_for_analysis, find_block_end, iter_function_signatures
from ..models import Finding, LocationKind, RuleMetadata, Severity, SourceDocument
from .base import Rule

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINES = 50


class FunctionLengthRule(Rule):
    """Flag function definitions whose body spans more than ``max_lines`` lines.

    The length runs from the line holding the return type to the line holding
    the closing brace, both inclusive.
    """

    def __init__(self, max_lines: int = DEFAULT_MAX_LINES) -> None:
        super().__init__(
            RuleMetadata(
                id="CUBTEK-FUNC-001",
                name="Function Length",
                description="Functions should not exceed the maximum allowed length",
                category="Maintainability",
                default_severity=Severity.WARNING,
            )
        )
        self._default_max_lines = max_lines
        self.max_lines = max_lines

    def configure(self, params: Mapping[str, Any]) -> None:
        value = params.get("maxLines", params.get("max_lines"))
        if value is None:
            self.max_lines = self._default_max_lines
            return
        try:
            max_lines = int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid maxLines for %s: %r", self.id, value)
            self.max_lines = self._default_max_lines
            return
        if max_lines < 1:
            logger.warning("Ignoring non-positive maxLines for %s: %r", self.id, value)
            max_lines = self._default_max_lines
        self.max_lines = max_lines

    def check(self, document: SourceDocument) -> List[Finding]:
        cleaned = clean_code_for_analysis(document.text)
        findings: List[Finding] = []

        for match in iter_function_signatures(cleaned):
            end_offset = find_block_end(cleaned, match.end() - 1)
            if end_offset is None:
                logger.debug(
                    "No closing brace for function %r at offset %d",
                    match.group("name"),
                    match.start(),
                )
                continue

            start_line = document.position_at(match.start()).line
            end_line = document.position_at(end_offset).line
            line_count = end_line - start_line + 1
            if line_count <= self.max_lines:
                continue

            name = match.group("name")
            findings.append(
                self._finding(
                    f'Function "{name}" is {line_count} lines long '
                    f"(maximum allowed is {self.max_lines})",
                    offset=match.start("name"),
                    identifier=name,
                    location_kind=LocationKind.FUNCTION,
                    name=name,
                    lineCount=line_count,
                    maxAllowed=self.max_lines,
                )
            )

        return findings


__all__ = ["DEFAULT_MAX_LINES", "FunctionLengthRule"]
