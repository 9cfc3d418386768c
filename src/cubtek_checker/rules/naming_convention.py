"""Rule enforcing CubTEK naming conventions for globals and functions."""

from __future__ import annotations

from typing import List, Set

from ..analysis import (
    clean_code_for_analysis,
    is_camel_case,
    is_pascal_case,
    iter_function_signatures,
    iter_global_declarations,
    iter_line_depths,
)
from ..models import Finding, LocationKind, RuleMetadata, Severity, SourceDocument
from .base import Rule

GLOBAL_PREFIX = "g_"


class NamingConventionRule(Rule):
    """Globals must start with ``g_``; functions must be camelCase or PascalCase."""

    def __init__(self) -> None:
        super().__init__(
            RuleMetadata(
                id="CUBTEK-NAME-001",
                name="Naming Convention",
                description="Variables and functions should follow CubTEK naming conventions",
                category="Style",
                default_severity=Severity.WARNING,
            )
        )

    def check(self, document: SourceDocument) -> List[Finding]:
        cleaned = clean_code_for_analysis(document.text)
        return self._check_globals(cleaned) + self._check_functions(cleaned)

    # ------------------------------------------------------------------
    def _check_globals(self, cleaned: str) -> List[Finding]:
        findings: List[Finding] = []
        seen: Set[int] = set()
        line_offset = 0

        for _, line, depth in iter_line_depths(cleaned):
            line_start = line_offset
            line_offset += len(line) + 1

            if depth > 0 or "(" in line:
                continue
            stripped = line.lstrip()
            if stripped.startswith(("#", "typedef")):
                continue

            for match in iter_global_declarations(line):
                name = match.group("name")
                offset = line_start + match.start("name")
                if offset in seen or name.startswith(GLOBAL_PREFIX):
                    continue
                seen.add(offset)

                findings.append(
                    self._finding(
                        f'Global variable "{name}" should start with "{GLOBAL_PREFIX}" prefix',
                        offset=offset,
                        identifier=name,
                        location_kind=LocationKind.VARIABLE,
                        name=name,
                        expectedPrefix=GLOBAL_PREFIX,
                    )
                )

        return findings

    def _check_functions(self, cleaned: str) -> List[Finding]:
        findings: List[Finding] = []
        seen: Set[int] = set()

        for match in iter_function_signatures(cleaned):
            name = match.group("name")
            offset = match.start("name")
            if offset in seen or is_camel_case(name) or is_pascal_case(name):
                continue
            seen.add(offset)

            findings.append(
                self._finding(
                    f'Function name "{name}" should be camelCase or PascalCase',
                    offset=offset,
                    identifier=name,
                    location_kind=LocationKind.FUNCTION,
                    name=name,
                )
            )

        return findings


__all__ = ["GLOBAL_PREFIX", "NamingConventionRule"]
