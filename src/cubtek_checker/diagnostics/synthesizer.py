"""Turn rule findings into positioned, severity-resolved diagnostics."""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, List, Mapping, Sequence

from ..analysis import INCLUDE_DIRECTIVE
from ..models import (
    Diagnostic,
    DiagnosticSource,
    DiagnosticTag,
    Finding,
    LocationKind,
    Range,
    Severity,
    SourceDocument,
)
from ..rules import CheckerConfig, RuleRegistry, default_config

logger = logging.getLogger(__name__)

_FUNCTION_NAME = re.compile(r"\b\w+\s+(\w+)\s*\(")
_VARIABLE_NAME = re.compile(r"\b\w+\s+(\w+)\s*[=;\[\s]")

_UNNECESSARY_TOKENS = ("STYLE", "FORMAT")
_DEPRECATED_TOKENS = ("SECURE", "ROBUST")


class DiagnosticSynthesizer:
    """Resolve severity, highlight range and tags for local rule output."""

    def __init__(
        self,
        registry: RuleRegistry,
        config: CheckerConfig | None = None,
    ) -> None:
        self.registry = registry
        self.config = config or default_config()

    # ------------------------------------------------------------------
    def resolve_severity(
        self,
        rule_id: str,
        project_default: Severity | None = None,
    ) -> Severity:
        """Return the configured rule severity, else the rule's current severity, else the
        project default.

        A registered rule's ``severity`` already carries any override applied by
        :meth:`RuleRegistry.apply_config`, otherwise its metadata default.
        """

        rule_config = self.config.rule_config(rule_id)
        if rule_config is not None and rule_config.severity is not None:
            return rule_config.severity

        rule = self.registry.get_rule_by_id(rule_id)
        if rule is not None:
            return rule.severity

        return project_default if project_default is not None else self.config.severity

    # ------------------------------------------------------------------
    def synthesize(
        self,
        document: SourceDocument,
        span: Range,
        message: str,
        rule_id: str,
        location_kind: LocationKind = LocationKind.STATEMENT,
        data: Mapping[str, Any] | None = None,
    ) -> Diagnostic:
        """Build a local diagnostic for ``rule_id`` covering ``span``."""

        tags = set()
        if any(token in rule_id for token in _UNNECESSARY_TOKENS):
            tags.add(DiagnosticTag.UNNECESSARY)
        if any(token in rule_id for token in _DEPRECATED_TOKENS):
            tags.add(DiagnosticTag.DEPRECATED)

        diagnostic = Diagnostic(
            range=span,
            message=message,
            severity=self.resolve_severity(rule_id),
            rule_id=rule_id,
            source=DiagnosticSource.LOCAL,
            tags=frozenset(tags),
            data={"locationKind": location_kind.value, **(data or {})},
        )

        logger.debug(
            "Created diagnostic for %s: %s at line %d",
            rule_id,
            message,
            span.start.line + 1,
        )
        return diagnostic

    def from_finding(self, document: SourceDocument, finding: Finding) -> Diagnostic:
        """Resolve a raw finding into a diagnostic."""

        return self.synthesize(
            document,
            self._finding_range(document, finding),
            finding.message,
            finding.rule_id,
            finding.location_kind,
            finding.data,
        )

    def _finding_range(self, document: SourceDocument, finding: Finding) -> Range:
        if finding.offset is not None:
            start = document.position_at(finding.offset)
            if finding.identifier:
                return Range(start, start.translate(character_delta=len(finding.identifier)))
            return find_best_range(document, start.line, finding.location_kind)

        line = finding.line if finding.line is not None else 0
        if finding.column is not None and finding.identifier:
            return Range.on_line(line, finding.column, finding.column + len(finding.identifier))
        return find_best_range(document, line, finding.location_kind, finding.identifier)

    # ------------------------------------------------------------------
    def variable_naming_diagnostic(
        self,
        document: SourceDocument,
        name: str,
        span: Range,
        expected_prefix: str,
        rule_id: str,
    ) -> Diagnostic:
        return self.synthesize(
            document,
            span,
            f'Variable "{name}" should use the "{expected_prefix}" prefix',
            rule_id,
            LocationKind.VARIABLE,
        )

    def function_length_diagnostic(
        self,
        document: SourceDocument,
        name: str,
        span: Range,
        line_count: int,
        max_allowed: int,
        rule_id: str,
    ) -> Diagnostic:
        return self.synthesize(
            document,
            span,
            f'Function "{name}" is {line_count} lines long '
            f"(maximum allowed is {max_allowed} lines)",
            rule_id,
            LocationKind.FUNCTION,
            {"lineCount": line_count, "maxAllowed": max_allowed},
        )

    def style_diagnostic(
        self,
        document: SourceDocument,
        span: Range,
        problem: str,
        rule_id: str,
    ) -> Diagnostic:
        return self.synthesize(document, span, problem, rule_id, LocationKind.STATEMENT)


def find_best_range(
    document: SourceDocument,
    line_index: int,
    location_kind: LocationKind,
    identifier_hint: str | None = None,
) -> Range:
    """Pick the span of ``line_index`` that best represents a problem of ``location_kind``.

    An ``identifier_hint`` matched as a whole word wins. Otherwise a
    kind-specific heuristic applies, and the whole line is the fallback.
    """

    try:
        line_text = document.line_text(line_index)
    except IndexError:
        return Range.on_line(max(line_index, 0), 0, 0)

    if identifier_hint:
        match = re.search(rf"\b{re.escape(identifier_hint)}\b", line_text)
        if match:
            return Range.on_line(line_index, match.start(), match.end())

    if location_kind is LocationKind.FUNCTION:
        match = _FUNCTION_NAME.search(line_text)
        if match:
            return Range.on_line(line_index, match.start(1), match.end(1))

    elif location_kind is LocationKind.VARIABLE:
        match = _VARIABLE_NAME.search(line_text)
        if match:
            return Range.on_line(line_index, match.start(1), match.end(1))

    elif location_kind is LocationKind.STATEMENT:
        indent = len(line_text) - len(line_text.lstrip())
        end = len(line_text)
        comment = line_text.find("//")
        if comment > 0:
            end = comment
        return Range.on_line(line_index, indent, max(end, indent))

    elif location_kind is LocationKind.COMMENT:
        comment = line_text.find("//")
        if comment >= 0:
            return Range.on_line(line_index, comment, len(line_text))

    elif location_kind is LocationKind.INCLUDE:
        match = INCLUDE_DIRECTIVE.search(line_text)
        if match:
            return Range.on_line(line_index, match.start(), match.end())

    return document.line_range(line_index)


def find_all_symbol_references(document: SourceDocument, name: str) -> List[Range]:
    """Return the range of every whole-word occurrence of ``name``."""

    pattern = re.compile(rf"\b{re.escape(name)}\b")
    return [
        Range(document.position_at(match.start()), document.position_at(match.end()))
        for match in pattern.finditer(document.text)
    ]


def filter_and_sort(
    diagnostics: Iterable[Diagnostic],
    severity_threshold: Severity | None = None,
    rule_filter: Sequence[str] | None = None,
) -> List[Diagnostic]:
    """Keep diagnostics at or above ``severity_threshold`` whose rule id contains a filter entry.

    The result is ordered by severity (most severe first), then start line.
    Equal keys keep their input order.
    """

    filtered = list(diagnostics)

    if severity_threshold is not None:
        filtered = [d for d in filtered if d.severity.rank <= severity_threshold.rank]

    if rule_filter:
        filtered = [d for d in filtered if any(entry in d.rule_id for entry in rule_filter)]

    return sorted(filtered, key=lambda d: (d.severity.rank, d.range.start.line))


__all__ = [
    "DiagnosticSynthesizer",
    "filter_and_sort",
    "find_all_symbol_references",
    "find_best_range",
]
