"""Orchestration layer that runs the external analyzer and local rules over documents."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from .adapters import AnalyzerError, ExternalAnalyzerAdapter
from .diagnostics import DiagnosticSynthesizer
from .models import Diagnostic, SourceDocument
from .rules import CheckerConfig, RuleRegistry, default_config

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CheckResult:
    """Diagnostics for one document plus any analyzer failure for that run."""

    diagnostics: List[Diagnostic]
    errors: List[str] = field(default_factory=list)
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ProjectCheckResult:
    """Per-document results of a batch check, in processing order."""

    results: Dict[str, CheckResult] = field(default_factory=dict)
    cancelled: bool = False

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return [d for result in self.results.values() for d in result.diagnostics]

    @property
    def errors(self) -> List[str]:
        return [error for result in self.results.values() for error in result.errors]


class CancellationToken:
    """Cooperative cancellation flag checked between documents."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


class CheckService:
    """Run the external analyzer and every enabled rule against documents.

    External and local diagnostics are concatenated without deduplication. A
    failing rule is logged and skipped; a failing analyzer is reported on the
    result while local diagnostics are still returned.
    """

    def __init__(
        self,
        *,
        config: CheckerConfig | None = None,
        registry: RuleRegistry | None = None,
        synthesizer: DiagnosticSynthesizer | None = None,
        analyzer: ExternalAnalyzerAdapter | None = None,
    ) -> None:
        self.config = config or default_config()
        self.registry = registry or RuleRegistry(self.config)
        self.synthesizer = synthesizer or DiagnosticSynthesizer(self.registry, self.config)
        self.analyzer = analyzer

    # ------------------------------------------------------------------
    def reconfigure(self, config: CheckerConfig) -> None:
        """Apply a reloaded configuration to the existing rule instances."""

        self.config = config
        self.synthesizer.config = config
        self.registry.apply_config(config)

    # ------------------------------------------------------------------
    def check_document(self, document: SourceDocument) -> List[Diagnostic]:
        return self.check(document).diagnostics

    def check(self, document: SourceDocument) -> CheckResult:
        """Check one document and return its diagnostics and analyzer errors."""

        if not document.is_supported:
            return CheckResult(diagnostics=[], metadata={"skipped": True})

        diagnostics: List[Diagnostic] = []
        errors: List[str] = []

        if self.analyzer is not None:
            try:
                diagnostics.extend(self.analyzer.analyze(document))
            except AnalyzerError as exc:
                logger.warning("External analyzer failed: %s", exc)
                errors.append(f"Checker error: {exc}")

        diagnostics.extend(self._run_rules(document))

        metadata: dict[str, Any] = {
            "language": document.language_id,
            "rule_count": len(self.registry.get_enabled_rules()),
        }
        if document.path is not None:
            metadata["path"] = str(document.path)

        return CheckResult(diagnostics=diagnostics, errors=errors, metadata=metadata)

    def _run_rules(self, document: SourceDocument) -> List[Diagnostic]:
        diagnostics: List[Diagnostic] = []
        for rule in self.registry.get_enabled_rules():
            try:
                findings = rule.check(document)
                resolved = [
                    self.synthesizer.from_finding(document, finding) for finding in findings
                ]
            except Exception:
                logger.exception("Error running rule %s", rule.id)
                continue
            diagnostics.extend(resolved)
        return diagnostics

    # ------------------------------------------------------------------
    def check_project(
        self,
        documents: Iterable[SourceDocument | Path | str],
        *,
        cancellation: CancellationToken | None = None,
    ) -> ProjectCheckResult:
        """Check documents one at a time, stopping early when ``cancellation`` fires.

        Results for documents completed before cancellation are kept.
        """

        project = ProjectCheckResult()
        for index, item in enumerate(documents):
            if cancellation is not None and cancellation.is_cancelled:
                logger.info("Project check cancelled after %d documents", len(project.results))
                project.cancelled = True
                break

            if isinstance(item, SourceDocument):
                document = item
            else:
                try:
                    document = SourceDocument.from_path(item)
                except OSError as exc:
                    project.results[str(item)] = CheckResult(
                        diagnostics=[], errors=[f"Failed to read {item}: {exc}"]
                    )
                    continue

            key = str(document.path) if document.path is not None else f"<document {index}>"
            project.results[key] = self.check(document)

        return project


__all__ = [
    "CancellationToken",
    "CheckResult",
    "CheckService",
    "ProjectCheckResult",
    "AnalyzerError",
]
