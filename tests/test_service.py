from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from cubtek_checker.adapters import AnalyzerError, ClangTidyAdapter
from cubtek_checker.models import (
    Diagnostic,
    DiagnosticSource,
    Finding,
    Range,
    RuleMetadata,
    Severity,
    SourceDocument,
)
from cubtek_checker.rules import (
    CheckerConfig,
    FunctionLengthRule,
    NamingConventionRule,
    Rule,
    RuleConfig,
    RuleRegistry,
    default_config,
)
from cubtek_checker.service import CancellationToken, CheckResult, CheckService

SOURCE = "int count;\nvoid process_data(void) {\n    int local;\n}\n"


@dataclass
class DummyAnalyzer:
    diagnostics: Sequence[Diagnostic] = ()
    error: str | None = None
    calls: List[SourceDocument] = field(default_factory=list)

    def analyze(self, document: SourceDocument) -> list[Diagnostic]:
        self.calls.append(document)
        if self.error:
            raise AnalyzerError(self.error)
        return list(self.diagnostics)


class ExplodingRule(Rule):
    def __init__(self) -> None:
        super().__init__(
            RuleMetadata(
                id="CUBTEK-ROBUST-001",
                name="Exploding",
                description="Always fails",
                category="Robustness",
            )
        )

    def check(self, document: SourceDocument) -> List[Finding]:
        raise RuntimeError("boom")


def external_diagnostic(line: int) -> Diagnostic:
    return Diagnostic(
        range=Range.on_line(line, 4, 9),
        message="unused variable 'count' [clang-diagnostic-unused-variable]",
        severity=Severity.WARNING,
        rule_id="clang-diagnostic-unused-variable",
        source=DiagnosticSource.CLANG_TIDY,
    )


def test_check_merges_external_and_local_diagnostics() -> None:
    analyzer = DummyAnalyzer(diagnostics=[external_diagnostic(0)])
    service = CheckService(analyzer=analyzer)

    result = service.check(SourceDocument(SOURCE, "c"))

    assert isinstance(result, CheckResult)
    assert result.errors == []
    assert [d.rule_id for d in result.diagnostics] == [
        "clang-diagnostic-unused-variable",
        "CUBTEK-NAME-001",
        "CUBTEK-NAME-001",
    ]
    # Same line carries both an external and a local diagnostic.
    assert {d.source for d in result.diagnostics if d.line == 0} == {
        DiagnosticSource.CLANG_TIDY,
        DiagnosticSource.LOCAL,
    }
    assert result.metadata["rule_count"] == 2


def test_analyzer_failure_is_reported_and_rules_still_run() -> None:
    analyzer = DummyAnalyzer(error="clang-tidy not found. Please install clang-tidy.")
    service = CheckService(analyzer=analyzer)

    result = service.check(SourceDocument(SOURCE, "cpp"))

    assert result.errors == ["Checker error: clang-tidy not found. Please install clang-tidy."]
    assert len(result.diagnostics) == 2


def test_unrunnable_clang_tidy_keeps_local_diagnostics(monkeypatch) -> None:
    def fake_run(command, capture_output, text, encoding, errors, timeout):
        raise PermissionError(13, "Permission denied", command[0])

    monkeypatch.setattr("cubtek_checker.adapters.clang_tidy.subprocess.run", fake_run)
    service = CheckService(analyzer=ClangTidyAdapter(executable="/opt/llvm/bin/clang-tidy"))

    result = service.check(SourceDocument("int count;\n", "c"))

    assert len(result.errors) == 1
    assert "Permission denied" in result.errors[0]
    assert [d.rule_id for d in result.diagnostics] == ["CUBTEK-NAME-001"]


def test_failing_rule_does_not_suppress_others(caplog) -> None:
    config = default_config()
    registry = RuleRegistry(config, rules=[ExplodingRule(), NamingConventionRule()])
    analyzer = DummyAnalyzer(diagnostics=[external_diagnostic(2)])
    service = CheckService(config=config, registry=registry, analyzer=analyzer)

    diagnostics = service.check_document(SourceDocument(SOURCE, "c"))

    assert [d.rule_id for d in diagnostics] == [
        "clang-diagnostic-unused-variable",
        "CUBTEK-NAME-001",
        "CUBTEK-NAME-001",
    ]
    assert "CUBTEK-ROBUST-001" in caplog.text


def test_unsupported_language_is_skipped() -> None:
    analyzer = DummyAnalyzer(diagnostics=[external_diagnostic(0)])
    service = CheckService(analyzer=analyzer)

    assert service.check_document(SourceDocument(SOURCE, "python")) == []
    assert analyzer.calls == []


def test_severity_comes_from_configuration() -> None:
    config = default_config()
    config.rules["CUBTEK-NAME-001"] = RuleConfig(enabled=True, severity=Severity.ERROR)
    service = CheckService(config=config)

    diagnostics = service.check_document(SourceDocument(SOURCE, "c"))

    assert {d.severity for d in diagnostics} == {Severity.ERROR}


def test_severity_from_configured_registry_without_config() -> None:
    config = default_config()
    config.rules["CUBTEK-NAME-001"] = RuleConfig(enabled=True, severity=Severity.ERROR)
    service = CheckService(registry=RuleRegistry(config))

    diagnostics = service.check_document(SourceDocument(SOURCE, "c"))

    assert len(diagnostics) == 2
    assert {d.severity for d in diagnostics} == {Severity.ERROR}


def test_reconfigure_updates_existing_rules() -> None:
    service = CheckService()
    rule = service.registry.get_rule_by_id("CUBTEK-NAME-001")

    service.reconfigure(CheckerConfig(rules={"CUBTEK-NAME-001": RuleConfig(enabled=False)}))

    assert service.registry.get_rule_by_id("CUBTEK-NAME-001") is rule
    assert service.check_document(SourceDocument(SOURCE, "c")) == []


def test_function_length_and_naming_are_independent() -> None:
    config = default_config()
    config.rules["CUBTEK-FUNC-001"] = RuleConfig(params={"maxLines": 3})
    service = CheckService(config=config)
    text = "void long_one(void) {\n    a();\n    b();\n}\n"

    diagnostics = service.check_document(SourceDocument(text, "c"))

    assert sorted(d.rule_id for d in diagnostics) == ["CUBTEK-FUNC-001", "CUBTEK-NAME-001"]
    function_length = next(d for d in diagnostics if d.rule_id == "CUBTEK-FUNC-001")
    assert function_length.range == Range.on_line(0, 5, 13)
    assert function_length.data["lineCount"] == 4
    assert isinstance(service.registry.get_rule_by_id("CUBTEK-FUNC-001"), FunctionLengthRule)


def test_check_project_reads_files_and_keeps_order(tmp_path: Path) -> None:
    first = tmp_path / "a.c"
    second = tmp_path / "b.cpp"
    first.write_text("int count;\n", encoding="utf-8")
    second.write_text("int g_total;\n", encoding="utf-8")
    service = CheckService()

    project = service.check_project([first, second, tmp_path / "missing.c"])

    assert list(project.results) == [str(first), str(second), str(tmp_path / "missing.c")]
    assert len(project.results[str(first)].diagnostics) == 1
    assert project.results[str(second)].diagnostics == []
    assert project.errors and "missing.c" in project.errors[0]
    assert project.cancelled is False


def test_check_project_cancellation_keeps_partial_results() -> None:
    token = CancellationToken()
    service = CheckService()

    def documents():
        yield SourceDocument("int count;\n", "c", Path("one.c"))
        token.cancel()
        yield SourceDocument("int other;\n", "c", Path("two.c"))

    project = service.check_project(documents(), cancellation=token)

    assert project.cancelled is True
    assert list(project.results) == ["one.c"]
    assert len(project.diagnostics) == 1
