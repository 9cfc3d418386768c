from __future__ import annotations

import pytest

from cubtek_checker.fixes import CodeActionKind, FixMapper, TextEdit, corrected_identifier
from cubtek_checker.models import Diagnostic, DiagnosticSource, Range, Severity, SourceDocument


def make_diagnostic(
    rule_id: str,
    message: str,
    span: Range,
    source: DiagnosticSource = DiagnosticSource.LOCAL,
) -> Diagnostic:
    return Diagnostic(
        range=span, message=message, severity=Severity.WARNING, rule_id=rule_id, source=source
    )


def test_function_length_triggers_extract_refactor() -> None:
    document = SourceDocument("void processData(void) {\n}\n")
    span = Range.on_line(0, 5, 16)
    diagnostic = make_diagnostic("CUBTEK-FUNC-001", "too long", span)

    actions = FixMapper().actions_for(document, diagnostic)

    assert len(actions) == 1
    action = actions[0]
    assert action.kind is CodeActionKind.QUICK_FIX
    assert action.is_preferred is True
    assert action.edits == []
    assert action.command.command == "editor.action.refactor.extract"
    assert action.command.arguments == (span,)
    assert action.diagnostic is diagnostic


def test_global_variable_rename_edit() -> None:
    document = SourceDocument("int count;\n")
    span = Range.on_line(0, 4, 9)
    diagnostic = make_diagnostic(
        "CUBTEK-NAME-001", 'Global variable "count" should start with "g_" prefix', span
    )

    actions = FixMapper().actions_for(document, diagnostic)

    assert len(actions) == 1
    assert actions[0].edits == [TextEdit(range=span, new_text="g_count")]
    assert actions[0].command is None


def test_function_naming_rename_edit() -> None:
    document = SourceDocument("void process_data(void) {\n}\n")
    span = Range.on_line(0, 5, 17)
    diagnostic = make_diagnostic(
        "CUBTEK-NAME-001", 'Function name "process_data" should be camelCase or PascalCase', span
    )

    actions = FixMapper().actions_for(document, diagnostic)

    assert actions[0].edits == [TextEdit(range=span, new_text="processData")]


@pytest.mark.parametrize(
    ("name", "message", "expected"),
    [
        ("count", "global variable missing prefix", "g_count"),
        ("g_count", "global variable wrong", "g_count"),
        ("counter", "static variable should use s_", "s_counter"),
        ("s_counter", "static variable should use s_", "s_counter"),
        ("Width", "parameter should be lower case", "width"),
        ("MAX_SIZE", "should be camelCase or PascalCase", "maxSize"),
        ("value", "unrelated message", "value"),
    ],
)
def test_corrected_identifier(name: str, message: str, expected: str) -> None:
    assert corrected_identifier(name, message) == expected


def test_already_correct_name_produces_no_action() -> None:
    document = SourceDocument("int g_count;\n")
    diagnostic = make_diagnostic(
        "CUBTEK-NAME-001", "global variable check", Range.on_line(0, 4, 11)
    )

    assert FixMapper().actions_for(document, diagnostic) == []


def test_external_diagnostic_gets_documentation_link() -> None:
    document = SourceDocument("int x;\n")
    diagnostic = make_diagnostic(
        "readability-magic-numbers",
        "magic number",
        Range.on_line(0, 0, 6),
        source=DiagnosticSource.CLANG_TIDY,
    )

    actions = FixMapper().actions_for(document, diagnostic)

    assert len(actions) == 1
    assert actions[0].title == "View documentation for readability-magic-numbers"
    assert actions[0].edits == []
    assert actions[0].command.arguments == (
        "https://clang.llvm.org/extra/clang-tidy/checks/readability-magic-numbers.html",
    )


def test_unknown_local_rule_produces_no_action() -> None:
    document = SourceDocument("int x;\n")
    diagnostic = make_diagnostic("CUBTEK-SAFE-001", "unchecked", Range.on_line(0, 0, 6))

    assert FixMapper().actions_for(document, diagnostic) == []


def test_actions_for_all_collects_every_action() -> None:
    document = SourceDocument("int count;\n")
    diagnostics = [
        make_diagnostic("CUBTEK-FUNC-001", "too long", Range.on_line(0, 0, 3)),
        make_diagnostic("CUBTEK-SAFE-001", "unchecked", Range.on_line(0, 0, 3)),
        make_diagnostic(
            "CUBTEK-NAME-001", 'Global variable "count"', Range.on_line(0, 4, 9)
        ),
    ]

    actions = FixMapper().actions_for_all(document, diagnostics)

    assert [action.diagnostic.rule_id for action in actions] == [
        "CUBTEK-FUNC-001",
        "CUBTEK-NAME-001",
    ]
