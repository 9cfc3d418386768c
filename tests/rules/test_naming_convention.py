from __future__ import annotations

from cubtek_checker.models import LocationKind, SourceDocument
from cubtek_checker.rules import NamingConventionRule


def check(text: str):
    return NamingConventionRule().check(SourceDocument(text))


def test_global_without_prefix_is_reported() -> None:
    findings = check("int count;")

    assert len(findings) == 1
    finding = findings[0]
    assert finding.rule_id == "CUBTEK-NAME-001"
    assert "count" in finding.message
    assert "g_" in finding.message
    assert finding.offset == 4
    assert finding.location_kind is LocationKind.VARIABLE


def test_prefixed_global_is_accepted() -> None:
    assert check("int g_count;") == []


def test_declaration_inside_function_is_ignored() -> None:
    text = "void run(void) {\n    int count;\n    static int calls = 0;\n}\n"
    assert check(text) == []


def test_one_finding_per_global_declaration() -> None:
    text = "int first;\nstatic int second = 1;\nint g_third;\nuint8_t buffer[4];\n"
    names = [finding.data["name"] for finding in check(text)]
    assert names == ["first", "second", "buffer"]


def test_lines_with_parentheses_are_not_globals() -> None:
    text = "int value = compute(3);\nint helper(int a);\n"
    assert check(text) == []


def test_commented_out_declarations_are_ignored() -> None:
    text = "// int count;\n/* int other; */\nconst char *label = \"int x;\";\n"
    assert check(text) == []


def test_function_names_must_be_camel_or_pascal() -> None:
    text = (
        "void processData(void) {\n}\n"
        "void ProcessData(void) {\n}\n"
        "void process_data(void) {\n}\n"
    )
    findings = check(text)

    assert len(findings) == 1
    assert findings[0].data["name"] == "process_data"
    assert findings[0].location_kind is LocationKind.FUNCTION
    assert "camelCase or PascalCase" in findings[0].message


def test_both_passes_report_independently() -> None:
    text = "int total;\nvoid do_work(void) {\n    int local;\n}\n"
    messages = [finding.message for finding in check(text)]

    assert messages == [
        'Global variable "total" should start with "g_" prefix',
        'Function name "do_work" should be camelCase or PascalCase',
    ]


def test_every_declaration_on_a_line_is_checked() -> None:
    findings = check("int g_a; int b; static char c = 'x';\n")

    assert [finding.data["name"] for finding in findings] == ["b", "c"]
    assert [finding.offset for finding in findings] == [13, 28]
