"""Command-line interface implementation for the CubTEK checker."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping, MutableMapping, Sequence

from ..adapters import DEFAULT_TIMEOUT, ClangTidyAdapter
from ..diagnostics import filter_and_sort
from ..models import Diagnostic, Severity
from ..rules import ConfigError, ConfigManager, RuleRegistry
from ..service import CheckService, ProjectCheckResult

SOURCE_SUFFIXES = frozenset({".c", ".h", ".cpp", ".hpp", ".cc", ".cxx", ".hh", ".hxx"})


@dataclass(slots=True)
class CheckReport:
    """Diagnostics for every checked file plus run-level errors."""

    diagnostics: Sequence[tuple[str, Diagnostic]]
    errors: Sequence[str]
    metadata: Mapping[str, Any]

    @property
    def highest_severity(self) -> Severity | None:
        if not self.diagnostics:
            return None
        return min(self.diagnostics, key=lambda item: item[1].severity.rank)[1].severity

    def counts_by_severity(self) -> dict[str, int]:
        counts: MutableMapping[Severity, int] = {severity: 0 for severity in Severity}
        for _, diagnostic in self.diagnostics:
            counts[diagnostic.severity] += 1
        return {severity.value: count for severity, count in counts.items()}

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": dict(self.metadata),
            "summary": {
                "total_diagnostics": len(self.diagnostics),
                "highest_severity": self.highest_severity.value if self.highest_severity else None,
                "counts": self.counts_by_severity(),
            },
            "diagnostics": [_serialize_diagnostic(path, d) for path, d in self.diagnostics],
            "errors": list(self.errors),
        }


def _serialize_diagnostic(path: str, diagnostic: Diagnostic) -> dict[str, Any]:
    span = diagnostic.range
    return {
        "path": path,
        "rule_id": diagnostic.rule_id,
        "message": diagnostic.message,
        "severity": diagnostic.severity.value,
        "source": diagnostic.source.value,
        "tags": sorted(tag.value for tag in diagnostic.tags),
        "range": {
            "start": {"line": span.start.line, "character": span.start.character},
            "end": {"line": span.end.line, "character": span.end.character},
        },
    }


def render_table(report: CheckReport) -> str:
    """Render diagnostics as a simple text table for terminal output."""

    if not report.diagnostics:
        return "No diagnostics reported."

    headers = ("Severity", "Rule ID", "Location", "Message")
    rows = [headers]
    for path, diagnostic in report.diagnostics:
        start = diagnostic.range.start
        rows.append(
            (
                diagnostic.severity.value,
                diagnostic.rule_id,
                f"{path}:{start.line + 1}:{start.character + 1}",
                diagnostic.message,
            )
        )

    widths = [max(len(str(row[idx])) for row in rows) for idx in range(len(headers))]

    def format_row(values: tuple[str, str, str, str]) -> str:
        return "  ".join(value.ljust(width) for value, width in zip(values, widths, strict=True))

    lines = [format_row(headers)]
    lines.append("  ".join("=" * width for width in widths))
    for row in rows[1:]:
        lines.append(format_row(row))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="cubtek-check", description="CubTEK C/C++ coding standard checker"
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging verbosity written to stderr.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file; defaults to .cubtek.json discovered in the working directory.",
    )
    # SUPPRESS keeps a top-level --config when the subcommand omits it.
    config_parent = argparse.ArgumentParser(add_help=False)
    config_parent.add_argument(
        "--config",
        type=Path,
        default=argparse.SUPPRESS,
        help="Configuration file; overrides a --config given before the subcommand.",
    )

    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser(
        "check",
        parents=[config_parent],
        help="Check C/C++ files against the CubTEK coding standard.",
    )
    check_parser.add_argument(
        "paths",
        type=Path,
        nargs="*",
        help="Files or directories to check. Directories are searched recursively.",
    )
    check_parser.add_argument(
        "--no-external",
        dest="external",
        action="store_false",
        default=True,
        help="Do not run clang-tidy; only the built-in rules are applied.",
    )
    check_parser.add_argument(
        "--clang-tidy-bin",
        default="clang-tidy",
        help="Name or path of the clang-tidy executable.",
    )
    check_parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Seconds to wait for clang-tidy on each file.",
    )
    check_parser.add_argument(
        "--min-severity",
        choices=[severity.value for severity in Severity],
        default=None,
        help="Only report diagnostics at or above this severity.",
    )
    check_parser.add_argument(
        "--rule",
        dest="rules",
        action="append",
        default=None,
        help="Only report diagnostics whose rule id contains this text. Repeatable.",
    )
    check_parser.add_argument(
        "--fail-on",
        choices=[severity.value for severity in Severity],
        default=Severity.ERROR.value,
        help="Fail the run when diagnostics at or above the provided severity are present.",
    )
    check_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format for check results.",
    )

    subparsers.add_parser(
        "rules",
        parents=[config_parent],
        help="List the registered rules and their configuration.",
    )

    return parser


def iter_source_files(paths: Sequence[Path]) -> Iterator[Path]:
    """Yield C/C++ source files named by ``paths``, walking directories recursively."""

    for path in paths:
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if candidate.is_file() and candidate.suffix.lower() in SOURCE_SUFFIXES:
                    yield candidate
        else:
            yield path


def create_service(
    *,
    config_path: Path | None = None,
    root: Path | None = None,
    external: bool = True,
    clang_tidy_bin: str = "clang-tidy",
    timeout: float | None = DEFAULT_TIMEOUT,
) -> CheckService:
    """Create a check service with configuration loaded for ``root``."""

    project_root = root or Path.cwd()
    config = ConfigManager().load(config_path, root=project_root)
    analyzer = None
    if external:
        analyzer = ClangTidyAdapter(
            executable=clang_tidy_bin,
            timeout=timeout,
            project_root=project_root,
        )
    return CheckService(config=config, registry=RuleRegistry(config), analyzer=analyzer)


def _build_report(
    result: ProjectCheckResult,
    *,
    min_severity: Severity | None,
    rule_filter: Sequence[str] | None,
) -> CheckReport:
    diagnostics: list[tuple[str, Diagnostic]] = []
    for path, file_result in result.results.items():
        for diagnostic in filter_and_sort(file_result.diagnostics, min_severity, rule_filter):
            diagnostics.append((path, diagnostic))

    metadata = {"files_checked": len(result.results), "cancelled": result.cancelled}
    return CheckReport(diagnostics=diagnostics, errors=result.errors, metadata=metadata)


def _format_report(
    report: CheckReport,
    *,
    fail_on: Severity,
    output_format: str,
) -> tuple[str, bool]:
    if output_format not in {"table", "json"}:
        raise ValueError("format must be either 'table' or 'json'")

    highest = report.highest_severity
    should_fail = highest is not None and highest.rank <= fail_on.rank

    if output_format == "json":
        output = json.dumps(report.to_dict(), indent=2)
    else:
        output = render_table(report)
        if report.errors:
            output += "\n\n" + "\n".join(f"Error: {error}" for error in report.errors)

    return output, should_fail


def _handle_check(args: argparse.Namespace) -> int:
    paths = list(args.paths) or [Path.cwd()]
    missing = [path for path in paths if not path.exists()]
    if missing:
        print(f"Error: path not found: {missing[0]}")
        return 2

    try:
        service = create_service(
            config_path=args.config,
            external=args.external,
            clang_tidy_bin=args.clang_tidy_bin,
            timeout=args.timeout,
        )
    except ConfigError as exc:
        print(f"Error: {exc}")
        return 2

    result = service.check_project(iter_source_files(paths))
    report = _build_report(
        result,
        min_severity=Severity.parse(args.min_severity),
        rule_filter=args.rules,
    )
    output, should_fail = _format_report(
        report,
        fail_on=Severity(args.fail_on),
        output_format=args.format,
    )

    print(output)
    return 1 if should_fail else 0


def _handle_rules(args: argparse.Namespace) -> int:
    try:
        service = create_service(config_path=args.config, external=False)
    except ConfigError as exc:
        print(f"Error: {exc}")
        return 2

    for rule in service.registry.get_all_rules():
        state = "enabled" if rule.enabled else "disabled"
        print(f"{rule.id}  {rule.name}  [{rule.category}]  {state}  {rule.severity.value}")
    return 0


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "check":
        return _handle_check(args)
    if args.command == "rules":
        return _handle_rules(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
