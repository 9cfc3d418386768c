"""External static analyzer adapters."""

from __future__ import annotations

import logging
import re
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from ..models import Diagnostic, DiagnosticSource, Range, Severity, SourceDocument

logger = logging.getLogger(__name__)

OUTPUT_LINE = re.compile(
    r"^(?P<path>.+?):(?P<line>\d+):(?P<column>\d+):\s+"
    r"(?P<level>fatal error|error|warning|note|remark):\s+"
    r"(?P<message>.+?)\s+\[(?P<rule_id>[^\]]+)\]\s*$"
)

DEFAULT_TIMEOUT = 30.0


class AnalyzerError(RuntimeError):
    """Raised when the external analyzer cannot be run or its output cannot be used."""


class ExternalAnalyzerAdapter(ABC):
    """Contract for analyzers that run out of process and report diagnostics as text."""

    @abstractmethod
    def analyze(self, document: SourceDocument) -> List[Diagnostic]:
        """Run the analyzer over ``document`` and return adapted diagnostics."""


class ClangTidyAdapter(ExternalAnalyzerAdapter):
    """Adapter that shells out to ``clang-tidy`` and parses its text output."""

    _LEVEL_TO_SEVERITY = {
        "fatal error": Severity.ERROR,
        "error": Severity.ERROR,
        "warning": Severity.WARNING,
        "note": Severity.INFORMATION,
        "remark": Severity.INFORMATION,
    }

    def __init__(
        self,
        *,
        executable: str = "clang-tidy",
        timeout: float | None = DEFAULT_TIMEOUT,
        project_root: Path | str | None = None,
        extra_args: Sequence[str] | None = None,
    ) -> None:
        self.executable = executable
        self.timeout = timeout
        self.project_root = Path(project_root) if project_root else None
        self.extra_args = list(extra_args or [])

    # ------------------------------------------------------------------
    def analyze(self, document: SourceDocument) -> List[Diagnostic]:
        suffix = ".cpp" if document.language_id == "cpp" else ".c"
        if document.path is not None and document.path.suffix:
            suffix = document.path.suffix

        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", prefix="cubtek_", suffix=suffix, delete=False
        ) as handle:
            handle.write(document.text)
            handle.flush()
            input_path = handle.name

        try:
            command = self._build_command(input_path)
            result = subprocess.run(  # noqa: S603 - deliberate invocation of external command
                command,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise AnalyzerError(
                f"{self.executable} not found. Please install clang-tidy."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise AnalyzerError(f"{self.executable} timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise AnalyzerError(f"Failed to run {self.executable}: {exc}") from exc
        finally:
            Path(input_path).unlink(missing_ok=True)

        diagnostics = self.parse_output(result.stdout or "", document)

        # clang-tidy exits non-zero when it reports errors; that is only a
        # failure when nothing usable came back.
        if result.returncode != 0 and not diagnostics and (result.stderr or "").strip():
            raise AnalyzerError(result.stderr.strip() or f"{self.executable} execution failed")

        return diagnostics

    # ------------------------------------------------------------------
    def _build_command(self, input_path: str) -> List[str]:
        command = [self.executable, input_path, "-quiet"]

        if self.project_root is not None:
            config_file = self.project_root / ".clang-tidy"
            if config_file.exists():
                command.append(f"--config-file={config_file}")

        command.extend(self.extra_args)
        return command

    # ------------------------------------------------------------------
    def parse_output(self, output: str, document: SourceDocument) -> List[Diagnostic]:
        """Convert ``path:line:col: level: message [rule-id]`` lines into diagnostics.

        Lines that do not have that shape are skipped.
        """

        diagnostics: List[Diagnostic] = []
        for raw_line in output.splitlines():
            match = OUTPUT_LINE.match(raw_line.strip())
            if match is None:
                continue

            try:
                diagnostics.append(self._to_diagnostic(match, document))
            except ValueError as exc:
                logger.warning("Skipping clang-tidy output line %r: %s", raw_line, exc)

        return diagnostics

    def _to_diagnostic(self, match: re.Match[str], document: SourceDocument) -> Diagnostic:
        line = int(match.group("line")) - 1
        column = int(match.group("column")) - 1
        if line < 0 or column < 0:
            raise ValueError("line and column must be 1-based")

        rule_id = match.group("rule_id").strip()
        return Diagnostic(
            range=Range.on_line(line, column, self._end_column(document, line, column)),
            message=f"{match.group('message')} [{rule_id}]",
            severity=self._normalize_severity(match.group("level")),
            rule_id=rule_id,
            source=DiagnosticSource.CLANG_TIDY,
            data={"path": match.group("path")},
        )

    def _end_column(self, document: SourceDocument, line: int, column: int) -> int:
        try:
            line_text = document.line_text(line)
        except IndexError:
            return column

        semicolon = line_text.find(";", column)
        if semicolon >= 0:
            return semicolon + 1
        return max(len(line_text), column)

    def _normalize_severity(self, level: str) -> Severity:
        return self._LEVEL_TO_SEVERITY.get(level.strip().lower(), Severity.INFORMATION)


__all__ = [
    "AnalyzerError",
    "ClangTidyAdapter",
    "DEFAULT_TIMEOUT",
    "ExternalAnalyzerAdapter",
    "OUTPUT_LINE",
]
