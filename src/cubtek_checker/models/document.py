"""Source document and position models used by the checker."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

SUPPORTED_LANGUAGES = frozenset({"c", "cpp"})

_LANGUAGE_BY_SUFFIX = {
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hh": "cpp",
    ".hxx": "cpp",
}


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based line/column position inside a document."""

    line: int
    character: int

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> "Position":
        return Position(self.line + line_delta, self.character + character_delta)


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open span between two positions."""

    start: Position
    end: Position

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> "Range":
        """Return a single-line range covering ``[start, end)`` on ``line``."""

        return cls(Position(line, start), Position(line, end))

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line


@dataclass(frozen=True, slots=True)
class SourceDocument:
    """Immutable view of C/C++ source text.

    Offset and line translations are derived from ``text`` on every call so a
    document never hands out positions for text it no longer holds. Callers
    build a fresh document for each check.
    """

    text: str
    language_id: str = "c"
    path: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Path | str, *, encoding: str = "utf-8") -> "SourceDocument":
        """Read ``path`` and infer the language tag from its suffix."""

        source_path = Path(path)
        text = source_path.read_text(encoding=encoding, errors="replace")
        return cls(text=text, language_id=language_for_path(source_path), path=source_path)

    @property
    def is_supported(self) -> bool:
        return self.language_id in SUPPORTED_LANGUAGES

    @property
    def lines(self) -> List[str]:
        return [line.rstrip("\r") for line in self.text.split("\n")]

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    def line_text(self, line: int) -> str:
        """Return the text of ``line`` without its line terminator."""

        lines = self.lines
        if line < 0 or line >= len(lines):
            raise IndexError(f"Line {line} is outside the document (0..{len(lines) - 1})")
        return lines[line]

    def line_range(self, line: int) -> Range:
        return Range.on_line(line, 0, len(self.line_text(line)))

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self.text)))
        line = self.text.count("\n", 0, offset)
        line_start = self.text.rfind("\n", 0, offset) + 1
        return Position(line, offset - line_start)

    def offset_at(self, position: Position) -> int:
        offset = 0
        for index, line in enumerate(self.text.split("\n")):
            if index == position.line:
                return offset + min(position.character, len(line))
            offset += len(line) + 1
        return len(self.text)

    def get_text(self, span: Range | None = None) -> str:
        if span is None:
            return self.text
        return self.text[self.offset_at(span.start) : self.offset_at(span.end)]


def language_for_path(path: Path | str) -> str:
    """Return the language tag for ``path``; unknown suffixes map to an empty tag."""

    return _LANGUAGE_BY_SUFFIX.get(Path(path).suffix.lower(), "")


__all__ = ["Position", "Range", "SourceDocument", "SUPPORTED_LANGUAGES", "language_for_path"]
