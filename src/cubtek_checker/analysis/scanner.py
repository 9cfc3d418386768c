"""Brace-counting heuristics for locating blocks without a parser.

Braces inside string literals, character literals and comments are counted
like any other brace, so callers pass text that went through
:func:`~cubtek_checker.analysis.patterns.clean_code_for_analysis`. Braces
produced by macro expansion are invisible to these helpers.
"""

from __future__ import annotations

from typing import Iterator, Optional


def find_block_end(text: str, start: int) -> Optional[int]:
    """Return the offset of the brace closing the first block opened at or after ``start``.

    Closing braces seen before the first opening brace are ignored. Returns
    ``None`` when no block opens after ``start`` or the block is never closed.
    """

    depth = 0
    opened = False
    for index in range(max(start, 0), len(text)):
        char = text[index]
        if char == "{":
            depth += 1
            opened = True
        elif char == "}" and opened:
            depth -= 1
            if depth == 0:
                return index
    return None


def brace_depth_before_line(text: str, line_index: int) -> int:
    """Return the brace nesting depth at the start of ``line_index``.

    Scans every preceding line, so calling it for each line of a document is
    quadratic; use :func:`iter_line_depths` for whole-document passes.
    """

    depth = 0
    for line in text.split("\n")[: max(line_index, 0)]:
        depth += line.count("{") - line.count("}")
    return depth


def iter_line_depths(text: str) -> Iterator[tuple[int, str, int]]:
    """Yield ``(line_index, line, depth_before_line)`` for every line of ``text``.

    Produces the same depths as :func:`brace_depth_before_line` in one pass.
    """

    depth = 0
    for index, line in enumerate(text.split("\n")):
        yield index, line, depth
        depth += line.count("{") - line.count("}")


__all__ = ["brace_depth_before_line", "find_block_end", "iter_line_depths"]
