"""Regular expressions and classification predicates for C/C++ source text.

None of these patterns understand C/C++ syntax; they are shape heuristics. Run
:func:`clean_code_for_analysis` over the text first so that braces, semicolons
and identifiers inside comments or string literals do not produce matches.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

CAMEL_CASE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")

GLOBAL_DECLARATION = re.compile(
    r"(?:\b(?:extern|static)\s+)?"
    r"(?:\bconst\s+)?"
    r"(?:\bunsigned\s+)?"
    r"\b(?:int|char|float|double|bool|void|\w+_t)\s+"
    r"(?P<name>\w+)\s*(?:=|;|\[)"
)

FUNCTION_SIGNATURE = re.compile(
    r"\b(?P<return_type>\w+)\s+(?P<name>\w+)\s*\([^)]*\)\s*(?:const\s*)?\s*\{"
)

INCLUDE_DIRECTIVE = re.compile(r"#include\s*[<\"](?P<path>[^>\"]+)[>\"]")

# Control-flow keywords that take a parenthesised clause followed by a block,
# e.g. ``else if (ready) {``. They are never function names.
CONTROL_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "return", "sizeof"})

_LITERALS_AND_COMMENTS = re.compile(
    r"\"(?:[^\"\\\n]|\\.)*\""
    r"|//[^\n]*"
    r"|/\*.*?(?:\*/|\Z)",
    re.DOTALL,
)


def is_camel_case(name: str) -> bool:
    return bool(CAMEL_CASE.match(name))


def is_pascal_case(name: str) -> bool:
    return bool(PASCAL_CASE.match(name))


def looks_like_global_declaration(line: str) -> Optional[re.Match[str]]:
    """Return the first variable-declaration-shaped match on ``line``."""

    return GLOBAL_DECLARATION.search(line)


def iter_global_declarations(line: str) -> Iterator[re.Match[str]]:
    """Yield every variable-declaration-shaped match on ``line``, e.g. ``int a; int b;``."""

    return GLOBAL_DECLARATION.finditer(line)


def looks_like_function_signature(line: str) -> Optional[re.Match[str]]:
    """Return the first function-definition-shaped match on ``line``."""

    for match in FUNCTION_SIGNATURE.finditer(line):
        if _is_function_match(match):
            return match
    return None


def iter_function_signatures(text: str) -> Iterator[re.Match[str]]:
    """Yield every function-definition-shaped match in ``text``.

    Signatures may span lines (parameter lists broken over several lines).
    """

    for match in FUNCTION_SIGNATURE.finditer(text):
        if _is_function_match(match):
            yield match


def _is_function_match(match: re.Match[str]) -> bool:
    return (
        match.group("name") not in CONTROL_KEYWORDS
        and match.group("return_type") not in CONTROL_KEYWORDS
        and match.group("return_type") != "else"
    )


def clean_code_for_analysis(code: str) -> str:
    """Blank out comments and string literal bodies, preserving offsets.

    String literals keep their quotes with the body replaced by spaces, and
    comments are replaced by spaces with their newlines kept, so every offset
    and line number in the result refers to the same place in ``code``.
    Character literals are left untouched.
    """

    def _blank(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.startswith('"'):
            return '"' + " " * (len(token) - 2) + '"'
        return re.sub(r"[^\n]", " ", token)

    return _LITERALS_AND_COMMENTS.sub(_blank, code)


__all__ = [
    "CAMEL_CASE",
    "CONTROL_KEYWORDS",
    "FUNCTION_SIGNATURE",
    "GLOBAL_DECLARATION",
    "INCLUDE_DIRECTIVE",
    "PASCAL_CASE",
    "clean_code_for_analysis",
    "is_camel_case",
    "is_pascal_case",
    "iter_function_signatures",
    "iter_global_declarations",
    "looks_like_function_signature",
    "looks_like_global_declaration",
]
