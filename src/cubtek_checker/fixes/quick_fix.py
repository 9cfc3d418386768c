"""Quick fixes for CubTEK and clang-tidy diagnostics."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..models import Diagnostic, Range, SourceDocument

CLANG_TIDY_DOCS_URL = "https://clang.llvm.org/extra/clang-tidy/checks/{rule_id}.html"
EXTRACT_FUNCTION_COMMAND = "editor.action.refactor.extract"
OPEN_DOCUMENTATION_COMMAND = "vscode.open"


class CodeActionKind(str, Enum):
    QUICK_FIX = "quickfix"
    REFACTOR_EXTRACT = "refactor.extract"


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace the text covered by ``range`` with ``new_text``."""

    range: Range
    new_text: str


@dataclass(frozen=True, slots=True)
class Command:
    title: str
    command: str
    arguments: tuple[Any, ...] = ()


@dataclass(slots=True)
class CodeAction:
    """A remediation proposed for one diagnostic."""

    title: str
    kind: CodeActionKind
    diagnostic: Diagnostic
    edits: List[TextEdit] = field(default_factory=list)
    command: Optional[Command] = None
    is_preferred: bool = False


FixHandler = Callable[[SourceDocument, Diagnostic], Optional[CodeAction]]


class FixMapper:
    """Look up a remediation for a diagnostic by its rule id.

    External-tool diagnostics without a specific handler get a documentation
    link. Anything else yields no action.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, FixHandler] = {
            "CUBTEK-FUNC-001": self._function_length_fix,
            "CUBTEK-NAME-001": self._naming_convention_fix,
        }

    def register(self, rule_id: str, handler: FixHandler) -> None:
        self._handlers[rule_id] = handler

    # ------------------------------------------------------------------
    def actions_for(self, document: SourceDocument, diagnostic: Diagnostic) -> List[CodeAction]:
        handler = self._handlers.get(diagnostic.rule_id)
        if handler is not None:
            action = handler(document, diagnostic)
        elif diagnostic.is_external:
            action = self._documentation_action(diagnostic)
        else:
            action = None
        return [action] if action is not None else []

    def actions_for_all(
        self, document: SourceDocument, diagnostics: List[Diagnostic]
    ) -> List[CodeAction]:
        actions: List[CodeAction] = []
        for diagnostic in diagnostics:
            actions.extend(self.actions_for(document, diagnostic))
        return actions

    # ------------------------------------------------------------------
    def _function_length_fix(
        self, document: SourceDocument, diagnostic: Diagnostic
    ) -> CodeAction:
        return CodeAction(
            title="Extract part of function to reduce length",
            kind=CodeActionKind.QUICK_FIX,
            diagnostic=diagnostic,
            command=Command(
                title="Extract Function",
                command=EXTRACT_FUNCTION_COMMAND,
                arguments=(diagnostic.range,),
            ),
            is_preferred=True,
        )

    def _naming_convention_fix(
        self, document: SourceDocument, diagnostic: Diagnostic
    ) -> Optional[CodeAction]:
        name = document.get_text(diagnostic.range)
        if not name:
            return None

        fixed = corrected_identifier(name, diagnostic.message)
        if fixed == name:
            return None

        return CodeAction(
            title=f"Rename '{name}' to '{fixed}'",
            kind=CodeActionKind.QUICK_FIX,
            diagnostic=diagnostic,
            edits=[TextEdit(range=diagnostic.range, new_text=fixed)],
        )

    def _documentation_action(self, diagnostic: Diagnostic) -> CodeAction:
        url = CLANG_TIDY_DOCS_URL.format(rule_id=diagnostic.rule_id)
        return CodeAction(
            title=f"View documentation for {diagnostic.rule_id}",
            kind=CodeActionKind.QUICK_FIX,
            diagnostic=diagnostic,
            command=Command(
                title="Show Documentation",
                command=OPEN_DOCUMENTATION_COMMAND,
                arguments=(url,),
            ),
        )


def corrected_identifier(name: str, message: str) -> str:
    """Return ``name`` renamed to satisfy the naming problem described by ``message``."""

    lowered = message.lower()
    if "global variable" in lowered:
        return "g_" + re.sub(r"^g_", "", name)
    if "static variable" in lowered:
        return "s_" + re.sub(r"^s_", "", name)
    if "parameter" in lowered:
        return name[:1].lower() + name[1:]
    if "camelcase" in lowered:
        return to_camel_case(name)
    return name


def to_camel_case(name: str) -> str:
    """Convert ``snake_case`` or ``SCREAMING_CASE`` identifiers to camelCase."""

    parts = [part for part in name.split("_") if part]
    if not parts:
        return name
    head, *tail = parts
    if head.isupper():
        head = head.lower()
    else:
        head = head[:1].lower() + head[1:]
    return head + "".join(part[:1].upper() + part[1:].lower() for part in tail)


__all__ = [
    "CLANG_TIDY_DOCS_URL",
    "CodeAction",
    "CodeActionKind",
    "Command",
    "FixMapper",
    "TextEdit",
    "corrected_identifier",
    "to_camel_case",
]
