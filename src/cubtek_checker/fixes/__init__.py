"""Quick-fix mapping for diagnostics."""

from .quick_fix import (
    CodeAction,
    CodeActionKind,
    Command,
    FixMapper,
    TextEdit,
    corrected_identifier,
)

__all__ = [
    "CodeAction",
    "CodeActionKind",
    "Command",
    "FixMapper",
    "TextEdit",
    "corrected_identifier",
]
