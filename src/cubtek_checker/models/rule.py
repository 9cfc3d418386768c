"""Rule metadata model."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .diagnostic import Severity

RULE_ID_PATTERN = re.compile(r"^CUBTEK-(?P<category>[A-Z]+)-\d{3}$")


@dataclass(frozen=True, slots=True)
class RuleMetadata:
    """Identity and default behaviour of a rule, fixed at construction."""

    id: str
    name: str
    description: str
    category: str
    default_severity: Severity = Severity.WARNING

    def __post_init__(self) -> None:
        if not RULE_ID_PATTERN.match(self.id):
            raise ValueError(f"Rule id must look like CUBTEK-<CATEGORY>-<3 digits>: {self.id!r}")

    @property
    def category_token(self) -> str:
        """Return the ``<CATEGORY>`` segment of the rule id."""

        match = RULE_ID_PATTERN.match(self.id)
        return match.group("category") if match else ""
