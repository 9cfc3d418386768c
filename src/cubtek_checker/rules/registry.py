"""Registry owning the built-in rule instances."""

from __future__ import annotations

from typing import Dict, Iterable, List

from .base import Rule
from .config import CheckerConfig
from .function_length import FunctionLengthRule
from .naming_convention import NamingConventionRule


def builtin_rules() -> List[Rule]:
    return [FunctionLengthRule(), NamingConventionRule()]


class RuleRegistry:
    """Hold rule instances for the lifetime of a session and apply configuration to them.

    Rules are created once; :meth:`apply_config` re-configures the same
    instances whenever the configuration reloads.
    """

    def __init__(
        self,
        config: CheckerConfig | None = None,
        *,
        rules: Iterable[Rule] | None = None,
    ) -> None:
        self._rules: Dict[str, Rule] = {}
        for rule in rules if rules is not None else builtin_rules():
            self.register(rule)

        if config is not None:
            self.apply_config(config)

    def register(self, rule: Rule) -> None:
        if rule.id in self._rules:
            raise ValueError(f"Rule id already registered: {rule.id}")
        self._rules[rule.id] = rule

    def apply_config(self, config: CheckerConfig) -> None:
        """Reset every rule to its defaults, then apply matching ``RuleConfig`` entries.

        Configuration entries for unknown rule ids are ignored.
        """

        for rule_id, rule in self._rules.items():
            rule.reset()
            rule_config = config.rule_config(rule_id)
            if rule_config is None:
                continue

            rule.enabled = rule_config.enabled
            if rule_config.severity is not None:
                rule.severity = rule_config.severity
            rule.configure(rule_config.params)

    def get_enabled_rules(self) -> List[Rule]:
        return [rule for rule in self._rules.values() if rule.enabled]

    def get_rule_by_id(self, rule_id: str) -> Rule | None:
        return self._rules.get(rule_id)

    def get_all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)


__all__ = ["RuleRegistry", "builtin_rules"]
