"""Rule abstraction, built-in rules, registry and configuration loading."""

from .base import Rule
from .config import (
    CheckerConfig,
    ConfigError,
    ConfigManager,
    RuleConfig,
    default_config,
)
from .function_length import FunctionLengthRule
from .naming_convention import NamingConventionRule
from .registry import RuleRegistry, builtin_rules

__all__ = [
    "CheckerConfig",
    "ConfigError",
    "ConfigManager",
    "FunctionLengthRule",
    "NamingConventionRule",
    "Rule",
    "RuleConfig",
    "RuleRegistry",
    "builtin_rules",
    "default_config",
]
