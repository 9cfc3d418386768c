"""Loading and merging of checker configuration files."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Sequence

import yaml

from ..models import Severity

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be loaded or parsed."""


@dataclass(slots=True)
class RuleConfig:
    """Per-rule settings keyed by rule id in the configuration file."""

    enabled: bool = True
    severity: Severity | None = None
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class CheckerConfig:
    """Project-wide checker settings."""

    severity: Severity = Severity.WARNING
    check_on_save: bool = True
    format_on_save: bool = True
    config_path: Path | None = None
    rules: Dict[str, RuleConfig] = field(default_factory=dict)

    def rule_config(self, rule_id: str) -> RuleConfig | None:
        return self.rules.get(rule_id)


DEFAULT_RULES: Mapping[str, RuleConfig] = {
    "CUBTEK-FUNC-001": RuleConfig(enabled=True, params={"maxLines": 50}),
    "CUBTEK-NAME-001": RuleConfig(enabled=True),
}

DEFAULT_CONFIG_LOCATIONS = (
    Path(".cubtek.json"),
    Path(".cubtek.yaml"),
    Path(".vscode") / "cubtek-config.json",
)


def default_config() -> CheckerConfig:
    """Return a configuration holding only the built-in rule defaults."""

    return CheckerConfig(rules=copy.deepcopy(dict(DEFAULT_RULES)))


class ConfigManager:
    """Discover, load and merge checker configuration over the built-in defaults."""

    def __init__(self, locations: Sequence[Path | str] | None = None) -> None:
        if locations is None:
            self._locations: List[Path] = list(DEFAULT_CONFIG_LOCATIONS)
        else:
            self._locations = [Path(location) for location in locations]

    # ------------------------------------------------------------------
    def discover(self, root: Path | str) -> Path | None:
        """Return the first existing configuration file under ``root``."""

        root_path = Path(root)
        for location in self._locations:
            candidate = location if location.is_absolute() else root_path / location
            if candidate.is_file():
                return candidate
        return None

    # ------------------------------------------------------------------
    def load(
        self,
        config_path: Path | str | None = None,
        *,
        root: Path | str | None = None,
    ) -> CheckerConfig:
        """Load the configuration for a project.

        An explicit ``config_path`` wins over discovery under ``root``. When no
        file is found the built-in defaults are returned.
        """

        config = default_config()

        path: Path | None
        if config_path is not None:
            path = Path(config_path)
        elif root is not None:
            path = self.discover(root)
        else:
            path = None

        if path is None:
            return config

        data = self._load_file(path)
        return self.merge(config, data, source=path)

    # ------------------------------------------------------------------
    def merge(
        self,
        config: CheckerConfig,
        data: Mapping[str, Any],
        *,
        source: Path | None = None,
    ) -> CheckerConfig:
        """Merge a parsed configuration mapping over ``config`` in place."""

        if source is not None:
            config.config_path = source

        severity = Severity.parse(data.get("severity"))
        if severity is not None:
            config.severity = severity
        if "checkOnSave" in data:
            config.check_on_save = bool(data["checkOnSave"])
        if "formatOnSave" in data:
            config.format_on_save = bool(data["formatOnSave"])

        rules = data.get("rules")
        if isinstance(rules, Mapping):
            merged: MutableMapping[str, RuleConfig] = dict(config.rules)
            for rule_id, rule_data in rules.items():
                if not isinstance(rule_id, str):
                    continue
                rule_config = self._parse_rule(rule_data)
                if rule_config is not None:
                    merged[rule_id.strip()] = rule_config
            config.rules = dict(merged)

        return config

    # ------------------------------------------------------------------
    def _parse_rule(self, rule_data: object) -> RuleConfig | None:
        if isinstance(rule_data, bool):
            return RuleConfig(enabled=rule_data)
        if not isinstance(rule_data, Mapping):
            return None

        rule_config = RuleConfig()
        enabled = rule_data.get("enabled")
        if isinstance(enabled, bool):
            rule_config.enabled = enabled
        elif enabled is not None:
            logger.warning("Ignoring non-boolean 'enabled' value %r", enabled)
        rule_config.severity = Severity.parse(rule_data.get("severity"))

        params = rule_data.get("params")
        if isinstance(params, Mapping):
            rule_config.params.update(params)

        return rule_config

    # ------------------------------------------------------------------
    def _load_file(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise ConfigError(f"Failed to read configuration file {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML/JSON in configuration file {path}") from exc

        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration file must contain a mapping: {path}")

        return dict(data)


__all__ = [
    "DEFAULT_CONFIG_LOCATIONS",
    "DEFAULT_RULES",
    "CheckerConfig",
    "ConfigError",
    "ConfigManager",
    "RuleConfig",
    "default_config",
]
