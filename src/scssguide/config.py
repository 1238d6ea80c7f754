"""Run configuration: per-rule settings plus numeric options."""

from __future__ import annotations

import fnmatch
import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Mapping

from scssguide.model.finding import Finding, Severity

logger = logging.getLogger(__name__)

DEFAULT_BASE_FILE_PATTERNS = ("base.scss", "_base.scss", "base-*.scss", "_base-*.scss")

# Rules that describe a file that could not be analysed at all.
UNSUPPRESSIBLE_RULES = frozenset({"IOError", "ParseError", "InternalError"})

MODIFIER_DESCENDANT_OWNERS = ("modifier", "descendant")


class ConfigError(Exception):
    """Raised when a configuration file or mapping is invalid."""


@dataclass(frozen=True)
class RuleSetting:
    """User override for one rule id."""

    enabled: bool = True
    severity: Severity | None = None


@dataclass(frozen=True)
class RuleConfiguration:
    """Read-only configuration shared by every file of a run."""

    rules: Mapping[str, RuleSetting] = field(default_factory=dict)
    max_line_length: int = 80
    indent_width: int = 2
    max_component_file_lines: int = 300
    base_file_patterns: tuple[str, ...] = DEFAULT_BASE_FILE_PATTERNS
    modifier_descendant_owner: str = "modifier"

    def is_enabled(self, rule_id: str) -> bool:
        if rule_id in UNSUPPRESSIBLE_RULES:
            return True
        setting = self.rules.get(rule_id)
        return setting is None or setting.enabled

    def severity_for(self, rule_id: str, default: Severity) -> Severity:
        setting = self.rules.get(rule_id)
        if setting is None or setting.severity is None:
            return default
        return setting.severity

    def is_base_file(self, path: str | Path) -> bool:
        name = Path(path).name
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.base_file_patterns)

    def apply(self, findings: Iterable[Finding]) -> list[Finding]:
        """Drop findings of disabled rules and apply severity overrides."""
        result: list[Finding] = []
        for finding in findings:
            if not self.is_enabled(finding.rule_id):
                continue
            severity = self.severity_for(finding.rule_id, finding.severity)
            if severity is not finding.severity:
                finding = replace(finding, severity=severity)
            result.append(finding)
        return result

    def with_options(self, **overrides: Any) -> RuleConfiguration:
        """Return a copy with the given non-None options replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


# camelCase file keys -> dataclass fields
_OPTION_KEYS: dict[str, tuple[str, type]] = {
    "maxLineLength": ("max_line_length", int),
    "indentWidth": ("indent_width", int),
    "maxComponentFileLines": ("max_component_file_lines", int),
}


def _parse_rule_setting(rule_id: str, raw: object) -> RuleSetting:
    if isinstance(raw, bool):
        return RuleSetting(enabled=raw)
    if not isinstance(raw, dict):
        raise ConfigError(f"Rule {rule_id!r}: expected an object, got {type(raw).__name__}")
    enabled = raw.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigError(f"Rule {rule_id!r}: 'enabled' must be true or false")
    severity = None
    if "severity" in raw:
        try:
            severity = Severity.parse(str(raw["severity"]))
        except ValueError as exc:
            raise ConfigError(f"Rule {rule_id!r}: {exc}") from exc
    return RuleSetting(enabled=enabled, severity=severity)


def config_from_mapping(
    data: Mapping[str, Any], known_rules: Iterable[str] | None = None
) -> RuleConfiguration:
    """Build a RuleConfiguration from a decoded JSON mapping."""
    known = set(known_rules) if known_rules is not None else None
    kwargs: dict[str, Any] = {}

    rules: dict[str, RuleSetting] = {}
    raw_rules = data.get("rules", {})
    if not isinstance(raw_rules, dict):
        raise ConfigError("'rules' must be an object mapping rule ids to settings")
    for rule_id, raw in raw_rules.items():
        if known is not None and rule_id not in known:
            raise ConfigError(f"Unknown rule id: {rule_id!r}")
        setting = _parse_rule_setting(rule_id, raw)
        if not setting.enabled and rule_id in UNSUPPRESSIBLE_RULES:
            logger.warning("Rule %s cannot be disabled; keeping it enabled", rule_id)
            setting = replace(setting, enabled=True)
        rules[rule_id] = setting
    kwargs["rules"] = rules

    for key, (attr, kind) in _OPTION_KEYS.items():
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, bool) or not isinstance(value, kind) or value <= 0:
            raise ConfigError(f"'{key}' must be a positive integer")
        kwargs[attr] = value

    if "baseFilePatterns" in data:
        patterns = data["baseFilePatterns"]
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ConfigError("'baseFilePatterns' must be a list of glob strings")
        kwargs["base_file_patterns"] = tuple(patterns)

    if "modifierDescendantOwner" in data:
        owner = data["modifierDescendantOwner"]
        if owner not in MODIFIER_DESCENDANT_OWNERS:
            raise ConfigError(
                f"'modifierDescendantOwner' must be one of: {', '.join(MODIFIER_DESCENDANT_OWNERS)}"
            )
        kwargs["modifier_descendant_owner"] = owner

    unknown = set(data) - set(_OPTION_KEYS) - {
        "rules",
        "baseFilePatterns",
        "modifierDescendantOwner",
    }
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(sorted(unknown))}")

    return RuleConfiguration(**kwargs)


def load_config(path: str | Path, known_rules: Iterable[str] | None = None) -> RuleConfiguration:
    """Load a JSON configuration file."""
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    logger.debug("Loaded configuration from %s", config_path)
    return config_from_mapping(data, known_rules=known_rules)
