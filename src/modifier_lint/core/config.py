"""Lint configuration dataclass and YAML loader.

Looked up in the scan root as ``.modifier-lint.yaml`` (or ``.yml``)::

    include_exts: [".kt", ".kts"]
    exclude: ["generated"]
    disabled_rules: ["MOD_DUPLICATE_001"]
    severity_overrides:
      MOD_ORDER_001: high
    custom_phases:
      roundedCard: surface
      debugBounds: content
    flexible: ["spacing"]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

from modifier_lint.catalog import DEFAULT_CATALOG, ModifierCatalog
from modifier_lint.errors import ConfigError
from modifier_lint.model import Severity
from modifier_lint.rules import ALL_RULE_IDS

_logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".modifier-lint.yaml", ".modifier-lint.yml")


@dataclass(frozen=True)
class LintConfig:
    """Immutable lint configuration."""

    include_exts: tuple[str, ...] = (".kt", ".kts")
    exclude: tuple[str, ...] = ()
    disabled_rules: frozenset[str] = frozenset()
    severity_overrides: Mapping[str, Severity] = field(default_factory=dict)
    custom_phases: Mapping[str, str] = field(default_factory=dict)
    flexible: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Suffixes are matched case-insensitively everywhere.
        exts = tuple(
            e.lower() if e.startswith(".") else f".{e.lower()}" for e in self.include_exts
        )
        object.__setattr__(self, "include_exts", exts)
        unknown = sorted(
            (set(self.disabled_rules) | set(self.severity_overrides)) - set(ALL_RULE_IDS)
        )
        if unknown:
            raise ConfigError(f"unknown rule id(s): {', '.join(unknown)}")
        # Build once so bad phase labels fail at load time.
        self.catalog()

    def catalog(self) -> ModifierCatalog:
        if not self.custom_phases and not self.flexible:
            return DEFAULT_CATALOG
        return DEFAULT_CATALOG.with_overrides(self.custom_phases, self.flexible)

    # ── loading ─────────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "LintConfig":
        """Build a config from a parsed YAML/JSON mapping."""
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a mapping")
        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            _logger.warning("Ignoring unknown config key %r", key)

        kwargs: dict[str, Any] = {}
        if "include_exts" in data:
            kwargs["include_exts"] = tuple(_str_list(data, "include_exts"))
        if "exclude" in data:
            kwargs["exclude"] = tuple(_str_list(data, "exclude"))
        if "disabled_rules" in data:
            kwargs["disabled_rules"] = frozenset(_str_list(data, "disabled_rules"))
        if "flexible" in data:
            kwargs["flexible"] = tuple(_str_list(data, "flexible"))
        if "severity_overrides" in data:
            raw = _mapping(data, "severity_overrides")
            overrides: dict[str, Severity] = {}
            for rule_id, sev in raw.items():
                try:
                    overrides[str(rule_id)] = Severity(str(sev).strip().lower())
                except ValueError:
                    raise ConfigError(
                        f"severity_overrides[{rule_id!r}]: unknown severity {sev!r}"
                    ) from None
            kwargs["severity_overrides"] = overrides
        if "custom_phases" in data:
            kwargs["custom_phases"] = {
                str(k): str(v) for k, v in _mapping(data, "custom_phases").items()
            }
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path) -> "LintConfig":
        """Load configuration from YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for config loading: pip install pyyaml")

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"{path}: cannot read config: {exc}") from exc

        _logger.debug("Loaded config from %s", path)
        return cls.from_mapping(data)

    @classmethod
    def discover(cls, root: Path) -> "LintConfig":
        """Load the first config file found in *root*, else defaults."""
        base = root if root.is_dir() else root.parent
        for name in CONFIG_FILENAMES:
            candidate = base / name
            if candidate.is_file():
                return cls.from_yaml(candidate)
        return cls()

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "include_exts": list(self.include_exts),
            "exclude": list(self.exclude),
            "disabled_rules": sorted(self.disabled_rules),
            "severity_overrides": {
                k: v.value for k, v in sorted(self.severity_overrides.items())
            },
            "custom_phases": dict(sorted(self.custom_phases.items())),
            "flexible": sorted(self.flexible),
        }


def _str_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data[key]
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"{key} must be a list of strings")
    return [str(v) for v in value]


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data[key]
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"{key} must be a mapping")
    return value
