"""Tests for LintConfig loading and validation."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from modifier_lint.analyzers.modifier_order import ModifierOrderAnalyzer
from modifier_lint.catalog import DEFAULT_CATALOG
from modifier_lint.core.config import LintConfig
from modifier_lint.core.runner import run_scan
from modifier_lint.errors import ConfigError, ModifierLintError
from modifier_lint.model import Phase, Severity


class TestDefaults:
    def test_default_values(self) -> None:
        cfg = LintConfig()
        assert cfg.include_exts == (".kt", ".kts")
        assert cfg.exclude == ()
        assert cfg.disabled_rules == frozenset()
        assert cfg.catalog() is DEFAULT_CATALOG

    def test_to_dict_is_sorted_and_plain(self) -> None:
        cfg = LintConfig(
            disabled_rules=frozenset({"MOD_ORDER_001", "MOD_DUPLICATE_001"}),
            severity_overrides={"MOD_ORDER_001": Severity.HIGH},
        )
        d = cfg.to_dict()
        assert d["disabled_rules"] == ["MOD_DUPLICATE_001", "MOD_ORDER_001"]
        assert d["severity_overrides"] == {"MOD_ORDER_001": "high"}


class TestFromMapping:
    def test_full_mapping(self) -> None:
        cfg = LintConfig.from_mapping(
            {
                "include_exts": ["kt"],
                "exclude": ["generated"],
                "disabled_rules": ["MOD_DUPLICATE_001"],
                "severity_overrides": {"MOD_ORDER_001": "High"},
                "custom_phases": {"roundedCard": "surface"},
                "flexible": ["spacing"],
            }
        )
        assert cfg.include_exts == (".kt",)
        assert cfg.exclude == ("generated",)
        assert cfg.disabled_rules == frozenset({"MOD_DUPLICATE_001"})
        assert cfg.severity_overrides == {"MOD_ORDER_001": Severity.HIGH}
        catalog = cfg.catalog()
        assert catalog.phase_of("roundedCard") is Phase.SURFACE
        assert catalog.is_flexible("spacing")

    def test_include_exts_normalized_to_lowercase(self) -> None:
        cfg = LintConfig.from_mapping({"include_exts": [".KT", "Kts"]})
        assert cfg.include_exts == (".kt", ".kts")
        assert LintConfig(include_exts=(".KT",)).include_exts == (".kt",)

    def test_uppercase_include_exts_still_lints(self, tmp_path: Path) -> None:
        (tmp_path / "A.kt").write_text(
            "val m = Modifier.background(c).clip(s)\n", encoding="utf-8"
        )
        cfg = LintConfig.from_mapping({"include_exts": [".KT"]})
        result = run_scan(tmp_path, [ModifierOrderAnalyzer(cfg)], config=cfg)
        assert result.files_scanned == 1
        assert result.chains_checked == 1
        assert [f.rule_id for f in result.findings] == ["MOD_CLIP_BG_001"]

    def test_null_values_mean_empty(self) -> None:
        cfg = LintConfig.from_mapping({"exclude": None, "custom_phases": None})
        assert cfg.exclude == ()
        assert cfg.custom_phases == {}

    def test_unknown_key_warns(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="modifier_lint.core.config"):
            LintConfig.from_mapping({"colour": "red"})
        assert "colour" in caplog.text

    @pytest.mark.parametrize(
        "data, match",
        [
            ({"disabled_rules": ["MOD_NOPE_001"]}, "unknown rule id"),
            ({"severity_overrides": {"MOD_NOPE_001": "low"}}, "unknown rule id"),
            ({"severity_overrides": {"MOD_ORDER_001": "urgent"}}, "unknown severity"),
            ({"custom_phases": {"x": "decoration"}}, "unknown phase"),
            ({"exclude": "build"}, "list of strings"),
            ({"custom_phases": ["x"]}, "mapping"),
        ],
    )
    def test_invalid(self, data: dict, match: str) -> None:
        with pytest.raises(ConfigError, match=match):
            LintConfig.from_mapping(data)

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigError):
            LintConfig.from_mapping(["a"])  # type: ignore[arg-type]

    def test_config_error_is_a_lint_error(self) -> None:
        assert issubclass(ConfigError, ModifierLintError)


class TestYaml:
    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / ".modifier-lint.yaml"
        path.write_text(
            "disabled_rules:\n  - MOD_SCOPE_FIRST_001\ncustom_phases:\n  debugBounds: content\n",
            encoding="utf-8",
        )
        cfg = LintConfig.from_yaml(path)
        assert cfg.disabled_rules == frozenset({"MOD_SCOPE_FIRST_001"})
        assert cfg.catalog().phase_of("debugBounds") is Phase.CONTENT

    def test_empty_file_is_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("", encoding="utf-8")
        assert LintConfig.from_yaml(path) == LintConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("exclude: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid YAML"):
            LintConfig.from_yaml(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="cannot read"):
            LintConfig.from_yaml(tmp_path / "nope.yaml")


class TestDiscover:
    def test_finds_yml(self, tmp_path: Path) -> None:
        (tmp_path / ".modifier-lint.yml").write_text("exclude: [gen]\n", encoding="utf-8")
        assert LintConfig.discover(tmp_path).exclude == ("gen",)

    def test_yaml_wins_over_yml(self, tmp_path: Path) -> None:
        (tmp_path / ".modifier-lint.yaml").write_text("exclude: [a]\n", encoding="utf-8")
        (tmp_path / ".modifier-lint.yml").write_text("exclude: [b]\n", encoding="utf-8")
        assert LintConfig.discover(tmp_path).exclude == ("a",)

    def test_single_file_root_uses_parent(self, tmp_path: Path) -> None:
        (tmp_path / ".modifier-lint.yaml").write_text("exclude: [a]\n", encoding="utf-8")
        source = tmp_path / "A.kt"
        source.write_text("", encoding="utf-8")
        assert LintConfig.discover(source).exclude == ("a",)

    def test_no_file_means_defaults(self, tmp_path: Path) -> None:
        assert LintConfig.discover(tmp_path) == LintConfig()
