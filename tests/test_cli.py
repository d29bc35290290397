"""CLI tests — exit codes and output of every command, run in-process."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from modifier_lint.__main__ import main

FIXTURES = Path(__file__).resolve().parent / "fixtures" / "kotlin"


@pytest.fixture(autouse=True)
def _no_ci_env(monkeypatch) -> None:
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("MODIFIER_LINT_DETERMINISTIC", raising=False)


class TestLintCommand:
    def test_hot_fixture_fails(self, capsys) -> None:
        rc = main([str(FIXTURES / "hot")])
        out = capsys.readouterr().out
        assert rc == 2
        assert "src/Card.kt:11:14: MOD_CLIP_BG_001 [high]" in out
        assert "suggested order: clip -> background -> clickable" in out
        assert out.rstrip().endswith("3 finding(s) in 3 chain(s) across 1 file(s)")

    def test_clean_fixture_passes(self, capsys) -> None:
        rc = main([str(FIXTURES / "clean")])
        assert rc == 0
        assert "0 finding(s) in 2 chain(s)" in capsys.readouterr().out

    def test_json_output(self, capsys) -> None:
        rc = main([str(FIXTURES / "hot"), "--ci", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert rc == 2
        assert data["schema_version"] == "lint_result_v1"
        assert data["run"]["created_at"] == "2000-01-01T00:00:00+00:00"

    def test_markdown_output(self, capsys) -> None:
        main([str(FIXTURES / "clean"), "--format", "markdown"])
        out = capsys.readouterr().out
        assert out.startswith("# Modifier Order Report")
        assert "All modifier chains follow the canonical order." in out

    def test_ci_env_forces_deterministic(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("CI", "true")
        main([str(FIXTURES / "clean"), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["run"]["run_id"].startswith("ci-")

    def test_out_dir(self, tmp_path: Path, capsys) -> None:
        main([str(FIXTURES / "hot"), "--out", str(tmp_path)])
        capsys.readouterr()
        assert (tmp_path / "lint_result.json").is_file()

    def test_strict_fails_on_low(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "A.kt").write_text("val m = Modifier.size(1.dp).size(2.dp)\n")
        assert main([str(tmp_path)]) == 0
        assert main([str(tmp_path), "--strict"]) == 1
        capsys.readouterr()

    def test_missing_path(self, capsys) -> None:
        assert main(["/nonexistent/path/xyz"]) == 2
        assert "does not exist" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path: Path, capsys) -> None:
        rc = main([str(FIXTURES / "clean"), "--config", str(tmp_path / "none.yaml")])
        assert rc == 2
        assert "config file not found" in capsys.readouterr().err

    def test_explicit_config(self, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "lint.yaml"
        cfg.write_text(
            "severity_overrides:\n"
            "  MOD_CLIP_BG_001: low\n"
            "  MOD_SHADOW_CLIP_001: low\n"
            "  MOD_ANIM_SIZE_001: medium\n",
            encoding="utf-8",
        )
        assert main([str(FIXTURES / "hot"), "--config", str(cfg)]) == 1
        capsys.readouterr()

    def test_no_arguments(self, capsys) -> None:
        assert main([]) == 2
        assert "please provide a path" in capsys.readouterr().err


class TestCheckCommand:
    def test_expression_with_violation(self, capsys) -> None:
        rc = main(["check", "Modifier.background(Color.Red).padding(8.dp).clickable { }"])
        out = capsys.readouterr().out
        assert rc == 1
        assert "1: MOD_PADDING_CLICK_001 [medium]" in out
        # Reordering by phase leaves this chain unchanged, so nothing is suggested.
        assert "suggested order:" not in out

    def test_names(self, capsys) -> None:
        assert main(["check", "clip", "background", "clickable"]) == 0
        assert capsys.readouterr().out.strip() == "OK"

    def test_high_severity(self, capsys) -> None:
        assert main(["check", "background", "clip"]) == 2
        assert "suggested order: clip -> background" in capsys.readouterr().out

    def test_json(self, capsys) -> None:
        rc = main(["check", "clickable", "clip", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert rc == 1
        assert data["chain"] == ["clickable", "clip"]
        assert data["suggested_order"] == ["clip", "clickable"]
        assert data["violations"][0]["rule_id"] == "MOD_CLIP_CLICK_001"

    def test_empty_chain(self, capsys) -> None:
        assert main(["check", "Modifier.Node"]) == 2
        assert "no modifier calls" in capsys.readouterr().err


class TestInfoCommands:
    def test_rules_text(self, capsys) -> None:
        assert main(["rules"]) == 0
        out = capsys.readouterr().out
        assert "MOD_CLIP_BG_001" in out
        assert len(out.strip().splitlines()) == 8

    def test_rules_json(self, capsys) -> None:
        assert main(["rules", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data) == 8
        assert {"rule_id", "severity", "category", "title"} <= set(data[0])

    def test_phases(self, capsys) -> None:
        assert main(["phases"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split()[:2] == ["0", "scope"]
        assert lines[-1].startswith("--  flexible")
        assert "padding" in lines[-1]


class TestValidateCommand:
    def test_valid_file(self, tmp_path: Path, capsys) -> None:
        main([str(FIXTURES / "hot"), "--ci", "--out", str(tmp_path)])
        capsys.readouterr()
        assert main(["validate", str(tmp_path / "lint_result.json")]) == 0
        assert "OK" in capsys.readouterr().out

    def test_wrong_schema_version(self, tmp_path: Path, capsys) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"schema_version": "other"}), encoding="utf-8")
        assert main(["validate", str(bad)]) == 1
        assert "FAIL" in capsys.readouterr().err

    def test_schema_violation(self, tmp_path: Path, capsys) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"schema_version": "lint_result_v1"}), encoding="utf-8")
        assert main(["validate", str(bad)]) == 1
        capsys.readouterr()

    def test_missing_file(self, tmp_path: Path, capsys) -> None:
        assert main(["validate", str(tmp_path / "nope.json")]) == 2
        assert "ERROR" in capsys.readouterr().err
