"""
modifier_lint.api
=================

Programmatic entrypoints for using modifier_lint as a library.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (ci_mode=True)
  - Stable, JSON-friendly outputs that match the result schema

Usage::

    from modifier_lint.api import check_modifiers, lint_project, lint_source

    result, result_dict = lint_project("app/src", ci_mode=True)
    findings = lint_source(kotlin_text, path="Card.kt")
    violations = check_modifiers(["background", "clip"])
"""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Optional, Sequence

from modifier_lint.analyzers.modifier_order import ModifierOrderAnalyzer
from modifier_lint.checker import Violation, check_chain
from modifier_lint.contracts.load import validate_instance
from modifier_lint.core.config import LintConfig
from modifier_lint.core.discover import discover_source_files
from modifier_lint.core.runner import run_scan
from modifier_lint.model.finding import Finding
from modifier_lint.model.run_result import LintResult

__all__ = [
    "check_modifiers",
    "lint_project",
    "lint_source",
    "validate_instance",
]

# Fixed timestamp for deterministic mode (matches CLI contract).
_DETERMINISTIC_TIMESTAMP = "2000-01-01T00:00:00+00:00"


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def _deterministic_run_id(root: Path, files: list[Path]) -> str:
    """Content-hash of the scanned file set."""
    base = root if root.is_dir() else root.parent
    h = hashlib.sha256()
    for p in files:
        try:
            h.update(p.relative_to(base).as_posix().encode("utf-8"))
            h.update(p.read_bytes())
        except (OSError, ValueError):
            h.update(b"0")
    return "ci-" + h.hexdigest()[:12]


# ── lint_project ────────────────────────────────────────────────────


def lint_project(
    root: str | Path,
    *,
    config: Optional[LintConfig] = None,
    ci_mode: bool = False,
    out_dir: Optional[Path] = None,
    analyzers: Optional[list[Any]] = None,
) -> tuple[LintResult, dict[str, Any]]:
    """Lint every source file under *root*.

    Parameters
    ----------
    root:
        Directory (or single ``.kt`` file) to lint.
    config:
        Lint configuration.  Default: discovered from ``.modifier-lint.yaml``
        in *root*, else built-in defaults.
    ci_mode:
        If True, output is byte-deterministic (fixed timestamp, content-hash
        run id, relative root).
    out_dir:
        If given, ``lint_result.json`` is written there.
    analyzers:
        Override the default analyzer set.

    Returns
    -------
    ``(LintResult, result_dict)``
        The dataclass and the schema-aligned JSON dict.

    Raises
    ------
    FileNotFoundError
        If *root* does not exist.
    ConfigError
        If the discovered configuration is invalid.
    """
    root_p = _to_path(root).resolve()
    if not root_p.exists():
        raise FileNotFoundError(f"lint_project: root does not exist: {root_p}")

    cfg = config if config is not None else LintConfig.discover(root_p)
    analyzer_instances = (
        analyzers if analyzers is not None else [ModifierOrderAnalyzer(cfg)]
    )

    kwargs: dict[str, Any] = {"config": cfg, "ci_mode": ci_mode, "out_dir": out_dir}
    if ci_mode:
        files = discover_source_files(
            root_p, include_exts=cfg.include_exts, exclude=cfg.exclude
        )
        kwargs["_created_at"] = _DETERMINISTIC_TIMESTAMP
        kwargs["_run_id"] = _deterministic_run_id(root_p, files)

    result = run_scan(root_p, analyzer_instances, **kwargs)
    return result, result.to_dict()


# ── lint_source ─────────────────────────────────────────────────────


def lint_source(
    source: str,
    *,
    path: str = "<string>",
    config: Optional[LintConfig] = None,
) -> list[Finding]:
    """Lint Kotlin *source* text held in memory.

    *path* is only used for finding locations and fingerprints.
    """
    analyzer = ModifierOrderAnalyzer(config)
    findings = analyzer.check_source(source, path)
    for i, f in enumerate(findings):
        object.__setattr__(f, "finding_id", f"mod_{f.fingerprint[7:15]}_{i:04d}")
    return findings


# ── check_modifiers ─────────────────────────────────────────────────


def check_modifiers(
    names: Sequence[str],
    *,
    config: Optional[LintConfig] = None,
) -> list[Violation]:
    """Check a bare sequence of modifier names against the canonical order."""
    cfg = config or LintConfig()
    return check_chain(
        list(names),
        catalog=cfg.catalog(),
        disabled=cfg.disabled_rules,
        severity_overrides=cfg.severity_overrides,
    )
