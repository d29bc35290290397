"""Analyzers produce raw findings from source code.

Each analyzer exposes ``id``, ``version``, and
``run(root, files) -> list[Finding]`` and is driven by ``core.runner.run_scan``.

Available analyzers:
    - ModifierOrderAnalyzer: checks Kotlin modifier chains against the canonical order
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from modifier_lint.model.finding import Finding


class Analyzer(Protocol):
    """Every analyzer must expose ``id``, ``version``, and ``run()``."""

    id: str
    version: str

    def run(self, root: Path, files: list[Path]) -> list[Finding]:
        """Analyze *files* under *root* and return findings."""
        ...


# Lazy imports to avoid circular dependencies
def __getattr__(name: str):
    if name == "ModifierOrderAnalyzer":
        from .modifier_order import ModifierOrderAnalyzer
        return ModifierOrderAnalyzer
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
