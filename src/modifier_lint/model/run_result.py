"""LintResult — the immutable, schema-aligned lint artifact."""

from __future__ import annotations

import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from modifier_lint import __version__
from modifier_lint.catalog import CATALOG_VERSION
from modifier_lint.model.finding import Finding
from modifier_lint.policy.exit_codes import worst_severity


@dataclass(slots=True)
class LintResult:
    """Assembled lint result matching ``lint_result.schema.json``.

    Constructed by ``core.runner`` after all analyzers finish.
    """

    # ── run metadata ────────────────────────────────────────────────
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
    )
    tool_version: str = __version__
    catalog_version: str = CATALOG_VERSION

    config: dict = field(default_factory=dict)

    # ── summary ─────────────────────────────────────────────────────
    files_scanned: int = 0
    chains_checked: int = 0
    findings: list[Finding] = field(default_factory=list)

    @property
    def worst_severity(self) -> str | None:
        return worst_severity(self.findings)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the full result JSON matching the schema."""
        by_severity = Counter(f.severity.value for f in self.findings)
        by_rule = Counter(f.rule_id for f in self.findings)

        return {
            "schema_version": "lint_result_v1",
            "run": {
                "run_id": self.run_id,
                "created_at": self.created_at,
                "tool_version": self.tool_version,
                "catalog_version": self.catalog_version,
                "config": self.config,
            },
            "summary": {
                "files_scanned": self.files_scanned,
                "chains_checked": self.chains_checked,
                "worst_severity": self.worst_severity,
                "counts": {
                    "findings_total": len(self.findings),
                    "by_severity": dict(sorted(by_severity.items())),
                    "by_rule": dict(sorted(by_rule.items())),
                },
            },
            "findings": [f.to_dict() for f in self.findings],
        }
