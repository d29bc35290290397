"""Modifier order analyzer — flags modifier chains that break the canonical order."""

from __future__ import annotations

import logging
from pathlib import Path

from modifier_lint.checker import check_chain, suggest_order
from modifier_lint.core.config import LintConfig
from modifier_lint.model.chain import ModifierChain
from modifier_lint.model.finding import Finding, Location, make_fingerprint
from modifier_lint.parser.kotlin import extract_chains
from modifier_lint.rules import RULES

_logger = logging.getLogger(__name__)


class ModifierOrderAnalyzer:
    """Checks every modifier chain in Kotlin sources.

    Each chain is run through ``checker.check_chain``; every violation
    becomes one finding located at the offending call.

    Rule IDs: see ``modifier_lint.rules``.
    """

    id: str = "modifier_order"
    version: str = "1.0.0"

    def __init__(self, config: LintConfig | None = None):
        self.config = config or LintConfig()
        self.catalog = self.config.catalog()
        self.chains_checked = 0
        self.files_scanned = 0

    def run(self, root: Path, files: list[Path]) -> list[Finding]:
        findings: list[Finding] = []
        self.chains_checked = 0
        self.files_scanned = 0

        for path in files:
            if path.suffix.lower() not in self.config.include_exts:
                continue

            try:
                content = path.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                _logger.warning("Cannot read %s: %s", path, exc)
                continue

            self.files_scanned += 1
            try:
                rel = path.relative_to(root).as_posix()
            except ValueError:
                rel = path.as_posix()
            findings.extend(self.check_source(content, rel))

        # Assign stable finding IDs (fingerprint-based)
        for i, f in enumerate(findings):
            object.__setattr__(f, "finding_id", f"mod_{f.fingerprint[7:15]}_{i:04d}")

        return findings

    def check_source(self, content: str, rel: str) -> list[Finding]:
        """Findings for one file's text; ``finding_id`` is left for the caller."""
        findings: list[Finding] = []
        for chain in extract_chains(content):
            self.chains_checked += 1
            findings.extend(self._check_chain(chain, rel))
        return findings

    def _check_chain(self, chain: ModifierChain, rel: str) -> list[Finding]:
        names = chain.names
        violations = check_chain(
            names,
            catalog=self.catalog,
            disabled=self.config.disabled_rules | chain.disabled_rules,
            severity_overrides=self.config.severity_overrides,
        )
        if not violations:
            return []

        suggested = suggest_order(names, catalog=self.catalog)
        out: list[Finding] = []
        for v in violations:
            call = chain.calls[v.index]
            symbol = f"{v.index}:{v.modifier}"
            out.append(
                Finding(
                    finding_id="",  # filled by run()
                    rule_id=v.rule_id,
                    category=RULES[v.rule_id].category,
                    severity=v.severity,
                    message=v.message,
                    location=Location(
                        path=rel,
                        line_start=call.line,
                        line_end=chain.line_end,
                        column=call.column,
                    ),
                    fingerprint=make_fingerprint(v.rule_id, rel, symbol, chain.text),
                    snippet=chain.text,
                    metadata={
                        "rule_id": v.rule_id,
                        "modifier": v.modifier,
                        "index": v.index,
                        "related_index": v.related_index,
                        "chain": names,
                        "suggested_order": suggested,
                    },
                )
            )
        return out
