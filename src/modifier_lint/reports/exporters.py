"""Multi-format exporters for lint results.

Supports:

*  **JSON** — machine-readable, suitable for CI artifact storage.
*  **Text** — one ``path:line:col: RULE [severity] message`` line per finding,
   the format editors and CI log parsers understand.
*  **Markdown** — human-readable, suitable for PR comments.

All exporters accept a :class:`LintResult` and produce a string.
"""

from __future__ import annotations

from collections import Counter

from modifier_lint.model import Severity
from modifier_lint.model.run_result import LintResult
from modifier_lint.utils.json_norm import stable_json_dumps

# ── severity ordering (worst first) ─────────────────────────────────
_SEVERITY_ORDER = [
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.INFO,
]

FORMATS = ("text", "json", "markdown")


# ════════════════════════════════════════════════════════════════════
# JSON exporter
# ════════════════════════════════════════════════════════════════════


def export_json(result: LintResult, *, ci_mode: bool = False, indent: int = 2) -> str:
    """Export a ``LintResult`` as indented JSON."""
    return stable_json_dumps(result.to_dict(), ci_mode=ci_mode, indent=indent)


# ════════════════════════════════════════════════════════════════════
# Text exporter
# ════════════════════════════════════════════════════════════════════


def export_text(result: LintResult) -> str:
    lines: list[str] = []
    for f in result.findings:
        loc = f.location
        lines.append(
            f"{loc.path}:{loc.line_start}:{loc.column}: "
            f"{f.rule_id} [{f.severity.value}] {f.message}"
        )
        suggested = f.metadata.get("suggested_order")
        # Padding and scope findings can leave the order itself unchanged.
        if suggested and suggested != f.metadata.get("chain"):
            lines.append(f"    suggested order: {' -> '.join(suggested)}")

    total = len(result.findings)
    lines.append(
        f"{total} finding(s) in {result.chains_checked} chain(s) "
        f"across {result.files_scanned} file(s)"
    )
    return "\n".join(lines) + "\n"


# ════════════════════════════════════════════════════════════════════
# Markdown exporter
# ════════════════════════════════════════════════════════════════════


def export_markdown(result: LintResult, *, top_n: int = 50) -> str:
    """Export a ``LintResult`` as a concise Markdown summary."""
    lines: list[str] = []

    lines.append("# Modifier Order Report")
    lines.append("")
    lines.append(f"**Files:** {result.files_scanned}  ")
    lines.append(f"**Chains:** {result.chains_checked}  ")
    lines.append(f"**Findings:** {len(result.findings)}")
    lines.append("")

    sev_counts = Counter(f.severity for f in result.findings)
    if sev_counts:
        lines.append("## By Severity")
        lines.append("")
        lines.append("| Severity | Count |")
        lines.append("|----------|------:|")
        for sev in _SEVERITY_ORDER:
            c = sev_counts.get(sev, 0)
            if c:
                lines.append(f"| {sev.value.upper()} | {c} |")
        lines.append("")

    if result.findings:
        ranked = sorted(
            result.findings,
            key=lambda f: (
                _SEVERITY_ORDER.index(f.severity),
                f.location.path,
                f.location.line_start,
            ),
        )
        lines.append("## Findings")
        lines.append("")
        lines.append("| Severity | Rule | Location | Message |")
        lines.append("|----------|------|----------|---------|")
        for f in ranked[:top_n]:
            message = f.message.replace("|", "\\|")
            lines.append(
                f"| {f.severity.value.upper()} | `{f.rule_id}` "
                f"| `{f.location.path}:{f.location.line_start}` | {message} |"
            )
        if len(ranked) > top_n:
            lines.append("")
            lines.append(f"_... and {len(ranked) - top_n} more_")
        lines.append("")
    else:
        lines.append("All modifier chains follow the canonical order.")
        lines.append("")

    return "\n".join(lines)


def export(result: LintResult, fmt: str, *, ci_mode: bool = False) -> str:
    """Dispatch to the exporter for *fmt* (one of ``FORMATS``)."""
    if fmt == "json":
        return export_json(result, ci_mode=ci_mode)
    if fmt == "markdown":
        return export_markdown(result)
    if fmt == "text":
        return export_text(result)
    raise ValueError(f"unknown format: {fmt!r} (expected one of {', '.join(FORMATS)})")
