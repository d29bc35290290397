"""Exit-code policy — severity-based CI exit-code contract.

Philosophy:
  - Deterministic in CI
  - Stable mapping from worst severity → exit code
  - No hidden magic inside CLI glue
  - Unknown severities are fail-safe (CRITICAL)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from modifier_lint.checker import Violation
from modifier_lint.model.finding import Finding
from modifier_lint.utils.exit_codes import ExitCode


SeverityName = Literal["NONE", "INFO", "LOW", "MEDIUM", "HIGH", "CRITICAL"]


@dataclass(frozen=True)
class ExitCodePolicy:
    """Tunable thresholds for severity → exit-code mapping."""

    ok: int = ExitCode.SUCCESS
    warn: int = ExitCode.VIOLATION
    fail: int = ExitCode.ERROR
    # Minimum severity that triggers warn/fail
    warn_at: SeverityName = "MEDIUM"
    fail_at: SeverityName = "HIGH"


DEFAULT_POLICY = ExitCodePolicy()

# `--strict`: any finding at all is a violation.
STRICT_POLICY = ExitCodePolicy(warn_at="INFO", fail_at="HIGH")


_SEV_RANK: dict[SeverityName, int] = {
    "NONE": 0,
    "INFO": 1,
    "LOW": 2,
    "MEDIUM": 3,
    "HIGH": 4,
    "CRITICAL": 5,
}


def _normalize_severity(value: str | None) -> SeverityName:
    """Normalize a raw severity string to a canonical name.

    Missing values mean ``NONE``; unknown values are treated as ``CRITICAL``
    (fail-safe in CI).
    """
    if not value:
        return "NONE"
    v = value.strip().upper()
    if v in _SEV_RANK:
        return v  # type: ignore[return-value]
    return "CRITICAL"


def exit_code_for_worst_severity(
    worst_severity: str | None,
    *,
    policy: ExitCodePolicy = DEFAULT_POLICY,
) -> int:
    """Compute the CI exit code from a worst-severity string.

    Contract:
      - monotonic (worse severity never produces a lower exit code)
      - unknown severities treated as CRITICAL (fail-safe)
    """
    sev_rank = _SEV_RANK[_normalize_severity(worst_severity)]
    if sev_rank == 0:
        return policy.ok

    if sev_rank >= _SEV_RANK[policy.fail_at]:
        return policy.fail
    if sev_rank >= _SEV_RANK[policy.warn_at]:
        return policy.warn
    return policy.ok


def worst_severity(findings: Iterable[Finding | Violation]) -> str | None:
    """Lowercase name of the worst severity present, or ``None`` if clean."""
    worst: str | None = None
    worst_rank = 0
    for f in findings:
        rank = _SEV_RANK[_normalize_severity(f.severity.value)]
        if rank > worst_rank:
            worst_rank = rank
            worst = f.severity.value
    return worst


def worst_severity_from_counts(by_severity: dict[str, int] | None) -> str | None:
    """Derive the worst severity present from a ``by_severity`` counts dict.

    Returns the lowercase name of the worst severity with a non-zero count,
    or ``None`` if no findings are present.
    """
    if not by_severity:
        return None
    worst: str | None = None
    worst_rank = 0
    for sev_str, count in by_severity.items():
        if not count:
            continue
        rank = _SEV_RANK[_normalize_severity(sev_str)]
        if rank > worst_rank:
            worst_rank = rank
            worst = _normalize_severity(sev_str).lower()
    return worst
