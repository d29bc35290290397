"""Canonical rule ID registry.

Single source of truth for all rule IDs emitted by modifier-lint.

Structure:
  PUBLIC_RULE_IDS       - stable, supported, safe for downstream consumption
  EXPERIMENTAL_RULE_IDS - unstable, may change or be removed
  DEPRECATED_RULE_IDS   - scheduled for removal, do not add new usage
  ALL_RULE_IDS          - union of all buckets (internal use only)
  RULES                 - rule ID → RuleInfo (default severity, category, title)
"""

from __future__ import annotations

from dataclasses import dataclass

from modifier_lint.model import RuleCategory, Severity

# ── Ordering (public) ───────────────────────────────────────────────
MOD_ORDER_001 = "MOD_ORDER_001"
MOD_SCOPE_FIRST_001 = "MOD_SCOPE_FIRST_001"

# ── Drawing (public) ────────────────────────────────────────────────
MOD_CLIP_BG_001 = "MOD_CLIP_BG_001"
MOD_SHADOW_CLIP_001 = "MOD_SHADOW_CLIP_001"

# ── Interaction (public) ────────────────────────────────────────────
MOD_CLIP_CLICK_001 = "MOD_CLIP_CLICK_001"
MOD_PADDING_CLICK_001 = "MOD_PADDING_CLICK_001"

# ── Animation (public) ──────────────────────────────────────────────
MOD_ANIM_SIZE_001 = "MOD_ANIM_SIZE_001"

# ── Redundancy (public) ─────────────────────────────────────────────
MOD_DUPLICATE_001 = "MOD_DUPLICATE_001"


@dataclass(frozen=True, slots=True)
class RuleInfo:
    rule_id: str
    severity: Severity
    category: RuleCategory
    title: str


RULES: dict[str, RuleInfo] = {
    info.rule_id: info
    for info in (
        RuleInfo(
            MOD_ORDER_001,
            Severity.MEDIUM,
            RuleCategory.ORDERING,
            "Modifier appears after a modifier of a later phase",
        ),
        RuleInfo(
            MOD_SCOPE_FIRST_001,
            Severity.LOW,
            RuleCategory.LAYOUT,
            "Parent-scope modifier (weight, align, ...) is not first in the chain",
        ),
        RuleInfo(
            MOD_CLIP_BG_001,
            Severity.HIGH,
            RuleCategory.DRAWING,
            "Surface (background, border) is painted before clip and ignores the shape",
        ),
        RuleInfo(
            MOD_SHADOW_CLIP_001,
            Severity.HIGH,
            RuleCategory.DRAWING,
            "Shadow after clip is clipped away",
        ),
        RuleInfo(
            MOD_CLIP_CLICK_001,
            Severity.MEDIUM,
            RuleCategory.INTERACTION,
            "Interaction before clip: ripple and touch area ignore the shape",
        ),
        RuleInfo(
            MOD_PADDING_CLICK_001,
            Severity.MEDIUM,
            RuleCategory.INTERACTION,
            "Padding between surface and interaction shrinks the touch target",
        ),
        RuleInfo(
            MOD_ANIM_SIZE_001,
            Severity.HIGH,
            RuleCategory.ANIMATION,
            "animateContentSize after a size modifier does not animate that size",
        ),
        RuleInfo(
            MOD_DUPLICATE_001,
            Severity.LOW,
            RuleCategory.REDUNDANCY,
            "Single-effect modifier repeated in one chain",
        ),
    )
}

# ── Buckets ─────────────────────────────────────────────────────────

PUBLIC_RULE_IDS: list[str] = sorted([
    # Ordering
    MOD_ORDER_001,
    MOD_SCOPE_FIRST_001,
    # Drawing
    MOD_CLIP_BG_001,
    MOD_SHADOW_CLIP_001,
    # Interaction
    MOD_CLIP_CLICK_001,
    MOD_PADDING_CLICK_001,
    # Animation
    MOD_ANIM_SIZE_001,
    # Redundancy
    MOD_DUPLICATE_001,
])

EXPERIMENTAL_RULE_IDS: list[str] = sorted([
    # Add experimental rules here as they're developed
])

DEPRECATED_RULE_IDS: list[str] = sorted([
    # Add deprecated rules here before removal
])

# Union of all buckets (internal use only)
ALL_RULE_IDS: list[str] = sorted(set(
    PUBLIC_RULE_IDS
    + EXPERIMENTAL_RULE_IDS
    + DEPRECATED_RULE_IDS
))


def _assert_rule_registry_invariants() -> None:
    """Fail fast on invariant violations.

    Called at import time so CI and local runs catch issues immediately.
    """
    import re

    # Pattern matches multi-segment IDs like MOD_CLIP_BG_001
    rule_re = re.compile(r"^[A-Z]{2,4}_[A-Z][A-Z0-9_]*_[0-9]{3}$")

    def _check_bucket(name: str, ids: list[str]) -> None:
        if ids != sorted(ids):
            raise AssertionError(f"{name} must be sorted")
        if len(ids) != len(set(ids)):
            raise AssertionError(f"{name} must contain unique IDs")
        bad = [x for x in ids if not rule_re.match(x)]
        if bad:
            raise AssertionError(f"{name} contains invalid rule IDs: {bad}")

    _check_bucket("PUBLIC_RULE_IDS", PUBLIC_RULE_IDS)
    _check_bucket("EXPERIMENTAL_RULE_IDS", EXPERIMENTAL_RULE_IDS)
    _check_bucket("DEPRECATED_RULE_IDS", DEPRECATED_RULE_IDS)
    _check_bucket("ALL_RULE_IDS", ALL_RULE_IDS)

    # Buckets must be disjoint.
    pub = set(PUBLIC_RULE_IDS)
    exp = set(EXPERIMENTAL_RULE_IDS)
    dep = set(DEPRECATED_RULE_IDS)
    overlap = (pub & exp) | (pub & dep) | (exp & dep)
    if overlap:
        raise AssertionError(
            f"Rule ID buckets must be disjoint; overlaps: {sorted(overlap)}"
        )

    # ALL must be exact union.
    union = pub | exp | dep
    if set(ALL_RULE_IDS) != union:
        raise AssertionError(
            "ALL_RULE_IDS must equal union(PUBLIC, EXPERIMENTAL, DEPRECATED)"
        )

    # Every emitted rule needs metadata, and nothing else may carry any.
    if set(RULES) != union:
        raise AssertionError(
            f"RULES metadata must cover exactly ALL_RULE_IDS; "
            f"diff: {sorted(set(RULES) ^ union)}"
        )


_assert_rule_registry_invariants()
