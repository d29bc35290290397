"""Chain checker — evaluates one modifier chain against the canonical order.

The checker works on plain modifier names so it can be driven from source
extraction, the CLI ``check`` command, or tests alike::

    >>> [v.rule_id for v in check_chain(["background", "clip"])]
    ['MOD_CLIP_BG_001']

Pair rules
----------
For every ranked modifier the checker walks the earlier ranked modifiers
whose phase it should precede. Each such pair maps to exactly one rule:
a dedicated rule when the pair is a known visual/interaction pitfall,
``MOD_ORDER_001`` otherwise. Per offending modifier, each rule is reported
once, against the first earlier modifier that triggers it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Mapping, Sequence

from modifier_lint import rules as R
from modifier_lint.catalog import DEFAULT_CATALOG, SINGLE_EFFECT, ModifierCatalog
from modifier_lint.model import Phase, Severity


@dataclass(frozen=True, slots=True)
class Violation:
    """A single rule violation inside one chain."""

    rule_id: str
    index: int
    modifier: str
    message: str
    severity: Severity
    related_index: int | None = None

    def to_dict(self) -> dict:
        return {
            "rule_id": self.rule_id,
            "index": self.index,
            "modifier": self.modifier,
            "message": self.message,
            "severity": self.severity.value,
            "related_index": self.related_index,
        }


# (earlier phase, later phase) → dedicated rule; anything else out of
# order falls through to MOD_ORDER_001.
_PAIR_RULES: dict[tuple[Phase, Phase], str] = {
    (Phase.SIZE, Phase.ANIMATION): R.MOD_ANIM_SIZE_001,
    (Phase.SURFACE, Phase.CLIP): R.MOD_CLIP_BG_001,
    (Phase.CLIP, Phase.SHADOW): R.MOD_SHADOW_CLIP_001,
    (Phase.INTERACTION, Phase.CLIP): R.MOD_CLIP_CLICK_001,
}

_PAIR_MESSAGES: dict[str, str] = {
    R.MOD_ANIM_SIZE_001: (
        "'{later}' is applied after '{earlier}'; the size change will not be "
        "animated. Move '{later}' before size modifiers"
    ),
    R.MOD_CLIP_BG_001: (
        "'{earlier}' is painted before '{later}' and ignores the clip shape. "
        "Move '{later}' before '{earlier}'"
    ),
    R.MOD_SHADOW_CLIP_001: (
        "'{later}' comes after '{earlier}' and is clipped away. "
        "Move '{later}' before '{earlier}'"
    ),
    R.MOD_CLIP_CLICK_001: (
        "'{earlier}' is applied before '{later}'; the ripple and touch area "
        "ignore the shape. Move '{later}' before '{earlier}'"
    ),
    R.MOD_ORDER_001: (
        "'{later}' ({later_phase}) should come before '{earlier}' ({earlier_phase})"
    ),
}


def _severity(rule_id: str, overrides: Mapping[str, Severity] | None) -> Severity:
    if overrides and rule_id in overrides:
        return overrides[rule_id]
    return R.RULES[rule_id].severity


def check_chain(
    names: Sequence[str],
    *,
    catalog: ModifierCatalog = DEFAULT_CATALOG,
    disabled: Collection[str] = (),
    severity_overrides: Mapping[str, Severity] | None = None,
) -> list[Violation]:
    """Return every rule violation in the chain *names* (source order).

    Pure and deterministic; results are sorted by ``(index, rule_id)``.
    """
    out: list[Violation] = []

    def emit(rule_id: str, index: int, message: str, related: int | None) -> None:
        if rule_id in disabled:
            return
        out.append(
            Violation(
                rule_id=rule_id,
                index=index,
                modifier=names[index],
                message=message,
                severity=_severity(rule_id, severity_overrides),
                related_index=related,
            )
        )

    phases: list[Phase | None] = [catalog.phase_of(n) for n in names]

    for j, later in enumerate(names):
        pj = phases[j]
        if pj is None:
            continue

        if pj is Phase.SCOPE:
            first = next(
                (
                    i
                    for i in range(j)
                    if catalog.is_known(names[i]) and phases[i] is not Phase.SCOPE
                ),
                None,
            )
            if first is not None:
                emit(
                    R.MOD_SCOPE_FIRST_001,
                    j,
                    f"Parent-scope modifier '{later}' should start the chain "
                    f"(found after '{names[first]}')",
                    first,
                )
            continue

        reported: set[str] = set()
        for i in range(j):
            pi = phases[i]
            if pi is None or pi <= pj:
                continue
            rule_id = _PAIR_RULES.get((pi, pj), R.MOD_ORDER_001)
            if rule_id in reported:
                continue
            reported.add(rule_id)
            emit(
                rule_id,
                j,
                _PAIR_MESSAGES[rule_id].format(
                    later=later,
                    earlier=names[i],
                    later_phase=pj.label,
                    earlier_phase=pi.label,
                ),
                i,
            )

    _check_padding_touch_target(names, phases, catalog, emit)
    _check_duplicates(names, emit)

    out.sort(key=lambda v: (v.index, v.rule_id))
    return out


def _check_padding_touch_target(names, phases, catalog, emit) -> None:
    """Padding sandwiched between a painted surface and a later click handler."""
    last_surface: int | None = None
    seen_interaction = False
    for k, name in enumerate(names):
        pk = phases[k]
        if pk is Phase.SURFACE:
            last_surface = k
            seen_interaction = False
        elif pk is Phase.INTERACTION:
            seen_interaction = True
        elif last_surface is not None and not seen_interaction and catalog.is_padding(name):
            target = next(
                (t for t in range(k + 1, len(names)) if phases[t] is Phase.INTERACTION),
                None,
            )
            if target is not None:
                emit(
                    R.MOD_PADDING_CLICK_001,
                    k,
                    f"'{name}' sits between '{names[last_surface]}' and "
                    f"'{names[target]}'; the painted padding is not clickable. "
                    f"Move '{names[target]}' before '{name}'",
                    target,
                )


def _check_duplicates(names, emit) -> None:
    first_seen: dict[str, int] = {}
    for k, name in enumerate(names):
        if name not in SINGLE_EFFECT:
            continue
        if name in first_seen:
            emit(
                R.MOD_DUPLICATE_001,
                k,
                f"'{name}' is already applied at position {first_seen[name]}; "
                f"the repeated call is redundant or ignored",
                first_seen[name],
            )
        else:
            first_seen[name] = k


def suggest_order(
    names: Sequence[str],
    *,
    catalog: ModifierCatalog = DEFAULT_CATALOG,
) -> list[str]:
    """Stable canonical reordering of *names*.

    Flexible and unknown modifiers travel with the next ranked modifier;
    any that trail the last ranked modifier stay at the end.
    """
    groups: list[tuple[int, int, list[str]]] = []
    pending: list[str] = []
    for name in names:
        phase = catalog.phase_of(name)
        if phase is None:
            pending.append(name)
            continue
        groups.append((int(phase), len(groups), pending + [name]))
        pending = []

    groups.sort(key=lambda g: (g[0], g[1]))
    ordered = [n for _, _, members in groups for n in members]
    return ordered + pending


def is_canonical(
    names: Sequence[str],
    *,
    catalog: ModifierCatalog = DEFAULT_CATALOG,
) -> bool:
    """True when *names* raises no violation at all."""
    return not check_chain(names, catalog=catalog)
