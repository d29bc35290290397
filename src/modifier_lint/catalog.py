"""Canonical modifier catalog — which phase each known modifier belongs to.

A conforming chain reads outside-in::

    scope → position → animation → size → transform → shadow → clip
          → surface → interaction → content → semantics

Padding-like modifiers are *flexible*: the same call is an outer margin
before the surface and an inner padding after the interaction, so their
place is judged by the dedicated rules rather than by rank.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from modifier_lint.errors import ConfigError
from modifier_lint.model import Phase

# Bump when phase membership changes; recorded in every result artifact.
CATALOG_VERSION = "catalog_v1"

_PHASE_MEMBERS: dict[Phase, tuple[str, ...]] = {
    Phase.SCOPE: (
        "align",
        "alignBy",
        "alignByBaseline",
        "weight",
        "matchParentSize",
        "fillParentMaxSize",
        "fillParentMaxWidth",
        "fillParentMaxHeight",
        "animateItem",
        "animateItemPlacement",
    ),
    Phase.POSITION: ("offset", "absoluteOffset", "zIndex"),
    Phase.ANIMATION: ("animateContentSize",),
    Phase.SIZE: (
        "size",
        "width",
        "height",
        "requiredSize",
        "requiredWidth",
        "requiredHeight",
        "fillMaxSize",
        "fillMaxWidth",
        "fillMaxHeight",
        "wrapContentSize",
        "wrapContentWidth",
        "wrapContentHeight",
        "defaultMinSize",
        "sizeIn",
        "widthIn",
        "heightIn",
        "requiredSizeIn",
        "requiredWidthIn",
        "requiredHeightIn",
        "aspectRatio",
        "minimumInteractiveComponentSize",
    ),
    Phase.TRANSFORM: ("graphicsLayer", "alpha", "rotate", "scale", "blur"),
    Phase.SHADOW: ("shadow", "dropShadow"),
    Phase.CLIP: ("clip", "clipToBounds"),
    Phase.SURFACE: ("background", "border", "paint", "drawBehind"),
    Phase.INTERACTION: (
        "clickable",
        "combinedClickable",
        "toggleable",
        "triStateToggleable",
        "selectable",
        "pointerInput",
        "draggable",
        "anchoredDraggable",
        "swipeable",
        "transformable",
        "hoverable",
        "focusable",
        "focusRequester",
        "onFocusChanged",
        "indication",
        "scrollable",
        "verticalScroll",
        "horizontalScroll",
        "nestedScroll",
    ),
    Phase.CONTENT: ("drawWithContent", "drawWithCache"),
    Phase.SEMANTICS: ("semantics", "clearAndSetSemantics", "testTag", "layoutId"),
}

PADDING_MODIFIERS: frozenset[str] = frozenset({
    "padding",
    "absolutePadding",
    "paddingFrom",
    "paddingFromBaseline",
    "windowInsetsPadding",
    "systemBarsPadding",
    "statusBarsPadding",
    "navigationBarsPadding",
    "imePadding",
    "safeDrawingPadding",
    "safeContentPadding",
    "safeGesturesPadding",
    "displayCutoutPadding",
    "captionBarPadding",
})

_FLEXIBLE: frozenset[str] = PADDING_MODIFIERS | {"then"}

# Modifiers whose second occurrence in one chain is redundant or ignored.
SINGLE_EFFECT: frozenset[str] = frozenset(
    set(_PHASE_MEMBERS[Phase.SIZE])
    | {
        "clip",
        "clickable",
        "combinedClickable",
        "testTag",
        "animateContentSize",
        "semantics",
    }
)


@dataclass(frozen=True)
class ModifierCatalog:
    """Immutable name → phase lookup plus the set of flexible names."""

    phases: Mapping[str, Phase]
    flexible: frozenset[str]

    def phase_of(self, name: str) -> Phase | None:
        """Return the phase of *name*, or ``None`` for flexible/unknown names."""
        return self.phases.get(name)

    def is_flexible(self, name: str) -> bool:
        return name in self.flexible

    def is_padding(self, name: str) -> bool:
        if name in self.phases:
            return False
        return name in PADDING_MODIFIERS or (
            name in self.flexible and name.endswith("Padding")
        )

    def is_known(self, name: str) -> bool:
        return name in self.phases or name in self.flexible

    def members(self, phase: Phase) -> list[str]:
        return sorted(n for n, p in self.phases.items() if p is phase)

    def with_overrides(
        self,
        phases: Mapping[str, str] | None = None,
        flexible: Iterable[str] | None = None,
    ) -> "ModifierCatalog":
        """Return a new catalog with custom modifier names assigned.

        *phases* maps modifier name → phase label (``"surface"``, …).
        Names listed in *flexible* lose any phase they had.
        """
        merged = dict(self.phases)
        for name, label in (phases or {}).items():
            try:
                merged[name] = Phase.from_label(str(label))
            except ValueError as exc:
                raise ConfigError(f"custom_phases[{name!r}]: {exc}") from None
        extra = frozenset(flexible or ())
        for name in extra:
            merged.pop(name, None)
        flex = (self.flexible - frozenset(merged)) | extra
        return ModifierCatalog(phases=MappingProxyType(merged), flexible=flex)


def _build_default() -> ModifierCatalog:
    table: dict[str, Phase] = {}
    for phase, names in _PHASE_MEMBERS.items():
        for name in names:
            if name in table:
                raise AssertionError(
                    f"{name!r} listed in both {table[name].label} and {phase.label}"
                )
            table[name] = phase
    overlap = set(table) & _FLEXIBLE
    if overlap:
        raise AssertionError(f"flexible names must not have a phase: {sorted(overlap)}")
    return ModifierCatalog(phases=MappingProxyType(table), flexible=_FLEXIBLE)


DEFAULT_CATALOG = _build_default()


def phase_of(name: str) -> Phase | None:
    """Phase of *name* in the default catalog."""
    return DEFAULT_CATALOG.phase_of(name)


def is_flexible(name: str) -> bool:
    """Whether *name* is flexible in the default catalog."""
    return DEFAULT_CATALOG.is_flexible(name)
