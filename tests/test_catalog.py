"""Tests for the canonical modifier catalog."""

from __future__ import annotations

import pytest

from modifier_lint.catalog import (
    DEFAULT_CATALOG,
    PADDING_MODIFIERS,
    SINGLE_EFFECT,
    is_flexible,
    phase_of,
)
from modifier_lint.errors import ConfigError
from modifier_lint.model import Phase


class TestDefaultCatalog:
    def test_ranks_are_contiguous_and_unique(self) -> None:
        assert [int(p) for p in Phase] == list(range(len(Phase)))

    def test_every_phase_has_members(self) -> None:
        for phase in Phase:
            assert DEFAULT_CATALOG.members(phase), phase

    def test_flexible_names_have_no_phase(self) -> None:
        assert not set(DEFAULT_CATALOG.phases) & DEFAULT_CATALOG.flexible

    @pytest.mark.parametrize(
        "name, phase",
        [
            ("weight", Phase.SCOPE),
            ("offset", Phase.POSITION),
            ("animateContentSize", Phase.ANIMATION),
            ("fillMaxWidth", Phase.SIZE),
            ("graphicsLayer", Phase.TRANSFORM),
            ("shadow", Phase.SHADOW),
            ("clip", Phase.CLIP),
            ("background", Phase.SURFACE),
            ("clickable", Phase.INTERACTION),
            ("drawWithContent", Phase.CONTENT),
            ("testTag", Phase.SEMANTICS),
        ],
    )
    def test_phase_lookup(self, name: str, phase: Phase) -> None:
        assert phase_of(name) is phase

    def test_padding_is_flexible(self) -> None:
        assert phase_of("padding") is None
        assert is_flexible("padding")
        assert DEFAULT_CATALOG.is_padding("imePadding")
        assert not DEFAULT_CATALOG.is_padding("then")

    def test_unknown_name(self) -> None:
        assert phase_of("sparkle") is None
        assert not is_flexible("sparkle")
        assert not DEFAULT_CATALOG.is_known("sparkle")

    def test_single_effect_covers_size_phase(self) -> None:
        assert set(DEFAULT_CATALOG.members(Phase.SIZE)) <= SINGLE_EFFECT
        assert "background" not in SINGLE_EFFECT

    def test_padding_family_is_flexible(self) -> None:
        assert PADDING_MODIFIERS <= DEFAULT_CATALOG.flexible


class TestOverrides:
    def test_custom_phase(self) -> None:
        catalog = DEFAULT_CATALOG.with_overrides({"roundedCard": "surface"})
        assert catalog.phase_of("roundedCard") is Phase.SURFACE
        # The default catalog is untouched.
        assert DEFAULT_CATALOG.phase_of("roundedCard") is None

    def test_phase_label_is_case_insensitive(self) -> None:
        catalog = DEFAULT_CATALOG.with_overrides({"debugBounds": " Content "})
        assert catalog.phase_of("debugBounds") is Phase.CONTENT

    def test_unknown_phase_label(self) -> None:
        with pytest.raises(ConfigError, match="unknown phase"):
            DEFAULT_CATALOG.with_overrides({"roundedCard": "decoration"})

    def test_extra_flexible_drops_phase(self) -> None:
        catalog = DEFAULT_CATALOG.with_overrides(flexible=["clip"])
        assert catalog.phase_of("clip") is None
        assert catalog.is_flexible("clip")

    def test_assigning_phase_to_padding(self) -> None:
        catalog = DEFAULT_CATALOG.with_overrides({"padding": "size"})
        assert catalog.phase_of("padding") is Phase.SIZE
        assert not catalog.is_flexible("padding")
        assert not catalog.is_padding("padding")


class TestPhaseLabels:
    def test_round_trip_label(self) -> None:
        assert Phase.from_label(Phase.SURFACE.label) is Phase.SURFACE

    def test_bad_label(self) -> None:
        with pytest.raises(ValueError):
            Phase.from_label("bogus")
