"""Enums shared across the engine and report layers."""

from __future__ import annotations

from enum import Enum, IntEnum


class Severity(str, Enum):
    """Finding severity — drives the CI exit-code policy."""

    INFO = "info"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RuleCategory(str, Enum):
    """What a rule protects: generic order, drawing, interaction, layout."""

    ORDERING = "ordering"
    DRAWING = "drawing"
    INTERACTION = "interaction"
    ANIMATION = "animation"
    LAYOUT = "layout"
    REDUNDANCY = "redundancy"


class Phase(IntEnum):
    """Canonical ordering bucket; a conforming chain never decreases in rank."""

    SCOPE = 0
    POSITION = 1
    ANIMATION = 2
    SIZE = 3
    TRANSFORM = 4
    SHADOW = 5
    CLIP = 6
    SURFACE = 7
    INTERACTION = 8
    CONTENT = 9
    SEMANTICS = 10

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "Phase":
        """Resolve a lowercase phase name (as used in config files)."""
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown phase: {label!r}") from None
