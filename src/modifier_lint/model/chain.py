"""Modifier chains as extracted from source."""

from __future__ import annotations

from dataclasses import dataclass, field

_SNIPPET_LIMIT = 200


@dataclass(frozen=True, slots=True)
class ModifierCall:
    """One ``.name(...)`` segment of a chain."""

    name: str
    line: int
    column: int = 0


@dataclass(frozen=True, slots=True)
class ModifierChain:
    """An ordered run of modifier calls hanging off one receiver."""

    receiver: str
    calls: tuple[ModifierCall, ...]
    line_start: int
    line_end: int
    text: str = ""
    disabled_rules: frozenset[str] = field(default_factory=frozenset)

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.calls]

    def to_dict(self) -> dict:
        return {
            "receiver": self.receiver,
            "calls": self.names,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "text": self.text,
        }


def collapse_snippet(raw: str) -> str:
    """Collapse whitespace and truncate to a stable snippet length."""
    text = " ".join(raw.split()).replace(" .", ".")
    if len(text) > _SNIPPET_LIMIT:
        text = text[: _SNIPPET_LIMIT - 3] + "..."
    return text
