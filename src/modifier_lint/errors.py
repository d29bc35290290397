"""Exception hierarchy for the lint engine."""

from __future__ import annotations


class ModifierLintError(Exception):
    """Base class for every error raised by modifier_lint."""


class ConfigError(ModifierLintError):
    """Configuration file or value is invalid."""
