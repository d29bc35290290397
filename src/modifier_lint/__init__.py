"""modifier_lint — canonical ordering checker for UI modifier chains."""

__all__ = [
    "__version__",
    "check_modifiers",
    "lint_project",
    "lint_source",
    "validate_instance",
    "ModifierLintError",
    "ConfigError",
]
__version__ = "0.1.0"

# Programmatic engine entrypoints.
from modifier_lint.errors import ConfigError, ModifierLintError  # noqa: E402, F401
from modifier_lint.api import (  # noqa: E402, F401
    check_modifiers,
    lint_project,
    lint_source,
    validate_instance,
)
