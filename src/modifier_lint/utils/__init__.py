"""Shared helpers: canonical JSON output and the exit-code contract."""

from modifier_lint.utils.exit_codes import ExitCode
from modifier_lint.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = ["ExitCode", "stable_json_dump", "stable_json_dumps"]
