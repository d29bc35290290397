"""Centralized exit-code contract for all CLI commands.

Code  Meaning
----  -------
  0   Success — no violation at or above the warn threshold
  1   Violation — chains break the canonical order
  2   Error — usage error, missing path, bad config, or a fail-level violation
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
