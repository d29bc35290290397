"""File discovery — find Kotlin sources respecting exclusion patterns."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

_logger = logging.getLogger(__name__)

# Default exclusion prefixes (relative to scan root).
_DEFAULT_EXCLUDES = frozenset(
    {
        ".git",
        ".github",
        ".gradle",
        ".idea",
        ".kotlin",
        ".venv",
        "build",
        "out",
        "node_modules",
        "__pycache__",
    }
)

_DEFAULT_EXTS = (".kt", ".kts")

# 2 MB safety limit; generated sources beyond this are not worth parsing.
_MAX_FILE_BYTES = 2_000_000


def discover_source_files(
    root: Path,
    *,
    include_exts: Iterable[str] = _DEFAULT_EXTS,
    exclude: Iterable[str] | None = None,
    max_file_bytes: int = _MAX_FILE_BYTES,
) -> list[Path]:
    """Recursively find source files under *root*.

    Parameters
    ----------
    root:
        Directory to scan, or a single file.
    include_exts:
        File suffixes to keep.  Default: ``.kt`` and ``.kts``.
    exclude:
        Directory basenames to skip.  Merged with built-in defaults.

    Returns
    -------
    Sorted list of absolute ``Path`` objects.
    """
    exts = {e.lower() for e in include_exts}
    if root.is_file():
        return [root.resolve()] if root.suffix.lower() in exts else []

    skip = _DEFAULT_EXCLUDES | set(exclude or [])
    results: list[Path] = []
    for p in root.rglob("*"):
        try:
            if p.is_symlink() or not p.is_file():
                continue
            if p.suffix.lower() not in exts:
                continue
            # skip if any parent is in skip set
            if any(part in skip for part in p.relative_to(root).parts[:-1]):
                continue
            if p.stat().st_size > max_file_bytes:
                _logger.debug("Skipping oversized file %s", p)
                continue
        except OSError:
            continue
        results.append(p.resolve())

    return sorted(set(results))
