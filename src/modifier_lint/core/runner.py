"""Runner — orchestrates analyzers, collects findings, builds LintResult."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from pathlib import Path
from typing import TYPE_CHECKING

from modifier_lint.contracts.load import validate_instance
from modifier_lint.core.config import LintConfig
from modifier_lint.core.discover import discover_source_files
from modifier_lint.model.finding import Finding
from modifier_lint.model.run_result import LintResult
from modifier_lint.utils.json_norm import stable_json_dumps

if TYPE_CHECKING:
    from modifier_lint.analyzers import Analyzer

_logger = logging.getLogger(__name__)

# Default per-analyzer timeout in seconds.  Override with
# MODIFIER_LINT_ANALYZER_TIMEOUT env var (0 = no limit).
_DEFAULT_ANALYZER_TIMEOUT = 300  # 5 minutes

RESULT_FILENAME = "lint_result.json"


def _analyzer_timeout() -> float | None:
    timeout_str = os.environ.get("MODIFIER_LINT_ANALYZER_TIMEOUT", "")
    try:
        timeout = float(timeout_str) if timeout_str else _DEFAULT_ANALYZER_TIMEOUT
    except ValueError:
        _logger.warning(
            "Ignoring invalid MODIFIER_LINT_ANALYZER_TIMEOUT=%r", timeout_str
        )
        timeout = _DEFAULT_ANALYZER_TIMEOUT
    return None if timeout == 0 else timeout


def run_scan(
    root: Path,
    analyzers: list[Analyzer],
    *,
    config: LintConfig | None = None,
    out_dir: Path | None = None,
    ci_mode: bool = False,
    # Testing hooks for golden-fixture determinism
    _run_id: str | None = None,
    _created_at: str | None = None,
) -> LintResult:
    """Execute all *analyzers* against *root* and assemble a ``LintResult``.

    This is the **only** entry point that wires discovery → analyzers → output.
    """
    root = root.resolve()
    cfg = config or LintConfig()
    files = discover_source_files(
        root,
        include_exts=cfg.include_exts,
        exclude=cfg.exclude,
    )
    scan_root = root if root.is_dir() else root.parent
    _logger.debug("Discovered %d source file(s) under %s", len(files), root)

    # ── 1. run every analyzer (with per-analyzer timeout) ───────────
    analyzer_timeout = _analyzer_timeout()

    all_findings: list[Finding] = []
    completed: list[Analyzer] = []
    for analyzer in analyzers:
        analyzer_id = getattr(analyzer, "id", type(analyzer).__name__)
        if analyzer_timeout is not None:
            # A single slow analyzer must not stall the whole scan; its
            # worker thread is abandoned rather than joined.
            pool = ThreadPoolExecutor(max_workers=1)
            try:
                future = pool.submit(analyzer.run, scan_root, files)
                all_findings.extend(future.result(timeout=analyzer_timeout))
                completed.append(analyzer)
            except FuturesTimeoutError:
                _logger.warning(
                    "Analyzer '%s' timed out after %gs, skipped",
                    analyzer_id,
                    analyzer_timeout,
                )
            except Exception:
                _logger.exception(
                    "Analyzer '%s' raised an exception, skipped",
                    analyzer_id,
                )
            finally:
                pool.shutdown(wait=False, cancel_futures=True)
        else:
            all_findings.extend(analyzer.run(scan_root, files))
            completed.append(analyzer)

    # ── 2. deterministic ordering ───────────────────────────────────
    all_findings.sort(
        key=lambda f: (
            f.location.path,
            f.location.line_start,
            f.location.column,
            f.rule_id,
            f.finding_id,
        )
    )

    # ── 3. assemble LintResult ──────────────────────────────────────
    result = LintResult(
        config={"root": "." if ci_mode else scan_root.as_posix(), **cfg.to_dict()},
        files_scanned=len(files),
        chains_checked=sum(getattr(a, "chains_checked", 0) for a in completed),
        findings=all_findings,
    )
    # Inject deterministic values for golden-fixture testing
    if _run_id is not None:
        result.run_id = _run_id
    if _created_at is not None:
        result.created_at = _created_at

    # ── 4. validate output against schema ───────────────────────────
    result_dict = result.to_dict()
    validate_instance(result_dict, "lint_result.schema.json")

    # ── 5. optionally write artifact to disk ────────────────────────
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / RESULT_FILENAME).write_text(
            stable_json_dumps(result_dict, ci_mode=ci_mode),
            encoding="utf-8",
        )
        _logger.info("Wrote %s", out_dir / RESULT_FILENAME)

    _logger.info(
        "Checked %d chain(s) in %d file(s): %d finding(s)",
        result.chains_checked,
        result.files_scanned,
        len(all_findings),
    )
    return result
