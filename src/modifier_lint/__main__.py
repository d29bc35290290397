"""CLI entry-point for modifier_lint.

Usage:
    python -m modifier_lint <path>
    python -m modifier_lint <path> --format json|text|markdown [--out DIR]
    python -m modifier_lint <path> --config .modifier-lint.yaml [--ci] [--strict]
    python -m modifier_lint check "Modifier.background(Color.Red).clip(shape)"
    python -m modifier_lint check padding clickable clip [--json]
    python -m modifier_lint rules [--json]
    python -m modifier_lint phases
    python -m modifier_lint validate <lint_result.json>
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from modifier_lint import __version__
from modifier_lint.api import check_modifiers as _api_check_modifiers
from modifier_lint.api import lint_project as _api_lint_project
from modifier_lint.checker import suggest_order
from modifier_lint.contracts.load import validate_file
from modifier_lint.core.config import LintConfig
from modifier_lint.errors import ConfigError
from modifier_lint.model import Phase
from modifier_lint.parser.kotlin import parse_chain_expression
from modifier_lint.policy.exit_codes import (
    DEFAULT_POLICY,
    STRICT_POLICY,
    exit_code_for_worst_severity,
    worst_severity,
)
from modifier_lint.reports.exporters import FORMATS, export
from modifier_lint.rules import ALL_RULE_IDS, RULES
from modifier_lint.utils.exit_codes import ExitCode
from modifier_lint.utils.json_norm import stable_json_dumps

_logger = logging.getLogger("modifier_lint")

_KNOWN_COMMANDS = {"check", "rules", "phases", "validate"}


def _env_requires_ci_mode() -> bool:
    """Return True when the environment signals deterministic mode is required."""
    if os.getenv("MODIFIER_LINT_DETERMINISTIC") == "1":
        return True
    ci = os.getenv("CI", "")
    return ci.lower() in ("1", "true", "yes", "on")


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    p.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default: .modifier-lint.yaml in the scan root).",
    )


def _add_lint_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--format",
        choices=FORMATS,
        default="text",
        help="Output format printed to stdout (default: text).",
    )
    p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Shorthand for --format json.",
    )
    p.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Also write lint_result.json into this directory.",
    )
    p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Enable deterministic output (stable IDs, timestamps, ordering).",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Exit non-zero on any finding, whatever its severity.",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="modifier-lint",
        description="Check UI modifier chains against the canonical order.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    # ── check subcommand ────────────────────────────────────────────
    check_p = sub.add_parser(
        "check",
        help="Check a single chain expression or a list of modifier names.",
    )
    check_p.add_argument(
        "chain",
        nargs="+",
        help='Chain expression ("Modifier.padding(8.dp).clickable { }") or names.',
    )
    check_p.add_argument("--json", dest="json_out", action="store_true", default=False)
    _add_common(check_p)

    # ── rules subcommand ────────────────────────────────────────────
    rules_p = sub.add_parser("rules", help="List rule IDs, severities and titles.")
    rules_p.add_argument("--json", dest="json_out", action="store_true", default=False)
    _add_common(rules_p)

    # ── phases subcommand ───────────────────────────────────────────
    phases_p = sub.add_parser("phases", help="Print the canonical phase table.")
    _add_common(phases_p)

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a lint_result.json file against the bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    _add_common(val_p)
    return p


def _build_default_parser() -> argparse.ArgumentParser:
    """Parser for default positional mode.

    Argparse subparsers greedily consume the first positional token, which
    would make ``modifier-lint <path> --ci`` fail by treating ``<path>`` as a
    command.  This parser is used when the first positional token is *not* a
    known subcommand.
    """
    p = argparse.ArgumentParser(
        prog="modifier-lint",
        description="Check UI modifier chains against the canonical order.",
    )
    p.add_argument(
        "path",
        type=Path,
        help="Root directory (or single .kt file) to lint.",
    )
    _add_lint_args(p)
    _add_common(p)
    p.set_defaults(command=None)
    return p


def _load_config(config_path: Path | None, root: Path | None) -> LintConfig:
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"config file not found: {config_path}")
        return LintConfig.from_yaml(config_path)
    if root is not None:
        return LintConfig.discover(root)
    return LintConfig()


# ── handlers ────────────────────────────────────────────────────────


def _handle_check(args: argparse.Namespace) -> int:
    names = parse_chain_expression(" ".join(args.chain))
    if not names:
        print("error: no modifier calls found in chain", file=sys.stderr)
        return ExitCode.ERROR

    cfg = _load_config(args.config, None)
    violations = _api_check_modifiers(names, config=cfg)
    suggested = suggest_order(names, catalog=cfg.catalog())

    if args.json_out:
        sys.stdout.write(
            stable_json_dumps(
                {
                    "chain": names,
                    "suggested_order": suggested,
                    "violations": [v.to_dict() for v in violations],
                }
            )
        )
    else:
        for v in violations:
            print(f"{v.index}: {v.rule_id} [{v.severity.value}] {v.message}")
        if not violations:
            print("OK")
        elif suggested != names:
            print(f"suggested order: {' -> '.join(suggested)}")

    return exit_code_for_worst_severity(worst_severity(violations))


def _handle_rules(args: argparse.Namespace) -> int:
    if args.json_out:
        sys.stdout.write(
            stable_json_dumps(
                [
                    {
                        "rule_id": rid,
                        "severity": RULES[rid].severity.value,
                        "category": RULES[rid].category.value,
                        "title": RULES[rid].title,
                    }
                    for rid in ALL_RULE_IDS
                ]
            )
        )
        return ExitCode.SUCCESS
    width = max(len(rid) for rid in ALL_RULE_IDS)
    for rid in ALL_RULE_IDS:
        info = RULES[rid]
        print(f"{rid:<{width}}  {info.severity.value:<8}  {info.title}")
    return ExitCode.SUCCESS


def _handle_phases(args: argparse.Namespace) -> int:
    catalog = _load_config(args.config, None).catalog()
    for phase in Phase:
        print(f"{int(phase):>2}  {phase.label:<12} {', '.join(catalog.members(phase))}")
    print(f"--  {'flexible':<12} {', '.join(sorted(catalog.flexible))}")
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    import jsonschema

    # Exit code contract:
    #   1 = schema violation
    #   2 = runtime / unreadable file / unexpected error
    try:
        validate_file(args.instance, "lint_result.schema.json")
    except (jsonschema.exceptions.ValidationError, ValueError) as e:
        print(f"FAIL: {e}", file=sys.stderr)
        return ExitCode.VIOLATION
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def _handle_lint(args: argparse.Namespace) -> int:
    ci_mode = bool(args.ci_mode)
    if _env_requires_ci_mode() and not ci_mode:
        _logger.info("CI environment detected, enabling deterministic output")
        ci_mode = True

    target: Path = args.path.resolve()
    if not target.exists():
        print(f"error: path does not exist: {target}", file=sys.stderr)
        return ExitCode.ERROR

    cfg = _load_config(args.config, target)
    result, _ = _api_lint_project(
        target,
        config=cfg,
        ci_mode=ci_mode,
        out_dir=args.out,
    )

    fmt = "json" if args.json_out else args.format
    sys.stdout.write(export(result, fmt, ci_mode=ci_mode))

    policy = STRICT_POLICY if args.strict else DEFAULT_POLICY
    return exit_code_for_worst_severity(result.worst_severity, policy=policy)


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = clean, 1 = violations, 2 = error/fail)."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    # If the first positional token is not a known command, parse using the
    # default-mode parser so `modifier-lint <path> --ci --json` works.
    first_positional = next(
        (a for a in effective_argv if not a.startswith("-")), None
    )
    if first_positional and first_positional not in _KNOWN_COMMANDS:
        args = _build_default_parser().parse_args(effective_argv)
    else:
        parser = _build_parser()
        args = parser.parse_args(effective_argv)
        if args.command is None:
            parser.print_usage(sys.stderr)
            print("error: please provide a path or use a subcommand.", file=sys.stderr)
            return ExitCode.ERROR

    _configure_logging(getattr(args, "verbose", 0))

    handlers = {
        "check": _handle_check,
        "rules": _handle_rules,
        "phases": _handle_phases,
        "validate": _handle_validate,
        None: _handle_lint,
    }
    try:
        return int(handlers[args.command](args))
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    raise SystemExit(main())
