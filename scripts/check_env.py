#!/usr/bin/env python3
"""
scripts/check_env.py — Preflight checks for *_HOME style environment variables.

For each variable: it must be set, point at an existing directory (or fall
back to a --default directory), and optionally contain the given executables.

Usage:
    python3 scripts/check_env.py JAVA_HOME -x bin/java -x bin/javac
    python3 scripts/check_env.py JAVA_HOME MAVEN_HOME --default MAVEN_HOME=/opt/maven

Importable (used by unit tests):
    from scripts.check_env import build_checks, check_home
    ok = check_home(checks, "JAVA_HOME", os.environ, executables=["bin/java"])

Exit status: 0 when every variable passes, 1 otherwise, 2 on bad configuration.
"""

from __future__ import annotations

import argparse
import logging
import os
import pathlib
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TextIO

# Add project root to path so checkmate and config are importable
_ROOT = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(_ROOT))

try:
    from config.settings import Settings, load_settings
except ImportError:
    print(
        "ERROR: pydantic-settings not installed.\n"
        "Run: pip install -e '.[test]'"
    )
    sys.exit(1)

from pydantic import ValidationError  # noqa: E402

from checkmate import Checks, LoggingCheckLogger, ObjectChecks, WhenFalse, builder  # noqa: E402


def build_checks(cfg: Settings, out: TextIO | None = None) -> Checks:
    """Printer on the configured stream, plus a logging sink when enabled."""
    report = builder().print(out if out is not None else cfg.output_stream, cfg.CHECK_COLUMN_WIDTH)
    if cfg.CHECK_LOG_RESULTS:
        report.logger(LoggingCheckLogger(logging.getLogger("checkmate.results")))
    return report.build()


def check_home(
    checks: Checks,
    var: str,
    env: Mapping[str, str],
    executables: Sequence[str] = (),
    default: str | None = None,
) -> bool:
    """Run the checks for one variable. Returns True if all of them passed.

    With a *default*, an unset variable is only a warning and the remaining
    checks run against the default directory instead.
    """
    value: ObjectChecks[str] = checks.object(var, env.get(var, "").strip()).check(
        "is specified", bool, WhenFalse.FAIL if default is None else WhenFalse.WARN
    )
    if default is not None:
        value = value.or_(f"{var} default", default)

    home = value.map(Path).check("exists", Path.exists).check("is directory", Path.is_dir)

    passed = home.result()
    for rel in executables:
        executable = (
            home.map(rel, lambda path, rel=rel: path / rel)
            .check("exists", Path.exists)
            .check("is executable", lambda path: os.access(path, os.X_OK))
        )
        passed = executable.result() and passed

    return passed


def _parse_defaults(pairs: Sequence[str]) -> dict[str, str]:
    defaults: dict[str, str] = {}
    for pair in pairs:
        var, sep, path = pair.partition("=")
        if not sep or not var.strip() or not path.strip():
            raise ValueError(f"--default must be VAR=PATH, got '{pair}'")
        defaults[var.strip()] = path.strip()
    return defaults


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Preflight checks for *_HOME environment variables")
    parser.add_argument("variables", nargs="+", metavar="VAR", help="environment variable naming a directory")
    parser.add_argument(
        "-x",
        "--executable",
        action="append",
        default=[],
        metavar="REL",
        help="executable expected under every directory (repeatable)",
    )
    parser.add_argument(
        "--default",
        action="append",
        default=[],
        metavar="VAR=PATH",
        help="fallback directory when VAR is unset (repeatable)",
    )
    parser.add_argument("--env-file", default=".env", help="env file with CHECK_* settings")
    parser.add_argument("--width", type=int, default=None, help="override CHECK_COLUMN_WIDTH")
    args = parser.parse_args(argv)

    try:
        cfg = load_settings(args.env_file)
        if args.width is not None:
            cfg = Settings(**{**cfg.model_dump(), "CHECK_COLUMN_WIDTH": args.width})
        defaults = _parse_defaults(args.default)
    except (ValidationError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(level=cfg.CHECK_LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    checks = build_checks(cfg)

    failed = [
        var
        for var in args.variables
        if not check_home(checks, var, os.environ, args.executable, defaults.get(var))
    ]

    print()
    total = len(args.variables)
    print(f"  Preflight complete: {total - len(failed)}/{total} passed")
    if failed:
        print(f"  FAILED: {', '.join(failed)} (see FAIL/WARN/ERROR lines above)")
    else:
        print("  All checks passed ✓")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
