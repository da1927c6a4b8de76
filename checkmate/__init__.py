"""
checkmate — Fluent validation checks with aligned PASS/FAIL/WARN/SKIP/ERROR reports.

Usage:
    from checkmate import ChecksFailedError, WhenFalse, builder

    checks = builder().print().build()
    checks.check("config file is present", config_path.exists).or_raise(ChecksFailedError)
"""

from checkmate.checks import ChainState, Checks, ChecksBuilder, ObjectChecks, WhenFalse, builder, describe_error
from checkmate.errors import ChecksFailedError
from checkmate.logger import (
    Check,
    CheckLogger,
    LoggersList,
    LoggingCheckLogger,
    NoOpLogger,
    PrintStreamLogger,
    dot_fill,
)

__all__ = [
    "ChainState",
    "Check",
    "CheckLogger",
    "Checks",
    "ChecksBuilder",
    "ChecksFailedError",
    "LoggersList",
    "LoggingCheckLogger",
    "NoOpLogger",
    "ObjectChecks",
    "PrintStreamLogger",
    "WhenFalse",
    "builder",
    "describe_error",
    "dot_fill",
]
