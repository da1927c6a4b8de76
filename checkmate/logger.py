"""
checkmate/logger.py — Check result sinks.

A CheckLogger turns a check name into a Check handle; exactly one terminal
method is called on each handle. Implementations:

  PrintStreamLogger   dot-filled, column-aligned text report
  LoggersList         fan-out over several loggers, in registration order
  NoOpLogger          discards everything
  LoggingCheckLogger  one stdlib logging record per outcome

Report line format (PrintStreamLogger):
    <name><padding><STATUS>[  <reason>]\\n
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Mapping
from typing import Protocol, TextIO, runtime_checkable

DEFAULT_COLUMN = 50

PASS = "PASS"
FAIL = "FAIL"
WARN = "WARN"
SKIP = "SKIP"
ERROR = "ERROR"


@runtime_checkable
class Check(Protocol):
    """Result handle for one named check."""

    def pass_(self) -> None: ...

    def fail(self, reason: str | None = None) -> None: ...

    def warn(self, reason: str | None = None) -> None: ...

    def skip(self) -> None: ...

    def error(self, reason: str) -> None: ...


@runtime_checkable
class CheckLogger(Protocol):
    """Turns a check name into a :class:`Check` handle."""

    def log(self, name: str) -> Check: ...


def status_line(status: str, reason: str | None = None) -> str:
    """Status token, plus two spaces and the reason when one is given."""
    if reason is None:
        return status
    return f"{status}  {reason}"


def dot_fill(name: str, column: int) -> str:
    """Alternating '.'/' ' padding from the end of *name* up to *column*.

    Even positions get a dot, odd positions a space; when the last position
    reached is odd one extra space is added, so the status is always preceded
    by a single space.
    """
    padding = []
    i = len(name) + 1
    while i < column:
        padding.append("." if i % 2 == 0 else " ")
        i += 1
    if i % 2 == 1:
        padding.append(" ")
    return "".join(padding)


# ---------------------------------------------------------------------------
# Formatting logger
# ---------------------------------------------------------------------------


class _PrintedCheck:
    def __init__(self, out: TextIO) -> None:
        self._out = out

    def _finish(self, status: str, reason: str | None = None) -> None:
        self._out.write(status_line(status, reason) + "\n")

    def pass_(self) -> None:
        self._finish(PASS)

    def fail(self, reason: str | None = None) -> None:
        self._finish(FAIL, reason)

    def warn(self, reason: str | None = None) -> None:
        self._finish(WARN, reason)

    def skip(self) -> None:
        self._finish(SKIP)

    def error(self, reason: str) -> None:
        self._finish(ERROR, reason)


class PrintStreamLogger:
    """Writes the name and padding at once; the handle completes the line."""

    def __init__(self, out: TextIO | None = None, column: int = DEFAULT_COLUMN) -> None:
        self.out = out if out is not None else sys.stdout
        self.column = column

    def log(self, name: str) -> Check:
        self.out.write(name + dot_fill(name, self.column))
        return _PrintedCheck(self.out)


# ---------------------------------------------------------------------------
# Fan-out / no-op
# ---------------------------------------------------------------------------


class _CheckList:
    def __init__(self, checks: list[Check]) -> None:
        self._checks = checks

    def pass_(self) -> None:
        for check in self._checks:
            check.pass_()

    def fail(self, reason: str | None = None) -> None:
        for check in self._checks:
            check.fail(reason)

    def warn(self, reason: str | None = None) -> None:
        for check in self._checks:
            check.warn(reason)

    def skip(self) -> None:
        for check in self._checks:
            check.skip()

    def error(self, reason: str) -> None:
        for check in self._checks:
            check.error(reason)


class LoggersList:
    """Composite logger: every wrapped logger sees every check, in order."""

    def __init__(self, loggers: Iterable[CheckLogger]) -> None:
        self.loggers: list[CheckLogger] = list(loggers)

    def log(self, name: str) -> Check:
        return _CheckList([logger.log(name) for logger in self.loggers])


class _DiscardedCheck:
    def pass_(self) -> None:
        pass

    def fail(self, reason: str | None = None) -> None:
        pass

    def warn(self, reason: str | None = None) -> None:
        pass

    def skip(self) -> None:
        pass

    def error(self, reason: str) -> None:
        pass


class NoOpLogger:
    def log(self, name: str) -> Check:
        return _DiscardedCheck()


# ---------------------------------------------------------------------------
# stdlib logging sink
# ---------------------------------------------------------------------------

DEFAULT_LEVELS: Mapping[str, int] = {
    PASS: logging.INFO,
    SKIP: logging.INFO,
    WARN: logging.WARNING,
    FAIL: logging.ERROR,
    ERROR: logging.ERROR,
}


class _LoggedCheck:
    def __init__(self, logger: logging.Logger, levels: Mapping[str, int], name: str) -> None:
        self._logger = logger
        self._levels = levels
        self._name = name

    def _finish(self, status: str, reason: str | None = None) -> None:
        self._logger.log(self._levels[status], "%s: %s", self._name, status_line(status, reason))

    def pass_(self) -> None:
        self._finish(PASS)

    def fail(self, reason: str | None = None) -> None:
        self._finish(FAIL, reason)

    def warn(self, reason: str | None = None) -> None:
        self._finish(WARN, reason)

    def skip(self) -> None:
        self._finish(SKIP)

    def error(self, reason: str) -> None:
        self._finish(ERROR, reason)


class LoggingCheckLogger:
    """Routes each outcome to a :class:`logging.Logger` as a single record.

    Nothing is emitted until the handle's terminal call, so the record level
    reflects the outcome (see :data:`DEFAULT_LEVELS`).
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        levels: Mapping[str, int] | None = None,
    ) -> None:
        self.logger = logger if logger is not None else logging.getLogger("checkmate.results")
        self.levels = {**DEFAULT_LEVELS, **(levels or {})}

    def log(self, name: str) -> Check:
        return _LoggedCheck(self.logger, self.levels, name)
