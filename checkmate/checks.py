"""
checkmate/checks.py — Fluent, short-circuiting check chains.

    checks = builder().print(sys.stdout, 50).build()

    java = (
        checks.check("JAVA_HOME is specified", lambda: "JAVA_HOME" in env)
        .object("JAVA_HOME", supplier=lambda: Path(env["JAVA_HOME"]))
        .check("exists", Path.exists)
        .check("is directory", Path.is_dir)
        .map("bin/java", lambda home: home / "bin" / "java")
        .check("is executable", lambda path: os.access(path, os.X_OK))
        .get_or_raise(lambda: ChecksFailedError("JAVA_HOME is not usable"))
    )

Every chain is an immutable value tagged with a ChainState. Each call returns
a new chain (or the receiver, when nothing changes):

  ACTIVE    predicates run and report PASS/FAIL/WARN/ERROR
  SKIPPING  a check already failed; later checks report SKIP unevaluated
  IGNORING  the subject was never materialised; checks report nothing

The first FAIL, WARN or ERROR moves an ACTIVE chain to SKIPPING. Only or_()
brings an object chain back to ACTIVE, with a fresh subject.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TextIO, TypeVar, overload

from checkmate.logger import DEFAULT_COLUMN, Check, CheckLogger, LoggersList, NoOpLogger, PrintStreamLogger

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

ErrorFactory = Callable[[], BaseException]

_UNSET: Any = object()


class WhenFalse(enum.Enum):
    """How a false predicate is reported. Both short-circuit the chain."""

    FAIL = "fail"
    WARN = "warn"


class ChainState(enum.Enum):
    ACTIVE = "active"
    SKIPPING = "skipping"
    IGNORING = "ignoring"


def describe_error(exc: BaseException) -> str:
    """Text reported on an ERROR line for a predicate that raised."""
    return f"{type(exc).__name__}: {exc}"


def _require_one(operation: str, value: object, supplier: Callable[[], object] | None) -> None:
    if value is _UNSET and supplier is None:
        raise TypeError(f"{operation}() needs a value or a supplier")
    if value is not _UNSET and supplier is not None:
        raise TypeError(f"{operation}() takes a value or a supplier, not both")


def _materialise(operation: str, value: T, supplier: Callable[[], T] | None) -> T:
    _require_one(operation, value, supplier)
    return supplier() if supplier is not None else value


def _evaluate(handle: Check, predicate: Callable[..., object], args: tuple, on_false: WhenFalse) -> bool:
    """Run *predicate* and report the outcome on *handle*.

    Returns True when the chain stays ACTIVE.
    """
    try:
        passed = bool(predicate(*args))
    except Exception as exc:
        handle.error(describe_error(exc))
        return False

    if passed:
        handle.pass_()
        return True

    if on_false is WhenFalse.WARN:
        handle.warn()
    else:
        handle.fail()
    return False


# ---------------------------------------------------------------------------
# Context-free chain
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Checks:
    logger: CheckLogger
    state: ChainState = ChainState.ACTIVE

    @overload
    def check(self, name: str) -> Check: ...

    @overload
    def check(
        self,
        name: str,
        predicate: Callable[[], object],
        on_false: WhenFalse | str = ...,
    ) -> Checks: ...

    def check(self, name, predicate=None, on_false=WhenFalse.FAIL):
        """Without a predicate, return the raw handle for *name*.

        With one, evaluate it (unless SKIPPING) and return the next chain.
        Any truthy result passes; falsy results (including None) fail or warn.
        """
        if predicate is None:
            return self.logger.log(name)

        on_false = WhenFalse(on_false)
        handle = self.logger.log(name)

        if self.state is not ChainState.ACTIVE:
            handle.skip()
            return self

        if _evaluate(handle, predicate, (), on_false):
            return self

        log.debug("check %r did not pass; skipping the rest of the chain", name)
        return dataclasses.replace(self, state=ChainState.SKIPPING)

    def or_raise(self, factory: ErrorFactory) -> Checks:
        if self.state is ChainState.ACTIVE:
            return self
        raise factory()

    def object(
        self,
        description: str,
        value: T = _UNSET,
        *,
        supplier: Callable[[], T] | None = None,
    ) -> ObjectChecks[T]:
        """Bind a subject for further checks, labelled *description*.

        A SKIPPING chain never calls *supplier*; the returned chain ignores
        everything until or_().
        """
        if self.state is not ChainState.ACTIVE:
            _require_one("object", value, supplier)
            return ObjectChecks(self.logger, None, description, ChainState.IGNORING)

        return ObjectChecks(self.logger, _materialise("object", value, supplier), description)

    def result(self) -> bool:
        return self.state is ChainState.ACTIVE


# ---------------------------------------------------------------------------
# Subject-bound chain
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ObjectChecks(Generic[T]):
    logger: CheckLogger
    subject: T | None  # None once the chain is SKIPPING or IGNORING
    prefix: str
    state: ChainState = ChainState.ACTIVE

    def check(
        self,
        description: str,
        predicate: Callable[[T], object],
        on_false: WhenFalse | str = WhenFalse.FAIL,
    ) -> ObjectChecks[T]:
        """Report ``"<prefix> <description>"`` for ``predicate(subject)``."""
        on_false = WhenFalse(on_false)

        if self.state is ChainState.IGNORING:
            return self

        name = f"{self.prefix} {description}"
        handle = self.logger.log(name)

        if self.state is ChainState.SKIPPING:
            handle.skip()
            return self

        if _evaluate(handle, predicate, (self.subject,), on_false):
            return self

        log.debug("check %r did not pass; skipping the rest of the chain", name)
        return dataclasses.replace(self, subject=None, state=ChainState.SKIPPING)

    @overload
    def map(self, description: Callable[[T], R]) -> ObjectChecks[R]: ...

    @overload
    def map(self, description: str, transform: Callable[[T], R]) -> ObjectChecks[R]: ...

    def map(self, description, transform=None):
        """Continue with ``transform(subject)``.

        A description extends the prefix; ``map(transform)`` keeps it. After a
        failure the transform is never called and the result ignores all
        further checks.
        """
        if transform is None:
            if isinstance(description, str):
                raise TypeError("map() needs a transform")
            description, transform = None, description

        if self.state is not ChainState.ACTIVE:
            return ObjectChecks(self.logger, None, self.prefix, ChainState.IGNORING)

        prefix = self.prefix if description is None else f"{self.prefix} {description}"
        return ObjectChecks(self.logger, transform(self.subject), prefix)

    def or_(
        self,
        description: str,
        value: T = _UNSET,
        *,
        supplier: Callable[[], T] | None = None,
    ) -> ObjectChecks[T]:
        """Fall back to another subject if anything so far did not pass."""
        if self.state is ChainState.ACTIVE:
            _require_one("or_", value, supplier)
            return self

        log.debug("falling back to %r", description)
        return ObjectChecks(self.logger, _materialise("or_", value, supplier), description)

    def get_or_raise(self, factory: ErrorFactory) -> T:
        if self.state is ChainState.ACTIVE:
            return self.subject
        raise factory()

    def or_raise(self, factory: ErrorFactory) -> ObjectChecks[T]:
        if self.state is ChainState.ACTIVE:
            return self
        raise factory()

    def result(self) -> bool:
        return self.state is ChainState.ACTIVE


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class ChecksBuilder:
    def __init__(self) -> None:
        self.loggers: list[CheckLogger] = []

    def logger(self, logger: CheckLogger) -> ChecksBuilder:
        self.loggers.append(logger)
        return self

    def print(self, out: TextIO | None = None, width: int = DEFAULT_COLUMN) -> ChecksBuilder:
        """Add a dot-filled text report written to *out* (stdout by default)."""
        self.loggers.append(PrintStreamLogger(out, width))
        return self

    def build(self) -> Checks:
        if not self.loggers:
            return Checks(NoOpLogger())
        if len(self.loggers) == 1:
            return Checks(self.loggers[0])
        return Checks(LoggersList(self.loggers))


def builder() -> ChecksBuilder:
    return ChecksBuilder()
