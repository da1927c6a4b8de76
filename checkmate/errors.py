"""
checkmate/errors.py — Errors raised at the edge of a check chain.

Check-level failures never raise; they are absorbed into the report. Only
or_raise()/get_or_raise() turn a failed chain into an exception, and
ChecksFailedError is the conventional one to hand them.
"""

from __future__ import annotations

DEFAULT_MESSAGE = "One or more checks failed"


class ChecksFailedError(ValueError):
    def __init__(self, message: str = DEFAULT_MESSAGE, cause: BaseException | None = None) -> None:
        if cause is not None:
            message = f"{message}\n{type(cause).__name__}: {cause}"
        super().__init__(message)
        self.__cause__ = cause
