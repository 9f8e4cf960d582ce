"""Error taxonomy for window kinetics collection runs."""

from __future__ import annotations


class IpdWindowError(Exception):
    """Base class for every fatal error raised during a collection run."""


class InputFormatError(IpdWindowError, ValueError):
    """An input row is malformed or carries an unrecognized strand."""


class PositionOverflowError(IpdWindowError, OverflowError):
    """Window extension pushed a position outside the signed 64-bit range."""

    def __init__(self, tpl: int, extension: int) -> None:
        self.tpl = tpl
        self.extension = extension
        super().__init__(
            f"Target position overflowed. IpdSummary tpl: {tpl}, extension length: {extension}"
        )


class RegionOverflowError(IpdWindowError, OverflowError):
    """Requested width/extension combination does not fit in 64 bits."""

    def __init__(self, message: str = "Total region length exceeds int64") -> None:
        super().__init__(message)


class ConsistencyError(IpdWindowError, AssertionError):
    """An internal invariant was violated; signals a logic defect."""
