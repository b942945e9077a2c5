"""Exception types raised during a poll cycle.

Every error aborts the current cycle; nothing is retried.
"""

from __future__ import annotations


class SoftnasError(Exception):
    """Base class for all plugin errors."""


class InvocationError(SoftnasError):
    """softnas-cmd could not be executed, timed out, or exited non-zero."""

    def __init__(
        self,
        message: str,
        action: str | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.action = action
        self.returncode = returncode
        self.stderr = stderr


class ResponseError(SoftnasError):
    """softnas-cmd output is not a valid response envelope."""


class ParseError(SoftnasError, ValueError):
    """A numeric or size-token field could not be parsed."""


class StructuralError(SoftnasError):
    """Response records do not have the shape a collector relies on."""
