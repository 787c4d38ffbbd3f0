"""Error hierarchy for figsync.

Only total failures of a required input are raised: the syntax engine
rejecting a stylesheet, or the design source being unreachable.  Per-item
problems (a malformed attribute, an unknown variable, a stale link) are
logged and resolved to an empty or literal value instead.
"""
from __future__ import annotations


class FigsyncError(Exception):
    """Base error for all figsync errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConfigurationError(FigsyncError):
    """A required setting (API token, file key) is missing."""


class StylesheetParseError(FigsyncError):
    """Raised when stylesheet source cannot be parsed."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.line = line
        self.column = column


# ---------------------------------------------------------------------------
# Design source errors
# ---------------------------------------------------------------------------


class DesignFetchError(FigsyncError):
    """The design document could not be fetched."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class AuthenticationError(DesignFetchError):
    """The API token was rejected."""


class NotFoundError(DesignFetchError):
    """The requested file key does not exist."""


class NetworkError(DesignFetchError):
    """Transport-level failure (connection refused, timeout)."""


def error_from_status_code(status_code: int, message: str) -> DesignFetchError:
    """Map an HTTP status code to the matching :class:`DesignFetchError`."""
    if status_code in (401, 403):
        return AuthenticationError(message, status_code=status_code)
    if status_code == 404:
        return NotFoundError(message, status_code=status_code)
    return DesignFetchError(message, status_code=status_code)
