"""Error taxonomy shared by the fetch, resolve and load layers."""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    CONFIG_FETCH_FAILED = "CONFIG_FETCH_FAILED"
    CONFIG_INVALID = "CONFIG_INVALID"
    SOURCE_FETCH_FAILED = "SOURCE_FETCH_FAILED"
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
    SOURCE_EMPTY = "SOURCE_EMPTY"
    SOURCE_INVALID = "SOURCE_INVALID"
    RELOAD_FAILED = "RELOAD_FAILED"


class CatalogError(Exception):
    """Raised for a failure that callers may recover from by skipping one input.

    ``recoverable`` tells the caller whether retrying the same request later
    could succeed (timeouts, 5xx) or not (404, malformed body).
    """

    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
