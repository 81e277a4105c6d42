"""Errors raised by the Veria client."""

from __future__ import annotations

from typing import Optional

MISSING_API_KEY = "MISSING_API_KEY"
TIMEOUT = "TIMEOUT"
NETWORK_ERROR = "NETWORK_ERROR"
REQUEST_FAILED = "REQUEST_FAILED"


class VeriaError(Exception):
    """A failed screening call.

    ``code`` is machine readable: one of the module constants, or the code the
    service returned in its error body. ``status_code`` is only set when the
    service answered with a non-success HTTP status.
    """

    def __init__(self, message: str, code: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"VeriaError(code={self.code!r}, message={self.message!r}, status_code={self.status_code!r})"
