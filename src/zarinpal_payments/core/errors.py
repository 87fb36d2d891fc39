"""
Exception hierarchy shared by the ZarinPal client helpers.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "ZarinPalError",
    "DecodeError",
    "TransportError",
    "GatewayError",
]


class ZarinPalError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(ZarinPalError):
    """Raised when a JSON payload cannot be mapped onto the expected shape."""


class TransportError(ZarinPalError):
    """Raised when the HTTP exchange itself fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GatewayError(ZarinPalError):
    """
    Raised when the gateway answers but reports a failure.

    ``code`` is the gateway's numeric result code (negative for request
    errors, e.g. ``-9`` for a validation error).
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[int] = None,
        status_code: Optional[int] = None,
        errors: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.errors = errors
