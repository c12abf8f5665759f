"""Exceptions raised by the Prepr client.

Transport failures are not wrapped: ``httpx.HTTPError`` and its subclasses
(including ``httpx.HTTPStatusError`` for non-2xx replies) reach the caller
unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class PreprError(Exception):
    """Base error class for the Prepr client."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(PreprError, ValueError):
    """Required configuration is missing."""


class AddressParseError(PreprError, ValueError):
    """A base address or request target could not be parsed."""


class RequestTimeoutError(PreprError, TimeoutError):
    """The request deadline elapsed before the transport completed."""

    def __init__(self, message: str, timeout: float, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.timeout = timeout


class DecodeError(PreprError, ValueError):
    """The response body does not match the requested decoding."""


__all__ = [
    "AddressParseError",
    "ConfigurationError",
    "DecodeError",
    "PreprError",
    "RequestTimeoutError",
]
