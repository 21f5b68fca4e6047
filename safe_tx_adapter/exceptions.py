"""Exceptions raised by the Safe Transaction Service client.

HTTP failures carry the response status so callers can tell a rejected
signature (400/422) from an outage (5xx) without parsing messages.
"""

from __future__ import annotations

from typing import Any


class SafeTxServiceError(Exception):
    """Base exception for Safe Transaction Service errors."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class SafeTxServiceHTTPError(SafeTxServiceError):
    """The service answered with a non-success status."""

    default_status: int | None = None

    def __init__(
        self, message: str, details: Any = None, status_code: int | None = None
    ):
        super().__init__(message, details)
        self.status_code = status_code or self.default_status


class SafeTxServiceAuthError(SafeTxServiceHTTPError):
    """API key missing, invalid or not allowed on this network (401/403)."""

    default_status = 401


class SafeTxServiceNotFoundError(SafeTxServiceHTTPError):
    """Safe, transaction or message unknown to the service (404)."""

    default_status = 404


class SafeTxServiceValidationError(SafeTxServiceHTTPError):
    """Request rejected by the service (400/422), e.g. an invalid signature."""

    default_status = 422


class SafeTxServiceRateLimitError(SafeTxServiceHTTPError):
    """Gateway rate limit hit (429). ``retry_after`` is in seconds when sent."""

    default_status = 429

    def __init__(
        self,
        message: str,
        details: Any = None,
        status_code: int | None = None,
        retry_after: float | None = None,
    ):
        super().__init__(message, details, status_code)
        self.retry_after = retry_after


class SafeTxServiceServerError(SafeTxServiceHTTPError):
    """Service or gateway failure (5xx). Reads are retried on this."""

    default_status = 500


class SafeTxServiceNetworkError(SafeTxServiceError):
    """No response: timeout or transport failure. Reads are retried on this."""


class UnsupportedChainError(SafeTxServiceError):
    """No transaction service is known for the requested chain."""

    def __init__(self, chain_id: int):
        super().__init__(f"No transaction service known for chain {chain_id}")
        self.chain_id = chain_id


def error_for_status(status_code: int) -> type[SafeTxServiceHTTPError]:
    """Exception class for an HTTP error status."""
    if status_code in (401, 403):
        return SafeTxServiceAuthError
    if status_code == 404:
        return SafeTxServiceNotFoundError
    if status_code in (400, 422):
        return SafeTxServiceValidationError
    if status_code == 429:
        return SafeTxServiceRateLimitError
    if status_code >= 500:
        return SafeTxServiceServerError
    return SafeTxServiceHTTPError


def parse_retry_after(value: str | None) -> float | None:
    """Seconds from a Retry-After header; HTTP-date values are ignored."""
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None
