"""Failure kinds raised by the outbound auth and user API clients."""

from __future__ import annotations

from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    """Classification of an outbound call failure."""

    AUTHENTICATION = "authentication"
    SERVER = "server"
    TRANSPORT = "transport"
    DECODE = "decode"
    REJECTED = "rejected"


RETRYABLE_KINDS = frozenset({FailureKind.SERVER, FailureKind.TRANSPORT})


class AuthApiError(Exception):
    """Base exception for outbound API failures."""

    def __init__(
        self,
        message: str,
        kind: FailureKind,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.kind = kind
        self.details = details or {}
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        """Whether the retry policy may re-issue the failed call."""
        return self.kind in RETRYABLE_KINDS


class AuthenticationFailure(AuthApiError):
    """Raised when credentials are rejected or no valid token is cached."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, FailureKind.AUTHENTICATION, details)


class ServerFailure(AuthApiError):
    """Raised when the remote service answers with a 5xx status."""

    def __init__(self, status_code: int, body: str = "", details: dict[str, Any] | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Server error: HTTP {status_code}",
            FailureKind.SERVER,
            {"status_code": status_code, "response": body, **(details or {})},
        )


class TransportFailure(AuthApiError):
    """Raised when the connection fails or times out."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, FailureKind.TRANSPORT, details)


class DecodeFailure(AuthApiError):
    """Raised when a response body cannot be decoded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, FailureKind.DECODE, details)


class RequestRejected(AuthApiError):
    """Raised when the remote API answers with a status that is neither success nor an auth or server failure."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Request rejected: HTTP {status_code}",
            FailureKind.REJECTED,
            {"status_code": status_code, "response": body},
        )


class RetryExhaustedError(AuthApiError):
    """Raised when every allowed attempt failed with a retryable error."""

    def __init__(self, attempts: int, last_error: AuthApiError) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Giving up after {attempts} attempt(s): {last_error}",
            last_error.kind,
            {"attempts": attempts, **last_error.details},
        )

    @property
    def retryable(self) -> bool:
        return False
