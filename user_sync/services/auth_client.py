"""Client for the external token-issuing service."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import httpx
from pydantic import ValidationError

from user_sync.schemas.auth import LoginRequest, LoginResponse
from user_sync.services.errors import (
    AuthApiError,
    AuthenticationFailure,
    DecodeFailure,
    RequestRejected,
    ServerFailure,
    TransportFailure,
)
from user_sync.services.retry import RetryPolicy
from user_sync.services.token_store import Credential, TokenStore

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_BUFFER = timedelta(minutes=5)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _expiry_from(now: datetime, expires_in: int) -> datetime:
    """Absolute expiry for a lifetime in seconds, clamped to the latest representable time."""
    try:
        return now + timedelta(seconds=expires_in)
    except OverflowError:
        return datetime.max.replace(tzinfo=now.tzinfo)


def classify_login_response(response: httpx.Response) -> AuthApiError | None:
    """
    Map a login response status onto a failure kind.

    Returns:
        None for 2xx, otherwise the error describing the failure.
    """
    status_code = response.status_code
    if 200 <= status_code < 300:
        return None
    if 400 <= status_code < 500:
        body = response.text
        return AuthenticationFailure(
            f"Authentication failed: {body}",
            details={"status_code": status_code, "response": body},
        )
    if status_code >= 500:
        return ServerFailure(status_code, response.text)
    return RequestRejected(status_code, response.text)


class AuthApiClient:
    """Logs in against the token endpoint and caches the issued bearer token."""

    def __init__(
        self,
        base_url: str,
        *,
        login_endpoint: str = "/auth/login",
        token_store: TokenStore | None = None,
        retry_policy: RetryPolicy | None = None,
        timeout: float = 10.0,
        expiry_buffer: timedelta = DEFAULT_EXPIRY_BUFFER,
        clock: Callable[[], datetime] = _utcnow,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the auth client.

        Args:
            base_url: Base URL of the token-issuing service.
            login_endpoint: Path of the login endpoint.
            token_store: Store holding the cached credential.
            retry_policy: Policy wrapping each login exchange.
            timeout: Default per-call timeout in seconds.
            expiry_buffer: Tokens count as expired this long before their real expiry.
            clock: Returns the current timezone-aware time.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.login_endpoint = login_endpoint
        self.token_store = token_store or TokenStore()
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout = timeout
        self.expiry_buffer = expiry_buffer
        self._clock = clock
        self._transport = transport

    async def login(self, username: str, password: str, *, timeout: float | None = None) -> str:
        """
        Exchange credentials for an access token and cache it.

        Args:
            username: Account name.
            password: Account password.
            timeout: Per-call timeout in seconds; defaults to the client timeout.

        Returns:
            The issued access token.

        Raises:
            AuthenticationFailure: Credentials were rejected (never retried).
            DecodeFailure: The response body was malformed.
            RetryExhaustedError: Server or transport failures outlasted the retry policy.
        """
        payload = LoginRequest(username=username, password=password).model_dump()
        effective_timeout = self.timeout if timeout is None else timeout

        async def attempt() -> LoginResponse:
            return await self._request_token(payload, effective_timeout)

        logger.info("Logging in to %s%s", self.base_url, self.login_endpoint)
        login_response = await self.retry_policy.run(attempt, description="Login")

        credential = Credential(
            access_token=login_response.access_token,
            refresh_token=login_response.refresh_token,
            token_type=login_response.token_type,
            expires_at=_expiry_from(self._clock(), login_response.expires_in),
        )
        self.token_store.set(credential)
        logger.info("Login succeeded; token valid until %s", credential.expires_at.isoformat())
        return credential.access_token

    async def _request_token(self, payload: dict[str, Any], timeout: float) -> LoginResponse:
        """Issue one login request and decode the response."""
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(self.login_endpoint, json=payload)
            except httpx.TimeoutException as e:
                raise TransportFailure(
                    f"Login request timed out: {e}", details={"error": str(e)}
                ) from e
            except httpx.TransportError as e:
                raise TransportFailure(
                    f"Login request failed: {e}", details={"error": str(e)}
                ) from e

        error = classify_login_response(response)
        if error is not None:
            raise error

        try:
            return LoginResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeFailure(
                "Malformed login response", details={"errors": e.errors(include_url=False)}
            ) from e

    def _valid_credential(self) -> Credential | None:
        credential = self.token_store.get()
        if credential is None or credential.is_expired(self._clock(), self.expiry_buffer):
            return None
        return credential

    def get_access_token(self) -> str:
        """
        Return the cached access token.

        Raises:
            AuthenticationFailure: No token is cached or it has expired.
        """
        credential = self._valid_credential()
        if credential is None:
            raise AuthenticationFailure("No valid access token available. Please login first.")
        return credential.access_token

    def is_authenticated(self) -> bool:
        return self._valid_credential() is not None

    def logout(self) -> None:
        """Drop the cached credential."""
        self.token_store.clear()
        logger.info("Cleared cached access token")

    def authorization_headers(self) -> dict[str, str]:
        """Headers carrying the current bearer token."""
        return {"Authorization": f"Bearer {self.get_access_token()}"}

    def create_authenticated_client(self, **kwargs: Any) -> httpx.AsyncClient:
        """
        Build an ``httpx.AsyncClient`` that sends the current bearer token.

        Keyword arguments are forwarded to ``httpx.AsyncClient``; ``base_url``,
        ``timeout`` and ``transport`` default to this client's settings.

        Raises:
            AuthenticationFailure: No valid token is cached.
        """
        headers = {**kwargs.pop("headers", {}), **self.authorization_headers()}
        kwargs.setdefault("base_url", self.base_url)
        kwargs.setdefault("timeout", self.timeout)
        kwargs.setdefault("transport", self._transport)
        return httpx.AsyncClient(headers=headers, **kwargs)
