"""Outbound API clients and their process-wide wiring."""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from user_sync.core.config import Settings, get_settings
from user_sync.services.auth_client import AuthApiClient, classify_login_response
from user_sync.services.errors import (
    AuthApiError,
    AuthenticationFailure,
    DecodeFailure,
    FailureKind,
    RequestRejected,
    RetryExhaustedError,
    ServerFailure,
    TransportFailure,
)
from user_sync.services.retry import RetryPolicy
from user_sync.services.token_store import Credential, TokenStore
from user_sync.services.user_client import UserApiClient


def build_retry_policy(settings: Settings) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_delay_seconds,
        max_delay=settings.retry_max_delay_seconds,
    )


def build_auth_client(settings: Settings) -> AuthApiClient:
    """Create an auth client with a fresh token store."""
    return AuthApiClient(
        settings.auth_base_url,
        login_endpoint=settings.auth_login_endpoint,
        token_store=TokenStore(),
        retry_policy=build_retry_policy(settings),
        timeout=settings.http_timeout_seconds,
        expiry_buffer=timedelta(seconds=settings.token_expiry_buffer_seconds),
    )


@lru_cache
def get_auth_client() -> AuthApiClient:
    """Process-wide auth client; its token store is the only cached credential."""
    return build_auth_client(get_settings())


@lru_cache
def get_user_client() -> UserApiClient:
    settings = get_settings()
    return UserApiClient(
        settings.external_api_base_url,
        get_auth_client(),
        timeout=settings.http_timeout_seconds,
    )


__all__ = [
    "AuthApiClient",
    "AuthApiError",
    "AuthenticationFailure",
    "Credential",
    "DecodeFailure",
    "FailureKind",
    "RequestRejected",
    "RetryExhaustedError",
    "RetryPolicy",
    "ServerFailure",
    "TokenStore",
    "TransportFailure",
    "UserApiClient",
    "build_auth_client",
    "build_retry_policy",
    "classify_login_response",
    "get_auth_client",
    "get_user_client",
]
