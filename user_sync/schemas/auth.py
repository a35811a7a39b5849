"""Pydantic schemas for the token login exchange."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    """Credentials sent to the token-issuing endpoint."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Token payload returned by the token-issuing endpoint.

    The remote service speaks camelCase (``accessToken``, ``expiresIn``);
    snake_case names are accepted as well.
    """

    access_token: str = Field(..., min_length=1)
    refresh_token: str | None = None
    token_type: str = "Bearer"
    expires_in: int = Field(..., ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthStatusResponse(BaseModel):
    """Authentication state reported by the REST layer."""

    authenticated: bool
    token_type: str | None = None
