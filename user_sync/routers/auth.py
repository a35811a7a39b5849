"""Endpoints driving the login against the token-issuing service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from user_sync.routers.errors import to_http_exception
from user_sync.schemas.auth import AuthStatusResponse, LoginRequest
from user_sync.services import AuthApiClient, get_auth_client
from user_sync.services.errors import AuthApiError

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=AuthStatusResponse)
async def login(
    payload: LoginRequest,
    auth_client: AuthApiClient = Depends(get_auth_client),
) -> AuthStatusResponse:
    """Log in upstream and cache the issued token; the token is not echoed back."""

    try:
        await auth_client.login(payload.username, payload.password)
    except AuthApiError as exc:
        raise to_http_exception(exc) from exc

    return AuthStatusResponse(authenticated=True, token_type="bearer")


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(auth_client: AuthApiClient = Depends(get_auth_client)) -> Response:
    auth_client.logout()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/status", response_model=AuthStatusResponse)
def read_status(auth_client: AuthApiClient = Depends(get_auth_client)) -> AuthStatusResponse:
    """Report whether a non-expired token is cached."""

    return AuthStatusResponse(authenticated=auth_client.is_authenticated())
