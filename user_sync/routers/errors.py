"""Translation of outbound client failures into HTTP responses."""

from __future__ import annotations

from fastapi import HTTPException, status

from user_sync.services.errors import AuthApiError, FailureKind


def to_http_exception(exc: AuthApiError) -> HTTPException:
    """Authentication problems become 401, anything else upstream becomes 502."""

    if exc.kind is FailureKind.AUTHENTICATION:
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=exc.message)
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
