"""Pydantic schemas used by the FastAPI application and the outbound clients."""

from .auth import AuthStatusResponse, LoginRequest, LoginResponse
from .user import UserRead, UserRecord

__all__ = [
    "AuthStatusResponse",
    "LoginRequest",
    "LoginResponse",
    "UserRead",
    "UserRecord",
]
