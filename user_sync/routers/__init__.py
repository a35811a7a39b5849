from . import auth, health, users  # noqa: F401

__all__ = ["auth", "health", "users"]
