"""In-memory holder for the single bearer credential of this process."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class Credential:
    """Access token issued by the login endpoint plus its expiry metadata."""

    access_token: str
    expires_at: datetime
    refresh_token: str | None = None
    token_type: str = "Bearer"

    def is_expired(self, now: datetime, buffer: timedelta = timedelta(0)) -> bool:
        """Return True once ``now`` is past ``expires_at - buffer``."""
        return now > self.expires_at - buffer


class TokenStore:
    """Holds at most one credential; every operation is atomic."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._credential: Credential | None = None

    def get(self) -> Credential | None:
        with self._lock:
            return self._credential

    def set(self, credential: Credential) -> None:
        """Replace the current credential."""
        with self._lock:
            self._credential = credential

    def clear(self) -> None:
        with self._lock:
            self._credential = None
