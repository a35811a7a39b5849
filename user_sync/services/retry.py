"""Bounded exponential-backoff retry for outbound calls."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, TypeVar

from user_sync.services.errors import AuthApiError, RetryExhaustedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry configuration shared by concurrent callers.

    Attributes:
        max_attempts: Total attempts, including the first one.
        base_delay: Seconds to wait before the first retry; doubles per retry.
        max_delay: Optional upper bound for a single wait.
    """

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float | None = None
    sleep: Callable[[float], Awaitable[None]] = field(
        default=asyncio.sleep, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay < 0:
            raise ValueError(f"base_delay must be >= 0, got {self.base_delay}")
        if self.max_delay is not None and self.max_delay < 0:
            raise ValueError(f"max_delay must be >= 0, got {self.max_delay}")

    def delay_for(self, retry_number: int) -> float:
        """Seconds to wait before retry ``retry_number`` (1-based)."""
        delay = self.base_delay * (2 ** (retry_number - 1))
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay

    def is_retryable(self, error: BaseException) -> bool:
        """Only server and transport failures are retried."""
        return isinstance(error, AuthApiError) and error.retryable

    async def run(self, operation: Callable[[], Awaitable[T]], *, description: str = "request") -> T:
        """
        Await ``operation`` until it succeeds or attempts run out.

        Attempts run one after another with backoff in between. Failures that
        are not retryable propagate immediately.

        Raises:
            RetryExhaustedError: If every attempt failed with a retryable error.
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except AuthApiError as e:
                if not self.is_retryable(e):
                    raise
                if attempt >= self.max_attempts:
                    logger.error(
                        "%s failed after %d attempts: %s", description, self.max_attempts, e
                    )
                    raise RetryExhaustedError(self.max_attempts, e) from e
                wait_time = self.delay_for(attempt)
                logger.warning(
                    "%s failed (attempt %d/%d): %s; retrying in %.2fs",
                    description,
                    attempt,
                    self.max_attempts,
                    e,
                    wait_time,
                )
                await self.sleep(wait_time)
                attempt += 1
