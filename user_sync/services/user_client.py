"""Client for the remote user listing API."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator

import httpx
from pydantic import ValidationError
from sqlalchemy.orm import Session

from user_sync.models.user import User
from user_sync.repositories.user import UserRepository
from user_sync.schemas.user import UserRecord
from user_sync.services.auth_client import AuthApiClient
from user_sync.services.errors import (
    AuthApiError,
    AuthenticationFailure,
    DecodeFailure,
    RequestRejected,
    ServerFailure,
    TransportFailure,
)

logger = logging.getLogger(__name__)


def _raise_for_status(response: httpx.Response) -> None:
    status_code = response.status_code
    if status_code in (401, 403):
        raise AuthenticationFailure(
            f"User API rejected the access token: {response.text}",
            details={"status_code": status_code, "response": response.text},
        )
    if 400 <= status_code < 500:
        raise RequestRejected(status_code, response.text)
    if status_code >= 500:
        raise ServerFailure(status_code, response.text)


class UserApiClient:
    """Fetches user records with the cached bearer token and stores them."""

    USERS_ENDPOINT = "/users"

    def __init__(
        self,
        base_url: str,
        auth_client: AuthApiClient,
        *,
        repository: UserRepository | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_client = auth_client
        self.repository = repository or UserRepository()
        self.timeout = timeout
        self._transport = transport

    async def fetch_users(self, *, timeout: float | None = None) -> AsyncIterator[UserRecord]:
        """
        Stream the users listed by the remote API.

        The token is checked before any request is sent. The returned iterator
        is single-use.

        Raises:
            AuthenticationFailure: No valid token is cached, or the API rejected it.
            RequestRejected: The API refused the request with another 4xx status.
            ServerFailure: The API answered with a 5xx status.
            TransportFailure: The connection failed or timed out.
            DecodeFailure: The body is not a JSON array of user records.
        """
        try:
            client = self.auth_client.create_authenticated_client(
                base_url=self.base_url,
                timeout=self.timeout if timeout is None else timeout,
                transport=self._transport,
            )
            async with client:
                try:
                    response = await client.get(self.USERS_ENDPOINT)
                except httpx.TransportError as e:
                    raise TransportFailure(
                        f"User listing request failed: {e}", details={"error": str(e)}
                    ) from e

            _raise_for_status(response)

            try:
                items = response.json()
            except ValueError as e:
                raise DecodeFailure("User listing response is not valid JSON") from e
            if not isinstance(items, list):
                raise DecodeFailure(
                    f"Expected a JSON array of users, got {type(items).__name__}"
                )

            for index, item in enumerate(items):
                try:
                    user = UserRecord.model_validate(item)
                except ValidationError as e:
                    raise DecodeFailure(
                        f"Malformed user record at index {index}",
                        details={"errors": e.errors(include_url=False)},
                    ) from e
                logger.info("Fetched user: %s", user)
                yield user
        except AuthApiError as e:
            logger.error("Error fetching users: %s", e, exc_info=True)
            raise

    async def fetch_and_save_users(
        self, session: Session, *, timeout: float | None = None
    ) -> list[User]:
        """Fetch every remote user and persist the batch in one repository call."""
        records = [record async for record in self.fetch_users(timeout=timeout)]
        saved = await asyncio.to_thread(
            self.repository.save_all, session, [record.to_model() for record in records]
        )
        logger.info("Saved %d users to database", len(saved))
        return saved

    def get_all_users(self, session: Session) -> list[User]:
        return self.repository.list_all(session)

    def get_user_by_id(self, session: Session, user_id: int) -> User | None:
        return self.repository.get(session, user_id)
