"""Repository utilities for user persistence."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from user_sync.models.user import User
from user_sync.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data-access helper for mirrored user records."""

    def __init__(self) -> None:
        super().__init__(model=User)

    def save_all(self, session: Session, users: Iterable[User]) -> list[User]:
        """Upsert a batch of users by id and commit.

        Returns the session-bound instances, refreshed with database defaults.
        """

        saved = self.merge_all(session, users)
        session.commit()
        for user in saved:
            session.refresh(user)
        return saved

    def list_all(self, session: Session) -> list[User]:
        """Return all stored users ordered by id."""

        result = session.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars())

    def get_by_username(self, session: Session, username: str) -> User | None:
        """Return a user matching the supplied username if it exists."""

        statement = select(self.model).where(self.model.username == username)
        result = session.execute(statement)
        return result.scalars().one_or_none()
