"""Pydantic schemas for user records."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from user_sync.models.user import User


class UserRecord(BaseModel):
    """A user as returned by the remote listing endpoint.

    Extra remote fields such as ``address`` or ``company`` are ignored.
    """

    id: int
    name: str = Field(..., max_length=255)
    username: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)

    model_config = ConfigDict(extra="ignore")

    def to_model(self) -> User:
        """Build an ORM instance carrying the remote identifier."""
        return User(id=self.id, name=self.name, username=self.username, email=self.email)


class UserRead(BaseModel):
    """Representation returned by the API for stored user records."""

    id: int
    name: str
    username: str
    email: str
    synced_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
