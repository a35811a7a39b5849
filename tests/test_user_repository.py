"""Tests for UserRepository persistence against an in-memory database."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from user_sync.db.base import Base
from user_sync.models.user import User
from user_sync.repositories.user import UserRepository


def _setup_in_memory_db() -> sessionmaker[Session]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def session() -> Session:
    session_local = _setup_in_memory_db()
    with session_local() as db:
        yield db


@pytest.fixture
def repository() -> UserRepository:
    return UserRepository()


def test_repository_model_type(repository: UserRepository) -> None:
    assert repository.model is User


def test_save_all_persists_batch(repository: UserRepository, session: Session) -> None:
    saved = repository.save_all(
        session,
        [
            User(id=2, name="Ervin Howell", username="Antonette", email="Shanna@melissa.tv"),
            User(id=1, name="Leanne Graham", username="Bret", email="Sincere@april.biz"),
        ],
    )

    assert {user.id for user in saved} == {1, 2}
    assert all(user.synced_at is not None for user in saved)
    assert [user.id for user in repository.list_all(session)] == [1, 2]


def test_save_all_upserts_by_remote_id(repository: UserRepository, session: Session) -> None:
    repository.save_all(
        session, [User(id=1, name="Leanne Graham", username="Bret", email="Sincere@april.biz")]
    )
    repository.save_all(
        session, [User(id=1, name="Leanne G.", username="Bret", email="Sincere@april.biz")]
    )

    users = repository.list_all(session)
    assert len(users) == 1
    assert users[0].name == "Leanne G."


def test_get_returns_user_or_none(repository: UserRepository, session: Session) -> None:
    repository.save_all(
        session, [User(id=5, name="Chelsey Dietrich", username="Kamren", email="Lucio@annie.ca")]
    )

    found = repository.get(session, 5)
    assert found is not None
    assert found.username == "Kamren"
    assert repository.get(session, 99) is None


def test_get_by_username(repository: UserRepository, session: Session) -> None:
    repository.save_all(
        session, [User(id=3, name="Clementine Bauch", username="Samantha", email="Nathan@yesenia.net")]
    )

    assert repository.get_by_username(session, "Samantha").id == 3
    assert repository.get_by_username(session, "Nobody") is None


def test_duplicate_email_is_rejected(repository: UserRepository, session: Session) -> None:
    repository.save_all(
        session, [User(id=1, name="Leanne Graham", username="Bret", email="Sincere@april.biz")]
    )

    with pytest.raises(IntegrityError):
        repository.save_all(
            session, [User(id=2, name="Impostor", username="other", email="Sincere@april.biz")]
        )
