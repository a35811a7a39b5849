"""Tests for the Alembic migration that creates the users table."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Any

from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine, inspect, text

MIGRATION_PATH = (
    Path(__file__).resolve().parents[1]
    / "alembic"
    / "versions"
    / "20261018_01_create_users_table.py"
)


def test_users_table_migration_creates_expected_schema() -> None:
    spec = importlib.util.spec_from_file_location("migration_20261018_01", MIGRATION_PATH)
    assert spec and spec.loader
    migration = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(migration)
    engine = create_engine("sqlite+pysqlite:///:memory:")
    original_op: Any = migration.op

    try:
        with engine.begin() as connection:
            context = MigrationContext.configure(connection=connection)
            migration.op = Operations(context)

            migration.upgrade()

            inspector = inspect(connection)
            column_info = {col["name"]: col for col in inspector.get_columns("users")}

            assert {"id", "name", "username", "email", "synced_at"}.issubset(column_info.keys())
            for column in ("name", "username", "email"):
                assert column_info[column]["nullable"] is False
            unique_columns = [
                constraint["column_names"]
                for constraint in inspector.get_unique_constraints("users")
            ]
            assert ["username"] in unique_columns
            assert ["email"] in unique_columns

            connection.execute(
                text(
                    "INSERT INTO users (id, name, username, email) VALUES "
                    "(1, 'Leanne Graham', 'Bret', 'Sincere@april.biz')"
                )
            )
            row = connection.execute(text("SELECT synced_at FROM users WHERE id = 1")).one()
            assert row.synced_at is not None

            migration.downgrade()
            assert "users" not in inspect(connection).get_table_names()
    finally:
        migration.op = original_op
