"""Shared fixtures for tests: in-memory database, cheap salt, identities."""

import bcrypt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userapi.models import Base
from userapi.schemas.user import Identity

# Minimum bcrypt cost keeps hashing fast in tests.
TEST_SALT = bcrypt.gensalt(rounds=4)


def make_session_factory() -> sessionmaker:
    """Fresh in-memory sqlite database with the users table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_identity(user_id: str = "a" * 32, role: str = "user", **extra: str) -> Identity:
    return Identity(id=user_id, role=role, **extra)


def valid_create_body(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "user_name": "alice",
        "email": "alice@example.com",
        "password": "correct-horse",
    }
    body.update(overrides)
    return body
