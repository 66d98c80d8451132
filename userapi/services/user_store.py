"""User persistence: one round trip to the database per operation."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from userapi.models import User

logger = logging.getLogger(__name__)


def _detached_copy(user: User) -> User:
    """Copy of a row that stays readable after the row is deleted and committed."""
    return User(
        id=user.id,
        user_name=user.user_name,
        email=user.email,
        password=user.password,
        role=user.role,
    )


class UserStore:
    """
    Find, create, update-by-id and delete-by-id over the users table.

    Lookups return None when no row matches. Writes commit immediately and roll
    the session back before re-raising on failure.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self) -> list[User]:
        """All users in store order."""
        return self.session.query(User).all()

    def find_by_id(self, user_id: str) -> User | None:
        return self.session.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def is_reachable(self) -> bool:
        """True if the users table answers a trivial query."""
        try:
            self.session.query(User.id).limit(1).all()
            return True
        except SQLAlchemyError:
            self.session.rollback()
            logger.warning("Users table is not reachable", exc_info=True)
            return False

    def create(self, fields: dict[str, Any]) -> User:
        user = User(**fields)
        self.session.add(user)
        self._commit()
        self.session.refresh(user)
        return user

    def update_by_id(self, user_id: str, changes: dict[str, Any]) -> User | None:
        """Apply changes and return the post-update record, or None if absent."""
        user = self.find_by_id(user_id)
        if user is None:
            return None
        for field, value in changes.items():
            setattr(user, field, value)
        self._commit()
        self.session.refresh(user)
        return user

    def delete_by_id(self, user_id: str) -> User | None:
        """Delete and return the removed record, or None if absent."""
        user = self.find_by_id(user_id)
        if user is None:
            return None
        removed = _detached_copy(user)
        self.session.delete(user)
        self._commit()
        return removed

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.warning("User store commit failed; session rolled back")
            raise
