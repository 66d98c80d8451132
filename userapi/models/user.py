"""ORM model for user accounts."""

from uuid import uuid4

from sqlalchemy import Column, String

from userapi.models.base import Base


def new_user_id() -> str:
    """Store-assigned identifier: 32 hex characters."""
    return uuid4().hex


class User(Base):
    """
    User account for the user resource and role-based access control.

    password holds the bcrypt digest, never the plain text.
    role: 'user' by default; any role containing 'admin' grants admin access.
    """

    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=new_user_id)
    user_name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
