"""SQLAlchemy ORM models."""

from userapi.models.base import Base
from userapi.models.user import User

__all__ = ["Base", "User"]
