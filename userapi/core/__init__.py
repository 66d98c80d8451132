"""Core app configuration, database, and error handling."""

from userapi.core.config import get_settings, settings
from userapi.core.database import get_db
from userapi.core.errors import ApiError, HandlerResult, Ok, unwrap

__all__ = ["ApiError", "HandlerResult", "Ok", "get_db", "get_settings", "settings", "unwrap"]
