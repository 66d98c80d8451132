"""Pydantic request/response schemas."""

from userapi.schemas.auth import LoginRequest, TokenResponse
from userapi.schemas.health import HealthResponse
from userapi.schemas.user import (
    AdminUserUpdate,
    EnvelopeUser,
    FieldError,
    Identity,
    MessageResponse,
    OutputUser,
    StatusMessage,
    TokenCheckResponse,
    UserCreate,
    UserUpdate,
    validate_body,
)

__all__ = [
    "AdminUserUpdate",
    "EnvelopeUser",
    "FieldError",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "MessageResponse",
    "OutputUser",
    "StatusMessage",
    "TokenCheckResponse",
    "TokenResponse",
    "UserCreate",
    "UserUpdate",
    "validate_body",
]
