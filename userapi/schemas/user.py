"""Request/response schemas for the user resource, plus field-level validation."""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError

USER_NAME_MIN_LEN = 3
USER_NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
ROLE_MAX_LEN = 32

# One message per field, reported as "<msg>: <param>".
FIELD_MESSAGES = {
    "user_name": "Invalid user name",
    "email": "Invalid email",
    "password": "Invalid password",
    "role": "Invalid role",
}
DEFAULT_FIELD_MESSAGE = "Invalid value"

ModelT = TypeVar("ModelT", bound=BaseModel)


class UserCreate(BaseModel):
    """Body for creating a user. role defaults to 'user' when omitted."""

    user_name: str = Field(..., min_length=USER_NAME_MIN_LEN, max_length=USER_NAME_MAX_LEN)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: str | None = Field(default=None, min_length=1, max_length=ROLE_MAX_LEN)


class UserUpdate(BaseModel):
    """Self-service update; every field optional, role is not accepted."""

    user_name: str | None = Field(
        default=None, min_length=USER_NAME_MIN_LEN, max_length=USER_NAME_MAX_LEN
    )
    email: EmailStr | None = None
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


class AdminUserUpdate(UserUpdate):
    """Admin update of another user; may also change role."""

    role: str | None = Field(default=None, min_length=1, max_length=ROLE_MAX_LEN)


class FieldError(BaseModel):
    """One failed field: msg is the human message, param the field name."""

    msg: str
    param: str


def validate_body(
    model: type[ModelT], body: Mapping[str, Any] | Any
) -> tuple[ModelT | None, list[FieldError]]:
    """
    Validate a raw request body against model.

    Returns (instance, []) on success or (None, errors) with one FieldError per
    failing field, in field declaration order.
    """
    try:
        return model.model_validate(body), []
    except ValidationError as e:
        errors: list[FieldError] = []
        seen: set[str] = set()
        for err in e.errors():
            param = str(err["loc"][0]) if err["loc"] else "body"
            if param in seen:
                continue
            seen.add(param)
            errors.append(
                FieldError(msg=FIELD_MESSAGES.get(param, DEFAULT_FIELD_MESSAGE), param=param)
            )
        return None, errors


class OutputUser(BaseModel):
    """Projected user: the stored record without password and role."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_name: str
    email: str


class EnvelopeUser(BaseModel):
    """The user part of a create/update/delete confirmation."""

    user_name: str
    email: str
    id: str


class StatusMessage(BaseModel):
    """Plain confirmation message."""

    message: str


class MessageResponse(StatusMessage):
    """Envelope returned by create, update and delete."""

    user: EnvelopeUser


class Identity(BaseModel):
    """Authenticated caller as established by the token (id and role at least)."""

    id: str
    role: str
    user_name: str | None = None
    email: str | None = None


class TokenCheckResponse(StatusMessage):
    """Response for the token check: the identity echoed back unmodified."""

    user: Identity
