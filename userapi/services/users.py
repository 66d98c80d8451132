"""
User resource handlers.

Each handler takes its inputs explicitly (store, caller identity, path id, body,
process salt), performs at most one store operation and returns a HandlerResult:
Ok(payload) or the ApiError to send instead. Translating the result into an HTTP
response is left to the route layer.
"""

import logging
from typing import Any

from userapi.core.errors import ApiError, HandlerResult, Ok
from userapi.core.security import hash_password
from userapi.models import User
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
from userapi.services.user_store import UserStore

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"
ADMIN_ROLE = "admin"

SERVER_UP = "Server up"
USER_CREATED = "User created"
USER_UPDATED = "User updated"
USER_DELETED = "User deleted"
TOKEN_VALID = "Token is valid"
USER_NOT_FOUND = "User not found"
USER_CREATION_FAILED = "User creation failed"
UNAUTHORIZED = "Unauthorized"


def format_field_errors(errors: list[FieldError]) -> str:
    """Join field errors as '<msg>: <param>' pairs separated by ', '."""
    return ", ".join(f"{e.msg}: {e.param}" for e in errors)


def _envelope(message: str, user: User) -> MessageResponse:
    return MessageResponse(
        message=message,
        user=EnvelopeUser(user_name=user.user_name, email=user.email, id=user.id),
    )


def _store_error_message(error: Exception) -> str:
    """The driver's own message; SQLAlchemy's wrapper also embeds the statement and its parameters."""
    return str(getattr(error, "orig", None) or error)


def _is_admin(identity: Identity) -> bool:
    return ADMIN_ROLE in identity.role


def check() -> StatusMessage:
    """Liveness confirmation; no side effects."""
    return StatusMessage(message=SERVER_UP)


def list_users(store: UserStore) -> HandlerResult[list[OutputUser]]:
    try:
        users = store.find()
    except Exception as e:
        logger.exception("Listing users failed")
        return ApiError.server_error(_store_error_message(e))
    return Ok([OutputUser.model_validate(u) for u in users])


def get_user(store: UserStore, user_id: str) -> HandlerResult[OutputUser]:
    try:
        user = store.find_by_id(user_id)
    except Exception as e:
        logger.exception("Fetching user %s failed", user_id)
        return ApiError.server_error(_store_error_message(e))
    if user is None:
        return ApiError.not_found(USER_NOT_FOUND)
    return Ok(OutputUser.model_validate(user))


def create_user(
    store: UserStore, body: dict[str, Any], salt: bytes
) -> HandlerResult[MessageResponse]:
    """
    Validate and persist a new user.

    Validation failures yield 400 with every '<msg>: <param>' pair and nothing is
    stored. The password is hashed with the process salt and role defaults to
    'user'. Any later failure yields the fixed 500 'User creation failed' so
    store internals are not leaked.
    """
    data, errors = validate_body(UserCreate, body)
    if errors:
        message = format_field_errors(errors)
        logger.warning("User creation rejected: %s", message)
        return ApiError.bad_request(message)

    try:
        fields = data.model_dump()
        fields["password"] = hash_password(data.password, salt)
        fields["role"] = data.role or DEFAULT_ROLE
        user = store.create(fields)
    except Exception:
        logger.exception("User creation failed")
        return ApiError.server_error(USER_CREATION_FAILED)

    logger.info("User created: id=%s", user.id)
    return Ok(_envelope(USER_CREATED, user))


def _update_user(
    store: UserStore,
    user_id: str,
    body: dict[str, Any],
    salt: bytes,
    schema: type[UserUpdate],
) -> HandlerResult[MessageResponse]:
    data, errors = validate_body(schema, body)
    if errors:
        message = format_field_errors(errors)
        logger.warning("Update of user %s rejected: %s", user_id, message)
        return ApiError.bad_request(message)

    try:
        changes = data.model_dump(exclude_none=True)
        if "password" in changes:
            changes["password"] = hash_password(changes["password"], salt)
        user = store.update_by_id(user_id, changes)
    except Exception as e:
        logger.exception("Updating user %s failed", user_id)
        return ApiError.server_error(_store_error_message(e))

    if user is None:
        logger.warning("Update of missing user %s", user_id)
        return ApiError.not_found(USER_NOT_FOUND)
    logger.info("User updated: id=%s fields=%s", user.id, sorted(changes))
    return Ok(_envelope(USER_UPDATED, user))


def _delete_user(store: UserStore, user_id: str) -> HandlerResult[MessageResponse]:
    try:
        user = store.delete_by_id(user_id)
    except Exception as e:
        logger.exception("Deleting user %s failed", user_id)
        return ApiError.server_error(_store_error_message(e))

    if user is None:
        logger.warning("Delete of missing user %s", user_id)
        return ApiError.not_found(USER_NOT_FOUND)
    logger.info("User deleted: id=%s", user.id)
    return Ok(_envelope(USER_DELETED, user))


def update_current_user(
    store: UserStore, identity: Identity, body: dict[str, Any], salt: bytes
) -> HandlerResult[MessageResponse]:
    """Update the caller's own record; the target comes from the identity."""
    return _update_user(store, identity.id, body, salt, UserUpdate)


def delete_current_user(store: UserStore, identity: Identity) -> HandlerResult[MessageResponse]:
    """Delete the caller's own record; the target comes from the identity."""
    return _delete_user(store, identity.id)


def delete_user_as_admin(
    store: UserStore, identity: Identity, user_id: str
) -> HandlerResult[MessageResponse]:
    if not _is_admin(identity):
        logger.warning("Non-admin %s tried to delete user %s", identity.id, user_id)
        return ApiError.unauthorized(UNAUTHORIZED)
    return _delete_user(store, user_id)


def update_user_as_admin(
    store: UserStore,
    identity: Identity,
    user_id: str,
    body: dict[str, Any],
    salt: bytes,
) -> HandlerResult[MessageResponse]:
    """Admin update of any user; unlike self-service this may change role."""
    if not _is_admin(identity):
        logger.warning("Non-admin %s tried to update user %s", identity.id, user_id)
        return ApiError.unauthorized(UNAUTHORIZED)
    return _update_user(store, user_id, body, salt, AdminUserUpdate)


def check_token(identity: Identity) -> TokenCheckResponse:
    """Echo the authenticated identity back unmodified."""
    return TokenCheckResponse(message=TOKEN_VALID, user=identity)
