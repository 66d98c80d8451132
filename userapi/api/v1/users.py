"""User resource endpoints. Routes gather inputs, call the handler and unwrap its result."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from userapi.api.v1.auth import get_current_identity
from userapi.core.database import get_db
from userapi.core.errors import unwrap
from userapi.schemas.user import (
    Identity,
    MessageResponse,
    OutputUser,
    StatusMessage,
    TokenCheckResponse,
)
from userapi.services import users
from userapi.services.user_store import UserStore

router = APIRouter()


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    """Dependency: a UserStore bound to the request's session."""
    return UserStore(db)


def get_password_salt(request: Request) -> bytes:
    """Dependency: the salt generated once when the app was created."""
    return request.app.state.password_salt


Store = Annotated[UserStore, Depends(get_user_store)]
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
Salt = Annotated[bytes, Depends(get_password_salt)]
JsonBody = Annotated[dict[str, Any], Body()]


@router.get("/check", response_model=StatusMessage)
def check() -> StatusMessage:
    return users.check()


@router.get("/token", response_model=TokenCheckResponse)
def check_token(identity: CurrentIdentity) -> TokenCheckResponse:
    return users.check_token(identity)


@router.get("", response_model=list[OutputUser])
def list_users(store: Store) -> list[OutputUser]:
    return unwrap(users.list_users(store))


@router.post("", response_model=MessageResponse)
def create_user(body: JsonBody, store: Store, salt: Salt) -> MessageResponse:
    """Register a user. Body: user_name, email, password and optional role."""
    return unwrap(users.create_user(store, body, salt))


@router.put("", response_model=MessageResponse)
def update_current_user(
    body: JsonBody, identity: CurrentIdentity, store: Store, salt: Salt
) -> MessageResponse:
    return unwrap(users.update_current_user(store, identity, body, salt))


@router.delete("", response_model=MessageResponse)
def delete_current_user(identity: CurrentIdentity, store: Store) -> MessageResponse:
    return unwrap(users.delete_current_user(store, identity))


@router.get("/{user_id}", response_model=OutputUser)
def get_user(user_id: str, store: Store) -> OutputUser:
    return unwrap(users.get_user(store, user_id))


@router.put("/{user_id}", response_model=MessageResponse)
def update_user_as_admin(
    user_id: str, body: JsonBody, identity: CurrentIdentity, store: Store, salt: Salt
) -> MessageResponse:
    """Update any user (admin role required)."""
    return unwrap(users.update_user_as_admin(store, identity, user_id, body, salt))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user_as_admin(
    user_id: str, identity: CurrentIdentity, store: Store
) -> MessageResponse:
    """Delete any user (admin role required)."""
    return unwrap(users.delete_user_as_admin(store, identity, user_id))
