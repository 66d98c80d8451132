"""JWT login and the get_current_identity dependency."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from userapi.core.database import get_db
from userapi.core.security import (
    create_access_token,
    decode_access_token,
    verify_password,
)
from userapi.schemas.auth import LoginRequest, TokenResponse
from userapi.schemas.user import Identity
from userapi.services.user_store import UserStore

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    user = UserStore(db).find_by_email(body.username)
    if user is None or not verify_password(body.password, user.password):
        raise _unauthorized("Invalid username or password")
    identity = Identity(id=user.id, role=user.role, user_name=user.user_name, email=user.email)
    return TokenResponse(access_token=create_access_token(identity.model_dump()))


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """Dependency: require valid Bearer JWT and return the identity it carries. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        return Identity.model_validate(payload)
    except ValidationError:
        raise _unauthorized("Invalid token payload")
