"""Service health: reports whether the user store answers queries."""

from typing import Annotated

from fastapi import APIRouter, Depends

from userapi.api.v1.users import get_user_store
from userapi.core.config import settings
from userapi.schemas.health import HealthResponse
from userapi.services.user_store import UserStore

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(store: Annotated[UserStore, Depends(get_user_store)]) -> HealthResponse:
    """Used by load balancers; stays 200 and reports 'degraded' when the users table is down."""
    reachable = store.is_reachable()
    return HealthResponse(
        status="ok" if reachable else "degraded",
        environment=settings.APP_ENV,
        users_store="reachable" if reachable else "unreachable",
    )
