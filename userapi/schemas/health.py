"""Schema for the service health response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status plus whether the users table can be queried."""

    status: Literal["ok", "degraded"] = Field(
        description="'degraded' when the user store cannot be reached"
    )
    environment: str = Field(description="APP_ENV of the running service")
    users_store: Literal["reachable", "unreachable"]
