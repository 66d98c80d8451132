"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from userapi.api.v1 import router as v1_router
from userapi.core.config import settings
from userapi.core.errors import register_exception_handlers
from userapi.core.security import generate_salt

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)

app = FastAPI(
    title="User API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Generated once per process and handed to the password hasher on every write.
app.state.password_salt = generate_salt(settings.BCRYPT_ROUNDS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)
register_exception_handlers(app)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "User API"}
