"""Typed API errors, handler results, and the central error dispatcher."""

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiError(Exception):
    """Error carried back to the client as {message, status} with status_code."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ApiError({self.message!r}, {self.status_code})"

    @classmethod
    def bad_request(cls, message: str) -> "ApiError":
        return cls(message, status.HTTP_400_BAD_REQUEST)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> "ApiError":
        return cls(message, status.HTTP_401_UNAUTHORIZED)

    @classmethod
    def not_found(cls, message: str) -> "ApiError":
        return cls(message, status.HTTP_404_NOT_FOUND)

    @classmethod
    def server_error(cls, message: str) -> "ApiError":
        return cls(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful handler outcome wrapping the response payload."""

    value: T


# A handler returns either its payload or the error to send instead.
HandlerResult = Union[Ok[T], ApiError]


def unwrap(result: "HandlerResult[T]") -> T:
    """Return the payload of a successful result; raise the ApiError otherwise."""
    if isinstance(result, ApiError):
        raise result
    return result.value


def _error_body(message: str, status_code: int) -> dict[str, object]:
    return {"message": message, "status": status_code}


def _format_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        parts.append(f"{err.get('msg', 'Invalid value')}: {'.'.join(loc) or 'body'}")
    return ", ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate every error the app raises into the uniform JSON error body."""

    @app.exception_handler(ApiError)
    async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.status_code),
        )

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _format_request_errors(exc)
        logger.info("%s %s -> 400: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(message, status.HTTP_400_BAD_REQUEST),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), exc.status_code),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(str(exc) or "Internal server error", 500),
        )
