"""
Error taxonomy for the Resource API.

Every error the API reports to a caller is one of the classes below and is
rendered as ``{"message": ...}`` with the matching status code.
"""
import traceback
from datetime import datetime

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.config import settings


class ApiError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Please enter all required fields"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _describe_validation_error(exc: RequestValidationError) -> str:
    missing = []
    for err in exc.errors():
        field = err.get("loc", [])[-1] if err.get("loc") else None
        if err.get("type") == "missing" and field is not None:
            missing.append(str(field))
    if missing:
        return f"Please enter all required fields: {', '.join(missing)}"
    first = exc.errors()[0] if exc.errors() else {}
    field = first.get("loc", [])[-1] if first.get("loc") else "request"
    return f"Invalid value for '{field}': {first.get('msg', 'invalid input')}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"message": _describe_validation_error(exc)},
    )


# Global exception handler to ensure CORS headers on failure
async def unhandled_exception_handler(request: Request, exc: Exception):
    error_msg = traceback.format_exc()
    print(f"[ERROR] {request.method} {request.url.path} failed: {error_msg}")

    with open(settings.ERROR_LOG_PATH, "a") as f:
        f.write(f"\n[{datetime.now()}] 500 Error on {request.method} {request.url.path}:\n{error_msg}\n")

    return JSONResponse(
        status_code=InternalError.status_code,
        content={"message": InternalError.default_message},
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Credentials": "true"
        }
    )


def register_exception_handlers(app):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
