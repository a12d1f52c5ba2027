"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from typing import Any, Dict, Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)

class GiftReservoirException(HTTPException):
    """Base exception class for GiftReservoir application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

class BadRequestException(GiftReservoirException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class AlreadyClaimedException(BadRequestException):
    """Item already has an active claim"""

    def __init__(self, detail: str = "Item is already claimed"):
        super().__init__(detail=detail, error_code="ALREADY_CLAIMED")

class SelfClaimForbiddenException(BadRequestException):
    """Wishlist owner tried to claim one of their own items"""

    def __init__(self, detail: str = "You cannot claim items from your own wishlist"):
        super().__init__(detail=detail, error_code="SELF_CLAIM_FORBIDDEN")

class UnauthorizedException(GiftReservoirException):
    """401 Unauthorized"""

    def __init__(self, detail: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"}
        )

class NotFoundException(GiftReservoirException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ConflictException(GiftReservoirException):
    """409 Conflict"""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )

class TokenCollisionException(ConflictException):
    """Share token collided twice in a row; the client may retry"""

    def __init__(self, detail: str = "Could not allocate a share link, please retry"):
        super().__init__(detail=detail, error_code="TOKEN_COLLISION")

def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    headers: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "request_id": getattr(request.state, "request_id", None)
            }
        },
        headers=headers
    )

async def app_exception_handler(request: Request, exc: GiftReservoirException) -> JSONResponse:
    """Render application exceptions"""
    return _error_response(
        request,
        exc.status_code,
        exc.error_code or "ERROR",
        exc.detail,
        headers=exc.headers
    )

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown routes, bad methods) in the same envelope"""
    return _error_response(
        request,
        exc.status_code,
        "HTTP_ERROR",
        str(exc.detail),
        headers=getattr(exc, "headers", None)
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed ids and bodies are client errors (400)"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))

    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "; ".join(messages) or "Invalid request"
    )

async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Persistence failures are logged and never leak internals"""
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")

    detail = str(exc) if settings.DEBUG else "An unexpected error occurred"
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        detail
    )

async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected exceptions"""
    logger.exception(f"Unhandled exception: {str(exc)}")

    detail = str(exc) if settings.DEBUG else "An unexpected error occurred"
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        detail
    )

def register_exception_handlers(app) -> None:
    """Attach all error handlers to the application"""
    from starlette.exceptions import HTTPException as StarletteHTTPException

    app.add_exception_handler(GiftReservoirException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
