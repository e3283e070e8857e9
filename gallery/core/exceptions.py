"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

class GalleryException(HTTPException):
    """Base exception class for the gallery application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.details = details or []

class BadRequestException(GalleryException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )

class UnauthorizedException(GalleryException):
    """401 Unauthorized"""

    def __init__(self, detail: str = "Unauthorized", error_code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code=error_code,
            headers={"WWW-Authenticate": "Bearer"}
        )

class ForbiddenException(GalleryException):
    """403 Forbidden"""

    def __init__(self, detail: str = "Forbidden", error_code: str = "FORBIDDEN"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code=error_code
        )

class NotFoundException(GalleryException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )

class ConflictException(GalleryException):
    """409 Conflict"""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )

class ValidationException(GalleryException):
    """422 Unprocessable Entity with field-level detail"""

    def __init__(
        self,
        detail: str,
        field: Optional[str] = None,
        error_code: str = "VALIDATION_ERROR",
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        if details is None and field:
            details = [{"field": field, "message": detail}]
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code,
            details=details
        )

class PersistenceException(GalleryException):
    """500 database-layer failure"""

    def __init__(
        self,
        detail: str = "A storage error occurred",
        error_code: str = "PERSISTENCE_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code
        )

class PaymentGatewayException(GalleryException):
    """502 payment processor failed to handle the request; safe to retry"""

    def __init__(
        self,
        detail: str = "Payment processor unavailable",
        error_code: str = "PAYMENT_GATEWAY_ERROR"
    ):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code=error_code
        )

# Business logic exceptions
class InvalidPaymentException(BadRequestException):
    """Payment validation failed"""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            error_code="INVALID_PAYMENT"
        )

class InvalidStatusTransitionException(ConflictException):
    """Order cannot move to the requested status"""

    def __init__(self, current: str, requested: str):
        super().__init__(
            detail=f"Cannot transition order from {current} to {requested}",
            error_code="INVALID_STATUS_TRANSITION"
        )

class ArtworkUnavailableException(ConflictException):
    """Requested original or print is not for sale"""

    def __init__(self, detail: str):
        super().__init__(
            detail=detail,
            error_code="ARTWORK_UNAVAILABLE"
        )

# Handlers
def _error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: Optional[List[Dict[str, Any]]] = None,
    headers: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or [],
                "request_id": getattr(request.state, "request_id", None),
            }
        },
        headers=headers,
    )

async def gallery_exception_handler(request: Request, exc: GalleryException) -> JSONResponse:
    return _error_response(
        request,
        exc.status_code,
        exc.error_code or "ERROR",
        exc.detail,
        details=exc.details,
        headers=exc.headers,
    )

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(
        request,
        exc.status_code,
        "HTTP_ERROR",
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )

async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        details=details,
    )

async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "PERSISTENCE_ERROR",
        "A storage error occurred",
    )

async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return _error_response(
        request,
        status.HTTP_429_TOO_MANY_REQUESTS,
        "RATE_LIMIT_EXCEEDED",
        f"Too many requests. {exc.detail}",
    )

def register_exception_handlers(app) -> None:
    """Attach all error handlers to the application"""
    app.add_exception_handler(GalleryException, gallery_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
