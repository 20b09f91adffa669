"""
Global error handler middleware for the FastAPI application.
Catches and formats all exceptions consistently.
"""

import logging
import traceback
from typing import Any, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status

from app.config import settings
from app.application.dto.base_dto import ErrorResponseDTO
from app.domain.models.base import DomainException, ValidationError

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Handle different types of exceptions and return appropriate responses.
        """
        # Log the full exception with traceback
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        status_code, error_response = self.format_error_response(exc)

        # Add request ID if available
        if hasattr(request.state, "request_id"):
            error_response.request_id = request.state.request_id

        # In development, add more debug information
        if settings.debug:
            error_response.details = {
                **(error_response.details or {}),
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=status_code,
            content=error_response.model_dump(mode="json", exclude_none=True)
        )

    def format_error_response(self, exc: Exception) -> tuple[int, ErrorResponseDTO]:
        """
        Format exception into a consistent error response structure.
        """
        if isinstance(exc, ValidationError):
            details: Dict[str, Any] = {"code": exc.code}
            if exc.field:
                details["field"] = exc.field
            return status.HTTP_400_BAD_REQUEST, ErrorResponseDTO(
                error="Bad Request",
                message=exc.message,
                details=details
            )
        elif isinstance(exc, DomainException):
            return status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponseDTO(
                error="Internal Server Error",
                message=exc.message,
                details={"code": exc.code}
            )
        elif isinstance(exc, ValueError):
            return status.HTTP_400_BAD_REQUEST, ErrorResponseDTO(
                error="Bad Request",
                message=str(exc)
            )
        elif isinstance(exc, TimeoutError):
            return status.HTTP_408_REQUEST_TIMEOUT, ErrorResponseDTO(
                error="Request Timeout",
                message="The request took too long to process"
            )

        return status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponseDTO(
            error="Internal Server Error",
            message="An unexpected error occurred"
        )
