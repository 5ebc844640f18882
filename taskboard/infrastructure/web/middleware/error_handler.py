"""
Error handling for the HTTP layer.
Maps use case error codes to status codes and formats uncaught exceptions.
"""

import json
import logging
import traceback
from typing import Any, Dict, Optional, Type, TypeVar

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError as PydanticValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from taskboard.application.use_cases.base_use_case import UseCaseResult
from taskboard.config import settings
from taskboard.domain.models.base import DomainException


T = TypeVar('T')
D = TypeVar('D', bound=BaseModel)

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": 422,
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ORDER_CONFLICT": status.HTTP_409_CONFLICT,
    "DUPLICATE_ENTITY": status.HTTP_409_CONFLICT,
    "BUSINESS_RULE_VIOLATION": status.HTTP_400_BAD_REQUEST,
    "PERSISTENCE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "UNKNOWN_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for_error_code(error_code: Optional[str]) -> int:
    return ERROR_STATUS_CODES.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def unwrap_result(result: UseCaseResult[T]) -> T:
    """
    Return the data of a successful use case result.

    Raises:
        HTTPException: With the status mapped from the result's error code
    """
    if result.success:
        return result.data

    error_code = result.error_code or "UNKNOWN_ERROR"
    status_code = status_for_error_code(error_code)
    message = result.error
    if status_code >= 500 and not settings.debug:
        message = "An unexpected error occurred"

    raise HTTPException(
        status_code=status_code,
        detail={"error_code": error_code, "message": message}
    )


def build_request_dto(dto_class: Type[D], **values: Any) -> D:
    """
    Build a request DTO from path parameters and a parsed body.
    Invalid values are reported like any other request validation failure.
    """
    try:
        return dto_class(**values)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return self.handle_exception(request, exc)

    def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled exception: %s: %s",
            type(exc).__name__,
            exc,
            exc_info=True,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        error_response = self.format_error_response(exc)

        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc().split("\n")
            }

        return JSONResponse(
            status_code=error_response["status_code"],
            content=error_response
        )

    def format_error_response(self, exc: Exception) -> Dict[str, Any]:
        """
        Format exception into a consistent error response structure.
        """
        error_response = {
            "error_code": "UNKNOWN_ERROR",
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
        }

        if isinstance(exc, DomainException):
            error_response.update({
                "error_code": exc.code,
                "message": exc.message,
                "status_code": status_for_error_code(exc.code)
            })
        elif isinstance(exc, json.JSONDecodeError):
            error_response.update({
                "error_code": "VALIDATION_ERROR",
                "message": "The request body contains invalid JSON",
                "status_code": status.HTTP_400_BAD_REQUEST
            })

        return error_response
