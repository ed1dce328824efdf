"""Global error handling middleware for consistent error responses."""

import logging
import traceback
from typing import Any, Callable

from fastapi import HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors.

    Use this class to raise application-specific errors that should
    be returned to the client with a specific status code and message.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type: str = "api_error",
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code to return.
            error_type: Error category/type for client handling.
            details: Optional additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_type="not_found",
            details=details,
        )


class ValidationError(APIError):
    """Missing required field or malformed identifier."""

    def __init__(self, message: str = "Validation error", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_type="validation_error",
            details=details,
        )


class AuthenticationError(APIError):
    """Authentication failure error."""

    def __init__(self, message: str = "Unauthorized access!", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_type="authentication_error",
            details=details,
        )


def create_error_response(
    error_type: str,
    message: str,
    status_code: int,
    details: list[dict[str, Any]] | None = None,
    request_id: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized JSON error response.

    Args:
        error_type: Error category for client handling.
        message: Human-readable error description.
        status_code: HTTP status code.
        details: Optional error details.
        request_id: Optional request ID for tracing.
        headers: Optional extra response headers.

    Returns:
        JSONResponse: Formatted error response.
    """
    error_response = ErrorResponse.from_exception(
        error_type=error_type,
        message=message,
        details=details,
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


async def error_handler_middleware(request: Request, call_next: Callable[[Request], Any]) -> Response:
    """Middleware to catch and format all exceptions.

    Ensures consistent error response format across the application.
    Logs full stack traces for debugging while returning safe messages to clients.

    Args:
        request: The incoming request.
        call_next: Next middleware or route handler.

    Returns:
        Response: Either the successful response or formatted error response.
    """
    # Extract request ID if present (can be set by upstream middleware/load balancer)
    request_id = request.headers.get("X-Request-ID")

    try:
        response = await call_next(request)
        return response

    except AuthenticationError as e:
        logger.warning(
            "Authentication failed: %s",
            e.message,
            extra={"request_id": request_id, "path": request.url.path},
        )
        return create_error_response(
            error_type=e.error_type,
            message=e.message,
            status_code=e.status_code,
            details=e.details,
            request_id=request_id,
            headers={"WWW-Authenticate": "Bearer"},
        )

    except APIError as e:
        # Application-specific errors - log at warning level
        logger.warning(
            "API error: %s - %s",
            e.error_type,
            e.message,
            extra={"request_id": request_id, "status_code": e.status_code},
        )
        return create_error_response(
            error_type=e.error_type,
            message=e.message,
            status_code=e.status_code,
            details=e.details,
            request_id=request_id,
        )

    except HTTPException as e:
        # FastAPI HTTP exceptions
        logger.warning(
            "HTTP exception: %s - %s",
            e.status_code,
            e.detail,
            extra={"request_id": request_id},
        )
        return create_error_response(
            error_type="http_error",
            message=str(e.detail),
            status_code=e.status_code,
            request_id=request_id,
        )

    except Exception as e:
        # Unexpected exceptions - log full stack trace
        logger.error(
            "Unhandled exception: %s\n%s",
            str(e),
            traceback.format_exc(),
            extra={"request_id": request_id},
        )
        return create_error_response(
            error_type="internal_error",
            message="An unexpected error occurred",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            request_id=request_id,
        )


def _field_label(loc: tuple[Any, ...]) -> str | None:
    """Dotted field path from a validation error location, minus its source."""
    names = [str(part) for part in loc[1:] if isinstance(part, str)]
    return ".".join(names) or None


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Convert request parsing errors to the 400 validation envelope.

    The message names the first offending field, so a missing field reads
    the same as the required-field check in the services.
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    label = _field_label(tuple(first.get("loc", ())))

    if label is None:
        message = "Invalid request body"
    elif first.get("type") == "missing":
        message = f"{label} is required"
    else:
        message = f"{label} is invalid: {first.get('msg', 'bad value')}"

    logger.warning(
        "Request validation failed: %s",
        message,
        extra={"path": request.url.path},
    )
    return create_error_response(
        error_type="validation_error",
        message=message,
        status_code=status.HTTP_400_BAD_REQUEST,
        details=[
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": error.get("msg", ""),
                "type": error.get("type", "error"),
            }
            for error in errors
        ],
        request_id=request.headers.get("X-Request-ID"),
    )
