"""
Centralized error handling for the Flight Deal Search API.

Provider failures are classified and logged here so the search handler can
absorb them; anything else surfaces to the caller as a fixed error payload
with no detail attached.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional, Tuple
from enum import Enum

import httpx
from fastapi import Request
from fastapi.responses import JSONResponse

from app.models.responses import ErrorResponse


INTERNAL_SERVER_ERROR_MESSAGE = "Internal server error"


class ErrorCode(str, Enum):
    """Enumeration of error codes for different failure scenarios."""

    # Provider failures (absorbed, never returned to the caller)
    PROVIDER_TIMEOUT = "PROVIDER_TIMEOUT"
    PROVIDER_HTTP_ERROR = "PROVIDER_HTTP_ERROR"
    PROVIDER_UNREACHABLE = "PROVIDER_UNREACHABLE"
    PROVIDER_INVALID_RESPONSE = "PROVIDER_INVALID_RESPONSE"

    # Surfaced errors
    HTTP_404 = "HTTP_404"
    HTTP_405 = "HTTP_405"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ErrorHandler:
    """
    Centralized error handling class.

    Classifies outbound provider errors, logs errors with request context,
    and builds the JSON error responses the API returns.
    """

    # Error code to HTTP status code mapping
    ERROR_STATUS_MAPPING: Dict[ErrorCode, int] = {
        ErrorCode.HTTP_404: 404,
        ErrorCode.HTTP_405: 405,
        ErrorCode.INTERNAL_SERVER_ERROR: 500,
    }

    # Error code to default message mapping
    ERROR_MESSAGES: Dict[ErrorCode, str] = {
        ErrorCode.PROVIDER_TIMEOUT: "Provider request timeout exceeded",
        ErrorCode.PROVIDER_HTTP_ERROR: "Provider returned an error status",
        ErrorCode.PROVIDER_UNREACHABLE: "Unable to reach the provider",
        ErrorCode.PROVIDER_INVALID_RESPONSE: "Provider returned a body that is not valid JSON",
        ErrorCode.HTTP_404: "Not Found",
        ErrorCode.HTTP_405: "Method Not Allowed",
        ErrorCode.INTERNAL_SERVER_ERROR: INTERNAL_SERVER_ERROR_MESSAGE,
    }

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the ErrorHandler.

        Args:
            logger: Optional logger instance. If not provided, creates a new logger.
        """
        self.logger = logger or logging.getLogger(__name__)

    def log_error(
        self,
        error_code: ErrorCode,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[BaseException] = None,
        url: Optional[str] = None,
        additional_context: Optional[Dict[str, Any]] = None,
        level: int = logging.ERROR
    ) -> None:
        """
        Log error with context information.

        Args:
            error_code: The error code enum value
            message: Error message
            request: Optional FastAPI request object
            exception: Optional exception that caused the error
            url: Optional outbound URL involved
            additional_context: Optional additional context information
            level: Logging level, ERROR unless the failure is recovered from
        """
        context = {
            "error_code": error_code.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if request:
            context.update({
                "method": request.method,
                "url": str(request.url),
                "client_ip": getattr(request.client, 'host', 'unknown') if request.client else 'unknown',
            })

        if url:
            context["target_url"] = url

        if additional_context:
            context.update(additional_context)

        self.logger.log(
            level,
            f"{error_code.value}: {message}",
            extra={"context": context},
            exc_info=exception if level >= logging.ERROR else None
        )

    def classify_provider_error(self, error: BaseException) -> Tuple[ErrorCode, str]:
        """
        Map an outbound provider error to an error code and message.

        Args:
            error: Exception raised while calling the provider

        Returns:
            Tuple of (ErrorCode, error_message)
        """
        if isinstance(error, (asyncio.TimeoutError, httpx.TimeoutException)):
            return ErrorCode.PROVIDER_TIMEOUT, f"Provider timeout: {error!r}"

        if isinstance(error, httpx.HTTPStatusError):
            status = error.response.status_code
            return ErrorCode.PROVIDER_HTTP_ERROR, f"API returned {status}"

        if isinstance(error, httpx.RequestError):
            return ErrorCode.PROVIDER_UNREACHABLE, f"Network error: {error!r}"

        if isinstance(error, ValueError):
            return ErrorCode.PROVIDER_INVALID_RESPONSE, f"Invalid provider response: {error}"

        return ErrorCode.PROVIDER_UNREACHABLE, f"Unexpected provider error: {error!r}"

    def create_error_response(self, error_code: ErrorCode) -> ErrorResponse:
        """
        Create the error body for an error code.

        Server errors always carry the fixed internal error message.
        """
        status_code = self.ERROR_STATUS_MAPPING.get(error_code, 500)
        if status_code >= 500:
            return ErrorResponse(error=INTERNAL_SERVER_ERROR_MESSAGE)
        return ErrorResponse(error=self.ERROR_MESSAGES.get(error_code, "Unknown error"))

    def error_code_for_status(self, status_code: int) -> Optional[ErrorCode]:
        """Error code mapped to an HTTP status, if any."""
        for error_code, mapped_status in self.ERROR_STATUS_MAPPING.items():
            if mapped_status == status_code:
                return error_code
        return None

    def create_json_response(
        self,
        error_code: ErrorCode,
        headers: Optional[Dict[str, str]] = None
    ) -> JSONResponse:
        """
        Create a JSON response for an error.

        Args:
            error_code: The error code enum value
            headers: Optional headers to send with the response

        Returns:
            JSONResponse: FastAPI JSON response with appropriate status code
        """
        error_response = self.create_error_response(error_code)
        status_code = self.ERROR_STATUS_MAPPING.get(error_code, 500)

        return JSONResponse(
            status_code=status_code,
            content=error_response.model_dump(mode='json'),
            headers=headers
        )


# Global error handler instance
error_handler = ErrorHandler()
