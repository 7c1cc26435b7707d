from typing import Dict, Any, Optional
from fastapi import status
from pydantic import BaseModel
import logging

logger = logging.getLogger(__name__)


class BaseCustomException(Exception):
    """Base class for custom exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(BaseCustomException):
    """Missing or malformed required input"""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code=error_code or "VALIDATION_ERROR"
        )


class NotFoundError(BaseCustomException):
    """Referenced resource does not exist"""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code=error_code or "NOT_FOUND_ERROR"
        )


class PersistenceError(BaseCustomException):
    """Storage layer failure"""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code=error_code or "PERSISTENCE_ERROR"
        )


class UpstreamError(BaseCustomException):
    """AI generation service failure"""

    def __init__(
        self,
        message: str = "External service error",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            error_code=error_code or "UPSTREAM_ERROR"
        )


# Response model for errors
class ErrorResponse(BaseModel):
    """Standard error response model"""
    error: str


def create_error_response(exception: BaseCustomException) -> Dict[str, Any]:
    """Create standardized error response"""
    return {"error": exception.message}


def handle_database_error(error: Exception, message: str, operation: str = "database operation") -> PersistenceError:
    """Log a storage failure and convert it to PersistenceError"""
    logger.error(f"Database error during {operation}: {error}")

    return PersistenceError(
        message=message,
        details={"operation": operation, "original_error": str(error)},
        error_code="DATABASE_OPERATION_ERROR"
    )


def handle_upstream_error(
    error: Exception,
    service_name: str,
    operation: str = "request"
) -> UpstreamError:
    """Handle AI service errors"""
    logger.error(f"External service error for {service_name}: {error}")

    return UpstreamError(
        message=f"External service {service_name} unavailable",
        details={
            "service_name": service_name,
            "operation": operation,
            "original_error": str(error)
        },
        error_code="UPSTREAM_ERROR"
    )


# Status code mapping for errors read back from HTTP responses
STATUS_MAPPING = {
    status.HTTP_400_BAD_REQUEST: ValidationError,
    status.HTTP_404_NOT_FOUND: NotFoundError,
}


def exception_from_status(status_code: int, message: str) -> BaseCustomException:
    """Rebuild a custom exception from an error response"""
    exception_class = STATUS_MAPPING.get(status_code, PersistenceError)
    exception = exception_class(message=message, details={"status_code": status_code})
    exception.status_code = status_code
    return exception
