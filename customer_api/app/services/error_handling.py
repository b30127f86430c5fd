import logging
from fastapi import status
from typing import Optional, Dict, Any, List, Callable
import functools

logger = logging.getLogger(__name__)

class ServiceError(Exception):

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(message)

    @property
    def errors(self) -> Optional[List[Dict[str, Any]]]:
        """Field-level errors carried in details, if any."""
        if self.details and isinstance(self.details.get("errors"), list):
            return self.details["errors"]
        return None

class NotFoundError(ServiceError):

    def __init__(self, resource_type: str, identifier: Any, details: Optional[Dict[str, Any]] = None):
        message = f"{resource_type} not found"
        error_details = details or {}
        error_details.setdefault("id", identifier)
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=f"{resource_type.upper()}_NOT_FOUND",
            details=error_details
        )

class ValidationError(ServiceError):
    """Validation error for input data."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            details=details
        )

class DatabaseError(ServiceError):
    """Database-related errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None, details: Optional[Dict[str, Any]] = None):
        error_details = details or {}
        if original_error:
            error_details["error_type"] = type(original_error).__name__

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="DATABASE_ERROR",
            details=error_details
        )

class ConflictError(ServiceError):
    """Conflict error for resource state conflicts."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="CONFLICT_ERROR",
            details=details
        )

def handle_service_error(func: Callable) -> Callable:
    """
    Make sure only ServiceError subclasses leave a service function.

    Anything else is logged with its traceback and re-raised as a DatabaseError,
    which the application renders as a generic 500.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ServiceError:
            raise
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {str(e)}", exc_info=True)
            raise DatabaseError(f"Failed to execute {func.__name__}", original_error=e)
    return wrapper
