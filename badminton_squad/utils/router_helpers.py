# badminton_squad/utils/router_helpers.py

from fastapi import HTTPException, status
from typing import Callable, Any
from functools import wraps
import logging

from .constants import ResponseMessages
from ..services.exceptions import (
    ServiceError,
    NotFoundError,
    PermissionDeniedError,
    BusinessRuleViolationError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


class DetailedHTTPException(HTTPException):
    """HTTPException that also carries field-level error details"""

    def __init__(self, status_code: int, detail: str, details: dict = None):
        super().__init__(status_code=status_code, detail=detail)
        self.details = details


def handle_service_errors(func: Callable) -> Callable:
    """Decorator to standardize service error handling in routers"""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        # Permission/Access Errors -> 403 Forbidden
        except PermissionDeniedError as e:
            logger.warning(f"Permission denied: {str(e)}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

        except NotFoundError as e:
            logger.warning(f"Resource not found: {str(e)}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        # Field validation -> 400 Bad Request with details
        except ValidationFailedError as e:
            logger.warning(f"Validation failed: {e.details}")
            raise DetailedHTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
                details=e.details,
            )

        # Business Rule Violations -> 400 Bad Request
        except BusinessRuleViolationError as e:
            logger.warning(f"Business rule violation: {str(e)}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        # Database failures inside services -> 500
        except ServiceError as e:
            logger.error(f"Service error in {func.__name__}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)
            )

        # Unexpected errors -> 500 Internal Server Error
        except Exception as e:
            logger.error(
                f"Unexpected error in {func.__name__}: {str(e)}", exc_info=True
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An unexpected error occurred",
            )

    return wrapper


class RouterResponse:
    """Helper class for creating standardized API responses"""

    @staticmethod
    def success(data: Any = None, message: str = ResponseMessages.SUCCESS) -> dict:
        """Create success response"""
        response = {"success": True, "message": message}
        if data is not None:
            response["data"] = data
        return response

    @staticmethod
    def created(data: Any, message: str = ResponseMessages.CREATED) -> dict:
        """Create resource creation response"""
        return {"success": True, "message": message, "data": data}

    @staticmethod
    def updated(
        data: Any = None, message: str = ResponseMessages.UPDATED
    ) -> dict:
        """Create resource update response"""
        response = {"success": True, "message": message}
        if data is not None:
            response["data"] = data
        return response

    @staticmethod
    def deleted(message: str = ResponseMessages.DELETED) -> dict:
        """Create resource deletion response"""
        return {"success": True, "message": message}
