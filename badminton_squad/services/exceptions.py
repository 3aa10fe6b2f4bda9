from typing import Dict, List, Optional


class ServiceError(Exception):
    """Base exception for service errors"""

    pass


class NotFoundError(ServiceError):
    """Requested resource does not exist"""

    pass


class PermissionDeniedError(ServiceError):
    """Permission denied for operation"""

    pass


class BusinessRuleViolationError(ServiceError):
    """Business rule violation"""

    pass


class ValidationFailedError(ServiceError):
    """Input failed validation; ``details`` maps field names to messages"""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, List[str]]] = None,
    ):
        super().__init__(message)
        self.details = details or {}
