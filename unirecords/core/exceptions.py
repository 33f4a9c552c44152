"""
Custom exceptions for the records manager.
"""

from typing import Optional, Any, Dict


class RecordsError(Exception):
    """Base exception for all records-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(RecordsError):
    """Raised when input data validation fails."""

    def __init__(self, message: str, error_code: Optional[str] = "VALIDATION_FAILED",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class ResourceNotFoundError(RecordsError):
    """Raised when a referenced student or course does not exist."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource.capitalize()} {resource_id} not found",
            error_code="NOT_FOUND",
            details={"resource": resource, "id": resource_id},
        )
        self.resource = resource
        self.resource_id = resource_id


class EnrollmentError(RecordsError):
    """Raised when a registration violates an enrollment rule."""
    pass


class CapacityExceededError(EnrollmentError):
    """Raised when a course already holds its maximum number of students."""
    pass


class FacultyMismatchError(EnrollmentError):
    """Raised when a student's faculty differs from the course's faculty."""
    pass


class NotRegisteredError(RecordsError):
    """Raised when grading a student who is not registered for the course."""
    pass


class IllegalTransitionError(RecordsError):
    """Raised when a status change is not allowed."""
    pass


class ConfigurationError(RecordsError):
    """Raised when configuration is invalid."""
    pass
