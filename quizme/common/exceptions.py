"""
Common Exception Classes

This module defines the error taxonomy shared by the quiz attempt lifecycle:
validation of user input, missing entities, dangling references between
attempts and quizzes, storage failures and explanation service failures.
"""

from typing import Optional, Any, Dict


class BaseError(Exception):
    """Base class for all custom exceptions."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            original_exception: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


class ValidationError(BaseError):
    """Exception raised for malformed or incomplete input."""

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        """
        Initialize the validation error.

        Args:
            message: Error message
            errors: Dictionary of field errors
        """
        super().__init__(message)
        self.errors = errors or {}


class NotFoundError(BaseError):
    """Exception raised when a quiz or attempt is not found."""

    def __init__(self, resource_type: str, resource_id: Any):
        """
        Initialize the not found error.

        Args:
            resource_type: Type of resource that wasn't found
            resource_id: ID of the resource that wasn't found
        """
        super().__init__(f"{resource_type} with ID {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ReferencedEntityMissing(BaseError):
    """
    Exception raised when an entity exists but the entity it references does not.

    The typical case is an attempt whose quiz has been deleted. The exception
    carries whatever could still be reconstructed without the missing entity
    in ``partial`` so the caller can choose to degrade.
    """

    def __init__(
        self,
        resource_type: str,
        resource_id: Any,
        referenced_by: Optional[str] = None,
        partial: Any = None
    ):
        """
        Initialize the dangling reference error.

        Args:
            resource_type: Type of the missing referenced resource
            resource_id: ID of the missing referenced resource
            referenced_by: ID of the entity holding the reference
            partial: Data that remains valid without the referenced entity
        """
        message = f"Referenced {resource_type} with ID {resource_id} no longer exists"
        if referenced_by:
            message = f"{message} (referenced by {referenced_by})"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.referenced_by = referenced_by
        self.partial = partial


class PersistenceError(BaseError):
    """Exception raised when the document store is unavailable or a write fails."""

    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(f"Persistence error: {message}", original_exception)


class ServiceError(BaseError):
    """Exception raised when the explanation service fails or returns garbage."""

    def __init__(
        self,
        message: str,
        service: str = "explanation",
        status_code: Optional[int] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize the service error.

        Args:
            message: Error message
            service: Name of the failing service
            status_code: HTTP status code returned by the service, if any
            original_exception: Original exception that caused this error
        """
        super().__init__(f"{service} service error: {message}", original_exception)
        self.service = service
        self.status_code = status_code
