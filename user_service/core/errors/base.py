"""
Base exceptions for the user service.

Defines the exception hierarchy for the layers of the application.
"""

from typing import Optional, Dict, Any


class UserServiceError(Exception):
    """
    Base exception for all user service errors.

    Every custom exception inherits from this class, so callers can
    catch all application failures in one place.

    Attributes:
        message: Human-readable error message
        details: Additional error details
        error_code: Machine-readable error code

    Example:
        >>> try:
        ...     raise UserServiceError("Something went wrong")
        ... except UserServiceError as e:
        ...     print(f"Error: {e}")
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        """
        Args:
            message: Error message
            details: Additional details (optional)
            error_code: Error code (optional, defaults to the class name)
        """
        self.message = message
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the exception to a dictionary.

        Used for logging and API responses.

        Returns:
            Dictionary with the error information
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }

    def __str__(self) -> str:
        return self.message


class DomainError(UserServiceError):
    """
    Base exception for domain and application rule violations.

    Raised by the entity and the application service when a business
    invariant would be broken.
    """
    pass


class InfrastructureError(UserServiceError):
    """
    Base exception for infrastructure failures.

    Used for errors from external systems: database, cache, network.
    The application service does not interpret or retry these.
    """
    pass
