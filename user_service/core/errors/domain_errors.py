"""
Domain exceptions.

The three failure kinds transport adapters switch on: not found,
conflict and invalid argument.
"""

from typing import Optional, Dict, Any

from .base import DomainError


class NotFoundError(DomainError):
    """
    The requested user does not exist.

    Raised by get-by-id and delete when no stored user has the id.

    Example:
        >>> raise NotFoundError(42)
    """

    def __init__(self, user_id: Any, details: Optional[Dict[str, Any]] = None):
        """
        Args:
            user_id: ID of the missing user
            details: Additional details
        """
        super().__init__(
            message=f"user does not exist: id={user_id}",
            details={"user_id": user_id, **(details or {})},
            error_code="NOT_FOUND"
        )


class ConflictError(DomainError):
    """
    A uniqueness invariant would be violated.

    Raised when creating a user whose username or email is already taken.

    Example:
        >>> raise ConflictError("username", "alice")
    """

    def __init__(self, field: str, value: Any, details: Optional[Dict[str, Any]] = None):
        """
        Args:
            field: Name of the unique field ("username" or "email")
            value: The duplicated value
            details: Additional details
        """
        super().__init__(
            message=f"{field} already exists: {value}",
            details={"field": field, "value": value, **(details or {})},
            error_code="CONFLICT"
        )


class InvalidArgumentError(DomainError):
    """
    Entity-level structural validation failed.

    Example:
        >>> raise InvalidArgumentError("email", "email format is invalid")
    """

    def __init__(self, field: str, reason: str, details: Optional[Dict[str, Any]] = None):
        """
        Args:
            field: Name of the first failing field
            reason: Why the value was rejected
            details: Additional details
        """
        super().__init__(
            message=reason,
            details={"field": field, "reason": reason, **(details or {})},
            error_code="INVALID_ARGUMENT"
        )
