"""
Infrastructure exceptions.

Errors from the storage adapters. The application service lets
them propagate untouched.
"""

from typing import Optional, Dict, Any

from .base import InfrastructureError


class RepositoryError(InfrastructureError):
    """
    A repository operation failed.

    Example:
        >>> raise RepositoryError(
        ...     operation="save",
        ...     entity_type="User",
        ...     reason="Database connection failed"
        ... )
    """

    def __init__(
        self,
        operation: str,
        entity_type: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            operation: Operation name (find_by_id, save, delete_by_id, ...)
            entity_type: Entity type
            reason: Failure reason
            details: Additional details
        """
        message = (
            f"Repository error during '{operation}' "
            f"on {entity_type}: {reason}"
        )
        super().__init__(
            message=message,
            details={
                "operation": operation,
                "entity_type": entity_type,
                "reason": reason,
                **(details or {})
            },
            error_code="REPOSITORY_ERROR"
        )


class DatabaseError(InfrastructureError):
    """
    The database is unavailable or misconfigured.

    Example:
        >>> raise DatabaseError(operation="connect", reason="Connection timeout")
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=f"Database error during '{operation}': {reason}",
            details={"operation": operation, "reason": reason, **(details or {})},
            error_code="DATABASE_ERROR"
        )
