"""
Custom exceptions for the user service.

Hierarchy of failures for the domain, application and infrastructure layers.
"""

from .base import (
    UserServiceError,
    DomainError,
    InfrastructureError,
)

from .domain_errors import (
    NotFoundError,
    ConflictError,
    InvalidArgumentError,
)

from .infrastructure_errors import (
    RepositoryError,
    DatabaseError,
)

__all__ = [
    # Base
    "UserServiceError",
    "DomainError",
    "InfrastructureError",

    # Domain
    "NotFoundError",
    "ConflictError",
    "InvalidArgumentError",

    # Infrastructure
    "RepositoryError",
    "DatabaseError",
]
