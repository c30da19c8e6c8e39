"""
User repository interface.

A repository encapsulates data access and gives the application layer a
collection-like view of stored users. Concrete adapters live in
``user_service.infrastructure``.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from user_service.domain.entities.user import User


class UserRepository(ABC):
    """
    Storage contract for the User aggregate.

    Lookups return ``None`` when nothing matches; they never raise for a
    missing user. Storage failures surface as infrastructure errors.

    Example:
        >>> class SqlUserRepository(UserRepository):
        ...     async def find_by_id(self, user_id: int) -> Optional[User]:
        ...         ...
    """

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """
        Find a user by ID.

        Args:
            user_id: Storage identifier

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username. Returns None if absent."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email. Returns None if absent."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Persist a user.

        A user without an ID is created: the adapter assigns the ID and
        sets both timestamps to now. A user with an ID is updated: the
        adapter refreshes update_time and writes by ID.

        Args:
            user: User to persist

        Returns:
            The persisted user, including the assigned ID and timestamps

        Raises:
            ConflictError: If storage rejects a duplicate username or email
            RepositoryError: If an update targets an unknown ID, or on storage failure
        """
        pass

    @abstractmethod
    async def delete_by_id(self, user_id: int) -> None:
        """
        Remove a user by ID.

        Idempotent: deleting an unknown ID is a no-op with no
        distinguishable result. Callers check existence first.
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[User]:
        """
        Return every stored user in insertion (ID) order.

        Unbounded by design; paging happens in the application layer.
        """
        pass

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """Check whether a user with this username is stored."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether a user with this email is stored."""
        pass
