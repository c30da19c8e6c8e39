"""
In-memory UserRepository.

Keeps users in an insertion-ordered dict. Used by tests and by
``storage_backend=memory``.
"""

import asyncio
import itertools
import logging
from typing import Dict, List, Optional

from user_service.core.errors import ConflictError, RepositoryError
from user_service.domain.entities import User
from user_service.domain.repositories import UserRepository

logger = logging.getLogger("user-service.infrastructure.in_memory_user_repository")


class InMemoryUserRepository(UserRepository):
    """
    Process-local user storage.

    IDs are assigned from a counter starting at 1 and never reused.
    Writes are serialized by a lock, and username/email uniqueness is
    re-checked under it, so concurrent creates of the same username
    cannot both succeed.

    Stored users are copies; callers never share an instance with the
    store.
    """

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    async def find_by_username(self, username: str) -> Optional[User]:
        for user in self._users.values():
            if user.username == username:
                return user.model_copy()
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user.model_copy()
        return None

    async def save(self, user: User) -> User:
        async with self._lock:
            if not user.is_new and user.id not in self._users:
                raise RepositoryError(
                    operation="save",
                    entity_type="User",
                    reason=f"no user with id={user.id} to update",
                )
            self._check_unique(user)
            if user.is_new:
                user.init_create_time()
                user.id = next(self._ids)
                logger.info(f"Saved new user: id={user.id}, username={user.username}")
            else:
                user.touch_update_time()
                logger.info(f"Updated user: id={user.id}, username={user.username}")
            self._users[user.id] = user.model_copy()
        return user

    async def delete_by_id(self, user_id: int) -> None:
        logger.info(f"Deleting user: id={user_id}")
        self._users.pop(user_id, None)

    async def find_all(self) -> List[User]:
        return [user.model_copy() for user in self._users.values()]

    async def exists_by_username(self, username: str) -> bool:
        return any(user.username == username for user in self._users.values())

    async def exists_by_email(self, email: str) -> bool:
        return any(user.email == email for user in self._users.values())

    def _check_unique(self, user: User) -> None:
        for other in self._users.values():
            if other.id == user.id:
                continue
            if other.username == user.username:
                raise ConflictError("username", user.username)
            if other.email == user.email:
                raise ConflictError("email", user.email)
