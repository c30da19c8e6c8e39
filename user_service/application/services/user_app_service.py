"""
User application service.

Orchestrates the user use cases: enforces the uniqueness and existence
rules, coordinates persistence through the repository port and builds
paged views.
"""

import logging
from typing import List

from user_service.application.assembler import UserAssembler
from user_service.application.dto import CreateUserRequest, PageRequest, PageResponse, UserDTO
from user_service.core.errors import ConflictError, NotFoundError
from user_service.domain.repositories import UserRepository

logger = logging.getLogger("user-service.application.user_app_service")


class UserAppService:
    """
    Use-case orchestration for the User aggregate.

    All reads and writes of users go through this service. It keeps no
    state between calls beyond its injected collaborators, and it never
    catches the errors it raises or those coming from the repository.

    Attributes:
        _user_repository: Storage port
        _user_assembler: Entity <-> DTO mapper

    Example:
        >>> service = UserAppService(InMemoryUserRepository(), UserAssembler())
        >>> user = await service.create_user(
        ...     CreateUserRequest(username="alice", email="alice@example.com")
        ... )
        >>> user.id
        1
    """

    def __init__(self, user_repository: UserRepository, user_assembler: UserAssembler):
        self._user_repository = user_repository
        self._user_assembler = user_assembler

    async def get_user_by_id(self, user_id: int) -> UserDTO:
        """
        Get a user by ID.

        Raises:
            NotFoundError: If no user has this ID
        """
        logger.info(f"Get user: id={user_id}")
        user = await self._user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(user_id)
        return self._user_assembler.to_dto(user)

    async def create_user(self, request: CreateUserRequest) -> UserDTO:
        """
        Register a user.

        Checks run in a fixed order and stop at the first failure:
        username uniqueness, email uniqueness, then entity validation.
        The uniqueness checks are a pre-check only; two concurrent creates
        can both pass them, and the repository adapter's own constraint
        decides the loser (it raises the same ConflictError).

        Args:
            request: Create request

        Returns:
            View of the persisted user

        Raises:
            ConflictError: If the username or email is taken
            InvalidArgumentError: If the entity fails validate_for_create
        """
        logger.info(f"Create user: username={request.username}, email={request.email}")

        if await self._user_repository.exists_by_username(request.username):
            raise ConflictError("username", request.username)
        if await self._user_repository.exists_by_email(request.email):
            raise ConflictError("email", request.email)

        user = self._user_assembler.to_entity(request)
        user.validate_for_create()

        saved = await self._user_repository.save(user)

        logger.info(f"User created: id={saved.id}")
        return self._user_assembler.to_dto(saved)

    async def get_users_by_ids(self, user_ids: List[int]) -> List[UserDTO]:
        """
        Get several users by ID.

        Unknown IDs are skipped without error. Output order follows the
        input order of the IDs that resolved; repeated IDs yield repeated
        views.
        """
        logger.info(f"Get users by ids: ids={user_ids}")
        result = []
        for user_id in user_ids:
            user = await self._user_repository.find_by_id(user_id)
            if user is not None:
                result.append(self._user_assembler.to_dto(user))
        return result

    async def query_users(self, page_request: PageRequest) -> PageResponse[UserDTO]:
        """
        Get one page of users.

        Loads every user and slices in memory, in repository order. A
        page past the end is returned empty with the real total.
        """
        page_request = page_request.normalize()
        logger.info(
            f"Query users: page_num={page_request.page_num}, page_size={page_request.page_size}"
        )

        users = await self._user_repository.find_all()
        total = len(users)

        start = page_request.offset
        end = min(start + page_request.page_size, total)
        page = users[start:end] if start < total else []

        records = [self._user_assembler.to_dto(user) for user in page]
        return PageResponse[UserDTO].of(page_request, records, total)

    async def delete_user(self, user_id: int) -> None:
        """
        Delete a user.

        Raises:
            NotFoundError: If no user has this ID; nothing is deleted
        """
        logger.info(f"Delete user: id={user_id}")
        if await self._user_repository.find_by_id(user_id) is None:
            raise NotFoundError(user_id)
        await self._user_repository.delete_by_id(user_id)
        logger.info(f"User deleted: id={user_id}")
