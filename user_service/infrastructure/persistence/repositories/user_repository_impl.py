"""
UserRepository implementation backed by SQLAlchemy.

Concrete adapter of the UserRepository port for relational storage.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.errors import ConflictError, RepositoryError
from user_service.domain.entities import User
from user_service.domain.repositories import UserRepository
from ..mappers import UserMapper
from ..models import UserModel

logger = logging.getLogger("user-service.infrastructure.user_repository")


class SqlAlchemyUserRepository(UserRepository):
    """
    User repository over an async SQLAlchemy session.

    The session is owned by the caller (one per request); this class only
    flushes, it never commits. The ``users`` table carries UNIQUE
    constraints on username and email, and a violation on flush is
    reported as ConflictError.

    Attributes:
        _db: SQLAlchemy session
        _mapper: Entity <-> row mapper

    Example:
        >>> repo = SqlAlchemyUserRepository(db_session)
        >>> user = await repo.find_by_id(1)
    """

    def __init__(self, db: AsyncSession):
        """
        Args:
            db: SQLAlchemy async session
        """
        self._db = db
        self._mapper = UserMapper()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        model = await self._first(select(UserModel).where(UserModel.id == user_id), "find_by_id")
        if model is None:
            logger.debug(f"User {user_id} not found")
            return None
        return self._mapper.to_entity(model)

    async def find_by_username(self, username: str) -> Optional[User]:
        model = await self._first(
            select(UserModel).where(UserModel.username == username), "find_by_username"
        )
        return self._mapper.to_entity(model) if model else None

    async def find_by_email(self, email: str) -> Optional[User]:
        model = await self._first(
            select(UserModel).where(UserModel.email == email), "find_by_email"
        )
        return self._mapper.to_entity(model) if model else None

    async def save(self, user: User) -> User:
        """
        Insert a new user or update an existing one.

        Raises:
            ConflictError: If the username or email violates a unique constraint
            RepositoryError: If an update targets a missing row, or on any
                other database failure
        """
        try:
            if user.is_new:
                user.init_create_time()
                model = self._mapper.to_model(user)
                self._db.add(model)
                await self._db.flush()
                user.id = model.id
                logger.info(f"Saved new user: id={user.id}, username={user.username}")
            else:
                model = await self._db.get(UserModel, user.id)
                if model is None:
                    raise RepositoryError(
                        operation="save",
                        entity_type="User",
                        reason=f"no row with id={user.id} to update",
                    )
                user.touch_update_time()
                self._mapper.to_model(user, model)
                await self._db.flush()
                logger.info(f"Updated user: id={user.id}, username={user.username}")
        except IntegrityError as e:
            await self._db.rollback()
            field = "email" if "email" in str(e.orig).lower() else "username"
            value = user.email if field == "email" else user.username
            logger.warning(f"Unique constraint rejected user {field}={value}")
            raise ConflictError(field, value) from e
        except SQLAlchemyError as e:
            raise RepositoryError(operation="save", entity_type="User", reason=str(e)) from e
        return user

    async def delete_by_id(self, user_id: int) -> None:
        logger.info(f"Deleting user: id={user_id}")
        try:
            await self._db.execute(delete(UserModel).where(UserModel.id == user_id))
            await self._db.flush()
        except SQLAlchemyError as e:
            raise RepositoryError(operation="delete_by_id", entity_type="User", reason=str(e)) from e

    async def find_all(self) -> List[User]:
        try:
            result = await self._db.execute(select(UserModel).order_by(UserModel.id.asc()))
        except SQLAlchemyError as e:
            raise RepositoryError(operation="find_all", entity_type="User", reason=str(e)) from e
        return [self._mapper.to_entity(model) for model in result.scalars().all()]

    async def exists_by_username(self, username: str) -> bool:
        return await self._count(UserModel.username == username, "exists_by_username") > 0

    async def exists_by_email(self, email: str) -> bool:
        return await self._count(UserModel.email == email, "exists_by_email") > 0

    async def _first(self, statement, operation: str) -> Optional[UserModel]:
        try:
            result = await self._db.execute(statement)
        except SQLAlchemyError as e:
            raise RepositoryError(operation=operation, entity_type="User", reason=str(e)) from e
        return result.scalar_one_or_none()

    async def _count(self, condition, operation: str) -> int:
        try:
            result = await self._db.execute(select(func.count(UserModel.id)).where(condition))
        except SQLAlchemyError as e:
            raise RepositoryError(operation=operation, entity_type="User", reason=str(e)) from e
        return result.scalar() or 0
