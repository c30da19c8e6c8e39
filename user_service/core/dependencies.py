"""
Dependency Injection providers.

Builds the repository, assembler and application service per request
for the routers.
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request

from user_service.application.assembler import UserAssembler
from user_service.application.services import UserAppService
from user_service.domain.repositories import UserRepository
from user_service.infrastructure.cache import CachedUserRepository
from user_service.infrastructure.persistence.database import session_scope
from user_service.infrastructure.persistence.repositories import SqlAlchemyUserRepository
from user_service.core.config import settings

logger = logging.getLogger("user-service.dependencies")


def _with_cache(repository: UserRepository, request: Request) -> UserRepository:
    redis = getattr(request.app.state, "redis", None)
    if redis is None:
        return repository
    return CachedUserRepository(repository, redis, ttl_seconds=settings.cache_ttl_seconds)


async def get_user_repository(request: Request) -> AsyncGenerator[UserRepository, None]:
    """
    Get the user repository for this request.

    With ``storage_backend=memory`` the process-wide in-memory repository
    created at startup is used; otherwise a SQLAlchemy repository bound to
    a request-scoped session (committed when the request succeeds).
    Either one is wrapped in the Redis cache when caching is enabled.

    Yields:
        UserRepository: Repository adapter
    """
    memory_repository = getattr(request.app.state, "memory_repository", None)
    if memory_repository is not None:
        yield _with_cache(memory_repository, request)
        return

    async with session_scope() as db:
        yield _with_cache(SqlAlchemyUserRepository(db), request)


def get_user_assembler() -> UserAssembler:
    """Get the user assembler"""
    return UserAssembler()


def get_user_app_service(
    repository: UserRepository = Depends(get_user_repository),
    assembler: UserAssembler = Depends(get_user_assembler),
) -> UserAppService:
    """
    Get the user application service.

    Args:
        repository: Repository (injected)
        assembler: Assembler (injected)

    Returns:
        UserAppService: Service bound to this request's repository
    """
    return UserAppService(user_repository=repository, user_assembler=assembler)


UserAppServiceDep = Annotated[UserAppService, Depends(get_user_app_service)]
