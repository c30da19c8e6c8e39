"""
Pytest configuration and fixtures.
"""
import pytest
import pytest_asyncio

from user_service.application.assembler import UserAssembler
from user_service.application.dto import CreateUserRequest
from user_service.application.services import UserAppService
from user_service.infrastructure.persistence.repositories import InMemoryUserRepository


@pytest.fixture
def memory_repository():
    """Empty in-memory repository"""
    return InMemoryUserRepository()


@pytest.fixture
def assembler():
    return UserAssembler()


@pytest.fixture
def service(memory_repository, assembler):
    """UserAppService over the in-memory repository"""
    return UserAppService(user_repository=memory_repository, user_assembler=assembler)


@pytest.fixture
def alice_request():
    return CreateUserRequest(
        username="alice",
        email="alice@example.com",
        phone="13800138000",
        real_name="Alice",
    )


@pytest_asyncio.fixture
async def five_users(service):
    """Create user1..user5 and return their views in creation order"""
    created = []
    for i in range(1, 6):
        created.append(
            await service.create_user(
                CreateUserRequest(username=f"user{i}", email=f"user{i}@example.com")
            )
        )
    return created
