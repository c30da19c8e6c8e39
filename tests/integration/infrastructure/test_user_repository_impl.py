"""
Integration tests for SqlAlchemyUserRepository.

Runs against an in-memory SQLite database through SQLAlchemy.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from user_service.core.errors import ConflictError, RepositoryError
from user_service.domain.entities import User
from user_service.infrastructure.persistence.models import Base
from user_service.infrastructure.persistence.repositories import SqlAlchemyUserRepository

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def user_repository(db_session):
    return SqlAlchemyUserRepository(db_session)


def make_user(name: str) -> User:
    return User(username=name, email=f"{name}@example.com", phone="123", real_name=name.title())


@pytest.mark.asyncio
async def test_save_new_user(user_repository):
    saved = await user_repository.save(make_user("alice"))

    assert saved.id is not None
    assert saved.create_time is not None
    assert saved.create_time == saved.update_time


@pytest.mark.asyncio
async def test_find_by_id_round_trip(user_repository):
    saved = await user_repository.save(make_user("alice"))

    found = await user_repository.find_by_id(saved.id)

    assert found == saved
    assert found.username == "alice"
    assert found.email == "alice@example.com"
    assert found.phone == "123"
    assert found.real_name == "Alice"
    assert found.create_time.tzinfo is not None


@pytest.mark.asyncio
async def test_find_missing(user_repository):
    assert await user_repository.find_by_id(404) is None
    assert await user_repository.find_by_username("nobody") is None
    assert await user_repository.find_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_find_by_username_and_email(user_repository):
    saved = await user_repository.save(make_user("alice"))

    assert (await user_repository.find_by_username("alice")).id == saved.id
    assert (await user_repository.find_by_email("alice@example.com")).id == saved.id


@pytest.mark.asyncio
async def test_exists(user_repository):
    await user_repository.save(make_user("alice"))

    assert await user_repository.exists_by_username("alice") is True
    assert await user_repository.exists_by_email("alice@example.com") is True
    assert await user_repository.exists_by_username("bob") is False
    assert await user_repository.exists_by_email("bob@example.com") is False


@pytest.mark.asyncio
async def test_find_all_ordered_by_id(user_repository):
    for name in ("carol", "alice", "bob"):
        await user_repository.save(make_user(name))

    users = await user_repository.find_all()

    assert [user.username for user in users] == ["carol", "alice", "bob"]
    assert [user.id for user in users] == sorted(user.id for user in users)


@pytest.mark.asyncio
async def test_update_existing_user(user_repository):
    saved = await user_repository.save(make_user("alice"))
    saved.real_name = "Alice Liddell"

    await user_repository.save(saved)

    found = await user_repository.find_by_id(saved.id)
    assert found.real_name == "Alice Liddell"
    assert found.update_time >= found.create_time


@pytest.mark.asyncio
async def test_update_missing_row(user_repository):
    with pytest.raises(RepositoryError):
        await user_repository.save(User(id=999, username="ghost", email="ghost@example.com"))


@pytest.mark.asyncio
async def test_unique_username_constraint(user_repository):
    await user_repository.save(make_user("alice"))

    with pytest.raises(ConflictError) as exc_info:
        await user_repository.save(User(username="alice", email="other@example.com"))

    assert exc_info.value.details["field"] == "username"


@pytest.mark.asyncio
async def test_unique_email_constraint(user_repository):
    await user_repository.save(make_user("alice"))

    with pytest.raises(ConflictError) as exc_info:
        await user_repository.save(User(username="other", email="alice@example.com"))

    assert exc_info.value.details["field"] == "email"


@pytest.mark.asyncio
async def test_delete(user_repository):
    saved = await user_repository.save(make_user("alice"))

    await user_repository.delete_by_id(saved.id)

    assert await user_repository.find_by_id(saved.id) is None


@pytest.mark.asyncio
async def test_delete_missing_is_noop(user_repository):
    await user_repository.delete_by_id(404)

    assert await user_repository.find_all() == []
