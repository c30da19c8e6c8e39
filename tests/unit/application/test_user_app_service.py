"""
Unit tests for UserAppService.

The service is exercised two ways: against a mocked repository port to
pin down call order, and against the in-memory repository for the
end-to-end behavior of each use case.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from user_service.application.assembler import UserAssembler
from user_service.application.dto import CreateUserRequest, PageRequest
from user_service.application.services import UserAppService
from user_service.core.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    RepositoryError,
)
from user_service.domain.entities import User
from user_service.domain.repositories import UserRepository


@pytest.fixture
def mock_repository():
    """Mock of the UserRepository port."""
    repository = AsyncMock(spec=UserRepository)
    repository.exists_by_username.return_value = False
    repository.exists_by_email.return_value = False
    repository.find_by_id.return_value = None
    repository.find_all.return_value = []
    return repository


@pytest.fixture
def mocked_service(mock_repository):
    return UserAppService(user_repository=mock_repository, user_assembler=UserAssembler())


# ==================== get_user_by_id ====================

@pytest.mark.asyncio
async def test_get_user_by_id_returns_created_user(service, alice_request):
    created = await service.create_user(alice_request)

    found = await service.get_user_by_id(created.id)

    assert found == created


@pytest.mark.asyncio
async def test_get_user_by_id_missing(service):
    with pytest.raises(NotFoundError) as exc_info:
        await service.get_user_by_id(99)

    assert exc_info.value.message == "user does not exist: id=99"
    assert exc_info.value.details["user_id"] == 99


# ==================== create_user ====================

@pytest.mark.asyncio
async def test_create_user_assigns_id_and_timestamps(service, alice_request):
    """A created user gets an ID and create_time == update_time."""
    user = await service.create_user(alice_request)

    assert user.id == 1
    assert user.username == "alice"
    assert user.email == "alice@example.com"
    assert user.phone == "13800138000"
    assert user.real_name == "Alice"
    assert user.create_time is not None
    assert user.create_time == user.update_time


@pytest.mark.asyncio
async def test_create_user_ids_are_unique(service):
    first = await service.create_user(CreateUserRequest(username="alice", email="alice@example.com"))
    second = await service.create_user(CreateUserRequest(username="bob", email="bob@example.com"))

    assert first.id != second.id


@pytest.mark.asyncio
async def test_create_user_duplicate_username(service, alice_request):
    await service.create_user(alice_request)

    with pytest.raises(ConflictError) as exc_info:
        await service.create_user(CreateUserRequest(username="alice", email="other@example.com"))

    assert exc_info.value.message == "username already exists: alice"
    assert exc_info.value.details["field"] == "username"


@pytest.mark.asyncio
async def test_create_user_duplicate_email(service, alice_request):
    await service.create_user(alice_request)

    with pytest.raises(ConflictError) as exc_info:
        await service.create_user(CreateUserRequest(username="alice2", email="alice@example.com"))

    assert exc_info.value.message == "email already exists: alice@example.com"
    assert exc_info.value.details["field"] == "email"


@pytest.mark.asyncio
async def test_create_user_duplicate_both_reports_username(service, alice_request):
    await service.create_user(alice_request)

    with pytest.raises(ConflictError) as exc_info:
        await service.create_user(alice_request)

    assert exc_info.value.details["field"] == "username"


@pytest.mark.asyncio
async def test_create_user_conflict_leaves_store_unchanged(service, memory_repository, alice_request):
    await service.create_user(alice_request)

    with pytest.raises(ConflictError):
        await service.create_user(alice_request)

    assert len(await memory_repository.find_all()) == 1


@pytest.mark.asyncio
async def test_create_user_invalid_email_not_saved(service, memory_repository):
    request = CreateUserRequest(username="alice", email="not-an-email")

    with pytest.raises(InvalidArgumentError) as exc_info:
        await service.create_user(request)

    assert exc_info.value.message == "email format is invalid"
    assert await memory_repository.find_all() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["a@b", "bob@host.local", "carol@example.test", "Bob@EXAMPLE.COM"])
async def test_create_user_keeps_email_verbatim(service, email):
    """Any local@domain address is accepted and stored exactly as sent."""
    user = await service.create_user(CreateUserRequest(username="bob", email=email))

    assert user.email == email
    assert (await service.get_user_by_id(user.id)).email == email


@pytest.mark.asyncio
async def test_create_user_conflict_reported_before_bad_email(service, alice_request):
    """A taken username wins over a malformed email."""
    await service.create_user(alice_request)

    with pytest.raises(ConflictError):
        await service.create_user(CreateUserRequest(username="alice", email="broken"))


@pytest.mark.asyncio
async def test_create_user_blank_username(service):
    request = CreateUserRequest(username="  ", email="alice@example.com")

    with pytest.raises(InvalidArgumentError) as exc_info:
        await service.create_user(request)

    assert exc_info.value.message == "username must not be empty"


@pytest.mark.asyncio
async def test_create_user_check_order(mocked_service, mock_repository, alice_request):
    """Username is checked before email, and a conflict stops before save."""
    mock_repository.exists_by_username.return_value = True

    with pytest.raises(ConflictError):
        await mocked_service.create_user(alice_request)

    mock_repository.exists_by_username.assert_awaited_once_with("alice")
    mock_repository.exists_by_email.assert_not_awaited()
    mock_repository.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_user_invalid_entity_never_saved(mocked_service, mock_repository):
    request = CreateUserRequest(username="alice", email="broken")

    with pytest.raises(InvalidArgumentError):
        await mocked_service.create_user(request)

    mock_repository.exists_by_username.assert_awaited_once()
    mock_repository.exists_by_email.assert_awaited_once()
    mock_repository.save.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_user_storage_conflict_propagates(mocked_service, mock_repository, alice_request):
    """A race lost at the storage constraint surfaces as the same ConflictError."""
    mock_repository.save.side_effect = ConflictError("username", "alice")

    with pytest.raises(ConflictError):
        await mocked_service.create_user(alice_request)


# ==================== get_users_by_ids ====================

@pytest.mark.asyncio
async def test_get_users_by_ids_skips_missing_and_keeps_order(service, five_users):
    users = await service.get_users_by_ids([3, 1, 99, 3])

    assert [user.id for user in users] == [3, 1, 3]
    assert users[0].username == "user3"


@pytest.mark.asyncio
async def test_get_users_by_ids_all_missing(service):
    assert await service.get_users_by_ids([7, 8]) == []


@pytest.mark.asyncio
async def test_get_users_by_ids_empty_input(mocked_service, mock_repository):
    assert await mocked_service.get_users_by_ids([]) == []

    mock_repository.find_by_id.assert_not_awaited()


# ==================== query_users ====================

@pytest.mark.asyncio
async def test_query_users_first_page(service, five_users):
    page = await service.query_users(PageRequest(page_num=1, page_size=3))

    assert page.page_num == 1
    assert page.page_size == 3
    assert page.total == 5
    assert page.total_pages == 2
    assert [user.username for user in page.records] == ["user1", "user2", "user3"]


@pytest.mark.asyncio
async def test_query_users_last_partial_page(service, five_users):
    page = await service.query_users(PageRequest(page_num=2, page_size=3))

    assert [user.username for user in page.records] == ["user4", "user5"]
    assert page.total == 5


@pytest.mark.asyncio
async def test_query_users_past_the_end(service, five_users):
    page = await service.query_users(PageRequest(page_num=3, page_size=3))

    assert page.records == []
    assert page.total == 5
    assert page.total_pages == 2


@pytest.mark.asyncio
async def test_query_users_normalizes_request(service, five_users):
    page = await service.query_users(PageRequest(page_num=0, page_size=500))

    assert page.page_num == 1
    assert page.page_size == 100
    assert page.total_pages == 1
    assert len(page.records) == 5


@pytest.mark.asyncio
async def test_query_users_empty_store(service):
    page = await service.query_users(PageRequest())

    assert page.total == 0
    assert page.total_pages == 0
    assert page.records == []


# ==================== delete_user ====================

@pytest.mark.asyncio
async def test_delete_user_then_get_fails(service, alice_request):
    created = await service.create_user(alice_request)

    await service.delete_user(created.id)

    with pytest.raises(NotFoundError):
        await service.get_user_by_id(created.id)


@pytest.mark.asyncio
async def test_delete_user_twice(service, alice_request):
    created = await service.create_user(alice_request)
    await service.delete_user(created.id)

    with pytest.raises(NotFoundError):
        await service.delete_user(created.id)


@pytest.mark.asyncio
async def test_delete_missing_user_never_calls_delete(mocked_service, mock_repository):
    with pytest.raises(NotFoundError):
        await mocked_service.delete_user(42)

    mock_repository.find_by_id.assert_awaited_once_with(42)
    mock_repository.delete_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_existing_user(mocked_service, mock_repository):
    mock_repository.find_by_id.return_value = User(id=42, username="alice", email="alice@example.com")

    await mocked_service.delete_user(42)

    mock_repository.delete_by_id.assert_awaited_once_with(42)


@pytest.mark.asyncio
async def test_deleted_username_can_be_reused(service, alice_request):
    created = await service.create_user(alice_request)
    await service.delete_user(created.id)

    again = await service.create_user(alice_request)

    assert again.id != created.id


# ==================== errors ====================

@pytest.mark.asyncio
async def test_repository_errors_propagate(mocked_service, mock_repository):
    mock_repository.find_by_id.side_effect = RepositoryError(
        operation="find_by_id", entity_type="User", reason="connection lost"
    )

    with pytest.raises(RepositoryError):
        await mocked_service.get_user_by_id(1)


@pytest.mark.asyncio
async def test_assembler_is_used_for_views(mock_repository):
    assembler = MagicMock(spec=UserAssembler)
    assembler.to_dto.return_value = "view"
    mock_repository.find_by_id.return_value = User(id=1, username="alice", email="alice@example.com")
    service = UserAppService(user_repository=mock_repository, user_assembler=assembler)

    assert await service.get_user_by_id(1) == "view"
    assembler.to_dto.assert_called_once()
