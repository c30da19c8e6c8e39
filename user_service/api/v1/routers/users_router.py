"""
Users router.

HTTP endpoints for the user use cases. Every response is wrapped in
ApiResponse; failures are mapped by the handlers in api.error_handlers.
"""

import logging
from typing import List

from fastapi import APIRouter, Body

from user_service.api.v1.schemas.common import ApiResponse
from user_service.application.dto import CreateUserRequest, PageRequest, PageResponse, UserDTO
from user_service.core.dependencies import UserAppServiceDep

logger = logging.getLogger("user-service.api.users")

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}", response_model=ApiResponse[UserDTO])
async def get_user_by_id(user_id: int, service: UserAppServiceDep) -> ApiResponse[UserDTO]:
    """
    Get a user by ID.

    Raises:
        404: If the user does not exist
    """
    logger.info(f"REST request: get user, id={user_id}")
    user = await service.get_user_by_id(user_id)
    return ApiResponse[UserDTO].success(user)


@router.post("", response_model=ApiResponse[UserDTO])
async def create_user(request: CreateUserRequest, service: UserAppServiceDep) -> ApiResponse[UserDTO]:
    """
    Create a user.

    Example request:
        POST /api/users
        {"username": "alice", "email": "alice@example.com"}

    Raises:
        400: If the body is malformed
        409: If the username or email is taken
    """
    logger.info(f"REST request: create user, username={request.username}")
    user = await service.create_user(request)
    return ApiResponse[UserDTO].success(user, message="user created")


@router.post("/batch", response_model=ApiResponse[List[UserDTO]])
async def get_users_by_ids(
    service: UserAppServiceDep,
    user_ids: List[int] = Body(..., examples=[[1, 2, 3]]),
) -> ApiResponse[List[UserDTO]]:
    """Get several users by ID; unknown IDs are skipped"""
    logger.info(f"REST request: batch get users, ids={user_ids}")
    users = await service.get_users_by_ids(user_ids)
    return ApiResponse[List[UserDTO]].success(users)


@router.post("/page", response_model=ApiResponse[PageResponse[UserDTO]])
async def query_users(
    service: UserAppServiceDep,
    page_request: PageRequest = Body(default=PageRequest()),
) -> ApiResponse[PageResponse[UserDTO]]:
    """Get one page of users"""
    logger.info(
        f"REST request: query users, page_num={page_request.page_num}, page_size={page_request.page_size}"
    )
    page = await service.query_users(page_request)
    return ApiResponse[PageResponse[UserDTO]].success(page)


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(user_id: int, service: UserAppServiceDep) -> ApiResponse[None]:
    """
    Delete a user.

    Raises:
        404: If the user does not exist
    """
    logger.info(f"REST request: delete user, id={user_id}")
    await service.delete_user(user_id)
    return ApiResponse[None].success(message="user deleted")
