"""
Remote client for the user service.

Calls the /api/users endpoints of a remote instance over HTTP and falls
back to a degraded response when the instance cannot be reached.
"""

import logging
from typing import Any, Callable, List, Optional, Type, TypeVar

import httpx

from user_service.api.v1.schemas.common import ApiResponse, ErrorCode
from user_service.application.dto import CreateUserRequest, PageRequest, PageResponse, UserDTO
from user_service.core.config import Settings

logger = logging.getLogger("user-service.client")

R = TypeVar("R", bound=ApiResponse)


class UserServiceFallback:
    """Responses returned when a remote call fails"""

    def get_user_by_id(self, user_id: int) -> ApiResponse[UserDTO]:
        logger.error(f"Remote call failed: get_user_by_id, id={user_id}")
        return ApiResponse[UserDTO].error(ErrorCode.REMOTE_CALL_ERROR)

    def create_user(self, request: CreateUserRequest) -> ApiResponse[UserDTO]:
        logger.error(f"Remote call failed: create_user, request={request}")
        return ApiResponse[UserDTO].error(ErrorCode.REMOTE_CALL_ERROR)

    def get_users_by_ids(self, user_ids: List[int]) -> ApiResponse[List[UserDTO]]:
        logger.error(f"Remote call failed: get_users_by_ids, ids={user_ids}")
        return ApiResponse[List[UserDTO]].error(ErrorCode.REMOTE_CALL_ERROR)

    def query_users(self, page_request: PageRequest) -> ApiResponse[PageResponse[UserDTO]]:
        logger.error(f"Remote call failed: query_users, page_request={page_request}")
        return ApiResponse[PageResponse[UserDTO]].error(ErrorCode.REMOTE_CALL_ERROR)

    def delete_user(self, user_id: int) -> ApiResponse[None]:
        logger.error(f"Remote call failed: delete_user, id={user_id}")
        return ApiResponse[None].error(ErrorCode.REMOTE_CALL_ERROR)


class UserServiceClient:
    """
    HTTP client for a remote user service.

    Business failures (not found, conflict, bad request) come back as the
    server's ApiResponse with its error code. Transport failures,
    timeouts, 5xx responses and unreadable bodies are routed to the
    fallback instead of raising.

    Example:
        >>> client = UserServiceClient("http://users:8004")
        >>> response = await client.get_user_by_id(1)
        >>> if response.is_success:
        ...     print(response.data.username)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        fallback: Optional[UserServiceFallback] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: Base URL of the remote service
            timeout: Request timeout in seconds
            fallback: Fallback responses (default UserServiceFallback)
            transport: httpx transport override
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._fallback = fallback or UserServiceFallback()
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "UserServiceClient":
        return cls(base_url=settings.remote_base_url, timeout=settings.remote_timeout)

    async def get_user_by_id(self, user_id: int) -> ApiResponse[UserDTO]:
        return await self._call(
            ApiResponse[UserDTO], "GET", f"/api/users/{user_id}",
            fallback=lambda: self._fallback.get_user_by_id(user_id),
        )

    async def create_user(self, request: CreateUserRequest) -> ApiResponse[UserDTO]:
        return await self._call(
            ApiResponse[UserDTO], "POST", "/api/users",
            json=request.model_dump(mode="json"),
            fallback=lambda: self._fallback.create_user(request),
        )

    async def get_users_by_ids(self, user_ids: List[int]) -> ApiResponse[List[UserDTO]]:
        return await self._call(
            ApiResponse[List[UserDTO]], "POST", "/api/users/batch",
            json=list(user_ids),
            fallback=lambda: self._fallback.get_users_by_ids(user_ids),
        )

    async def query_users(self, page_request: PageRequest) -> ApiResponse[PageResponse[UserDTO]]:
        return await self._call(
            ApiResponse[PageResponse[UserDTO]], "POST", "/api/users/page",
            json=page_request.model_dump(mode="json"),
            fallback=lambda: self._fallback.query_users(page_request),
        )

    async def delete_user(self, user_id: int) -> ApiResponse[None]:
        return await self._call(
            ApiResponse[None], "DELETE", f"/api/users/{user_id}",
            fallback=lambda: self._fallback.delete_user(user_id),
        )

    async def _call(
        self,
        response_type: Type[R],
        method: str,
        path: str,
        fallback: Callable[[], R],
        json: Any = None,
    ) -> R:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                logger.debug(f"Calling {method} {self._base_url}{path}")
                response = await client.request(method, path, json=json)
                if response.status_code >= 500:
                    response.raise_for_status()
                return response_type.model_validate(response.json())

            except httpx.HTTPStatusError as e:
                logger.warning(
                    f"User service error [{method} {path}]: "
                    f"status={e.response.status_code}, body={e.response.text}"
                )
                return fallback()
            except httpx.HTTPError as e:
                logger.warning(f"User service unreachable [{method} {path}]: {e!r}")
                return fallback()
            except ValueError as e:
                # Invalid JSON or an envelope that does not match the response type
                logger.warning(f"Unreadable user service response [{method} {path}]: {e}")
                return fallback()
