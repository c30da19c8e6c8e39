"""
Common API schemas.

Contains:
- ErrorCode: numeric codes carried in every response envelope
- ApiResponse: the {code, message, data} envelope
"""
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorCode(Enum):
    """Response codes and their default messages"""

    SUCCESS = (200, "success")

    # Client errors
    BAD_REQUEST = (400, "bad request")
    NOT_FOUND = (404, "resource not found")
    VALIDATION_ERROR = (422, "validation failed")

    # Server errors
    INTERNAL_SERVER_ERROR = (500, "internal server error")
    SERVICE_UNAVAILABLE = (503, "service unavailable")

    # Business errors
    USER_NOT_FOUND = (1001, "user not found")
    USER_ALREADY_EXISTS = (1002, "user already exists")

    # Remote call errors
    EXTERNAL_SERVICE_ERROR = (2001, "external service call failed")
    REMOTE_CALL_ERROR = (2002, "remote user service call failed")

    @property
    def code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


class ApiResponse(BaseModel, Generic[T]):
    """Uniform response envelope"""

    code: int = Field(description="Response code", examples=[200])
    message: str = Field(description="Response message", examples=["success"])
    data: Optional[T] = Field(default=None, description="Response payload")

    @classmethod
    def success(cls, data: Optional[T] = None, message: str = ErrorCode.SUCCESS.message) -> "ApiResponse[T]":
        return cls(code=ErrorCode.SUCCESS.code, message=message, data=data)

    @classmethod
    def error(cls, error_code: ErrorCode, message: Optional[str] = None) -> "ApiResponse[T]":
        return cls(code=error_code.code, message=message or error_code.message, data=None)

    @property
    def is_success(self) -> bool:
        return self.code == ErrorCode.SUCCESS.code
