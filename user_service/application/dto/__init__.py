"""
Data Transfer Objects of the application layer.
"""

from .page_dto import PageRequest, PageResponse, MAX_PAGE_SIZE
from .user_dto import CreateUserRequest, UserDTO

__all__ = [
    "PageRequest",
    "PageResponse",
    "MAX_PAGE_SIZE",
    "CreateUserRequest",
    "UserDTO",
]
