"""Application services."""

from .user_app_service import UserAppService

__all__ = ["UserAppService"]
