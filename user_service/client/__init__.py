"""
Remote client for the user service.
"""
from .user_client import UserServiceClient, UserServiceFallback

__all__ = ["UserServiceClient", "UserServiceFallback"]
