"""Repository interfaces (ports) of the domain layer."""

from .user_repository import UserRepository

__all__ = ["UserRepository"]
