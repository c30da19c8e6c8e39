"""
UserRepository adapters.
"""
from .in_memory_user_repository import InMemoryUserRepository
from .user_repository_impl import SqlAlchemyUserRepository

__all__ = ["InMemoryUserRepository", "SqlAlchemyUserRepository"]
