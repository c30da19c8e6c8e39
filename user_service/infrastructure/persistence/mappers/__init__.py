"""
Mappers between domain entities and database models.
"""
from .user_mapper import UserMapper

__all__ = ["UserMapper"]
