"""Domain entities."""

from .base import Entity
from .user import User

__all__ = ["Entity", "User"]
