"""Entity <-> DTO assemblers."""

from .user_assembler import UserAssembler

__all__ = ["UserAssembler"]
