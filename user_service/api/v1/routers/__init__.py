"""
API v1 routers.
"""
from .users_router import router as users_router

__all__ = ["users_router"]
