"""
API v1 router aggregation.
"""
from fastapi import APIRouter

from user_service.core.config import settings
from .routers import users_router

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "user-service",
        "version": settings.version,
    }


router.include_router(users_router)
