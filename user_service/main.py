"""Main FastAPI application"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_service.api.error_handlers import register_exception_handlers
from user_service.api.v1.endpoints import router as v1_router
from user_service.core.config import Settings, logger, settings
from user_service.infrastructure.cache import create_redis_client
from user_service.infrastructure.persistence import database
from user_service.infrastructure.persistence.repositories import InMemoryUserRepository
from user_service.middleware import StructuredLoggingMiddleware


def create_app(app_settings: Settings = settings) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to start with (the module-level settings by default)

    Returns:
        Configured application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info("Starting User Service...")
        logger.info(f"Environment: {app_settings.environment}")
        logger.info(f"Version: {app_settings.version}")

        try:
            if app_settings.uses_memory_storage:
                app.state.memory_repository = InMemoryUserRepository()
                logger.info("✓ In-memory user storage ready")
            else:
                database.init_database(app_settings.db_url, echo=False)
                await database.init_db()
                logger.info("✓ Database initialized")

            if app_settings.cache_enabled:
                app.state.redis = create_redis_client(app_settings.redis_url)
                logger.info("✓ Redis user cache enabled")
        except Exception as e:
            logger.error(f"Failed to initialize: {e}")
            raise

        yield

        logger.info("Shutting down User Service...")
        redis = getattr(app.state, "redis", None)
        if redis is not None:
            await redis.aclose()
        if not app_settings.uses_memory_storage:
            await database.close_db()

    app = FastAPI(
        title="User Service",
        description="User management: create, read, batch read, page and delete users",
        version=app_settings.version,
        docs_url="/docs" if app_settings.is_development else None,
        redoc_url="/redoc" if app_settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(StructuredLoggingMiddleware)
    register_exception_handlers(app)
    app.include_router(v1_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "user_service.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
