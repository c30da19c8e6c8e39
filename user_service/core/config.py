"""Application configuration"""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="USER_SERVICE__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = "development"
    port: int = 8004

    # Storage
    db_url: str = "sqlite:///data/users.db"
    storage_backend: str = "sql"  # "sql" or "memory"

    # Redis cache (optional read-through cache for user lookups)
    redis_url: str = "redis://localhost:6379/2"
    cache_enabled: bool = False
    cache_ttl_seconds: int = 300

    # Remote client
    remote_base_url: str = "http://localhost:8004"
    remote_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"

    # Version
    version: str = "0.1.0"

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.environment.lower() == "development"

    @property
    def uses_memory_storage(self) -> bool:
        """Check if users are kept in process memory instead of the database"""
        return self.storage_backend.lower() == "memory"


# Create settings instance
settings = Settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger("user-service")
