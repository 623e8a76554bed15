"""Service configuration settings."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service configuration
    service_name: str = "casebook-service"
    environment: str = "development"
    port: int = 8003

    # Database configuration
    database_url: str = "sqlite+aiosqlite:///./casebook.db"

    # Every storage call is bounded by this; a timeout surfaces as StorageError
    storage_timeout_seconds: float = 10.0

    # Startup connection verification (K8s/scale-to-zero)
    connect_retries: int = 5
    connect_retry_delay_seconds: float = 1.0

    # Default institution-scoped permission written at case creation
    default_permission_entity: str = "institution"
    default_clearance: str = "1"

    # CORS configuration
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]


# Global settings instance
settings = Settings()
