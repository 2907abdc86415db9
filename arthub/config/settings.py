"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="arthub", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment name"
    )
    debug: bool = Field(default=True, description="Debug mode")

    # Firebase (Realtime Database + Auth)
    firebase_enabled: bool = Field(
        default=False, description="Use Firebase Realtime Database as the store"
    )
    firebase_credentials_path: str | None = Field(
        default=None, description="Path to Firebase service account JSON file"
    )
    firebase_database_url: str | None = Field(
        default=None,
        description="Realtime Database URL (e.g., https://project-id.firebaseio.com)",
    )
    firebase_project_id: str | None = Field(
        default=None, description="Firebase project ID"
    )

    # Redis
    redis_enabled: bool = Field(
        default=False, description="Use Redis for status cache and notification pub/sub"
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    redis_max_connections: int = Field(default=10, description="Max Redis connections")
    redis_socket_timeout: float = Field(default=5.0, description="Redis socket timeout")
    redis_socket_connect_timeout: float = Field(
        default=5.0, description="Redis connect timeout"
    )
    redis_retry_on_timeout: bool = Field(default=True, description="Retry on timeout")
    redis_health_check_interval: int = Field(
        default=30, description="Health check interval"
    )

    # Counters
    counter_transaction_retries: int = Field(
        default=25,
        description="Max optimistic retries for in-memory counter transactions",
    )

    # Notifications
    notification_channel_prefix: str = Field(
        default="notifications:user",
        description="Redis Pub/Sub channel prefix for per-user notifications",
    )
    status_cache_key_prefix: str = Field(
        default="status:last_observed",
        description="Redis hash prefix for last observed invitation statuses",
    )
    max_status_watchers: int = Field(
        default=1000,
        description="Max artists with an open invitation status subscription",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="DEBUG", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log format"
    )
    log_include_caller_info: bool = Field(
        default=True, description="Include caller info"
    )
    log_to_file: bool = Field(default=True, description="Write JSON log files")
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_file_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max size per log file (10MB default)"
    )
    log_file_backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )
    log_requests: bool = Field(
        default=True, description="Log HTTP request start/finish"
    )
    log_exclude_paths: list[str] = Field(
        default=["/health", "/health/live", "/health/ready"],
        description="Paths to exclude from request logging",
    )

    # CORS
    cors_origins: list[str] = Field(default=["*"], description="CORS origins")
    cors_allow_credentials: bool = Field(default=True, description="Allow credentials")
    cors_allow_methods: list[str] = Field(default=["*"], description="Allowed methods")
    cors_allow_headers: list[str] = Field(default=["*"], description="Allowed headers")
    cors_max_age: int = Field(default=600, description="CORS max age")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def firebase_configured(self) -> bool:
        """Check if the Firebase Realtime Database is configured."""
        return bool(
            self.firebase_enabled
            and self.firebase_credentials_path
            and self.firebase_database_url
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
