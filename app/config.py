"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="ShoppingList", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, ge=1, le=65535, description="Server port")

    # MongoDB settings
    mongo_uri: Optional[str] = Field(
        default=None, description="MongoDB connection URI (required at startup)"
    )
    mongo_db_name: str = Field(
        default="shoppinglist", description="MongoDB database name"
    )
    mongo_collection: str = Field(
        default="products", description="Collection holding product records"
    )
    mongo_timeout_ms: int = Field(
        default=5000, ge=100, description="Server selection timeout in milliseconds"
    )
    db_init_attempts: int = Field(
        default=5, ge=1, description="Database connection retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB connection attempts"
    )

    # Image attachments
    image_max_bytes: int = Field(
        default=5 * 1024 * 1024, ge=1, description="Largest accepted image upload"
    )
    image_allowed_content_types: list[str] = Field(
        default=["image/jpeg", "image/png", "image/gif", "image/webp"],
        description="Content types accepted for product images",
    )
    image_default_content_type: str = Field(
        default="image/jpeg",
        description="Content type assumed when the upload does not declare one",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=False, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="Shopping List API", description="API documentation title"
    )
    api_description: str = Field(
        default="Shared shopping list with product photos",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("image_allowed_content_types", mode="after")
    @classmethod
    def normalize_content_types(cls, v):
        return [ct.strip().lower() for ct in v if ct.strip()]

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()
