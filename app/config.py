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
    app_name: str = Field(default="SchoolMeal", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/schoolmeal",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Domain defaults. Kept as a raw string so a malformed value surfaces as a
    # server configuration error when a profile is provisioned.
    default_school_id: Optional[str] = Field(
        default=None, description="School assigned to auto-provisioned profiles"
    )
    default_school_name: str = Field(
        default="Default School", description="Name used when seeding the default school"
    )
    default_school_timezone: str = Field(
        default="Europe/Stockholm", description="Timezone for newly created schools"
    )

    # Token settings
    jwt_secret: str = Field(default="dev-secret-change-me", description="HS256 signing secret")
    jwt_issuer: str = Field(default="schoolmeal", description="Token issuer claim")
    jwt_audience: str = Field(default="schoolmeal-clients", description="Token audience claim")
    jwt_expiry_minutes: int = Field(default=60, ge=1, description="Access token lifetime")
    jwt_leeway_seconds: int = Field(default=30, ge=0, description="Clock skew tolerance")

    # Bootstrap admin identity (seeded on startup when both are set)
    initial_admin_email: Optional[str] = Field(default=None)
    initial_admin_password: Optional[str] = Field(default=None)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
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
        default="SchoolMeal API", description="API documentation title"
    )
    api_description: str = Field(
        default="School meal planning: menus, allergies and daily meal choices",
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

    @field_validator("default_school_id", mode="before")
    @classmethod
    def blank_school_id_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Settings dependency; handlers receive configuration through this."""
    return settings
