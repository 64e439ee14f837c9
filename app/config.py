"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class RotationResetStrategy(str, Enum):
    """What to do when rotation avoidance would exclude every candidate"""

    IGNORE_ALL = "ignore_all"
    DROP_OLDEST = "drop_oldest"


# Dinner window hours (local time of the request)
DINNER_START_HOUR = 17
DINNER_END_HOUR = 21
LATE_THRESHOLD_HOUR = 20

if not DINNER_START_HOUR < LATE_THRESHOLD_HOUR <= DINNER_END_HOUR:
    raise ValueError("DINNER_START_HOUR < LATE_THRESHOLD_HOUR <= DINNER_END_HOUR must hold")


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="MealArbiter", description="Application name")
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
        default="sqlite:///./mealarbiter.db",
        description="SQLAlchemy connection URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Arbiter settings
    rotation_window_days: int = Field(
        default=7, ge=0, description="Days of history used for rotation avoidance"
    )
    history_window_days: int = Field(
        default=7, ge=1, description="Days of history read for DRM evaluation"
    )
    rotation_reset_strategy: RotationResetStrategy = Field(
        default=RotationResetStrategy.IGNORE_ALL,
        description="Reset policy when rotation would exhaust the catalog",
    )
    safe_core_bootstrap: bool = Field(
        default=True,
        description="Restrict to safe core meals when the inventory is empty",
    )
    dinner_start_hour: int = Field(default=DINNER_START_HOUR, ge=0, le=23)
    dinner_end_hour: int = Field(default=DINNER_END_HOUR, ge=0, le=24)
    late_threshold_hour: int = Field(
        default=LATE_THRESHOLD_HOUR,
        ge=0,
        le=24,
        description="Local hour from which DRM is recommended",
    )
    drm_rejection_threshold: int = Field(
        default=2, ge=1, description="Consecutive rejections that trigger DRM"
    )
    inventory_confidence_threshold: float = Field(
        default=0.60, ge=0, le=1, description="Decayed confidence for availability"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8081"],
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
        default="Meal Arbiter API", description="API documentation title"
    )
    api_description: str = Field(
        default="Single-decision dinner arbiter with rescue routing",
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

    @model_validator(mode="after")
    def validate_dinner_window(self):
        """Late threshold must sit inside the dinner window"""
        if not (
            self.dinner_start_hour
            < self.late_threshold_hour
            <= self.dinner_end_hour
        ):
            raise ValueError(
                "dinner_start_hour < late_threshold_hour <= dinner_end_hour must hold"
            )
        return self

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
