"""Application configuration with validation."""
from typing import Literal, Optional
from functools import lru_cache
from pydantic import Field, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Nine-Box Talent Review"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    SECRET_KEY: SecretStr

    # API
    API_V1_PREFIX: str = "/api/v1"
    ACCESS_TOKEN_TTL_MINUTES: int = Field(default=720, ge=5, le=10080)

    # JSON document store
    DATA_FILE: str = Field(
        default="data/db.json",
        description="Path of the JSON document holding every collection"
    )

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    CACHE_TTL_SCORING_CONFIG: int = 300  # 5 minutes

    # Seed data for a fresh store
    DEFAULT_COMPANY_NAME: str = "MIDES"
    DEFAULT_ADMIN_EMAIL: str = "admin@mides.kz"
    DEFAULT_ADMIN_NAME: str = "Administrator"
    DEFAULT_ADMIN_PASSWORD: SecretStr = SecretStr("change-me-admin")

    # Scoring defaults (both axes)
    DEFAULT_LOW_MAX: float = 13
    DEFAULT_MED_MAX: float = 20

    # Retention-risk flag
    RETENTION_QUESTION_ID: str = "val_retention"
    RETENTION_RISK_VALUE: int = Field(default=3, ge=0, le=3)

    # Development advice (Google Gemini)
    GEMINI_API_KEY: Optional[SecretStr] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"

    @model_validator(mode="after")
    def validate_default_thresholds(self):
        """Default cut points must partition the axis into three intervals."""
        if self.DEFAULT_LOW_MAX >= self.DEFAULT_MED_MAX:
            raise ValueError(
                f"DEFAULT_LOW_MAX must be < DEFAULT_MED_MAX, got "
                f"{self.DEFAULT_LOW_MAX} >= {self.DEFAULT_MED_MAX}"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has required security settings."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if len(self.SECRET_KEY.get_secret_value()) < 32:
                raise ValueError("SECRET_KEY must be ≥32 characters in production")
            if self.DEFAULT_ADMIN_PASSWORD.get_secret_value() == "change-me-admin":
                raise ValueError("DEFAULT_ADMIN_PASSWORD must be changed in production")
        return self

    @property
    def default_thresholds(self) -> dict:
        """Threshold document used when the store has none configured."""
        axis = {"low_max": self.DEFAULT_LOW_MAX, "med_max": self.DEFAULT_MED_MAX}
        return {"x": dict(axis), "y": dict(axis)}


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
