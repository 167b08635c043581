import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMATS = {
    "text": "%(levelname)s: %(message)s",
    "verbose": "%(asctime)s %(levelname)s %(name)s: %(message)s",
}


class Settings(BaseSettings):
    # Logging settings
    log_level: str = "WARNING"
    log_format: str = "text"  # text or verbose

    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in LOG_FORMATS:
            raise ValueError(f"Log format must be one of: {', '.join(sorted(LOG_FORMATS))}")
        return v.lower()

    @property
    def log_format_string(self) -> str:
        return LOG_FORMATS[self.log_format]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
