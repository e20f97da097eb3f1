from functools import lru_cache
from typing import Optional
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from rate_gate.constants import DEFAULT_QUOTAS_PATH, DEFAULT_REDIS_KEY_PREFIX


class AppSettings(BaseSettings):
    # Web server
    webapp_host: str = Field(default="0.0.0.0", alias="WEBAPP_HOST")
    webapp_port: int = Field(default_factory=lambda: int(os.getenv("PORT", 8000)), alias="PORT")

    # Redis (in-memory log when unset)
    redis_dsn: Optional[str] = Field(default=None, alias="REDIS_DSN")
    redis_key_prefix: str = Field(default=DEFAULT_REDIS_KEY_PREFIX, alias="REDIS_KEY_PREFIX")

    # Rate limiting
    quotas_path: str = Field(default=DEFAULT_QUOTAS_PATH, alias="QUOTAS_PATH")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        if level not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL={value!r}. Allowed: {sorted(allowed)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
