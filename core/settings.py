"""Application settings and environment configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from functools import lru_cache
from pathlib import Path
from typing import List


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Runtime configuration resolved from environment variables."""

    data_file: Path = Path("reminders.json")
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    strict_load: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        env_data_file = os.getenv("REMINDERS_DATA_FILE")
        env_host = os.getenv("REMINDERS_HOST")
        env_port = os.getenv("REMINDERS_PORT")
        env_origins = os.getenv("REMINDERS_CORS_ORIGINS")
        env_strict = os.getenv("REMINDERS_STRICT_LOAD")
        env_log_level = os.getenv("REMINDERS_LOG_LEVEL")
        if env_data_file:
            self.data_file = Path(env_data_file)
        if env_host:
            self.host = env_host
        if env_port:
            self.port = int(env_port)
        if env_origins:
            self.cors_origins = [origin.strip() for origin in env_origins.split(",") if origin.strip()]
        if env_strict:
            self.strict_load = env_strict.strip().lower() in _TRUTHY
        if env_log_level:
            self.log_level = env_log_level.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
