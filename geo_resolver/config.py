"""
Central configuration loaded from environment variables with sensible defaults.
All secrets come from env vars; no hardcoded credentials.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache


@dataclass(frozen=True)
class DatabaseConfig:
    host: str = os.getenv("PG_HOST", "localhost")
    port: int = int(os.getenv("PG_PORT", "5432"))
    user: str = os.getenv("PG_USER", "geo")
    password: str = os.getenv("PG_PASSWORD", "geo")
    database: str = os.getenv("PG_DATABASE", "geo_reference")
    min_pool_size: int = int(os.getenv("PG_POOL_MIN", "1"))
    max_pool_size: int = int(os.getenv("PG_POOL_MAX", "4"))

    @property
    def dsn(self) -> str:
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass(frozen=True)
class ReferenceConfig:
    # JSON Lines file with region/city rows; empty means read from Postgres
    reference_file: str = os.getenv("GEO_REFERENCE_FILE", "")


@dataclass(frozen=True)
class APIConfig:
    host: str = os.getenv("API_HOST", "0.0.0.0")
    port: int = int(os.getenv("API_PORT", "8000"))


@dataclass(frozen=True)
class Settings:
    db: DatabaseConfig = field(default_factory=DatabaseConfig)
    reference: ReferenceConfig = field(default_factory=ReferenceConfig)
    api: APIConfig = field(default_factory=APIConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    env: str = os.getenv("APP_ENV", "development")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
