"""Runtime configuration loaded from ``MOVIESTORE_*`` environment variables."""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    development = 'development'
    test = 'test'
    production = 'production'


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='MOVIESTORE_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    environment: Environment = Environment.development
    database_url: str | None = Field(
        default=None,
        description='SQLAlchemy URL. Defaults to a SQLite file under data/.',
    )
    log_level: str = 'INFO'
    admin_token: str = Field(
        default='change-me',
        description='Shared secret expected in the X-Admin-Token header.',
    )

    # Catalog listing
    page_size: int = Field(default=24, gt=0)
    pagination_siblings: int = Field(default=2, ge=0)
    pagination_min_ellipsis_gap: int = Field(
        default=1,
        ge=1,
        description='Smallest run of hidden pages collapsed into an ellipsis.',
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings accessor, also used as a FastAPI dependency."""
    return Settings()
