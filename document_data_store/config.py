"""Environment-driven settings for building a document store."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Settings read from ``DOCUMENT_STORE_*`` variables or a ``.env`` file."""

    backend: Literal["memory", "sqlite"] = "memory"
    sql_echo: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DOCUMENT_STORE_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> StoreSettings:
    return StoreSettings()


__all__ = ["StoreSettings", "get_settings"]
