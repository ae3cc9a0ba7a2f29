"""portafs configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PLATFORM_CHOICES = ("auto", "posix", "windows")


class Settings(BaseSettings):
    """Library and API settings."""

    app_name: str = "portafs"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Network (HTTP surface only)
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"

    # Enumeration variant: auto follows the running OS
    platform: str = "auto"

    # Permission bits for mkdir (owner/group rwx)
    mkdir_mode: int = 0o775

    # Capacity handed to get_cwd by the API
    cwd_max_length: int = 4096

    # When false the default diagnostic writer drops "not a file" style warnings
    diagnostics_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="PORTAFS_",
        extra="ignore",
    )

    @field_validator("platform", mode="before")
    @classmethod
    def _check_platform(cls, value: str) -> str:
        value = str(value).strip().lower()
        if value not in PLATFORM_CHOICES:
            raise ValueError(f"platform must be one of {PLATFORM_CHOICES}, got {value!r}")
        return value

    @field_validator("mkdir_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: int | str) -> int:
        # Env vars arrive as strings like "0o775" or "775"
        if isinstance(value, str):
            text = value.strip().lower()
            if text.startswith("0o"):
                return int(text[2:], 8)
            return int(text, 8)
        return value

    @property
    def is_windows(self) -> bool:
        if self.platform == "auto":
            return os.name == "nt"
        return self.platform == "windows"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
