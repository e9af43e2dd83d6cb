"""Configuration loaded from environment variables and a .env file."""

from functools import lru_cache

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spelling_allowlist.allow_list import AllowList, default_allow_list
from spelling_allowlist.loader import AllowListLoader

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings for the allow-list tooling.

    Environment variables use the ``SPELLING_ALLOWLIST_`` prefix, e.g.
    ``SPELLING_ALLOWLIST_FILE=docs/allowlist.yaml``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPELLING_ALLOWLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    file: str | None = None
    include_defaults: bool = True
    log_level: str = "WARNING"

    @field_validator("file")
    @classmethod
    def blank_file_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(LOG_LEVELS)}"
            raise ValueError(msg)
        return level


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()


def load_configured_allow_list(settings: Settings) -> AllowList:
    """Build the allow-list described by the settings.

    Without a configured file this is the default list. With one, the file's
    entries are appended to the defaults, or used alone when
    ``include_defaults`` is off.
    """
    if settings.file is None:
        if not settings.include_defaults:
            logger.warning("No allow-list file configured and defaults disabled; list is empty")
            return AllowList()
        return default_allow_list()

    extra = AllowListLoader().load_from_file(settings.file)
    if not settings.include_defaults:
        logger.debug("Default allow-list disabled by configuration")
        return extra
    return default_allow_list().merge(extra)
