import logging
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _default_sitemap_dir() -> Path:
    return Path.cwd() / "public" / "sitemaps"


class ProxyConfig(BaseSettings):
    """Process-wide settings, built once at startup and never mutated.

    Values come from keyword arguments first, then environment variables,
    then the defaults below. Empty variables count as unset.
    """

    app_secret: str = Field(default="", validation_alias="SHOPIFY_APP_SECRET")
    skip_verification: bool = Field(default=False, validation_alias="SKIP_VERIFICATION")
    environment: str = Field(
        default="not set", validation_alias=AliasChoices("APP_ENV", "NODE_ENV")
    )
    sitemap_dir: Path = Field(
        default_factory=_default_sitemap_dir, validation_alias="SITEMAP_DIR"
    )
    cache_control: Optional[str] = Field(
        default=None, validation_alias="SITEMAP_CACHE_CONTROL"
    )
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        env_ignore_empty=True,
    )

    @field_validator("skip_verification", mode="before")
    @classmethod
    def _only_literal_true(cls, value):
        # anything but "true" (any case) leaves verification on
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level

    @property
    def secret_configured(self) -> bool:
        return bool(self.app_secret)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def verification_bypassed(self) -> bool:
        """True when requests are served without checking the signature.

        The switch is ignored in production.
        """
        return self.skip_verification and not self.is_production
