"""
glvd/config.py -- Centralized client configuration via pydantic-settings.

All environment variable reads for glvdctl happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Environment variables (prefix GLVD_):
  GLVD_API_URL           Base URL of the GLVD REST API, including /v1.
  GLVD_REQUEST_TIMEOUT   Seconds to wait for the service before giving up.
  GLVD_VULNERABLE_FIELD  JSON key carrying the per-summary vulnerability flag.
                         The service has shipped both "vulnerable" and
                         "isVulnerable"; pick the one your deployment emits.
  GLVD_LOG_LEVEL         Logging level name for the CLI (default WARNING).
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("glvd.config")

DEFAULT_API_URL = "https://glvd.ingress.glvd.gardnlinux.shoot.canary.k8s-hana.ondemand.com/v1"


class Settings(BaseSettings):
    """Client settings loaded from GLVD_* environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without any environment at all.
    """

    model_config = SettingsConfigDict(
        env_prefix="GLVD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0
    vulnerable_field: Literal["vulnerable", "isVulnerable"] = "vulnerable"
    log_level: str = "WARNING"

    @model_validator(mode="after")
    def validate_endpoint(self) -> "Settings":
        """Normalize api_url and reject values that cannot produce a request."""
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"GLVD_API_URL must be an http(s) URL, got {self.api_url!r}")
        self.api_url = self.api_url.rstrip("/")
        if self.request_timeout <= 0:
            raise ValueError("GLVD_REQUEST_TIMEOUT must be a positive number of seconds.")
        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning("Unknown GLVD_LOG_LEVEL %r, falling back to WARNING", self.log_level)
            level = "WARNING"
        self.log_level = level
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
