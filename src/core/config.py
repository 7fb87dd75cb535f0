"""Application configuration."""

from typing import Literal, Self
from urllib.parse import urlparse

from pydantic import HttpUrl, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "catalogExplorer"
    SERVER_PORT: int = 8000
    ROOTPATH: str = ""
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    # Sentry
    SENTRY_DSN: HttpUrl | None = None

    # Remote services
    CATALOG_SERVICE_URL: str = "https://pokeapi.co/api/v2/pokemon"
    CATEGORY_SERVICE_URL: str = "https://pokeapi.co/api/v2/type"
    FETCHER_TIMEOUT_SEC: float | None = None  # None: 不设超时，挂起的请求一直保持 loading
    FETCHER_USER_AGENT: str = "catalogExplorer/0.1"

    # Catalog view
    CATALOG_INITIAL_LIMIT: int = 20
    CATALOG_LIMIT_STEP: int = 20
    CATEGORY_PLACEHOLDER_LABEL: str = "Select a type"

    @model_validator(mode="after")
    def _validate_service_urls(self) -> Self:
        for var_name in ("CATALOG_SERVICE_URL", "CATEGORY_SERVICE_URL"):
            parsed = urlparse(getattr(self, var_name))
            if parsed.scheme not in ("http", "https") or not parsed.hostname:
                raise ValueError(f"{var_name} must be an HTTP(S) URL")
        return self

    @model_validator(mode="after")
    def _validate_limits(self) -> Self:
        if self.CATALOG_INITIAL_LIMIT < 1:
            raise ValueError("CATALOG_INITIAL_LIMIT must be a positive integer")
        if self.CATALOG_LIMIT_STEP < 1:
            raise ValueError("CATALOG_LIMIT_STEP must be a positive integer")
        return self


settings = Settings()
