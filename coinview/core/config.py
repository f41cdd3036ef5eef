from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Market data provider
    COINGECKO_API_URL: str = "https://api.coingecko.com/api/v3"
    COINGECKO_API_KEY: str | None = None
    VS_CURRENCY: str = "usd"
    HTTP_TIMEOUT_SECONDS: float = 15.0

    # Catalog: 250 * 2 = 500 coins
    CATALOG_SIZE: int = 500
    CATALOG_PAGE_SIZE: int = 250
    REFRESH_ON_STARTUP: bool = True

    # View
    TABLE_PAGE_SIZE: int = 25
    SEARCH_DEBOUNCE_SECONDS: float = 0.5
    DETAIL_CACHE_SIZE: int = 32

    # Docs Configuration
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENV == "dev"

    @property
    def debug_enabled(self) -> bool:
        return self.is_development

    @property
    def effective_log_level(self) -> str:
        """Return a loguru level name, never below INFO in production."""
        level = (self.LOG_LEVEL or "INFO").strip().upper()
        level = _LEVEL_ALIASES.get(level, level)
        if level not in _VALID_LOG_LEVELS:
            level = "INFO"
        if self.is_production and level in ("TRACE", "DEBUG"):
            return "INFO"
        return level

    @property
    def docs_enabled(self) -> bool:
        """Swagger/ReDoc docs enabled based on environment or override."""
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development


settings = Settings()
