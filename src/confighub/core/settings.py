# src/confighub/core/settings.py
"""Runtime settings for ConfigHub.

Values come from the environment (or a ``.env`` file) under the upper-case
aliases below. ``SECRET_KEY`` has no default and must be provided.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ASYNC_DRIVER_SUFFIXES = {
    "+asyncpg": "+psycopg",
    "+aiosqlite": "",
    "+aiomysql": "+pymysql",
}


class Settings(BaseSettings):
    """ConfigHub configuration."""

    app_name: str = Field(default="ConfigHub", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Storage
    database_url: str = Field(default="sqlite:///./confighub.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Bearer tokens are issued elsewhere; ConfigHub only verifies them.
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Listings
    default_page_size: int = Field(default=20, ge=1, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, ge=1, alias="MAX_PAGE_SIZE")

    # Community content
    comment_max_length: int = Field(default=1000, ge=1, alias="COMMENT_MAX_LENGTH")
    change_summary_max_length: int = Field(
        default=200,
        ge=1,
        alias="CHANGE_SUMMARY_MAX_LENGTH",
    )
    moderator_max_suspension_hours: int = Field(
        default=24,
        ge=0,
        alias="MODERATOR_MAX_SUSPENSION_HOURS",
    )

    # Browser clients
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """The test database when testing mode is on and one is configured."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """``effective_database_url`` with any async driver swapped for a sync one.

        Alembic and the command-line scripts run on blocking connections.
        """
        url = self.effective_database_url
        scheme, sep, rest = url.partition("://")
        for async_suffix, sync_suffix in ASYNC_DRIVER_SUFFIXES.items():
            if scheme.endswith(async_suffix):
                scheme = scheme[: -len(async_suffix)] + sync_suffix
                break
        return f"{scheme}{sep}{rest}"


settings = Settings()  # type: ignore[call-arg]
