"""Application settings and configuration.

This module defines all configuration options for the CoursePass service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="CoursePass", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./coursepass.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=False, alias="AUTO_CREATE_TABLES")

    # Login nonces (in-memory, single use)
    nonce_ttl_seconds: int = Field(default=300, alias="NONCE_TTL_SECONDS")
    nonce_sweep_interval_seconds: float = Field(
        default=300.0,
        alias="NONCE_SWEEP_INTERVAL_SECONDS",
    )

    # Sessions and course access receipts
    session_ttl_hours: int = Field(default=24, alias="SESSION_TTL_HOURS")
    session_sweep_interval_seconds: float = Field(
        default=3600.0,
        alias="SESSION_SWEEP_INTERVAL_SECONDS",
    )
    course_access_ttl_hours: int = Field(default=2, alias="COURSE_ACCESS_TTL_HOURS")

    # Accepted distance between a client-supplied timestamp and server time
    challenge_window_seconds: int = Field(default=300, alias="CHALLENGE_WINDOW_SECONDS")

    # Reject logins and profile updates that do not carry a nonce
    auth_require_nonce: bool = Field(default=False, alias="AUTH_REQUIRE_NONCE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()
