"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Tenant directory database connection settings.

    Environment variables:
        HELPDESK_DB_HOST: Database host (default: localhost)
        HELPDESK_DB_PORT: Database port (default: 5432)
        HELPDESK_DB_DATABASE: Database name (default: helpdesk)
        HELPDESK_DB_USERNAME: Database user (default: helpdesk)
        HELPDESK_DB_PASSWORD: Database password (required in production)
        HELPDESK_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 1)
        HELPDESK_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 5)
        HELPDESK_DB_POOL_RECYCLE_SECONDS: Connection recycle age (default: 1800)
        HELPDESK_DB_COMMAND_TIMEOUT_SECONDS: Per-statement timeout (default: 5.0)
        HELPDESK_DB_APPLICATION_NAME: Name shown in pg_stat_activity
    """

    model_config = SettingsConfigDict(
        env_prefix="HELPDESK_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="helpdesk", description="Database name")
    username: str = Field(default="helpdesk", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=1,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=5,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    pool_recycle_seconds: int = Field(
        default=1800,
        description="Seconds before a pooled connection is replaced",
        ge=60,
    )
    command_timeout_seconds: float = Field(
        default=5.0,
        description="asyncpg per-statement timeout in seconds",
        gt=0,
    )
    application_name: str = Field(
        default="helpdesk-tenancy",
        description="application_name reported to PostgreSQL",
        min_length=1,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class TenancySettings(BaseSettings):
    """Tenant resolution settings.

    List values are read from the environment as JSON arrays, e.g.
    HELPDESK_TENANCY_PLATFORM_DOMAINS='["helpdesk.com", "localhost"]'.

    Environment variables:
        HELPDESK_TENANCY_PLATFORM_DOMAINS: Hostnames of the shared platform surface
        HELPDESK_TENANCY_RESERVED_SUBDOMAINS: Subdomains tenants may not register
        HELPDESK_TENANCY_LOOPBACK_MARKER: Development host marker (default: localhost)
        HELPDESK_TENANCY_IGNORED_SUBDOMAIN: Label never treated as a tenant (default: www)
        HELPDESK_TENANCY_LOOKUP_TIMEOUT_SECONDS: Per-lookup timeout (default: 5.0)
        HELPDESK_TENANCY_CACHE_MAX_ENTRIES: Cached hostnames per resolver (default: 1024)
        HELPDESK_TENANCY_DIRECTORY_BACKEND: "postgres" or "rest" (default: postgres)
        HELPDESK_TENANCY_TRUST_FORWARDED_HOST: Read X-Forwarded-Host (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="HELPDESK_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    platform_domains: list[str] = Field(
        default_factory=lambda: [
            "localhost",
            "127.0.0.1",
            "helpdesk.com",
            "helpdesk.vercel.app",
            "helpdesk-5fe0c.web.app",
        ],
        description="Hostnames serving the shared, tenant-less platform surface",
    )
    reserved_subdomains: list[str] = Field(
        default_factory=lambda: [
            "www",
            "api",
            "admin",
            "app",
            "help",
            "support",
            "mail",
            "ftp",
            "cdn",
        ],
        description="Subdomains that can never be registered by a tenant",
    )
    loopback_marker: str = Field(
        default="localhost",
        description="Hostname marker enabling the development subdomain rule",
    )
    ignored_subdomain: str = Field(
        default="www",
        description="Leading label that never identifies a tenant",
    )
    lookup_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout applied to each tenant directory lookup",
        gt=0,
        le=60,
    )
    cache_max_entries: int = Field(
        default=1024,
        description="Maximum hostnames held in the resolution cache",
        ge=1,
    )
    directory_backend: Literal["postgres", "rest"] = Field(
        default="postgres",
        description="Tenant directory implementation to use",
    )
    trust_forwarded_host: bool = Field(
        default=False,
        description="Resolve tenants from X-Forwarded-Host behind a trusted proxy",
    )

    @field_validator("platform_domains", "reserved_subdomains")
    @classmethod
    def normalize_names(cls, value: list[str]) -> list[str]:
        """Lowercase entries and drop blanks."""
        return [item.strip().lower() for item in value if item.strip()]

    @field_validator("loopback_marker", "ignored_subdomain")
    @classmethod
    def normalize_label(cls, value: str) -> str:
        """Labels are compared lowercase."""
        value = value.strip().lower()
        if not value:
            raise ValueError("label must not be empty")
        return value


class DirectoryApiSettings(BaseSettings):
    """Hosted tenant directory (PostgREST-style API) settings.

    Environment variables:
        HELPDESK_DIRECTORY_BASE_URL: API base URL (e.g. https://xyz.supabase.co)
        HELPDESK_DIRECTORY_API_KEY: API key sent as apikey and bearer token
        HELPDESK_DIRECTORY_TABLE: Table holding tenant records (default: tenants)
        HELPDESK_DIRECTORY_TIMEOUT_SECONDS: HTTP client timeout (default: 10.0)
    """

    model_config = SettingsConfigDict(
        env_prefix="HELPDESK_DIRECTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:54321",
        description="Base URL of the hosted directory API",
    )
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="API key for the hosted directory",
    )
    table: str = Field(default="tenants", description="Tenant table name")
    timeout_seconds: float = Field(
        default=10.0,
        description="HTTP client timeout",
        gt=0,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="HELPDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Helpdesk Tenancy API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenant resolution settings."""
        return get_tenancy_settings()

    @property
    def directory_api(self) -> DirectoryApiSettings:
        """Get hosted directory settings."""
        return get_directory_api_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenant resolution settings."""
    return TenancySettings()


@lru_cache
def get_directory_api_settings() -> DirectoryApiSettings:
    """Get cached hosted directory settings."""
    return DirectoryApiSettings()
