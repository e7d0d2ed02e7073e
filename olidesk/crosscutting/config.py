"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Build the PostgreSQL conninfo from DATABASE_URL or discrete DB_* vars

Collaborators:
  - api/main.py: reads settings for CORS, pool and startup validation
  - container.py: reads settings for repositories, geocoding and tokens
  - server.py: reads host/port and the graceful shutdown window

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic: pure configuration

Notes:
  - Singleton via lru_cache
  - JWT_SECRET has no usable default: an empty secret aborts startup
"""

from functools import lru_cache
from urllib.parse import quote

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/local/test/production)
        host / port: Bind address for uvicorn (default: 0.0.0.0:8080)
        shutdown_grace_seconds: Grace period for in-flight requests on shutdown
        log_level / log_json: Logger configuration
        database_url: PostgreSQL connection string (wins over DB_* vars)
        db_host / db_port / db_user / db_password / db_name / db_ssl_mode:
            Discrete connection parameters used when DATABASE_URL is empty
        jwt_secret: Secret for signing identity tokens (required)
        nominatim_url: Geocoding search endpoint
        geocoding_user_agent: User-Agent sent to the geocoding provider
        geocoding_timeout_seconds: Bounded timeout per geocoding call
        retry_*: Backoff policy for transient geocoding failures
        allowed_origins: Comma-separated CORS origins
        dev_seed_user*: Initial account created at startup in local env
    """

    # Environment
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    shutdown_grace_seconds: int = 30

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Database
    database_url: str = ""
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "olidesk"
    db_ssl_mode: str = "disable"

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Security - JWT
    jwt_secret: str = ""

    # Geocoding
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    geocoding_user_agent: str = "OlideskAPI/1.0"
    geocoding_timeout_seconds: float = 10.0

    # Retry/Resilience
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 0.5
    retry_max_delay_seconds: float = 4.0

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Dev Tools (Backend Safe)
    dev_seed_user: bool = False
    dev_seed_user_name: str = "Administrador"
    dev_seed_user_email: str = "admin@olidesk.local"
    dev_seed_user_password: str = "admin"
    dev_seed_user_role: str = "admin"

    @field_validator("port")
    @classmethod
    def port_must_be_valid(cls, v: int) -> int:
        if v <= 0 or v > 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("geocoding_timeout_seconds")
    @classmethod
    def geocoding_timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("geocoding_timeout_seconds must be greater than 0")
        return v

    @field_validator("retry_max_attempts")
    @classmethod
    def retry_attempts_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("retry_max_attempts must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_pool_bounds(self):
        if self.db_pool_min_size < 0 or self.db_pool_max_size <= 0:
            raise ValueError("db pool sizes must be positive")
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password", "secret"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if self.dev_seed_user:
            raise ValueError("DEV_SEED_USER must be disabled in production")
        return self

    def get_database_url(self) -> str:
        """DATABASE_URL if present; otherwise assembled from DB_* vars."""
        if self.database_url.strip():
            return self.database_url.strip()

        password = f":{quote(self.db_password, safe='')}" if self.db_password else ""
        return (
            f"postgresql://{quote(self.db_user, safe='')}{password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
            f"?sslmode={self.db_ssl_mode}"
        )

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
