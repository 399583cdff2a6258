"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the documented behavior

Collaborators:
  - main.py: reads settings for CORS, pool and lifespan wiring
  - container.py: selects repository implementations per APP_ENV
  - auth_users.py: JWT secret and lifetime
  - rate_limit.py: login attempt threshold and lockout duration

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - Tests call get_settings.cache_clear() after changing env vars
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-secret"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: development | test | production
        allowed_origins: Comma-separated CORS origins
        jwt_secret: Secret for signing JWT access tokens
        jwt_expiration_hours: Access token lifetime in hours (default: 24)
        login_max_attempts: Failed logins per IP before lockout (default: 5)
        login_lockout_minutes: Lockout duration in minutes (default: 15)
        verification_code_ttl_minutes: Email code lifetime (default: 10)
        verification_cleanup_interval_seconds: Expired-code sweep period
        expose_verification_code: Return code in API response (demo mode)
        upload_dir: Directory for leave attachments
        max_body_bytes: Max request body size (default: 10MB)
        default_department: Department assigned at registration
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required (no defaults)
    database_url: str

    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:4200"
    cors_allow_credentials: bool = False

    # Security - JWT Auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_expiration_hours: int = 24

    # Security - Login throttling
    login_max_attempts: int = 5
    login_lockout_minutes: int = 15

    # Email verification
    verification_code_ttl_minutes: int = 10
    verification_cleanup_interval_seconds: int = 3600
    expose_verification_code: bool = True

    # Attachments
    upload_dir: str = "uploads"

    # Security - Hardening
    max_body_bytes: int = 10 * 1024 * 1024  # 10MB

    # Registration
    default_department: str = "ICT"

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    @field_validator(
        "jwt_expiration_hours",
        "login_max_attempts",
        "login_lockout_minutes",
        "verification_code_ttl_minutes",
        "verification_cleanup_interval_seconds",
        "db_pool_min_size",
        "db_pool_max_size",
    )
    @classmethod
    def must_be_positive(cls, v: int, info) -> int:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_pool_bounds(self):
        if self.db_pool_max_size < self.db_pool_min_size:
            raise ValueError(
                f"db_pool_max_size ({self.db_pool_max_size}) must be >= "
                f"db_pool_min_size ({self.db_pool_min_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_production_secret(self):
        if self.is_production() and (
            self.jwt_secret == DEFAULT_JWT_SECRET or len(self.jwt_secret) < 32
        ):
            raise ValueError(
                "JWT_SECRET must be set to a value of at least 32 characters in production"
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() in {"prod", "production"}

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing"}

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
