from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database configuration
    DATABASE_URL: str | None = None

    # Clerk (identity provider) configuration
    CLERK_JWKS_URL: str | None = None
    CLERK_ISSUER: str | None = None
    JWT_SECRET: str | None = None  # HS256 tokens, development only

    # Application URLs
    APP_BASE_URL: str = "http://localhost:8001"  # Default for development
    FRONTEND_URL: str | None = None

    # Logging
    LOG_LEVEL: str = "INFO"

    # Role store lookups
    ROLE_LOOKUP_TIMEOUT: float = 5.0  # seconds

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
