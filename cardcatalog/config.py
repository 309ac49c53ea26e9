"""Configuration management using pydantic-settings."""

from flask import current_app, has_app_context
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .utils import isodatetime


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/cardcatalog.db"
    api_prefix: str = "/api"
    auth_prefix: str = "/api/auth"
    cors_origins: list[str] = ["http://localhost:3000"]
    environment: str = "development"
    host: str = "localhost"
    port: int = 5000

    # Larger request bodies are rejected with 413
    max_content_length: int = 10 * 1024 * 1024

    # JWT Configuration
    # No default secret: the app refuses to start without one
    jwt_secret: str | None = None
    jwt_expires_in: str = "24h"
    jwt_algorithm: str = "HS256"

    # Bcrypt work factor; tests drop this to 4
    bcrypt_work_factor: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()


def get_settings() -> Settings:
    """
    Return the settings bound to the running app.

    Inside a request (or app context) this is the Settings instance passed
    to create_app(); outside one it falls back to the environment-loaded
    module settings.
    """
    if has_app_context():
        bound = current_app.config.get("SETTINGS")
        if bound is not None:
            return bound
    return settings


def validate_settings(config: Settings) -> None:
    """
    Validate settings that must be correct before the app starts.

    Args:
        config: Settings to check

    Raises:
        ConfigurationError: Listing every problem found
    """
    errors: list[str] = []

    if not config.jwt_secret or not config.jwt_secret.strip():
        errors.append("JWT_SECRET must be set")

    try:
        isodatetime.parse_duration(config.jwt_expires_in)
    except ValueError:
        errors.append(f"JWT_EXPIRES_IN is not a valid duration: {config.jwt_expires_in!r}")

    if not 4 <= config.bcrypt_work_factor <= 31:
        errors.append("BCRYPT_WORK_FACTOR must be between 4 and 31")

    if errors:
        raise ConfigurationError(
            "Invalid configuration:\n- " + "\n- ".join(errors),
            {"errors": errors},
        )
