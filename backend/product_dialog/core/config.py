"""Centralized client settings using pydantic settings."""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
# Look for .env in the backend directory or project root
env_path = Path(__file__).parent.parent.parent / ".env"
if not env_path.exists():
    # Try project root
    env_path = Path(__file__).parent.parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path, override=False)


class Settings(BaseSettings):
    """Environment-aware configuration (API base URL, token, transport)."""

    # Application settings
    app_name: str = "Product Dialog"
    log_level: str = "INFO"

    # Product service settings
    api_url: str = Field(
        default="http://localhost:8000/api",
        validation_alias="API_URL",
        description="Base URL of the product REST service",
    )
    api_token: str | None = Field(
        default=None,
        validation_alias="PRODUCT_API_TOKEN",
        description="Bearer token sent with product writes",
    )
    request_timeout: float = Field(
        default=10.0,
        description="Transport timeout in seconds for a single save request",
    )
    user_agent: str = "Product-Dialog/1.0"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow case-insensitive env var matching
        extra="ignore",  # Ignore extra env vars not defined in model
        populate_by_name=True,  # Allow both field name and alias
    )

    @field_validator("api_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URL so resource paths can be appended verbatim."""
        return v.rstrip("/")

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Provide singleton-like access for dependency injection."""
    return Settings()
