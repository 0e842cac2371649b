"""Configuration management for Storno MCP Server."""

import sys
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://api.storno.ro"


class Config(BaseSettings):
    """Configuration for Storno MCP Server.

    Every setting is read from a ``STORNO_``-prefixed environment variable
    (``STORNO_BASE_URL``, ``STORNO_TOKEN``, ...). The log level also accepts
    the plain ``LOG_LEVEL`` variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="STORNO_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    base_url: str = Field(
        description="Storno API base URL",
        default=DEFAULT_BASE_URL,
    )

    token: Optional[str] = Field(
        description="JWT access token or API key (af_...)",
        default=None,
    )

    refresh_token: Optional[str] = Field(
        description="JWT refresh token used for automatic renewal",
        default=None,
    )

    company_id: Optional[str] = Field(
        description="Default company UUID sent as the X-Company header",
        default=None,
    )

    email: Optional[str] = Field(
        description="Email for auto-login when no token is configured",
        default=None,
    )

    password: Optional[str] = Field(
        description="Password for auto-login when no token is configured",
        default=None,
    )

    log_level: str = Field(
        description="Logging level",
        default="WARNING",
        validation_alias=AliasChoices("STORNO_LOG_LEVEL", "LOG_LEVEL", "log_level"),
    )

    request_timeout: float = Field(
        description="Total timeout in seconds for a single HTTP request",
        default=300.0,
    )

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_base_url(cls, v: Optional[str]) -> str:
        """Fall back to the production host and strip trailing slashes."""
        if not v:
            return DEFAULT_BASE_URL
        return str(v).rstrip("/")

    @field_validator("token", "refresh_token", "company_id", "email", "password", mode="before")
    @classmethod
    def empty_as_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty environment values as unset."""
        return v or None

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> str:
        """Validate log level."""
        if not v:
            return "WARNING"

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if str(v).upper() not in valid_levels:
            print(f"⚠️ Invalid LOG_LEVEL '{v}', using WARNING", file=sys.stderr)
            return "WARNING"
        return str(v).upper()

    @property
    def has_credentials(self) -> bool:
        """Whether email and password are both configured for auto-login."""
        return bool(self.email and self.password)
