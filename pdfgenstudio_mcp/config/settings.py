"""
Application Settings
===================

Application settings resolved from environment variables using Pydantic Settings.
Command line flags are passed as init arguments and take precedence over the
environment.
"""

from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.pdfgenstudio.com"
DEFAULT_PORT = 3100

# Every HTTP flavour accepted on the command line maps onto streamable HTTP.
HTTP_TRANSPORTS = {"http", "httpStream", "sse"}


class Settings(BaseSettings):
    """Process-wide settings, built once at start-up and read-only afterwards."""

    # API Configuration
    api_key: str = Field(default="", description="PDF Gen Studio API key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="PDF Gen Studio API base URL")

    # Server Configuration
    app_name: str = Field(default="pdfgenstudio", description="MCP server name")
    app_version: str = Field(default="1.0.0", description="MCP server version")
    transport: str = Field(default="stdio", description="Transport: stdio, http, httpStream, sse")
    host: str = Field(default="0.0.0.0", description="HTTP transport bind host")
    port: int = Field(default=DEFAULT_PORT, description="HTTP transport port")

    # Logging Configuration
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate transport type."""
        allowed = {"stdio"} | HTTP_TRANSPORTS
        if v not in allowed:
            raise ValueError(f"Transport must be one of: {sorted(allowed)}")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        return v.strip() or DEFAULT_BASE_URL

    @property
    def uses_http_transport(self) -> bool:
        return self.transport in HTTP_TRANSPORTS

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PDFGENSTUDIO_",
        extra="ignore",
        frozen=True,
    )


# Global settings instance - will be initialized when needed
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings(**overrides: Any) -> Settings:
    """Rebuild settings from the environment, applying explicit overrides on top."""
    global settings
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    return settings
