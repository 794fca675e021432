"""Configuration management for ddg-web-search using Pydantic settings.

Settings are read by the CLI and MCP entry points only. The searcher, fetcher
and rate limiter take their configuration as constructor arguments, so library
callers never depend on the environment.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main configuration settings for ddg-web-search.

    Settings are loaded from ``DDG_``-prefixed environment variables and a
    ``.env`` file. Environment variables take precedence over .env values.
    """

    model_config = SettingsConfigDict(
        env_prefix="DDG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level for the application",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional file path to write JSON logs (defaults to stderr only)",
    )

    # Browser
    headless: bool = Field(
        default=True,
        description="Run the search browser headless (captchas cannot be solved headless)",
    )

    # Rate limiting
    search_rate_limit: int = Field(
        default=1,
        description="Searches allowed per search window",
        ge=1,
    )
    search_rate_interval_ms: int = Field(
        default=2000,
        description="Length of the search rate-limit window in milliseconds",
        ge=1,
    )
    fetch_rate_limit: int = Field(
        default=1,
        description="Fetches allowed per fetch window",
        ge=1,
    )
    fetch_rate_interval_ms: int = Field(
        default=1000,
        description="Length of the fetch rate-limit window in milliseconds",
        ge=1,
    )

    # HTTP
    http_timeout: float = Field(
        default=10.0,
        description="Timeout for content fetch requests in seconds",
        ge=1.0,
        le=120.0,
    )

    # MCP server
    mcp_transport: Literal["stdio", "http"] = Field(
        default="stdio",
        description="Transport used by the MCP server",
    )
    mcp_host: str = Field(
        default="localhost",
        description="Bind host for the HTTP transport",
    )
    mcp_port: int = Field(
        default=3001,
        description="Bind port for the HTTP transport",
        ge=1,
        le=65535,
    )
    max_content_length: int = Field(
        default=10000,
        description="Characters of fetched content returned by the MCP fetch tool",
        ge=100,
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_paths(cls, v: str | Path | None) -> Path | None:
        """Expand relative paths to absolute paths."""
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()

    def model_dump_safe(self) -> dict[str, str]:
        """Dump settings as a dictionary of display strings."""
        return {
            "log_level": self.log_level,
            "log_file": str(self.log_file) if self.log_file else "-",
            "headless": str(self.headless),
            "search_rate": f"{self.search_rate_limit}/{self.search_rate_interval_ms}ms",
            "fetch_rate": f"{self.fetch_rate_limit}/{self.fetch_rate_interval_ms}ms",
            "http_timeout": f"{self.http_timeout}s",
            "mcp_transport": self.mcp_transport,
            "mcp_address": f"{self.mcp_host}:{self.mcp_port}",
            "max_content_length": str(self.max_content_length),
        }


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Creates and caches the settings on first call.

    Returns:
        Settings: The global settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from environment/files.

    Returns:
        Settings: The newly loaded settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
