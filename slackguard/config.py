"""Configuration management for SlackGuard."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SlackGuard configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: str = Field(default="dev", description="Environment: dev, prod")

    # Slack Web API
    slack_api_base_url: str = Field(
        default="https://slack.com/api",
        description="Base URL of the Slack Web API"
    )
    slack_token: Optional[str] = Field(
        default=None,
        description="Bearer token used when none is passed explicitly"
    )
    slack_team_id: Optional[str] = Field(
        default=None,
        description="Workspace ID used when none is passed explicitly"
    )

    # HTTP
    http_timeout: float = Field(
        default=30,
        description="Per-request timeout in seconds"
    )
    users_page_size: int = Field(
        default=200,
        description="Page size for users.list"
    )
    channels_page_size: int = Field(
        default=1000,
        description="Page size for conversations.list"
    )

    # Scan
    scan_timeout: Optional[float] = Field(
        default=300,
        description="Deadline for a whole scan in seconds (None disables it)"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="json",
        description="Log format: json, console"
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (for testing)."""
    global _settings
    _settings = None
