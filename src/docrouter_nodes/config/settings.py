"""Configuration and settings management using pydantic-settings."""
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://app.docrouter.ai/fastapi"


class DocRouterSettings(BaseSettings):
    """Node pack settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_prefix="DOCROUTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core settings
    env: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(default=True, description="Emit JSON log lines")

    # Remote service
    default_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API base URL used when a credential does not set one",
    )
    http_timeout_s: float = Field(
        default=30,
        description="Timeout applied to every HTTP request, in seconds",
    )
    api_token: SecretStr | None = Field(
        default=None,
        description="API token for command line runs",
    )

    @field_validator("http_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate that the timeout is positive."""
        if v <= 0:
            raise ValueError("http_timeout_s must be positive")
        return v

    @field_validator("default_base_url")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        """Drop surrounding whitespace and trailing slashes."""
        return v.strip().rstrip("/")


# Global settings instance
_settings: DocRouterSettings | None = None


def get_settings() -> DocRouterSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = DocRouterSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
