"""
Configuration management.

Centralized environment variable management and validation.
"""

from typing import Literal, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from shared.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow case-insensitive env var matching
        extra="ignore"
    )

    # Environment
    environment: Literal["development", "staging", "production", "test"] = "development"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # LOG_DIR: directory for the rotating JSON log file; empty disables file logging
    log_dir: str = "logs"

    # API keys (both optional: a key can also be supplied at runtime via key selection)
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    # Prompt Master configuration
    # PROMPT_MASTER_PROVIDER: which model backend serves generation requests
    prompt_master_provider: Literal["gemini", "openai"] = "gemini"
    prompt_master_gemini_model: str = "gemini-3-pro-preview"
    prompt_master_openai_model: str = "gpt-4o"
    prompt_master_temperature: float = 1.0

    # Frontend configuration
    frontend_url: str = "http://localhost:3000"  # Frontend domain for CORS

    @field_validator("gemini_api_key", "openai_api_key", mode="before")
    @classmethod
    def blank_key_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty key variables as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("openai_api_key")
    @classmethod
    def validate_openai_api_key(cls, v: Optional[str]) -> Optional[str]:
        """Validate OpenAI API key format."""
        if v is None:
            return v
        if not v.startswith("sk-"):
            raise ConfigError("OPENAI_API_KEY must start with 'sk-'")
        if len(v) < 20:
            raise ConfigError("OPENAI_API_KEY appears to be invalid")
        return v

    @field_validator("prompt_master_temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        """Validate sampling temperature range."""
        if not 0.0 <= v <= 2.0:
            raise ConfigError("PROMPT_MASTER_TEMPERATURE must be between 0 and 2")
        return v

    @field_validator("frontend_url")
    @classmethod
    def validate_frontend_url(cls, v: str) -> str:
        """Validate frontend URL format."""
        if not v:
            raise ConfigError("FRONTEND_URL is required")
        if not v.startswith(("http://", "https://")):
            raise ConfigError("FRONTEND_URL must be a valid HTTP/HTTPS URL")
        return v

    @property
    def active_model(self) -> str:
        """Model name for the configured provider."""
        if self.prompt_master_provider == "openai":
            return self.prompt_master_openai_model
        return self.prompt_master_gemini_model

    @property
    def active_api_key(self) -> Optional[str]:
        """API key for the configured provider, if one is set."""
        if self.prompt_master_provider == "openai":
            return self.openai_api_key
        return self.gemini_api_key


# Singleton instance
try:
    settings = Settings()
except Exception as e:
    # Re-raise as ConfigError for consistency
    if isinstance(e, ConfigError):
        raise
    raise ConfigError(f"Failed to load configuration: {str(e)}") from e
