"""Configuration management for the Payment Gateway."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Acquiring bank
    bank_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the acquiring bank (simulator in development)",
    )
    bank_connect_timeout_seconds: float = Field(
        default=10.0, description="Connect timeout for the authorization call"
    )
    bank_read_timeout_seconds: float = Field(
        default=10.0, description="Read timeout for the authorization call"
    )

    # Authentication
    api_keys: str = Field(
        default="",
        description="Comma separated key:merchant_id pairs accepted in X-API-Key",
    )

    # Service Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="development", description="Environment name")
    service_name: str = Field(default="payment-gateway", description="Service name")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to upper case and reject names the logging module doesn't know."""
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return level

    def parsed_api_keys(self) -> dict[str, str]:
        """Return the configured API keys as a key -> merchant_id mapping.

        Malformed pairs (no colon) are skipped.
        """
        keys: dict[str, str] = {}
        for pair in self.api_keys.split(","):
            pair = pair.strip()
            if not pair:
                continue
            key, sep, merchant_id = pair.partition(":")
            if sep and key.strip() and merchant_id.strip():
                keys[key.strip()] = merchant_id.strip()
        return keys


# Global settings instance
settings = Settings()
