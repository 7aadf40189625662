"""
Configuration management for the Sera cart engine
"""

import threading

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    environment: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    json_logs: bool = Field(default=True, description="Write JSON log file alongside console output")

    # Currency settings
    currency: str = Field(default="INR", description="Currency code")
    currency_symbol: str = Field(default="₹", description="Symbol used in catalog price strings")

    # Checkout settings
    delivery_fee: int = Field(default=40, ge=0, description="Flat delivery fee added at checkout")

    # Cart behaviour
    max_customization_quantity: int = Field(
        default=10, gt=0, description="Largest quantity selectable in the customization step"
    )
    strict_price_merge: bool = Field(
        default=False,
        description="Raise instead of warning when a merged line resolves to a different price",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("currency")
    @classmethod
    def _validate_currency(cls, value: str) -> str:
        if not value or len(value) != 3 or not value.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        return value.upper()


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next get_config() re-reads the environment"""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
