"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")


class PaymentsConfig(BaseSettings):
    """Payments engine configuration"""
    
    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )
    
    # Logging configuration
    log_level: str = "WARNING"  # Rejected records are logged at WARNING
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr
    
    # Input configuration
    csv_delimiter: str = ","
    
    # Business rules configuration
    replace_duplicate_deposits: bool = False  # Reject a repeated deposit tx id by default
    
    @field_validator("log_level", mode="before")
    @classmethod
    def known_log_level(cls, v):
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
    
    @field_validator("log_format", mode="before")
    @classmethod
    def known_log_format(cls, v):
        fmt = str(v).strip().lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return fmt


# Global configuration instance
config = PaymentsConfig()


def get_config() -> PaymentsConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> PaymentsConfig:
    """Reload configuration from environment"""
    global config
    config = PaymentsConfig()
    return config
