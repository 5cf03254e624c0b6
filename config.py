"""
Configuration management for the trial license provider.

This module provides centralized configuration with validation using Pydantic.
All configuration values are loaded from environment variables with sensible defaults.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from page_parser import DEFAULT_KEY_PREFIX, DEFAULT_KEY_SUFFIX


class CatalogConfig(BaseSettings):
    """License page source configuration."""

    model_config = SettingsConfigDict(env_prefix='LICENSE_', case_sensitive=False)

    page_url: Optional[str] = Field(default=None, description='URL of the license directory page')
    key_prefix: str = Field(default=DEFAULT_KEY_PREFIX, description='Link target prefix in front of the key')
    key_suffix: str = Field(default=DEFAULT_KEY_SUFFIX, description='Link target suffix after the key')
    fetch_timeout: Optional[float] = Field(
        default=None,
        description='Timeout in seconds for fetching the page (none = wait indefinitely)'
    )

    @field_validator('page_url')
    @classmethod
    def validate_page_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate the page URL is an http(s) URL."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not v.startswith(('http://', 'https://')):
            raise ValueError('License page URL must start with http:// or https://')
        return v

    @field_validator('fetch_timeout')
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        """Validate timeout is positive."""
        if v is not None and v <= 0:
            raise ValueError('Fetch timeout must be positive')
        return v

    @property
    def is_configured(self) -> bool:
        return self.page_url is not None


class APIConfig(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix='API_', case_sensitive=False)

    host: str = Field(default='0.0.0.0', description='API host')
    port: int = Field(default=3000, description='API port')
    log_level: Literal['debug', 'info', 'warning', 'error', 'critical'] = Field(
        default='info',
        description='Logging level'
    )
    cors_origins: list[str] = Field(
        default=['*'],
        description='CORS allowed origins'
    )

    @field_validator('port')
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in the TCP range."""
        if not 0 < v < 65536:
            raise ValueError('Port must be between 1 and 65535')
        return v


class AppConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    # Logging
    debug: bool = Field(default=False, description='Debug logging')
    verbose: bool = Field(default=False, description='Verbose logging')
    log_file: Optional[str] = Field(default=None, description='Optional log file path')

    # Sub-configurations
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    api: APIConfig = Field(default_factory=APIConfig)

    @classmethod
    def load(cls) -> 'AppConfig':
        """Load configuration from environment."""
        return cls(
            catalog=CatalogConfig(),
            api=APIConfig()
        )


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.load()
    return _config


def reload_config() -> AppConfig:
    """Reload configuration from environment."""
    global _config
    _config = AppConfig.load()
    return _config
