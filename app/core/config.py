"""
Configuration settings for the Flight Deal Search API
"""

import logging
from typing import List, Optional, Dict, Any
from enum import Enum
from urllib.parse import urlsplit, urlunsplit
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings


class Environment(str, Enum):
    """Supported environment types"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation"""

    # API Configuration
    API_TITLE: str = Field(default="Flight Deal Search API", description="API title")
    API_VERSION: str = Field(default="1.0.0", description="API version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, ge=1, le=65535, description="API port")

    # CORS Configuration (stored as string, parsed to list)
    CORS_ORIGINS_STR: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)",
        alias="CORS_ORIGINS"
    )

    # Provider Configuration
    SCRAPER_API_URL: Optional[str] = Field(
        default=None,
        description="Base URL of the external scraping service; unset selects mock-only mode"
    )
    PROVIDER_TIMEOUT: float = Field(
        default=60,
        gt=0,
        le=300,
        description="Deadline for the outbound provider call in seconds"
    )

    # Mock Configuration
    MOCK_LATENCY_SECONDS: float = Field(
        default=2.0,
        ge=0,
        description="Simulated latency before mock results are returned"
    )

    # Logging Configuration
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level"
    )

    # Environment Configuration
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment"
    )

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS_STR.split(',') if origin.strip()]

    @property
    def provider_enabled(self) -> bool:
        """Whether searches are delegated to the external provider"""
        return bool(self.SCRAPER_API_URL)

    @field_validator('SCRAPER_API_URL', mode='before')
    @classmethod
    def normalize_scraper_api_url(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank values as unset and drop trailing slashes"""
        if v is None:
            return None
        v = str(v).strip()
        if not v:
            return None
        return v.rstrip('/')

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v) -> str:
        """Validate and normalize log level"""
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode='after')
    def validate_environment_specific_settings(self) -> 'Settings':
        """Validate environment-specific configuration"""
        if self.ENVIRONMENT == Environment.PRODUCTION:
            if any('localhost' in origin for origin in self.CORS_ORIGINS):
                logging.warning(
                    "Production environment detected with localhost CORS origins. "
                    "Consider updating CORS_ORIGINS for production."
                )

            if not self.provider_enabled:
                logging.warning(
                    "SCRAPER_API_URL is not set in production; "
                    "searches will be served from mock data."
                )

        return self

    def get_provider_config(self) -> Dict[str, Any]:
        """Get provider-specific configuration"""
        return {
            'enabled': self.provider_enabled,
            'base_url': self.SCRAPER_API_URL,
            'timeout': self.PROVIDER_TIMEOUT,
        }

    def mask_sensitive_data(self) -> Dict[str, Any]:
        """Get configuration with sensitive data masked for logging"""
        config = self.model_dump()

        # Mask credentials embedded in the provider URL
        url = config.get('SCRAPER_API_URL')
        if url:
            parts = urlsplit(url)
            if parts.password:
                netloc = f"{parts.username}:***@{parts.hostname}"
                if parts.port:
                    netloc = f"{netloc}:{parts.port}"
                config['SCRAPER_API_URL'] = urlunsplit(parts._replace(netloc=netloc))

        return config

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "validate_assignment": True,
        "use_enum_values": True,
        "validate_default": True,
        "populate_by_name": True,
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """Get settings instance"""
    return Settings()


# Global settings instance - will be initialized when first accessed
settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance"""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
