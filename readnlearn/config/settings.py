"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

import os
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode
from typing import Annotated, Dict, Any, List, Optional
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Nested groups read the same files as the root settings
_ENV_FILE_CONFIG = {
    "env_file": ".env",
    "env_file_encoding": "utf-8",
    "case_sensitive": False,
    "extra": "ignore",
}


class DatabaseSettings(BaseSettings):
    """Phrase database configuration"""

    url: str = Field(default="sqlite:///readnlearn.db", description="SQLAlchemy database URL")
    echo: bool = Field(default=False)
    pool_pre_ping: bool = Field(default=True)

    model_config = {"env_prefix": "DB_", **_ENV_FILE_CONFIG}


class ResolverSettings(BaseSettings):
    """Phrase locating and ordering configuration"""

    # Return the unverified saved line/column offset when every text search fails
    stored_position_fallback: bool = Field(default=False)
    fetch_timeout_seconds: float = Field(default=5.0, ge=0.1, le=60.0)
    marker_length: int = Field(default=4, ge=0, le=36)

    model_config = {"env_prefix": "RESOLVER_", **_ENV_FILE_CONFIG}


class SecuritySettings(BaseSettings):
    """CORS configuration for the reader front-end"""

    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["GET", "POST", "DELETE"]
    )
    cors_allow_headers: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', 'cors_allow_methods', 'cors_allow_headers', mode='before')
    @classmethod
    def parse_csv_list(cls, v):
        """Parse comma separated values from environment variables"""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v or []

    model_config = {"env_prefix": "SECURITY_", **_ENV_FILE_CONFIG}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="ReadNLearn Anchor Service")
    app_version: str = Field(default="0.3.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    log_json: bool = Field(default=False)

    # Nested Settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = dict(_ENV_FILE_CONFIG)


def env_files_for(environment: Environment) -> tuple[str, ...]:
    """`.env` then `.env.<environment>`; later files win, missing ones are skipped"""
    return (".env", f".env.{environment.value}")


def build_settings(environment: Optional[str] = None) -> Settings:
    """
    Build settings for one deployment environment.

    Args:
        environment: Target environment; ENVIRONMENT env var or development if None

    Returns:
        Settings where process environment variables override
        `.env.<environment>`, which overrides `.env`
    """
    env = Environment((environment or os.getenv("ENVIRONMENT") or "development").lower())
    env_files = env_files_for(env)
    return Settings(
        _env_file=env_files,
        environment=env,
        database=DatabaseSettings(_env_file=env_files),
        resolver=ResolverSettings(_env_file=env_files),
        security=SecuritySettings(_env_file=env_files),
    )


# Global settings instance
settings = build_settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings(environment: Optional[str] = None) -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = build_settings(environment)
    return settings
