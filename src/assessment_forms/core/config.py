"""
Configuration management for the assessment form service.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

import json
from typing import List, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_BACKENDS = ["mongo", "memory"]

# MongoDB refuses documents nested past 100 levels. A form uses 8 levels down
# to its first options, and each level of sub-questions adds 4 more.
MONGO_MAX_NESTING_DEPTH = 22


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    db_name: str = Field(default="assessment_form_db", description="MongoDB database name")
    collection: str = Field(
        default="assessmentforms", description="MongoDB collection for forms"
    )
    timeout_ms: int = Field(
        default=5000, description="Server selection and socket timeout in milliseconds"
    )

    @validator("uri")
    def validate_mongo_uri(cls, v: str) -> str:
        """Validate MongoDB URI format."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MongoDB URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v

    @validator("timeout_ms")
    def validate_timeout(cls, v: int) -> int:
        """Validate storage timeout."""
        if v <= 0:
            raise ValueError("Storage timeout must be positive")
        return v


class FormSettings(BaseSettings):
    """Assessment form model settings."""

    model_config = SettingsConfigDict(env_prefix="FORMS_")

    max_nesting_depth: int = Field(
        default=32, description="Deepest allowed level of nested sub-questions"
    )

    @validator("max_nesting_depth")
    def validate_max_nesting_depth(cls, v: int) -> int:
        """Keep the guard well inside the interpreter's recursion limit."""
        if not 1 <= v <= 200:
            raise ValueError("Max nesting depth must be between 1 and 200")
        return v


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )
    allow_credentials: bool = Field(
        default=True, description="Allow credentials in CORS"
    )

    @validator("allowed_origins", pre=True)
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string format
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="text", description="Log format (json or text)")
    file_path: Optional[str] = Field(default=None, description="Log file path")

    @validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("format")
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Assessment Form Service", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8005, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")
    storage_backend: str = Field(
        default="mongo", description="Form storage backend (mongo or memory)"
    )

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    forms: FormSettings = Field(default_factory=FormSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @validator("app_env")
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @validator("port")
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @validator("storage_backend")
    def validate_storage_backend(cls, v: str) -> str:
        """Validate storage backend."""
        if v.lower() not in STORAGE_BACKENDS:
            raise ValueError(f"Storage backend must be one of: {STORAGE_BACKENDS}")
        return v.lower()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def uses_mongo(self) -> bool:
        return self.storage_backend == "mongo"

    @property
    def max_nesting_depth(self) -> int:
        """Nesting guard in effect, capped at what the storage backend can hold."""
        if self.uses_mongo:
            return min(self.forms.max_nesting_depth, MONGO_MAX_NESTING_DEPTH)
        return self.forms.max_nesting_depth


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance."""
    return settings
