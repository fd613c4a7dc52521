"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and
validation. Every variable is prefixed with ``TELESCOPE_``.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from telescope.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.response_size_limit)
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TELESCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )

    # -------------------------------------------------------------------------
    # Capture Switches
    # -------------------------------------------------------------------------
    enabled: bool = Field(
        default=True,
        description="Master switch; when false nothing is captured",
    )
    enabled_kinds: str = Field(
        default="request",
        description="Comma-separated list of enabled capture kinds",
    )

    @property
    def enabled_kinds_list(self) -> list[str]:
        """Parse enabled capture kinds into a list."""
        return [k.lower() for k in _split_csv(self.enabled_kinds)]

    # -------------------------------------------------------------------------
    # Payload Limits and Redaction
    # -------------------------------------------------------------------------
    response_size_limit: int = Field(
        default=64,
        description="Largest payload captured verbatim, in KB",
    )
    hidden_response_parameters: str = Field(
        default="",
        description="Comma-separated dotted paths masked in response payloads",
    )
    hidden_request_parameters: str = Field(
        default="password,password_confirmation",
        description="Comma-separated dotted paths masked in request payloads",
    )
    hidden_request_headers: str = Field(
        default="authorization,cookie,x-api-key",
        description="Comma-separated header names masked in captured headers",
    )

    @property
    def hidden_response_parameters_list(self) -> list[str]:
        return _split_csv(self.hidden_response_parameters)

    @property
    def hidden_request_parameters_list(self) -> list[str]:
        return _split_csv(self.hidden_request_parameters)

    @property
    def hidden_request_headers_list(self) -> list[str]:
        return [h.lower() for h in _split_csv(self.hidden_request_headers)]

    # -------------------------------------------------------------------------
    # Path Rules
    # -------------------------------------------------------------------------
    ignore_paths: str = Field(
        default="",
        description="Comma-separated glob patterns of paths that are never captured",
    )
    only_paths: str = Field(
        default="",
        description="Comma-separated glob patterns that are always captured (patch-only)",
    )

    @property
    def ignore_paths_list(self) -> list[str]:
        return _split_csv(self.ignore_paths)

    @property
    def only_paths_list(self) -> list[str]:
        return _split_csv(self.only_paths)

    # -------------------------------------------------------------------------
    # Request Classification
    # -------------------------------------------------------------------------
    trusted_proxy_header: str = Field(
        default="x-real-ip",
        description="Header holding the client address set by a trusted proxy",
    )
    rpc_path_prefixes: str = Field(
        default="",
        description="Comma-separated path prefixes served by the RPC transport",
    )

    @property
    def rpc_path_prefixes_list(self) -> list[str]:
        return _split_csv(self.rpc_path_prefixes)

    # -------------------------------------------------------------------------
    # Recorder
    # -------------------------------------------------------------------------
    recorder: str = Field(
        default="log",
        description="Recorder backend: log, file or memory",
    )
    capture_dir: str = Field(
        default="./telescope",
        description="Directory used by the file recorder",
    )
    max_workers: int = Field(
        default=4,
        description="Worker threads for deferred capture",
    )
    max_pending_captures: int = Field(
        default=1000,
        description="Captures allowed to wait or run at once; extra ones are dropped",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("recorder")
    @classmethod
    def validate_recorder(cls, v: str) -> str:
        """Ensure the recorder backend is known."""
        valid_recorders = {"log", "file", "memory"}
        if v.lower() not in valid_recorders:
            raise ValueError(
                f"Invalid recorder '{v}'. Must be one of: {valid_recorders}"
            )
        return v.lower()

    @field_validator("response_size_limit", "max_workers", "max_pending_captures")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be a positive integer")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {valid_levels}")
        return v.upper()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
