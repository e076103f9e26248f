"""Configuration management for Logo Creator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the LOGOCREATOR_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (LOGOCREATOR_* prefix)
2. .env file in the project root
3. Default values defined in LogoCreatorConfig

Example .env file:
    LOGOCREATOR_REDIS_URL=redis://localhost:6379/0
    LOGOCREATOR_REPLICATE_API_TOKEN=r8_...
    LOGOCREATOR_CLERK_SECRET_KEY=sk_test_...
    LOGOCREATOR_CLERK_JWKS_URL=https://example.clerk.accounts.dev/.well-known/jwks.json

Quota Enforcement
-----------------
Quota enforcement is switched on by the presence of ``redis_url``.  When it
is unset every request skips the limiter, exactly as if the caller had
brought their own Replicate key.

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from logocreator.core.config import config

    print(config.model_id)
    print(config.quota_enabled)
"""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogoCreatorConfig(BaseSettings):
    """Main configuration for Logo Creator.

    Attributes
    ----------
    Quota Settings:
        redis_url : str | None
            Redis connection URL for the fixed-window limiter.  ``None``
            disables quota enforcement.
        quota_limit : int
            Permits per window per user.
        quota_window_days : int
            Length of a quota window in days.
        quota_prefix : str
            Namespace prepended to every limiter key.

    Provider Settings:
        replicate_api_token : SecretStr | None
            Server-side Replicate token used when the caller brings no key.
        model_id : str
            Replicate model reference.

    Identity Settings:
        clerk_secret_key : SecretStr | None
            Clerk Backend API secret, used for metadata writes.
        clerk_jwt_key : str | None
            PEM public key for networkless session token verification.
        clerk_jwks_url : str | None
            JWKS endpoint used when no PEM key is configured.
        clerk_api_url : str
            Clerk Backend API base URL.
        clerk_authorized_parties : list[str]
            Accepted ``azp`` claim values.  Empty disables the check.
        clerk_clock_skew_seconds : float
            Leeway applied to time-based token claims.

    Server Settings:
        http_timeout : float | None
            Timeout in seconds for identity and image download calls.
            ``None`` means no timeout.
        server_host : str
        server_port : int
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LOGOCREATOR_",
        case_sensitive=False,
    )

    # Quota settings
    redis_url: str | None = Field(
        default=None,
        description="Redis URL for quota counting (unset disables quota)",
    )
    quota_limit: int = Field(default=3, ge=1, description="Permits per window")
    quota_window_days: int = Field(default=60, ge=1, description="Window length in days")
    quota_prefix: str = Field(default="logocreator", description="Limiter key namespace")

    # Provider settings
    replicate_api_token: SecretStr | None = Field(
        default=None,
        description="Default Replicate API token",
    )
    model_id: str = Field(
        default="black-forest-labs/flux-1.1-pro",
        description="Replicate model used for logo generation",
    )

    # Identity settings
    clerk_secret_key: SecretStr | None = Field(
        default=None,
        description="Clerk Backend API secret key",
    )
    clerk_jwt_key: str | None = Field(
        default=None,
        description="PEM public key for session token verification",
    )
    clerk_jwks_url: str | None = Field(
        default=None,
        description="JWKS URL for session token verification",
    )
    clerk_api_url: str = Field(
        default="https://api.clerk.com/v1",
        description="Clerk Backend API base URL",
    )
    clerk_authorized_parties: list[str] = Field(
        default_factory=list,
        description="Accepted azp claim values (empty disables the check)",
    )
    clerk_clock_skew_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Leeway in seconds for session token exp/nbf/iat checks",
    )

    # Server settings
    http_timeout: float | None = Field(
        default=None,
        description="Timeout in seconds for outbound HTTP calls (None = no timeout)",
    )
    server_host: str = Field(default="0.0.0.0", description="Server bind address")
    server_port: int = Field(default=8000, ge=1024, le=65535, description="Server port")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    @property
    def quota_enabled(self) -> bool:
        """Whether a quota backend is configured."""
        return bool(self.redis_url)

    @property
    def quota_window_seconds(self) -> int:
        return self.quota_window_days * 24 * 60 * 60


# Global configuration instance
# Loads values from environment variables (LOGOCREATOR_* prefix) and .env file.
config = LogoCreatorConfig()
