"""
Configuration settings for agent service libraries.

Settings are loaded from a .env file and environment variables prefixed with
``AGENT_LIBS_``. Nested TLS fields use a double underscore, e.g.
``AGENT_LIBS_TLS__CA_FILE=/etc/agent/ca.pem``.
"""

from __future__ import annotations

from agent_common_core.config_enums import Environment
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from agent_service_libs.clienttls import ClientTLS


class ServiceLibSettings(BaseSettings):
    """Settings consumed by the host when wiring these libraries."""

    # Service identity
    SERVICE_NAME: str = "agent"
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment for the host service",
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str | None = Field(
        default=None, description="'json' or 'console'; None picks by environment"
    )
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str | None = None

    # Client TLS for data-sync transports
    TLS: ClientTLS = Field(default_factory=ClientTLS)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AGENT_LIBS_",
        env_nested_delimiter="__",
        extra="ignore",
    )
