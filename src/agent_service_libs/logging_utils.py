"""
Structured logging utilities for agent service libraries using structlog.

Helpers in this package log through ``create_service_logger``; the host
framework calls ``configure_service_logging`` once at startup (or
``configure_logging_from_settings`` with a ServiceLibSettings instance).

Key Features:
- Service identity fields on every record (service.name, deployment.environment)
- Context binding with contextvars
- JSON output for production, colored console output otherwise
- Optional file-based logging with rotation
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor

if TYPE_CHECKING:
    from agent_service_libs.config import ServiceLibSettings

_TRUTHY = ("true", "1", "yes")


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Add service identity to all logs.

    Fields added:
    - service.name: Logical service name (from SERVICE_NAME env var)
    - deployment.environment: Environment (development/staging/production)

    Args:
        logger: The logger instance (unused but required by structlog)
        method_name: The logging method name (unused but required by structlog)
        event_dict: The log event dictionary to enrich

    Returns:
        Enriched event dictionary with service context fields
    """
    event_dict["service.name"] = os.getenv("SERVICE_NAME", "unknown")
    event_dict["deployment.environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def _build_processors(use_json: bool) -> list[Processor]:
    processors: list[Processor] = [
        merge_contextvars,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
    ]
    if use_json:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # Pretty exceptions in development; format_exc_info would flatten them
        processors += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    return processors


def _build_file_handler(service_name: str, log_file_path: str | None) -> logging.Handler:
    if log_file_path is None:
        log_file_path = os.getenv("LOG_FILE_PATH", f"./logs/{service_name}.log")

    log_file = Path(log_file_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    return RotatingFileHandler(
        filename=str(log_file),
        maxBytes=int(os.getenv("LOG_MAX_BYTES", "10485760")),  # 10MB default
        backupCount=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )


def configure_service_logging(
    service_name: str,
    environment: str | None = None,
    log_level: str = "INFO",
    log_to_file: bool | None = None,
    log_file_path: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Configure structlog for a host service embedding these libraries.

    Args:
        service_name: Name of the service (e.g., "vpp-agent")
        environment: Environment name (defaults to ENVIRONMENT env var)
        log_level: Logging level (defaults to "INFO")
        log_to_file: Enable file-based logging (defaults to LOG_TO_FILE env var)
        log_file_path: Path to log file (defaults to LOG_FILE_PATH env var
            or ./logs/{service_name}.log)
        log_format: "json" or "console" (defaults to LOG_FORMAT env var, then
            JSON in production and console elsewhere)

    Environment Variables:
        LOG_FORMAT: Output format - "json" or "console"
        LOG_TO_FILE: Enable file logging (default: false)
        LOG_FILE_PATH: Custom log file path
        LOG_MAX_BYTES: Max bytes per log file before rotation (default: 10MB)
        LOG_BACKUP_COUNT: Number of backup log files to keep (default: 5)
    """
    if environment is None:
        environment = os.getenv("ENVIRONMENT", "development")

    # Processors read identity from the environment
    os.environ.setdefault("SERVICE_NAME", service_name)
    os.environ.setdefault("ENVIRONMENT", environment)

    if log_to_file is None:
        log_to_file = os.getenv("LOG_TO_FILE", "false").lower() in _TRUTHY

    if log_format is None:
        log_format = os.getenv("LOG_FORMAT", "")
    log_format = log_format.lower()
    use_json = log_format == "json" or (not log_format and environment == "production")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_to_file:
        handlers.append(_build_file_handler(service_name, log_file_path))

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    structlog.configure(
        processors=_build_processors(use_json),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(settings: ServiceLibSettings) -> None:
    """Apply ``configure_service_logging`` using values from library settings."""
    configure_service_logging(
        service_name=settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
        log_to_file=settings.LOG_TO_FILE,
        log_file_path=settings.LOG_FILE_PATH,
        log_format=settings.LOG_FORMAT,
    )


def create_service_logger(name: str | None = None) -> Any:
    """
    Create a service logger with optional name binding.

    Args:
        name: Optional logger name (e.g., "measure", "netutils", "clienttls")

    Returns:
        A configured structlog BoundLogger instance
    """
    logger = structlog.get_logger()

    if name:
        logger = logger.bind(logger_name=name)

    return logger
