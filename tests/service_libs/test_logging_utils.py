"""
Unit tests for logging_utils processors and configuration.

Focuses on side effects (handlers, structlog configuration) rather than
rendered log content.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import pytest
import structlog
from agent_common_core.config_enums import Environment
from agent_service_libs.config import ServiceLibSettings
from agent_service_libs.logging_utils import (
    add_service_context,
    configure_logging_from_settings,
    configure_service_logging,
    create_service_logger,
)
from structlog.testing import capture_logs


class TestAddServiceContext:
    """Tests for the add_service_context processor."""

    def test_adds_identity_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVICE_NAME", "vpp-agent")
        monkeypatch.setenv("ENVIRONMENT", "production")
        event_dict: dict[str, Any] = {"event": "test message", "level": "info"}

        result = add_service_context(None, "info", event_dict)

        assert result["service.name"] == "vpp-agent"
        assert result["deployment.environment"] == "production"
        assert result["event"] == "test message"
        assert result["level"] == "info"

    def test_defaults_when_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SERVICE_NAME", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        result = add_service_context(None, "", {})

        assert result["service.name"] == "unknown"
        assert result["deployment.environment"] == "development"


@pytest.mark.usefixtures("clean_logging_config")
class TestConfigureServiceLogging:
    """Tests for configure_service_logging."""

    @pytest.fixture(autouse=True)
    def _isolated_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVICE_NAME", "test-service")
        monkeypatch.setenv("ENVIRONMENT", "testing")
        for name in ("LOG_FORMAT", "LOG_TO_FILE", "LOG_FILE_PATH"):
            monkeypatch.delenv(name, raising=False)

    def test_stdout_handler_only_by_default(self, tmp_path: Path) -> None:
        configure_service_logging("test-service", log_level="DEBUG")

        assert len(logging.root.handlers) == 1
        assert not isinstance(logging.root.handlers[0], RotatingFileHandler)
        assert logging.root.level == logging.DEBUG
        assert list(tmp_path.glob("*.log")) == []

    def test_file_handler_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        log_file_path = tmp_path / "nested" / "agent.log"
        monkeypatch.setenv("LOG_TO_FILE", "yes")
        monkeypatch.setenv("LOG_FILE_PATH", str(log_file_path))
        monkeypatch.setenv("LOG_MAX_BYTES", "2048")
        monkeypatch.setenv("LOG_BACKUP_COUNT", "3")

        configure_service_logging("test-service")

        file_handlers = [h for h in logging.root.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 2048
        assert file_handlers[0].backupCount == 3
        assert log_file_path.parent.is_dir()

    def test_json_renderer_in_production(self) -> None:
        configure_service_logging("test-service", environment="production")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_in_development(self) -> None:
        configure_service_logging("test-service", environment="development")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_explicit_format_overrides_environment(self) -> None:
        configure_service_logging("test-service", environment="development", log_format="json")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_configure_from_settings(self, tmp_path: Path) -> None:
        log_file = tmp_path / "from-settings.log"
        settings = ServiceLibSettings(
            SERVICE_NAME="settings-agent",
            ENVIRONMENT=Environment.STAGING,
            LOG_LEVEL="WARNING",
            LOG_FORMAT="json",
            LOG_TO_FILE=True,
            LOG_FILE_PATH=str(log_file),
        )

        configure_logging_from_settings(settings)

        assert logging.root.level == logging.WARNING
        assert any(isinstance(h, RotatingFileHandler) for h in logging.root.handlers)
        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)


class TestCreateServiceLogger:
    """Tests for create_service_logger."""

    def test_binds_logger_name(self) -> None:
        with capture_logs() as logs:
            create_service_logger("measure").info("ledger cleared", dropped_entries=2)

        assert logs == [
            {
                "event": "ledger cleared",
                "log_level": "info",
                "logger_name": "measure",
                "dropped_entries": 2,
            }
        ]
