"""Tests for plugin lifecycle protocols and the NamedPlugin wrapper."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from agent_service_libs.plugin_protocols import (
    NamedPlugin,
    Plugin,
    PluginName,
    PostInit,
    name_plugin,
)


class RecordingPlugin:
    """Plugin without a name that records lifecycle calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def init(self) -> None:
        self.calls.append("init")

    def close(self) -> None:
        self.calls.append("close")


class RecordingPostInitPlugin(RecordingPlugin):
    def after_init(self) -> None:
        self.calls.append("after_init")


class FullPlugin:
    def init(self) -> None:
        pass

    def close(self) -> None:
        pass

    def name(self) -> str:
        return "full"


class TestProtocols:
    """Tests for structural protocol checks."""

    def test_full_plugin_satisfies_plugin(self) -> None:
        assert isinstance(FullPlugin(), Plugin)

    def test_unnamed_plugin_is_not_a_plugin(self) -> None:
        assert not isinstance(RecordingPlugin(), Plugin)

    def test_post_init_capability(self) -> None:
        assert isinstance(RecordingPostInitPlugin(), PostInit)
        assert not isinstance(RecordingPlugin(), PostInit)


class TestNamedPlugin:
    """Tests for NamedPlugin forwarding."""

    def test_name_plugin_attaches_name(self) -> None:
        named = name_plugin("ifplugin", RecordingPlugin())

        assert isinstance(named, Plugin)
        assert named.name() == "ifplugin"
        assert str(named) == "ifplugin"
        assert isinstance(named.plugin_name, PluginName)

    def test_lifecycle_forwarded(self) -> None:
        inner = RecordingPostInitPlugin()
        named = name_plugin("ifplugin", inner)

        named.init()
        named.after_init()
        named.close()

        assert inner.calls == ["init", "after_init", "close"]

    def test_after_init_skipped_without_capability(self) -> None:
        inner = RecordingPlugin()
        named = NamedPlugin(PluginName("plain"), inner)

        named.after_init()

        assert inner.calls == []

    def test_init_errors_propagate(self) -> None:
        inner = MagicMock()
        inner.init.side_effect = RuntimeError("init failed")
        named = name_plugin("broken", inner)

        with pytest.raises(RuntimeError, match="init failed"):
            named.init()
