"""
Plugin lifecycle protocols for the agent host framework.

The host calls ``init`` on every plugin in order, then ``after_init`` on the
plugins that implement PostInit, and ``close`` on shutdown. Failures are
raised as exceptions; the host decides how to unwind.

Architecture:
- Plugin: init/close/name lifecycle contract
- PostInit: optional second-phase initialization hook
- NamedPlugin: attaches a name to a plugin that does not carry one
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = [
    "Plugin",
    "PostInit",
    "PluginName",
    "NamedPlugin",
    "name_plugin",
]


@runtime_checkable
class Plugin(Protocol):
    """Protocol every plugin managed by the host implements."""

    def init(self) -> None:
        """Initialize the plugin. Raise to abort host startup."""
        ...

    def close(self) -> None:
        """Release resources held by the plugin."""
        ...

    def name(self) -> str:
        """Return the unique plugin name."""
        ...


@runtime_checkable
class PostInit(Protocol):
    """Optional capability: called once every plugin's ``init`` has succeeded."""

    def after_init(self) -> None: ...


class _UnnamedPlugin(Protocol):
    def init(self) -> None: ...

    def close(self) -> None: ...


class PluginName(str):
    """Name under which a plugin is registered with the host."""

    __slots__ = ()


class NamedPlugin:
    """Plugin wrapper carrying an explicit name.

    Lifecycle calls are forwarded to the wrapped plugin; ``after_init`` is
    forwarded only when the wrapped plugin provides it.
    """

    def __init__(self, plugin_name: PluginName, plugin: _UnnamedPlugin) -> None:
        self.plugin_name = plugin_name
        self.plugin = plugin

    def init(self) -> None:
        self.plugin.init()

    def close(self) -> None:
        self.plugin.close()

    def name(self) -> str:
        return str(self.plugin_name)

    def after_init(self) -> None:
        if isinstance(self.plugin, PostInit):
            self.plugin.after_init()

    def __str__(self) -> str:
        return str(self.plugin_name)

    def __repr__(self) -> str:
        return f"NamedPlugin({self.plugin_name!r}, {self.plugin!r})"


def name_plugin(name: str, plugin: _UnnamedPlugin) -> NamedPlugin:
    """Wrap ``plugin`` so that it reports ``name``."""
    return NamedPlugin(PluginName(name), plugin)
