"""
Data-synchronisation transport protocols.

A transport (etcd, a gRPC stream, a local bus, ...) lets plugins watch key
prefixes and publish values. Watchers receive two independent event
streams: change events for individual keys, and one resync event per
subscription carrying the full state under the watched prefixes. No
ordering between the two streams is promised.

Payloads are pydantic models; how a transport encodes them on the wire is
its own business.

Usage:
    from agent_service_libs.datasync_protocols import TransportAdapter

    registration = transport.watch_data(
        "ifplugin", change_queue, resync_queue, "config/vpp/v2/interfaces/"
    )
    ...
    registration.release()
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Protocol, TypeVar, runtime_checkable

from agent_common_core.crud_enums import PutDel
from pydantic import BaseModel

__all__ = [
    "T_Payload",
    "EventSink",
    "KeyVal",
    "ChangeEvent",
    "ResyncEvent",
    "WatchDataRegistration",
    "Watcher",
    "Publisher",
    "TransportAdapter",
]

T_Payload = TypeVar("T_Payload", bound=BaseModel)
T_Event = TypeVar("T_Event", contravariant=True)


@runtime_checkable
class EventSink(Protocol[T_Event]):
    """Unidirectional event channel; ``queue.Queue`` satisfies it."""

    def put(self, item: T_Event) -> None: ...


class KeyVal(Protocol):
    """A stored key with its current value."""

    @property
    def key(self) -> str: ...

    @property
    def revision(self) -> int: ...

    def get_value(self, model: type[T_Payload]) -> T_Payload:
        """Decode the stored value into ``model``."""
        ...


class ChangeEvent(Protocol):
    """Change of a single watched key."""

    @property
    def key(self) -> str: ...

    @property
    def change_type(self) -> PutDel: ...

    @property
    def revision(self) -> int: ...

    def get_value(self, model: type[T_Payload]) -> T_Payload:
        """Decode the new value into ``model``. Undefined for DELETE changes."""
        ...

    def get_prev_value(self, model: type[T_Payload]) -> T_Payload | None:
        """Decode the previous value, or return None if the key was new."""
        ...

    def done(self, error: BaseException | None) -> None:
        """Acknowledge processing; ``error`` reports a failed apply."""
        ...


class ResyncEvent(Protocol):
    """Full state of every watched prefix, delivered once per subscription."""

    def get_values(self) -> Mapping[str, Iterator[KeyVal]]:
        """Map each watched key prefix to the key/values stored under it."""
        ...

    def done(self, error: BaseException | None) -> None:
        """Acknowledge the resync; ``error`` reports a failed apply."""
        ...


@runtime_checkable
class WatchDataRegistration(Protocol):
    """Handle of an active subscription; releasing it revokes the subscription."""

    def release(self) -> None: ...


@runtime_checkable
class Watcher(Protocol):
    """Protocol for subscribing to key prefixes of a data-sync transport."""

    def watch_data(
        self,
        resync_name: str,
        change_sink: EventSink[ChangeEvent],
        resync_sink: EventSink[ResyncEvent],
        *key_prefixes: str,
    ) -> WatchDataRegistration:
        """
        Subscribe to changes under ``key_prefixes``.

        Args:
            resync_name: Name of the subscriber, used to group resyncs
            change_sink: Receives a ChangeEvent per changed key
            resync_sink: Receives a ResyncEvent per subscription
            key_prefixes: Key prefixes to watch

        Returns:
            Registration handle; call ``release()`` to stop delivery
        """
        ...


@runtime_checkable
class Publisher(Protocol):
    """Protocol for publishing values to a data-sync transport."""

    def publish_data(self, key: str, message: BaseModel) -> None:
        """
        Publish ``message`` under ``key``.

        Args:
            key: Destination key
            message: Value to store
        """
        ...


@runtime_checkable
class TransportAdapter(Watcher, Publisher, Protocol):
    """Transport supporting both watching and publishing."""
