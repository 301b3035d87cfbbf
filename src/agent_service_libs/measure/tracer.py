"""
In-memory call latency tracer.

A tracer keeps an append-only ledger of (index, name, duration) entries and
reports them as a Trace snapshot with per-name averages and an overall sum.

Usage:
    tracer = new_tracer("vpp-calls")

    start = time.monotonic_ns()
    do_call()
    tracer.log_time("interface-dump", start)

    with tracer.measure("route-add"):
        add_route()

    snapshot = tracer.get()

Call sites that may or may not be instrumented hold ``Tracer | None`` and
resolve it with ``tracer_or_noop``.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from agent_common_core.trace_models import Average, Trace, TracedEntry

from agent_service_libs.logging_utils import create_service_logger
from agent_service_libs.measure.duration import format_duration

__all__ = [
    "Tracer",
    "LatencyTracer",
    "NoopTracer",
    "new_tracer",
    "tracer_or_noop",
]


@runtime_checkable
class Tracer(Protocol):
    """Protocol for measuring, storing and listing timed entries."""

    def log_time(self, entity: str, start: int) -> None:
        """
        Record the time elapsed since ``start`` under ``entity``.

        Args:
            entity: Name of the measured call
            start: Start timestamp in nanoseconds from the tracer's clock
                (``time.monotonic_ns`` by default)
        """
        ...

    def get(self) -> Trace:
        """Return a snapshot of all stored entries."""
        ...

    def clear(self) -> None:
        """Remove stored entries. Entry indexes keep counting."""
        ...

    def measure(self, entity: str) -> Any:
        """Context manager timing its body under ``entity``."""
        ...


@dataclass(frozen=True, slots=True)
class _Entry:
    index: int
    name: str
    duration_ns: int


class LatencyTracer:
    """Thread-safe tracer backed by a list ledger.

    One lock serialises log_time, get and clear. The index starts at 1 and
    survives clear(), so indexes are never reused.
    """

    def __init__(
        self,
        name: str,
        logger: Any | None = None,
        clock: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        self._name = name
        self._logger = logger or create_service_logger("measure").bind(tracer=name)
        self._clock = clock
        self._lock = threading.Lock()
        self._index = 1
        self._entries: list[_Entry] = []

    @property
    def name(self) -> str:
        return self._name

    def log_time(self, entity: str, start: int) -> None:
        elapsed = max(self._clock() - start, 0)
        with self._lock:
            self._entries.append(_Entry(index=self._index, name=entity, duration_ns=elapsed))
            self._index += 1

    @contextmanager
    def measure(self, entity: str) -> Iterator[None]:
        start = self._clock()
        try:
            yield
        finally:
            self.log_time(entity, start)

    def get(self) -> Trace:
        with self._lock:
            entries = list(self._entries)

        traced: list[TracedEntry] = []
        totals: dict[str, list[int]] = {}  # name -> [sum_ns, count]
        overall = 0
        for entry in entries:
            overall += entry.duration_ns
            traced.append(
                TracedEntry(
                    index=entry.index,
                    msg_name=entry.name,
                    duration=format_duration(entry.duration_ns),
                )
            )
            bucket = totals.setdefault(entry.name, [0, 0])
            bucket[0] += entry.duration_ns
            bucket[1] += 1

        averages = tuple(
            Average(msg_name=msg_name, average_time=format_duration(total // count))
            for msg_name, (total, count) in totals.items()
        )

        return Trace(
            traced_entries=tuple(traced),
            average_times=averages,
            overall=format_duration(overall),
        )

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries = []
        self._logger.debug("Trace ledger cleared", dropped_entries=dropped)


class NoopTracer:
    """Tracer that records nothing; stands in for an absent tracer."""

    def log_time(self, entity: str, start: int) -> None:
        return None

    @contextmanager
    def measure(self, entity: str) -> Iterator[None]:
        yield

    def get(self) -> Trace:
        return Trace()

    def clear(self) -> None:
        return None


def new_tracer(name: str, logger: Any | None = None) -> LatencyTracer:
    """Create a tracer labelled ``name``."""
    return LatencyTracer(name, logger=logger)


def tracer_or_noop(tracer: Tracer | None) -> Tracer:
    """Return ``tracer``, or a NoopTracer when none is configured."""
    if tracer is None:
        return NoopTracer()
    return tracer
