"""Wire models for latency trace snapshots.

Trace: full snapshot of a tracer ledger.
TracedEntry: one measured call, in append order.
Average: per-name mean duration.

Durations are human-readable strings (e.g. "1.23ms", "500ns"), not numeric
fields. The camelCase aliases (msgName, averageTime, tracedEntries,
averageTimes) are the stable serialized form; dump with ``by_alias=True``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = ["TracedEntry", "Average", "Trace"]

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class TracedEntry(BaseModel):
    """Single measured call."""

    index: int = Field(ge=1, description="Tracer-wide sequence number, never reused")
    msg_name: str = Field(description="Name of the measured entity")
    duration: str = Field(description="Measured duration, compact string form")

    model_config = _WIRE_CONFIG


class Average(BaseModel):
    """Mean duration of every entry recorded under one name."""

    msg_name: str
    average_time: str

    model_config = _WIRE_CONFIG


class Trace(BaseModel):
    """Snapshot of a tracer ledger.

    Built once under the tracer lock; later tracer mutations never reach an
    already returned snapshot.
    """

    traced_entries: tuple[TracedEntry, ...] = ()
    average_times: tuple[Average, ...] = ()
    overall: str = "0s"

    model_config = _WIRE_CONFIG

    def average_for(self, msg_name: str) -> str | None:
        """Return the rendered average for ``msg_name``, or None if never traced."""
        for average in self.average_times:
            if average.msg_name == msg_name:
                return average.average_time
        return None
