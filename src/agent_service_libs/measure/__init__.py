"""Call latency measurement: tracers and duration formatting."""

from .duration import format_duration
from .tracer import LatencyTracer, NoopTracer, Tracer, new_tracer, tracer_or_noop

__all__ = [
    "Tracer",
    "LatencyTracer",
    "NoopTracer",
    "new_tracer",
    "tracer_or_noop",
    "format_duration",
]
