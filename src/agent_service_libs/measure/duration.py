"""Compact rendering of nanosecond durations: 0s, 500ns, 1.5µs, 1.23ms, 1m30s."""

from __future__ import annotations

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE


def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(nanoseconds: int) -> str:
    """Render ``nanoseconds`` using the largest fitting unit.

    Sub-second values use a single unit (ns, µs, ms) with a trimmed decimal
    fraction; longer values are split into hours, minutes and seconds.
    """
    if nanoseconds == 0:
        return "0s"

    sign = "-" if nanoseconds < 0 else ""
    value = abs(nanoseconds)

    if value < MICROSECOND:
        return f"{sign}{value}ns"
    if value < MILLISECOND:
        return f"{sign}{_with_fraction(value, MICROSECOND)}µs"
    if value < SECOND:
        return f"{sign}{_with_fraction(value, MILLISECOND)}ms"

    hours, value = divmod(value, HOUR)
    minutes, value = divmod(value, MINUTE)
    seconds = f"{_with_fraction(value, SECOND)}s"

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"
