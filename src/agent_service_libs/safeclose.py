"""
Closing helpers for plugin resources and watch registrations.

``close`` tolerates None and objects without a close method; ``close_all``
closes everything it is given even when some closes fail, so shutdown paths
never leak the remaining resources.
"""

from __future__ import annotations

from typing import Any

from agent_service_libs.logging_utils import create_service_logger

__all__ = ["close", "close_all"]

logger = create_service_logger("safeclose")

_CLOSE_METHODS = ("close", "release")


def close(obj: Any) -> None:
    """Call ``close()`` (or ``release()``) on ``obj`` if it has one.

    Errors raised by the close method propagate to the caller.
    """
    if obj is None:
        return
    for method_name in _CLOSE_METHODS:
        method = getattr(obj, method_name, None)
        if callable(method):
            method()
            return


def close_all(*objs: Any) -> list[Exception | None]:
    """Close every object, collecting failures instead of stopping at the first.

    Returns:
        One slot per argument: the exception raised while closing it, or None
    """
    details: list[Exception | None] = [None] * len(objs)
    for i, obj in enumerate(objs):
        try:
            close(obj)
        except Exception as e:
            details[i] = e
            logger.error(
                "Failed to close resource",
                resource=type(obj).__name__,
                position=i,
                error=str(e),
                exc_info=True,
            )
    return details
