"""Error handling utilities for agent service libraries."""

from .errors import (
    DecodeFailureError,
    IOFailureError,
    MalformedInputError,
    ServiceLibError,
)

__all__ = [
    "ServiceLibError",
    "MalformedInputError",
    "IOFailureError",
    "DecodeFailureError",
]
