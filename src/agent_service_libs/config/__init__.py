"""Configuration utilities for agent service libraries."""

from .settings import ServiceLibSettings

__all__ = ["ServiceLibSettings"]
