"""
agent_common_core.crud_enums - Change types carried by data-sync events.
"""

from __future__ import annotations

from enum import Enum


class PutDel(str, Enum):
    """Kind of change a data-sync event describes."""

    PUT = "Put"  # Create or update
    DELETE = "Delete"
