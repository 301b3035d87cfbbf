"""
agent_common_core.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    MALFORMED_INPUT = "MALFORMED_INPUT"  # Address text, prefix length, MAC value
    IO_FAILURE = "IO_FAILURE"  # TLS asset cannot be read
    DECODE_FAILURE = "DECODE_FAILURE"  # PEM without certificates, bad keypair
