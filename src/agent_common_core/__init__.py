"""
Agent Common Core Package.

Enums and wire models shared by the agent plugin host and the
agent_service_libs helpers.
"""

from .config_enums import Environment
from .crud_enums import PutDel
from .error_enums import ErrorCode
from .trace_models import Average, TracedEntry, Trace

__all__ = [
    "Environment",
    "ErrorCode",
    "PutDel",
    "Average",
    "TracedEntry",
    "Trace",
]
