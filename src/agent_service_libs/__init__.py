"""
Agent Service Libraries Package.

Shared contracts and helpers consumed by the agent plugin host: plugin and
data-sync protocols, interface address diffing, call latency tracing and
client TLS configuration.
"""

from agent_service_libs.clienttls import ClientTLS, ClientTLSConfig, create_tls_config
from agent_service_libs.measure import (
    LatencyTracer,
    NoopTracer,
    Tracer,
    format_duration,
    new_tracer,
    tracer_or_noop,
)
from agent_service_libs.netutils import (
    NetworkAddress,
    diff_addresses,
    mac_int_to_string,
    parse_ip_with_prefix,
)

__all__ = [
    "ClientTLS",
    "ClientTLSConfig",
    "create_tls_config",
    "Tracer",
    "LatencyTracer",
    "NoopTracer",
    "new_tracer",
    "tracer_or_noop",
    "format_duration",
    "NetworkAddress",
    "diff_addresses",
    "parse_ip_with_prefix",
    "mac_int_to_string",
]

# Protocols, settings and error types are imported from their modules:
# - agent_service_libs.plugin_protocols
# - agent_service_libs.datasync_protocols
# - agent_service_libs.config
# - agent_service_libs.error_handling
