"""Network address helpers: prefix parsing, address-set diffing, MAC formatting."""

from .addrs import (
    NetworkAddress,
    compare_addresses,
    diff_addresses,
    is_ipv6,
    mac_int_to_string,
    parse_address_list,
    parse_ip_with_prefix,
)

__all__ = [
    "NetworkAddress",
    "compare_addresses",
    "diff_addresses",
    "is_ipv6",
    "mac_int_to_string",
    "parse_address_list",
    "parse_ip_with_prefix",
]
