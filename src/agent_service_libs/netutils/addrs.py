"""
Interface address parsing and set reconciliation.

Addresses are handled as NetworkAddress values: the packed interface IP
(host bits preserved) plus the packed netmask. ``diff_addresses`` computes
what to delete from and add to a live network stack so that its addresses
match a desired configuration.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key

from agent_service_libs.error_handling import MalformedInputError
from agent_service_libs.logging_utils import create_service_logger

__all__ = [
    "NetworkAddress",
    "compare_addresses",
    "diff_addresses",
    "is_ipv6",
    "parse_ip_with_prefix",
    "parse_address_list",
    "mac_int_to_string",
]

logger = create_service_logger("netutils")

IPV4_DEFAULT_PREFIX = "/32"
IPV6_DEFAULT_PREFIX = "/128"

_MAC_BITS = 48


@dataclass(frozen=True, order=True)
class NetworkAddress:
    """Interface address as (ip, mask) byte strings of equal length.

    Ordering is lexicographic on ``ip``, then on ``mask``.
    """

    ip: bytes
    mask: bytes

    def __post_init__(self) -> None:
        if len(self.ip) not in (4, 16) or len(self.ip) != len(self.mask):
            raise ValueError(
                f"ip and mask must both be 4 or 16 bytes, got {len(self.ip)} and {len(self.mask)}"
            )

    @property
    def is_ipv6(self) -> bool:
        return len(self.ip) == 16

    @property
    def prefix_length(self) -> int:
        return bin(int.from_bytes(self.mask, "big")).count("1")

    def to_interface(self) -> ipaddress.IPv4Interface | ipaddress.IPv6Interface:
        """Return the stdlib interface object for this address."""
        return ipaddress.ip_interface((self.ip, self.prefix_length))

    def __str__(self) -> str:
        return f"{ipaddress.ip_address(self.ip)}/{self.prefix_length}"


def compare_addresses(a: NetworkAddress, b: NetworkAddress) -> int:
    """Three-way comparison in canonical address order."""
    if a.ip != b.ip:
        return -1 if a.ip < b.ip else 1
    if a.mask != b.mask:
        return -1 if a.mask < b.mask else 1
    return 0


_canonical_key = cmp_to_key(compare_addresses)


def diff_addresses(
    new: Sequence[NetworkAddress], old: Sequence[NetworkAddress]
) -> tuple[list[NetworkAddress], list[NetworkAddress]]:
    """
    Calculate the difference between two sets of interface addresses.

    Args:
        new: Desired addresses
        old: Addresses currently configured

    Returns:
        (to_delete, to_add), both in canonical order. Applying them to ``old``
        yields ``new``. Inputs are left untouched.
    """
    new_sorted = sorted(new, key=_canonical_key)
    old_sorted = sorted(old, key=_canonical_key)

    to_delete: list[NetworkAddress] = []
    to_add: list[NetworkAddress] = []

    i = j = 0
    while i < len(new_sorted) and j < len(old_sorted):
        order = compare_addresses(new_sorted[i], old_sorted[j])
        if order == 0:
            i += 1
            j += 1
        elif order < 0:
            to_add.append(new_sorted[i])
            i += 1
        else:
            to_delete.append(old_sorted[j])
            j += 1

    to_add.extend(new_sorted[i:])
    to_delete.extend(old_sorted[j:])

    logger.debug(
        "Address diff computed",
        new_count=len(new_sorted),
        old_count=len(old_sorted),
        to_delete=len(to_delete),
        to_add=len(to_add),
    )
    return to_delete, to_add


def is_ipv6(address: str) -> bool:
    """Classify address text as IPv6 (contains ':') or IPv4 (contains '.')."""
    if ":" in address:
        return True
    if "." in address:
        return False
    raise MalformedInputError(address, "Unknown IP version")


def parse_ip_with_prefix(text: str) -> tuple[NetworkAddress, bool]:
    """
    Parse ``ADDR`` or ``ADDR/LEN`` into an interface address.

    A missing prefix defaults to /32 for IPv4 and /128 for IPv6. The host
    bits of the address are kept, so "192.168.1.5/24" keeps ip 192.168.1.5.

    Returns:
        (address, is_v6) where is_v6 follows the textual form, so IPv4-mapped
        IPv6 text such as "::ffff:10.0.0.1" counts as IPv6.

    Raises:
        MalformedInputError: on a bad split, bad prefix, bad address or
            unknown IP version
    """
    if "/" in text:
        parts = text.split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise MalformedInputError(text, "Incorrect ip address and prefix format")
        address, prefix = parts
        if not prefix.isdigit():
            raise MalformedInputError(text, "Invalid prefix length")
        v6 = is_ipv6(address)
        cidr = text
    else:
        address = text
        v6 = is_ipv6(address)
        cidr = address + (IPV6_DEFAULT_PREFIX if v6 else IPV4_DEFAULT_PREFIX)

    try:
        interface = ipaddress.ip_interface(cidr)
    except ValueError as e:
        raise MalformedInputError(text, f"Invalid CIDR address ({e})") from e
    if getattr(interface.ip, "scope_id", None):
        raise MalformedInputError(text, "Invalid CIDR address (zoned address not allowed)")

    return NetworkAddress(ip=interface.ip.packed, mask=interface.netmask.packed), v6


def parse_address_list(texts: Iterable[str]) -> list[NetworkAddress]:
    """Parse configured address strings, skipping empty entries.

    The first malformed entry aborts parsing with MalformedInputError.
    """
    result: list[NetworkAddress] = []
    for text in texts:
        if not text:
            continue
        address, _ = parse_ip_with_prefix(text)
        result.append(address)
    return result


def mac_int_to_string(mac: int) -> str:
    """Render a 48-bit integer as a colon separated MAC, e.g. 00:00:00:00:00:ff."""
    if mac < 0 or mac >> _MAC_BITS:
        raise MalformedInputError(str(mac), "MAC address out of 48-bit range")
    return ":".join(f"{octet:02x}" for octet in mac.to_bytes(_MAC_BITS // 8, "big"))
