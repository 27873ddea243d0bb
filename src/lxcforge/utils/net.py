"""Host network interface helpers."""

import ipaddress
import logging
import socket

import psutil


logger = logging.getLogger(__name__)


class InterfaceLookupError(Exception):
    """Raised when an interface or its IPv4 address cannot be resolved."""


def get_interface_network(iface: str) -> ipaddress.IPv4Interface:
    """Return the first IPv4 address assigned to ``iface`` with its prefix.

    Raises:
        InterfaceLookupError: interface missing, has no IPv4 address, or the
            address/netmask pair does not parse.
    """
    try:
        addrs = psutil.net_if_addrs()
    except (OSError, RuntimeError) as e:
        raise InterfaceLookupError(f"Unable to enumerate interfaces: {e}") from e

    if iface not in addrs:
        raise InterfaceLookupError(f"Interface {iface} not found")

    ipv4 = [a for a in addrs[iface] if a.family == socket.AF_INET]
    if not ipv4:
        raise InterfaceLookupError(f"Interface {iface} has no IPv4 address")

    first = ipv4[0]
    try:
        if first.netmask:
            interface = ipaddress.IPv4Interface(f"{first.address}/{first.netmask}")
        else:
            interface = ipaddress.IPv4Interface(first.address)
    except ValueError as e:
        raise InterfaceLookupError(
            f"Invalid address {first.address}/{first.netmask} on {iface}: {e}"
        ) from e

    logger.debug(f"Interface {iface} has address {interface}")
    return interface


def get_bridge_network_address(iface: str) -> str:
    """Return the network address of the interface's first IPv4 address.

    ``10.0.3.1/24`` yields ``10.0.3.0``.
    """
    return str(get_interface_network(iface).network.network_address)
