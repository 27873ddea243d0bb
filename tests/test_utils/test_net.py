"""Tests for network interface helpers."""

import socket
from collections import namedtuple
from unittest.mock import patch

import pytest

from lxcforge.utils.net import (
    InterfaceLookupError,
    get_bridge_network_address,
    get_interface_network,
)


snicaddr = namedtuple("snicaddr", ["family", "address", "netmask", "broadcast", "ptp"])
AF_LINK = getattr(socket, "AF_PACKET", -1)


def fake_addrs(*entries):
    return {"lxcbr0": list(entries)}


@patch("lxcforge.utils.net.psutil.net_if_addrs")
def test_network_address_of_first_ipv4(mock_addrs):
    """Test that the first IPv4 address is used and reduced to its network."""
    mock_addrs.return_value = fake_addrs(
        snicaddr(AF_LINK, "00:16:3e:00:00:00", None, None, None),
        snicaddr(socket.AF_INET6, "fe80::1", "ffff:ffff:ffff:ffff::", None, None),
        snicaddr(socket.AF_INET, "10.0.3.1", "255.255.255.0", None, None),
        snicaddr(socket.AF_INET, "172.16.0.1", "255.255.0.0", None, None),
    )

    assert get_bridge_network_address("lxcbr0") == "10.0.3.0"
    assert str(get_interface_network("lxcbr0")) == "10.0.3.1/24"


@patch("lxcforge.utils.net.psutil.net_if_addrs")
def test_address_without_netmask(mock_addrs):
    """Test a host route address without netmask."""
    mock_addrs.return_value = fake_addrs(snicaddr(socket.AF_INET, "10.0.3.1", None, None, None))

    assert get_bridge_network_address("lxcbr0") == "10.0.3.1"


@patch("lxcforge.utils.net.psutil.net_if_addrs")
def test_missing_interface(mock_addrs):
    mock_addrs.return_value = {}

    with pytest.raises(InterfaceLookupError, match="not found"):
        get_bridge_network_address("lxcbr0")


@patch("lxcforge.utils.net.psutil.net_if_addrs")
def test_interface_without_ipv4(mock_addrs):
    mock_addrs.return_value = fake_addrs(snicaddr(socket.AF_INET6, "fe80::1", None, None, None))

    with pytest.raises(InterfaceLookupError, match="no IPv4"):
        get_bridge_network_address("lxcbr0")


@patch("lxcforge.utils.net.psutil.net_if_addrs")
def test_unparsable_address(mock_addrs):
    mock_addrs.return_value = fake_addrs(snicaddr(socket.AF_INET, "10.0.3.999", "255.255.255.0", None, None))

    with pytest.raises(InterfaceLookupError, match="Invalid address"):
        get_bridge_network_address("lxcbr0")
