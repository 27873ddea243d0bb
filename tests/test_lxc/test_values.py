"""Tests for render-time derived values."""

import pytest

from lxcforge.lxc.values import get_memory_swap, ResolvConfPathHelper
from lxcforge.models.container import ContainerConfig
from lxcforge.models.state import ResolvedState


class TestGetMemorySwap:
    """Test swap limit derivation."""

    def test_defaults_to_twice_memory(self):
        assert get_memory_swap(ContainerConfig(memory=100, memory_swap=0)) == 200

    def test_positive_swap_still_doubles_memory(self):
        assert get_memory_swap(ContainerConfig(memory=100, memory_swap=50)) == 200

    def test_negative_swap_disables(self):
        assert get_memory_swap(ContainerConfig(memory=100, memory_swap=-1)) == 0

    def test_negative_swap_without_memory(self):
        assert get_memory_swap(ContainerConfig(memory=0, memory_swap=-1)) == 0


class TestResolvConfPathHelper:
    """Test resolver path helper."""

    def test_returns_resolved_path(self):
        helper = ResolvConfPathHelper(ResolvedState(resolv_conf_path="/var/lib/docker/resolv.conf"))

        assert helper() == "/var/lib/docker/resolv.conf"

    def test_unresolved_raises(self):
        with pytest.raises(RuntimeError):
            ResolvConfPathHelper()()
