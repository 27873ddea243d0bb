"""Tests for runtime startup."""

from unittest.mock import MagicMock, patch

import pytest

from lxcforge.errors import FatalStartupError
from lxcforge.models.config import LxcForgeConfig
from lxcforge.models.container import ContainerDescriptor
from lxcforge.models.state import ResolvedState
from lxcforge.runtime.bootstrap import LxcRuntime, bootstrap
from lxcforge.runtime.sysinit import is_init_mode


@pytest.fixture
def container():
    return ContainerDescriptor.model_validate({
        "Id": "abc123",
        "NetworkSettings": {"IpAddress": "10.0.3.15", "IpPrefixLen": 24},
        "Mountpoint": {"Root": "/rootfs"},
        "SysInitPath": "/usr/bin/lxcforge",
    })


@pytest.fixture
def reconciler():
    mock = MagicMock()
    mock.reconcile.return_value = ResolvedState(resolv_conf_path="/state/resolv.conf", rewritten=True)
    return mock


@patch("lxcforge.runtime.bootstrap.is_init_mode", return_value=False)
def test_bootstrap_builds_runtime(mock_init_mode, reconciler, container):
    """Test reconciliation followed by template compilation."""
    runtime = bootstrap(config=LxcForgeConfig(), reconciler=reconciler)

    assert isinstance(runtime, LxcRuntime)
    reconciler.reconcile.assert_called_once()
    assert runtime.resolved.resolv_conf_path == "/state/resolv.conf"
    assert "lxc.mount.entry = /state/resolv.conf /rootfs/etc/resolv.conf none bind,ro 0 0" in (
        runtime.render(container).splitlines()
    )


@patch("lxcforge.runtime.bootstrap.is_init_mode", return_value=False)
def test_bootstrap_uses_configured_network(mock_init_mode, reconciler, container):
    config = LxcForgeConfig(network={"bridge_iface": "br0"})

    runtime = bootstrap(config=config, reconciler=reconciler)

    assert "lxc.network.link = br0" in runtime.render(container).splitlines()


@patch("lxcforge.runtime.bootstrap.is_init_mode", return_value=False)
def test_bootstrap_propagates_fatal_errors(mock_init_mode, reconciler):
    """Test that startup failures reach the caller."""
    reconciler.reconcile.side_effect = FatalStartupError("read-resolv-conf", "No such file")

    with pytest.raises(FatalStartupError):
        bootstrap(config=LxcForgeConfig(), reconciler=reconciler)


@patch("lxcforge.runtime.bootstrap.LxcTemplateEngine.compile")
@patch("lxcforge.runtime.bootstrap.is_init_mode", return_value=True)
def test_init_mode_hands_off(mock_init_mode, mock_compile, reconciler):
    """Test that init mode skips reconciliation and compilation."""
    handoff = MagicMock()

    assert bootstrap(config=LxcForgeConfig(), reconciler=reconciler, init_handoff=handoff) is None

    handoff.assert_called_once_with()
    reconciler.reconcile.assert_not_called()
    mock_compile.assert_not_called()
    mock_init_mode.assert_called_once_with("/sbin/init")


@patch("lxcforge.runtime.bootstrap.is_init_mode", return_value=False)
def test_bootstrap_loads_config_dir(mock_init_mode, tmp_path, reconciler):
    (tmp_path / "config.yaml").write_text("network:\n  mtu: 9000\n")

    runtime = bootstrap(config_dir=tmp_path, reconciler=reconciler)

    assert runtime.config.network.mtu == 9000


class TestInitMode:
    """Test init mode detection."""

    def test_started_as_init(self):
        with patch("sys.argv", ["/sbin/init"]):
            assert is_init_mode("/sbin/init") is True

    def test_started_normally(self):
        with patch("sys.argv", ["/usr/bin/lxcforge"]):
            assert is_init_mode("/sbin/init") is False
