"""Host resolv.conf reconciliation.

Containers cannot reach nameservers bound to the host's loopback range
(dnsmasq on 127.0.1.1, systemd-resolved on 127.0.0.53, ...). At startup the
host resolver file is scanned once; loopback-style entries are replaced with
the bridge network address and the result is persisted under the state
directory. Containers get that copy bind-mounted read-only.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Optional

from lxcforge.errors import FatalStartupError
from lxcforge.models.config import LxcForgeConfig
from lxcforge.models.state import ResolvedState
from lxcforge.utils.net import InterfaceLookupError, get_bridge_network_address


logger = logging.getLogger(__name__)

STATE_DIR_MODE = 0o700
RESOLV_CONF_MODE = 0o644


class ResolvConfReconciler:
    """Decides which resolver file containers bind-mount."""

    def __init__(
        self,
        config: Optional[LxcForgeConfig] = None,
        address_lookup: Callable[[str], str] = get_bridge_network_address,
    ):
        """Initialize reconciler from configuration."""
        config = config or LxcForgeConfig()
        self.host_path = Path(config.dns.host_resolv_conf)
        self.pattern = config.dns.loopback_pattern
        self.bridge_iface = config.network.bridge_iface
        self.state_dir = Path(config.paths.state_dir)
        self.target_path = self.state_dir / config.paths.resolv_conf_name
        self._address_lookup = address_lookup
        self._state: Optional[ResolvedState] = None

    @property
    def state(self) -> Optional[ResolvedState]:
        """Result of the reconciliation, None until it has run."""
        return self._state

    def reconcile(self) -> ResolvedState:
        """Run the reconciliation. May only be called once.

        Raises:
            FatalStartupError: on any read, lookup or write failure.
        """
        if self._state is not None:
            raise RuntimeError("resolv.conf already reconciled")

        content = self._read_host_file()
        loopback = self._compile_pattern()
        bridge_address = self._lookup_bridge_address()

        replacement = bridge_address.encode()
        rewritten = loopback.sub(lambda _: replacement, content)
        if rewritten != content:
            logger.info(
                f"Replacing loopback nameservers in {self.host_path} with {bridge_address}"
            )
            self._persist(rewritten)
            self._state = ResolvedState(
                resolv_conf_path=str(self.target_path), rewritten=True
            )
        else:
            logger.debug(f"No loopback nameservers found in {self.host_path}")
            self._state = ResolvedState(resolv_conf_path=str(self.host_path))

        logger.info(f"Containers will use resolver file {self._state.resolv_conf_path}")
        return self._state

    def _read_host_file(self) -> bytes:
        try:
            return self.host_path.read_bytes()
        except OSError as e:
            logger.error(f"Impossible to read {self.host_path} from host: {e}")
            raise FatalStartupError("read-resolv-conf", str(e), str(self.host_path)) from e

    def _compile_pattern(self) -> "re.Pattern[bytes]":
        # Matched on raw bytes, the file is not required to be UTF-8
        try:
            return re.compile(self.pattern.encode())
        except re.error as e:
            logger.error(f"Invalid loopback pattern {self.pattern!r}: {e}")
            raise FatalStartupError("compile-pattern", str(e)) from e

    def _lookup_bridge_address(self) -> str:
        try:
            return self._address_lookup(self.bridge_iface)
        except (InterfaceLookupError, ValueError) as e:
            logger.error(f"Unable to resolve address of {self.bridge_iface}: {e}")
            raise FatalStartupError("bridge-address", str(e)) from e

    def _persist(self, content: bytes) -> None:
        try:
            self.state_dir.mkdir(mode=STATE_DIR_MODE, parents=True, exist_ok=True)
            self.target_path.write_bytes(content)
            self.target_path.chmod(RESOLV_CONF_MODE)
        except OSError as e:
            logger.error(f"Failed to write {self.target_path}: {e}")
            raise FatalStartupError("write-resolv-conf", str(e), str(self.target_path)) from e
        logger.debug(f"Wrote container resolver file {self.target_path}")
