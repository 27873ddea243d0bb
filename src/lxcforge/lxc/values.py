"""Values derived at render time."""

from typing import Optional

from lxcforge.models.container import ContainerConfig
from lxcforge.models.state import ResolvedState


def get_memory_swap(config: ContainerConfig) -> int:
    """Return the memsw limit for a container.

    By default the swap limit is twice the size of RAM. A negative
    ``memory_swap`` disables it and yields 0.
    """
    if config.memory_swap < 0:
        return 0
    return config.memory * 2


class ResolvConfPathHelper:
    """Template helper returning the reconciled resolver file path."""

    def __init__(self, resolved: Optional[ResolvedState] = None):
        self.resolved = resolved

    def __call__(self) -> str:
        if self.resolved is None:
            raise RuntimeError("resolv.conf path requested before reconciliation")
        return self.resolved.resolv_conf_path
