"""
lxcforge - LXC configuration generation for containers.

Renders the per-container LXC configuration document from a runtime
descriptor and reconciles the host resolver file so containers get a
reachable nameserver.
"""

__version__ = "1.0.0"
__author__ = "lxcforge Development Team"

# Re-export key components for easier access
from lxcforge.errors import FatalStartupError
from lxcforge.models.config import LxcForgeConfig
from lxcforge.models.container import ContainerDescriptor
from lxcforge.models.state import ResolvedState, LxcDirective

__all__ = [
    "FatalStartupError",
    "LxcForgeConfig",
    "ContainerDescriptor",
    "ResolvedState",
    "LxcDirective",
]
