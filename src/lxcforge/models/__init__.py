"""Pydantic models for configuration and validation."""

from lxcforge.models.config import (
    LxcForgeConfig,
    NetworkConfig,
    DnsConfig,
    PathsConfig,
    LoggingConfig,
)
from lxcforge.models.container import (
    ContainerDescriptor,
    ContainerConfig,
    NetworkSettings,
    Mountpoint,
)
from lxcforge.models.state import ResolvedState, LxcDirective, DirectiveKind

__all__ = [
    "LxcForgeConfig",
    "NetworkConfig",
    "DnsConfig",
    "PathsConfig",
    "LoggingConfig",
    "ContainerDescriptor",
    "ContainerConfig",
    "NetworkSettings",
    "Mountpoint",
    "ResolvedState",
    "LxcDirective",
    "DirectiveKind",
]
