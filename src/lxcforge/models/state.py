"""Startup state and rendered directive models."""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class ResolvedState(BaseModel):
    """Resolver file to bind-mount into every container.

    Built once by the resolv.conf reconciler and never modified afterwards.
    """
    model_config = ConfigDict(frozen=True)

    resolv_conf_path: str = Field(..., description="Host path mounted at /etc/resolv.conf")
    rewritten: bool = Field(default=False, description="Whether loopback entries were replaced")


class DirectiveKind(str, Enum):
    """Category of an LXC configuration key."""
    NAMESPACE = "namespace"
    CGROUP = "cgroup"
    MOUNT = "mount"
    NETWORK = "network"
    CAPABILITY = "capability"


class LxcDirective(BaseModel):
    """A single ``key = value`` line of an LXC configuration."""
    model_config = ConfigDict(frozen=True)

    key: str
    value: str
    kind: DirectiveKind

    def __str__(self) -> str:
        return f"{self.key} = {self.value}"
