"""Container descriptor models.

The descriptor is produced by the container lifecycle manager, which
serializes it with PascalCase keys (``Id``, ``Config``, ``NetworkSettings``).
Both those keys and the snake_case field names are accepted.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ContainerConfig(BaseModel):
    """User-facing container configuration."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    hostname: Optional[str] = Field(default=None, alias="Hostname")
    memory: int = Field(default=0, ge=0, alias="Memory")
    # Negative disables swap accounting.
    memory_swap: int = Field(default=0, alias="MemorySwap")


class NetworkSettings(BaseModel):
    """Network address assigned to the container."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    ip_address: str = Field(..., alias="IpAddress")
    ip_prefix_len: int = Field(..., ge=0, le=32, alias="IpPrefixLen")


class Mountpoint(BaseModel):
    """Container filesystem mountpoint."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    root: str = Field(..., alias="Root")


class ContainerDescriptor(BaseModel):
    """Runtime descriptor of a single container."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str = Field(..., alias="Id", description="Container identifier")
    config: ContainerConfig = Field(default_factory=ContainerConfig, alias="Config")
    network_settings: NetworkSettings = Field(..., alias="NetworkSettings")
    mountpoint: Mountpoint = Field(..., alias="Mountpoint")
    sys_init_path: str = Field(..., alias="SysInitPath", description="Init binary injected as /sbin/init")

    @property
    def utsname(self) -> str:
        """Hostname inside the container, falling back to the id."""
        return self.config.hostname or self.id
