"""Configuration models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_LOOPBACK_PATTERN = r"127(.[0-9]{0,3}){3}"


class NetworkConfig(BaseModel):
    """Container network settings shared by every rendered config."""
    bridge_iface: str = Field(default="lxcbr0")
    veth_name: str = Field(default="eth0")
    mtu: int = Field(default=1500, ge=68)


class DnsConfig(BaseModel):
    """Resolver file reconciliation settings."""
    host_resolv_conf: str = Field(default="/etc/resolv.conf")
    # Broader than 127.0.0.0/8: '.' matches any character.
    loopback_pattern: str = Field(default=DEFAULT_LOOPBACK_PATTERN)


class PathsConfig(BaseModel):
    """Filesystem locations."""
    state_dir: str = Field(default="/var/lib/docker")
    resolv_conf_name: str = Field(default="resolv.conf")
    init_path: str = Field(default="/sbin/init")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class LxcForgeConfig(BaseModel):
    """Main configuration model."""
    model_config = ConfigDict(extra="ignore")

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    dns: DnsConfig = Field(default_factory=DnsConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
