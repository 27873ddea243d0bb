"""Process startup: configuration, resolver reconciliation, template compilation."""

from lxcforge.runtime.bootstrap import LxcRuntime, bootstrap
from lxcforge.runtime.config import ConfigManager

__all__ = [
    "LxcRuntime",
    "bootstrap",
    "ConfigManager",
]
