"""Detection of the in-container init mode.

The same executable is bind-mounted into every container as /sbin/init.
When started under that path it must hand off to the init routine instead
of preparing LXC configuration.
"""

import logging
import os
import sys


logger = logging.getLogger(__name__)


def self_path() -> str:
    """Absolute path the running program was invoked as."""
    return os.path.abspath(sys.argv[0])


def is_init_mode(init_path: str = "/sbin/init") -> bool:
    """Whether the process was started as the container init."""
    if self_path() == init_path:
        logger.debug(f"Running as {init_path}, init mode")
        return True
    return False
