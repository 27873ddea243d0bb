"""Exception types."""

from typing import Optional


class LxcForgeError(Exception):
    """Base class for lxcforge errors."""


class FatalStartupError(LxcForgeError):
    """Startup could not establish a valid template or resolver path.

    There is no degraded mode: callers are expected to halt the process.
    """

    def __init__(self, stage: str, message: str, path: Optional[str] = None):
        self.stage = stage
        self.path = path
        super().__init__(f"{stage}: {message}")
