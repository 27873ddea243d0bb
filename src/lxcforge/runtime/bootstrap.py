"""One-time startup of the LXC configuration subsystem."""

import logging
from pathlib import Path
from typing import Callable, Optional

from lxcforge.lxc.resolvconf import ResolvConfReconciler
from lxcforge.lxc.template import LxcTemplateEngine
from lxcforge.models.config import LxcForgeConfig
from lxcforge.models.container import ContainerDescriptor
from lxcforge.models.state import ResolvedState
from lxcforge.runtime.config import ConfigManager
from lxcforge.runtime.sysinit import is_init_mode


logger = logging.getLogger(__name__)


class LxcRuntime:
    """Startup results needed to configure containers.

    Immutable once built; ``render`` may be called concurrently.
    """

    def __init__(
        self,
        config: LxcForgeConfig,
        resolved: ResolvedState,
        engine: LxcTemplateEngine,
    ):
        self.config = config
        self.resolved = resolved
        self.engine = engine

    def render(self, container: ContainerDescriptor) -> str:
        """Render the LXC configuration for a container."""
        return self.engine.render(container)


def bootstrap(
    config: Optional[LxcForgeConfig] = None,
    config_dir: Optional[Path] = None,
    reconciler: Optional[ResolvConfReconciler] = None,
    init_handoff: Optional[Callable[[], None]] = None,
) -> Optional[LxcRuntime]:
    """Reconcile resolv.conf and compile the LXC template.

    When the process runs as the container init, ``init_handoff`` is called
    instead and None is returned.

    Raises:
        FatalStartupError: the runtime cannot be established. The caller
            decides how to halt.
    """
    if config is None:
        config = ConfigManager(config_dir).load()

    if is_init_mode(config.paths.init_path):
        logger.info("Started as container init, skipping LXC setup")
        if init_handoff is not None:
            init_handoff()
        return None

    reconciler = reconciler or ResolvConfReconciler(config)
    resolved = reconciler.reconcile()
    engine = LxcTemplateEngine.compile(resolved=resolved, network=config.network)

    logger.info("LXC runtime initialized successfully")
    return LxcRuntime(config=config, resolved=resolved, engine=engine)
