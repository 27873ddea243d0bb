"""Configuration loading."""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

from ruamel.yaml import YAML
from pydantic import ValidationError

from lxcforge.models.config import LxcForgeConfig
from lxcforge.models.container import ContainerDescriptor


logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "LXCFORGE_CONFIG_DIR"
DEFAULT_CONFIG_DIR = "/etc/lxcforge"


def default_config_dir() -> Path:
    """Config directory, overridable from the environment."""
    return Path(os.environ.get(CONFIG_DIR_ENV, DEFAULT_CONFIG_DIR))


class ConfigManager:
    """Loads the main configuration and container descriptors."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize configuration manager."""
        self.config_dir = Path(config_dir) if config_dir else default_config_dir()
        self.yaml = YAML(typ="safe")
        self.config: Optional[LxcForgeConfig] = None

    def load(self) -> LxcForgeConfig:
        """Load ``config.yaml``, falling back to defaults when absent."""
        config_file = self.config_dir / "config.yaml"
        if not config_file.exists():
            logger.info(f"No config at {config_file}, using defaults")
            self.config = LxcForgeConfig()
            return self.config

        try:
            data = self._read_yaml(config_file) or {}
            self.config = LxcForgeConfig(**data)
            logger.debug(f"Loaded main config: {config_file}")
        except ValidationError as e:
            logger.error(f"Invalid main config: {e}")
            raise

        return self.config

    def load_descriptor(self, path: Path) -> ContainerDescriptor:
        """Load a container descriptor from a JSON or YAML file."""
        path = Path(path)
        if path.suffix == ".json":
            data = json.loads(path.read_text())
        else:
            data = self._read_yaml(path)

        try:
            return ContainerDescriptor.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid container descriptor {path}: {e}")
            raise

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse YAML file."""
        return self.yaml.load(file_path.read_text())
