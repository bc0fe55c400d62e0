"""Runtime configuration for the cratefind CLI.

Values come from a YAML file (``--config``, ``CRATEFIND_CONFIG`` or
``./cratefind.yml``) and are then overridden by CLI flags. Without a file the defaults below apply.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import yaml

from constants import Constants
from manifest.models import DependencySelector

logger = logging.getLogger(__name__)


@dataclass
class FinderConfig:
    """Settings used to locate the manifest and scope the search."""

    dependencies: str = "default"
    manifest_dir_env: str = Constants.MANIFEST_DIR_ENV
    manifest_file: str = Constants.MANIFEST_FILE
    log_level: Optional[str] = None

    @property
    def selector(self) -> DependencySelector:
        return DependencySelector.parse(self.dependencies)


def _config_path(explicit: Optional[str]) -> Optional[str]:
    if explicit:
        return explicit
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path and env_path.strip():
        return env_path.strip()
    if os.path.isfile(Constants.CONFIG_FILE):
        return Constants.CONFIG_FILE
    return None


def load_config(config_path: Optional[str] = None) -> FinderConfig:
    """Load configuration from YAML.

    Args:
        config_path: Path given on the command line, if any.

    Returns:
        FinderConfig with file values applied over the defaults.

    Raises:
        ValueError: the file is not valid YAML, is not a mapping, or names
            an unknown dependency selector.
    """
    path = _config_path(config_path)
    config = FinderConfig()
    if not path:
        return config

    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"invalid config file {path}: {e}") from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ValueError(f"invalid config file {path}: expected a mapping")

    section: Any = data.get("cratefind", data)
    if not isinstance(section, dict):
        raise ValueError(f"invalid config file {path}: `cratefind` must be a mapping")
    for field_name in ("dependencies", "manifest_dir_env", "manifest_file", "log_level"):
        value = section.get(field_name)
        if value is not None:
            setattr(config, field_name, str(value))

    # Unknown selector names fail here rather than at search time
    DependencySelector.parse(config.dependencies)
    logger.debug("Loaded config from %s", path)
    return config


def apply_cli_overrides(config: FinderConfig, args: Any) -> FinderConfig:
    """Apply CLI flags on top of file configuration (highest precedence)."""
    if getattr(args, "DEPENDENCIES", None):
        DependencySelector.parse(args.DEPENDENCIES)
        config.dependencies = args.DEPENDENCIES
    if getattr(args, "LOG_LEVEL", None):
        config.log_level = args.LOG_LEVEL
    return config
