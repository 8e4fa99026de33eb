"""Configuration file loading for the CLI.

The file (YAML, or JSON which YAML also reads) may contain:

    options:            # target directory overrides, e.g. config-dir: etc
      config-dir: etc
    configurators:      # custom configurators, name -> "module:Class"
      acme-routes: acme_rope.configurators:RoutesConfigurator
"""

from __future__ import annotations

import importlib
import logging
import os
from typing import Any, Dict, Mapping, Optional

import yaml

from errors import ConfigurationError

logger = logging.getLogger(__name__)


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the configuration file, or an empty config when no path is given.

    Raises:
        ConfigurationError: the file is missing, unreadable or not a mapping.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to load config {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config {config_path} must contain a mapping")

    logger.debug("Loaded config %s", config_path)
    return data


def config_options(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Target directory overrides of the config."""
    options = config.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigurationError('The "options" section must be a mapping')
    return options


def import_class(path: str) -> type:
    """Import ``module:Class`` (or ``module.Class``)."""
    module_name, sep, attr = path.partition(":")
    if not sep:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ConfigurationError(f'Invalid class path "{path}", expected "module:Class"')

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f'Cannot import "{module_name}": {exc}') from exc

    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ConfigurationError(f'The module "{module_name}" has no "{attr}"') from exc


def config_configurators(config: Mapping[str, Any]) -> Dict[str, type]:
    """Custom configurator classes declared in the config."""
    declared = config.get("configurators") or {}
    if not isinstance(declared, dict):
        raise ConfigurationError('The "configurators" section must be a mapping')
    return {name: import_class(str(path)) for name, path in declared.items()}
