"""Custom configurator contract and registry."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from errors import ConfigurationError
from host.options import TargetDirOptions
from recipes.models import Recipe

from .interfaces import RecipeLock

logger = logging.getLogger(__name__)


class AbstractConfigurator(ABC):
    """Base class of configurators handling one manifest key.

    The fallback system instantiates registered classes and calls them with
    the manifest value stored under the configurator's name.
    """

    def __init__(self, project: Any, options: Optional[TargetDirOptions] = None):
        self.project = project
        self.options = options or TargetDirOptions()

    @abstractmethod
    def configure(self, recipe: Recipe, config: Any, lock: RecipeLock, options: Optional[Mapping[str, Any]] = None) -> None:
        """Apply ``config`` for ``recipe``."""

    @abstractmethod
    def unconfigure(self, recipe: Recipe, config: Any, lock: RecipeLock) -> None:
        """Revert ``config`` for ``recipe``."""


class ConfiguratorRegistry:
    """Custom configurator classes by unique name."""

    def __init__(self, configurators: Optional[Mapping[str, type]] = None):
        self._configurators: Dict[str, type] = {}
        for name, cls in (configurators or {}).items():
            self.register(name, cls)

    def register(self, name: str, cls: type) -> None:
        """Register ``cls`` under ``name``.

        Raises:
            ConfigurationError: ``cls`` does not extend ``AbstractConfigurator``
                or ``name`` is already bound to another class.
        """
        if not isinstance(cls, type) or not issubclass(cls, AbstractConfigurator):
            raise ConfigurationError(
                f'The custom configurator "{getattr(cls, "__name__", cls)}" must extend '
                f'the "{AbstractConfigurator.__module__}.{AbstractConfigurator.__name__}" class'
            )

        existing = self._configurators.get(name)
        if existing is not None and existing is not cls:
            raise ConfigurationError(
                f'The custom configurator with the name "{name}" and the class '
                f'"{cls.__name__}" already exists'
            )

        self._configurators[name] = cls
        logger.debug("Registered configurator %s (%s)", name, cls.__name__)

    def __contains__(self, name: str) -> bool:
        return name in self._configurators

    def __len__(self) -> int:
        return len(self._configurators)

    def items(self) -> Iterator[Tuple[str, type]]:
        return iter(self._configurators.items())
