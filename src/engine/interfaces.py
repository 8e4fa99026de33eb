"""Narrow interfaces of the collaborators the resolution engine drives.

The fallback recipe system owns the pending operation list, downloads its own
recipes and applies recipes through its configurators. The recipe lock
records which recipe was applied per package.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from host.models import Operation
from recipes.models import Recipe


class RecipeLock(ABC):
    """Persisted record of applied recipes, keyed by package name."""

    @abstractmethod
    def has(self, name: str) -> bool:
        """Return True if a recipe is recorded for ``name``."""

    @abstractmethod
    def get(self, name: str) -> Optional[Dict[str, Any]]:
        """Recorded entry for ``name``, or None."""

    @abstractmethod
    def add(self, name: str, data: Dict[str, Any]) -> None:
        """Record ``data`` for ``name``, replacing any previous entry."""

    @abstractmethod
    def remove(self, name: str) -> None:
        """Forget ``name``; a missing entry is not an error."""


class FallbackRecipeSystem(ABC):
    """The baseline recipe mechanism that Rope recipes replace, suppress or extend."""

    @abstractmethod
    def get_operations(self) -> List[Operation]:
        """Operations the fallback system would process."""

    @abstractmethod
    def set_operations(self, operations: Sequence[Operation]) -> None:
        """Replace the operations the fallback system will process."""

    @abstractmethod
    def get_recipes(self, operations: Sequence[Operation]) -> Mapping[str, Any]:
        """Fallback recipes of ``operations``.

        Returns a mapping with a ``manifests`` key: package name ->
        ``{"manifest": {...}, "files": {...}}`` (``files`` optional).
        """

    @abstractmethod
    def install(self, recipe: Recipe, lock: RecipeLock, options: Mapping[str, Any]) -> None:
        """Apply ``recipe`` (``options`` carries ``force``)."""

    @abstractmethod
    def unconfigure(self, recipe: Recipe, lock: RecipeLock) -> None:
        """Revert what ``recipe`` configured."""

    @abstractmethod
    def add_configurator(self, name: str, configurator: type) -> None:
        """Make a custom configurator class available under ``name``."""

    @abstractmethod
    def add_post_install_output(self, lines: Sequence[str]) -> None:
        """Append lines to the message shown at the end of the run."""
