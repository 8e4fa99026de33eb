"""Fallback recipe system that records what it is asked to do.

Used by the CLI to plan a run without a real recipe installer: it provides no
fallback recipes of its own and keeps a log of install/unconfigure calls.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from host.models import Operation
from recipes.models import Recipe

from .interfaces import FallbackRecipeSystem, RecipeLock


class RecordingFallbackSystem(FallbackRecipeSystem):
    """In-memory fallback system recording the calls made by the engine."""

    def __init__(self, operations: Sequence[Operation] = (), recipes: Optional[Mapping[str, Any]] = None):
        self.operations: List[Operation] = list(operations)
        self.recipes: Dict[str, Any] = dict(recipes or {})
        self.actions: List[Dict[str, Any]] = []
        self.configurators: Dict[str, type] = {}
        self.post_install_output: List[str] = []

    def get_operations(self) -> List[Operation]:
        return list(self.operations)

    def set_operations(self, operations: Sequence[Operation]) -> None:
        self.operations = list(operations)

    def get_recipes(self, operations: Sequence[Operation]) -> Mapping[str, Any]:
        names = {operation.package.name for operation in operations}
        return {"manifests": {name: data for name, data in self.recipes.items() if name in names}}

    def install(self, recipe: Recipe, lock: RecipeLock, options: Mapping[str, Any]) -> None:
        self.actions.append({
            "action": "install",
            "package": recipe.name,
            "origin": recipe.origin,
            "force": bool(options.get("force", False)),
        })

    def unconfigure(self, recipe: Recipe, lock: RecipeLock) -> None:
        self.actions.append({"action": "unconfigure", "package": recipe.name, "origin": recipe.origin})

    def add_configurator(self, name: str, configurator: type) -> None:
        self.configurators[name] = configurator

    def add_post_install_output(self, lines: Sequence[str]) -> None:
        self.post_install_output.extend(lines)
