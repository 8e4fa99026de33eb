"""Batch recipe resolution for one install/update/uninstall run.

For every pending operation the engine decides whether the fallback recipe
system keeps handling the package or whether a Rope recipe replaces,
suppresses or extends it, keeps the recipe lock in sync and finally applies
the resolved recipes through the fallback system's configurator.

Uninstall operations must be captured (``capture_uninstall``) before the
resolution pass of the same run, while the uninstalled packages' recipes can
still be located.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Job
from host.models import Operation
from host.options import TargetDirOptions
from recipes.merge import merge_files, merge_manifest
from recipes.models import Recipe
from recipes.origin import build_lock_entry, format_origin
from repository.manager import RecipeRepositoryManager

from .configurators import ConfiguratorRegistry
from .interfaces import FallbackRecipeSystem, RecipeLock

logger = logging.getLogger(__name__)


@dataclass
class RecipeDecision:
    """Outcome of the lookup for a single operation."""
    use_fallback: bool
    recipe: Optional[Recipe] = None


@dataclass
class ResolutionResult:
    """Outcome of a resolution run."""
    recipes: List[Recipe] = field(default_factory=list)
    fallback_operations: List[Operation] = field(default_factory=list)
    post_install_output: List[str] = field(default_factory=list)


class RecipeResolutionEngine:
    """Selects, merges and applies Rope recipes for a batch of operations."""

    def __init__(
        self,
        manager: RecipeRepositoryManager,
        fallback: FallbackRecipeSystem,
        lock: RecipeLock,
        options: Optional[TargetDirOptions] = None,
        configurators: Optional[Mapping[str, type]] = None,
    ):
        self.manager = manager
        self.fallback = fallback
        self.lock = lock
        self.options = options or TargetDirOptions()
        self.configurators = ConfiguratorRegistry(configurators)
        self._pending_uninstalls: Dict[str, List[Recipe]] = {}
        self._configurators_registered = False

    @property
    def pending_uninstalls(self) -> Dict[str, List[Recipe]]:
        return self._pending_uninstalls

    def capture_uninstall(self, operation: Operation) -> None:
        """Remember the recipe of a package about to be uninstalled."""
        if operation.job is not Job.UNINSTALL:
            return

        recipe = self.manager.get_recipe(operation.package, operation.job_type)
        if recipe is not None:
            self._pending_uninstalls.setdefault(recipe.name, []).append(recipe)
            logger.debug("Captured recipe of uninstalled package %s", recipe.name)

    def capture_uninstalls(self, operations: Sequence[Operation]) -> None:
        for operation in operations:
            self.capture_uninstall(operation)

    def fetch_recipe(self, operation: Operation, recipes: List[Recipe]) -> RecipeDecision:
        """Decide how ``operation`` is handled.

        Recipes with a non-empty manifest are appended to ``recipes`` and the
        lock is updated for install and uninstall jobs. A recipe with an
        empty manifest only disables the fallback recipe.
        """
        package = operation.package
        name = package.name

        if operation.job is Job.INSTALL and self.lock.has(name):
            logger.debug("Recipe of %s already locked, leaving it to the fallback system", name)
            return RecipeDecision(use_fallback=True)

        recipe = self.manager.get_recipe(package, operation.job_type)
        if recipe is None and self._pending_uninstalls.get(name):
            recipe = self._pending_uninstalls[name][-1]

        if recipe is None:
            return RecipeDecision(use_fallback=True)

        if recipe.manifest:
            recipes.append(recipe)
            if operation.job is Job.INSTALL:
                self.lock.add(name, build_lock_entry(recipe))
            elif operation.job is Job.UNINSTALL:
                self.lock.remove(name)
            outcome = "recipe"
        else:
            outcome = "suppressed"

        if is_debug_enabled(logger):
            logger.debug(
                "Rope recipe selected",
                extra=extra_context(
                    event="decision", component="resolution", action="fetch_recipe",
                    outcome=outcome, package=name, job=operation.job_type, origin=recipe.origin
                )
            )

        return RecipeDecision(use_fallback=False, recipe=recipe)

    def fetch_recipes(self) -> ResolutionResult:
        """Resolve the fallback system's pending operations.

        Operations left to the fallback system are handed back to it; the
        captured uninstall recipes are cleared.
        """
        result = ResolutionResult()
        merge_recipes: Dict[str, Recipe] = {}
        merge_operations: Dict[str, Operation] = {}

        with Timer() as t:
            for operation in self.fallback.get_operations():
                decision = self.fetch_recipe(operation, result.recipes)

                if decision.use_fallback:
                    result.fallback_operations.append(operation)
                elif decision.recipe is not None and decision.recipe.manifest.merge_fallback_recipe:
                    merge_recipes[decision.recipe.name] = decision.recipe
                    merge_operations[decision.recipe.name] = operation

            if merge_recipes:
                self._merge_fallback_recipes(merge_recipes, list(merge_operations.values()))

            self.fallback.set_operations(result.fallback_operations)
            self._pending_uninstalls = {}

        if is_debug_enabled(logger):
            logger.debug(
                "Recipes fetched",
                extra=extra_context(
                    event="function_exit", component="resolution", action="fetch_recipes",
                    count=len(result.recipes), fallback_count=len(result.fallback_operations),
                    merged=len(merge_recipes), duration_ms=t.duration_ms()
                )
            )

        return result

    def _merge_fallback_recipes(self, recipes: Dict[str, Recipe], operations: List[Operation]) -> None:
        fallback_recipes = self.fallback.get_recipes(operations) or {}

        for name, data in (fallback_recipes.get("manifests") or {}).items():
            recipe = recipes.get(name)
            if recipe is None:
                logger.debug("Ignoring fallback recipe of %s, not requested", name)
                continue

            recipe.replace_data(
                merge_manifest(data.get("manifest"), recipe.manifest),
                merge_files(data.get("files"), recipe.files),
            )
            logger.debug("Merged fallback recipe into Rope recipe of %s", name)

    def register_configurators(self) -> None:
        """Hand the custom configurators over to the fallback system (once)."""
        if self._configurators_registered:
            return
        for name, cls in self.configurators.items():
            self.fallback.add_configurator(name, cls)
        self._configurators_registered = True

    def install_recipes(self, force: bool = False) -> ResolutionResult:
        """Resolve the pending operations and apply the resulting recipes."""
        self.register_configurators()
        result = self.fetch_recipes()

        if not result.recipes:
            return result

        count = len(result.recipes)
        logger.info("Rope operations: %d recipe%s", count, "s" if count > 1 else "")

        for recipe in result.recipes:
            if recipe.job == Job.INSTALL.value:
                logger.info("  - Configuring %s", format_origin(recipe.origin))
                self.fallback.install(recipe, self.lock, {"force": force})
                lines = recipe.manifest.post_install_output
                if lines:
                    result.post_install_output.extend(self.options.expand_target_dir(line) for line in lines)
                    result.post_install_output.append("")
            elif recipe.job == Job.UNINSTALL.value:
                logger.info("  - Unconfiguring %s", format_origin(recipe.origin))
                self.fallback.unconfigure(recipe, self.lock)

        if result.post_install_output:
            self.fallback.add_post_install_output(result.post_install_output)

        return result

    def run(self, force: bool = False) -> ResolutionResult:
        """Capture the pending uninstalls, then resolve and apply in one go."""
        self.capture_uninstalls(self.fallback.get_operations())
        return self.install_recipes(force=force)
