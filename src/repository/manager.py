"""Ordered collection of recipe repositories."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Optional

from host.composer import ComposerProject
from host.models import Package
from host.options import TargetDirOptions
from recipes.models import Recipe

from .base import RecipeRepository
from .catalog import PackageRecipeRepository, is_recipe_catalog
from .inline import InlineRecipeRepository

logger = logging.getLogger(__name__)


class RecipeRepositoryManager:
    """Recipe repositories by name, in registration order.

    The first repository claiming a package owns it.
    """

    def __init__(self, repositories: Optional[Iterable[RecipeRepository]] = None):
        self._repositories: Dict[str, RecipeRepository] = {}
        for repository in repositories or []:
            self.add(repository)

    def has(self, name: str) -> bool:
        return name in self._repositories

    def add(self, repository: RecipeRepository) -> None:
        """Register ``repository`` unless one with the same name already is."""
        if repository.name in self._repositories:
            logger.debug("Recipe repository %s already registered", repository.name)
            return
        self._repositories[repository.name] = repository

    def __iter__(self) -> Iterator[RecipeRepository]:
        return iter(self._repositories.values())

    def __len__(self) -> int:
        return len(self._repositories)

    def get_recipe(self, package: Package, job: str) -> Optional[Recipe]:
        """Recipe from the first repository that has one for ``package``.

        The owning repository's result is returned as is, even with an empty
        manifest; later repositories are not consulted.
        """
        for repository in self._repositories.values():
            if repository.has(package):
                logger.debug("Recipe of %s provided by %s", package.name, repository.name)
                return repository.get(package, job)
        return None


def import_recipe_repositories(
    manager: RecipeRepositoryManager,
    project: ComposerProject,
    options: Optional[TargetDirOptions] = None,
) -> RecipeRepositoryManager:
    """Register the inline repository and every catalog locked in ``project``."""
    manager.add(InlineRecipeRepository(project, options))
    for package in project.locked_packages():
        if is_recipe_catalog(package):
            manager.add(PackageRecipeRepository(project, package, options))
    return manager
