"""Recipes shipped inside the package itself (``rope.json`` at its root)."""
from __future__ import annotations

import logging
import os
from typing import Optional

from common.json_file import read_json_object
from constants import Constants
from host.models import Package
from recipes.models import Recipe
from recipes.origin import recipe_branch, recipe_repo

from .base import RecipeRepository

logger = logging.getLogger(__name__)


class InlineRecipeRepository(RecipeRepository):
    """Repository reading ``rope.json`` from each package's install path."""

    @property
    def name(self) -> str:
        return Constants.INLINE_REPOSITORY_NAME

    def manifest_path(self, package: Package) -> str:
        return os.path.join(self.project.install_path(package), Constants.MANIFEST_FILE)

    def has(self, package: Package) -> bool:
        return os.path.isfile(self.manifest_path(package))

    def get(self, package: Package, job: str) -> Optional[Recipe]:
        if not self.has(package):
            return None

        path = self.manifest_path(package)
        version = package.pretty_version.lstrip("v")
        logger.debug("Loading inline recipe %s", path)
        return self._build_recipe(
            package, version, read_json_object(path, allow_empty_array=True), job, package.reference, path
        )

    def _repo_origin(self, package: Package) -> str:
        return f"{recipe_repo(package)}:{recipe_branch(package)}"
