"""Recipes hosted by a catalog package for other packages.

A catalog is an installed package declaring ``"klipper-rope-recipes": true``
in its ``extra`` section. Recipes live under
``<install-path>/<recipes-path>/<package-name>/<version-folder>/rope.json``
where ``recipes-path`` defaults to ``recipes`` and can be changed with
``klipper-rope-path-recipes``. A version folder applies to every package
version greater than or equal to the folder name.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, Optional, Tuple

from common.json_file import read_json_object
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from errors import ConfigurationError
from host.composer import ComposerProject
from host.models import Package
from host.options import TargetDirOptions
from recipes.models import Recipe
from recipes.origin import recipe_branch, recipe_repo
from versioning.composer import FolderConstraint, effective_version

from .base import RecipeRepository
from .constraints import VersionConstraintIndex
from .files import collect_recipe_files

logger = logging.getLogger(__name__)


def is_recipe_catalog(package: Package) -> bool:
    """True when the package opted in as a recipe catalog."""
    return package.unwrap_alias().extra.get(Constants.EXTRA_RECIPES_FLAG) is True


class PackageRecipeRepository(RecipeRepository):
    """Repository backed by a recipe catalog package."""

    def __init__(
        self,
        project: ComposerProject,
        package: Package,
        options: Optional[TargetDirOptions] = None,
    ):
        super().__init__(project, options)
        package = package.unwrap_alias()

        if not is_recipe_catalog(package):
            raise ConfigurationError(f'The "{package.name}" package is not a Rope recipe repository')

        base = str(package.extra.get(Constants.EXTRA_RECIPES_PATH) or Constants.DEFAULT_RECIPES_PATH)
        self.package = package
        self.base_path = os.path.join(project.install_path(package), base.strip("/"))
        self.repo = recipe_repo(package)
        self.branch = recipe_branch(package)
        self.index = VersionConstraintIndex(self.base_path)
        self._paths: Dict[Tuple[str, str], Optional[str]] = {}

    @property
    def name(self) -> str:
        return self.package.name

    def has(self, package: Package) -> bool:
        return self.find_recipe_path(package) is not None

    def get(self, package: Package, job: str) -> Optional[Recipe]:
        recipe_path = self.find_recipe_path(package)
        if recipe_path is None:
            return None

        recipe_dir = os.path.dirname(recipe_path)
        recipe = self._build_recipe(
            package,
            os.path.basename(recipe_dir),
            read_json_object(recipe_path, allow_empty_array=True),
            job,
            self.package.reference,
            recipe_path,
        )

        copy_from_recipe = recipe.manifest.copy_from_recipe
        if copy_from_recipe:
            recipe.files = collect_recipe_files(copy_from_recipe, recipe_dir, self.options)

        return recipe

    def _repo_origin(self, package: Package) -> str:
        return f"{self.repo}:{self.branch}"

    def find_recipe_path(self, package: Package) -> Optional[str]:
        """Path of the ``rope.json`` that applies to ``package``, or None.

        Among the folders whose lower bound the package version satisfies,
        the one with the greatest version wins; folders naming the same
        version (``1.0`` and ``1.0.0``) fall back to the greatest folder name.
        """
        key = (package.name, package.pretty_version)
        if key in self._paths:
            return self._paths[key]

        package_version = effective_version(package.pretty_version, package.extra)
        best: Optional[FolderConstraint] = None
        best_path: Optional[str] = None

        for folder, constraint in self.index.constraints_for(package.name).items():
            recipe_path = os.path.join(self.index.package_dir(package.name), folder, Constants.MANIFEST_FILE)
            if not constraint.matches(package_version) or not os.path.isfile(recipe_path):
                continue
            if best is None or (constraint.version, folder) > (best.version, best.folder):
                best, best_path = constraint, recipe_path

        if is_debug_enabled(logger):
            logger.debug(
                "Recipe path lookup",
                extra=extra_context(
                    event="decision", component="catalog", action="find_recipe_path",
                    outcome="found" if best_path else "not_found",
                    package=package.name, version=package_version, repository=self.name,
                    folder=best.folder if best else None
                )
            )

        self._paths[key] = best_path
        return best_path
