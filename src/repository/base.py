"""Abstract base for recipe repositories."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Set

from constants import Constants
from host.bundles import bundle_class_names
from host.composer import ComposerProject
from host.models import Package
from host.options import TargetDirOptions
from recipes.models import Manifest, Recipe
from recipes.origin import build_origin


class RecipeRepository(ABC):
    """Source of recipes for packages of a Composer project."""

    def __init__(self, project: ComposerProject, options: Optional[TargetDirOptions] = None):
        self.project = project
        self.options = options or TargetDirOptions()
        self._dev_packages: Optional[Set[str]] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the repository."""

    @abstractmethod
    def has(self, package: Package) -> bool:
        """Return True if the repository holds a recipe for ``package``."""

    @abstractmethod
    def get(self, package: Package, job: str) -> Optional[Recipe]:
        """Load the recipe of ``package`` for the given job, or None."""

    @abstractmethod
    def _repo_origin(self, package: Package) -> str:
        """Repository locator used in the recipe origin."""

    def _dev_package_names(self) -> Set[str]:
        if self._dev_packages is None:
            self._dev_packages = set(self.project.dev_package_names())
        return self._dev_packages

    def _build_recipe(
        self,
        package: Package,
        version: str,
        data: Mapping[str, Any],
        job: str,
        reference: str,
        source: str,
    ) -> Recipe:
        """Recipe with computed origin and, for bundles, the bundle registrations."""
        manifest = Manifest(data, source)

        if package.type == Constants.BUNDLE_PACKAGE_TYPE:
            envs = (
                Constants.BUNDLE_ENVS_DEV
                if package.name in self._dev_package_names()
                else Constants.BUNDLE_ENVS_ALL
            )
            classes = bundle_class_names(package, self.project.install_path(package), job)
            manifest = manifest.with_bundles(classes, envs)

        return Recipe(
            package=package,
            job=job,
            manifest=manifest,
            origin=build_origin(package.name, version, self._repo_origin(package)),
            reference=reference,
        )
