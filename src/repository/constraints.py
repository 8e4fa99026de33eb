"""Index of the version folders of a recipe catalog."""
from __future__ import annotations

import logging
import os
from typing import Dict

from common.logging_utils import extra_context, is_debug_enabled
from versioning.composer import FolderConstraint

logger = logging.getLogger(__name__)


class VersionConstraintIndex:
    """Per package ``{folder: >=folder constraint}`` maps of one catalog.

    Lists ``<base_path>/<package>/`` once per package and caches the result
    for the lifetime of the index. Mapping order is the directory enumeration
    order; callers must not rely on it being sorted.
    """

    def __init__(self, base_path: str):
        self.base_path = base_path
        self._cache: Dict[str, Dict[str, FolderConstraint]] = {}

    def package_dir(self, package_name: str) -> str:
        return os.path.join(self.base_path, package_name)

    def constraints_for(self, package_name: str) -> Dict[str, FolderConstraint]:
        """Version folder constraints of ``package_name``.

        Raises:
            ConstraintError: a folder name is not a valid version.
        """
        if package_name in self._cache:
            return self._cache[package_name]

        constraints: Dict[str, FolderConstraint] = {}
        path = self.package_dir(package_name)

        if os.path.isdir(path):
            with os.scandir(path) as entries:
                for entry in entries:
                    if entry.name in (".", "..") or not entry.is_dir():
                        continue
                    constraints[entry.name] = FolderConstraint.parse(entry.name)

        if is_debug_enabled(logger):
            logger.debug(
                "Indexed recipe version folders",
                extra=extra_context(
                    event="cache_fill", component="constraint_index", action="constraints_for",
                    package=package_name, count=len(constraints)
                )
            )

        self._cache[package_name] = constraints
        return constraints
