"""Read-only view of a Composer project: composer.json, composer.lock, install paths."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Set

from common.json_file import read_json_object
from constants import Constants

from .models import Package

logger = logging.getLogger(__name__)


class ComposerProject:
    """Composer project rooted at ``root_dir``.

    Missing composer.json/composer.lock files are treated as empty documents,
    malformed ones raise ``RecipeDataError``.
    """

    def __init__(self, root_dir: str, vendor_dir: Optional[str] = None):
        self.root_dir = os.path.abspath(root_dir)
        self._manifest = self._read_optional(Constants.COMPOSER_JSON_FILE)
        self._lock_data = self._read_optional(Constants.COMPOSER_LOCK_FILE)
        config = self._manifest.get("config") or {}
        self.vendor_dir = vendor_dir or config.get("vendor-dir") or Constants.DEFAULT_VENDOR_DIR
        self._packages: Optional[List[Package]] = None
        self._dev_names: Optional[Set[str]] = None

    def _read_optional(self, filename: str) -> Dict[str, Any]:
        path = os.path.join(self.root_dir, filename)
        if not os.path.isfile(path):
            logger.debug("No %s in %s", filename, self.root_dir)
            return {}
        return read_json_object(path)

    @property
    def extra(self) -> Dict[str, Any]:
        """The ``extra`` section of composer.json."""
        return dict(self._manifest.get("extra") or {})

    def locked_packages(self) -> List[Package]:
        """Packages of composer.lock, production first then dev."""
        if self._packages is None:
            entries = list(self._lock_data.get("packages") or [])
            entries += list(self._lock_data.get("packages-dev") or [])
            self._packages = [Package.from_lock_entry(entry) for entry in entries]
        return self._packages

    def find_package(self, name: str) -> Optional[Package]:
        for package in self.locked_packages():
            if package.name == name:
                return package
        return None

    def dev_package_names(self) -> Set[str]:
        """Names listed under ``packages-dev`` in composer.lock."""
        if self._dev_names is None:
            self._dev_names = {
                entry["name"] for entry in (self._lock_data.get("packages-dev") or []) if "name" in entry
            }
        return self._dev_names

    def install_path(self, package: Package) -> str:
        """Directory where ``package`` is installed: ``<root>/<vendor-dir>/<name>``."""
        return os.path.join(self.root_dir, self.vendor_dir, package.unwrap_alias().name)
