"""Shared fixtures: an on-disk Composer project with recipes."""

import json

import pytest

from host.composer import ComposerProject


class ProjectBuilder:
    """Writes composer.lock, installed packages and recipes under a root dir."""

    def __init__(self, root):
        self.root = root
        self.packages = []
        self.dev_packages = []
        self._write_lock()

    def _write_lock(self):
        data = {"packages": self.packages, "packages-dev": self.dev_packages}
        (self.root / "composer.lock").write_text(json.dumps(data), encoding="utf-8")

    def lock_package(self, name, version, dev=False, **fields):
        entry = {"name": name, "version": version}
        entry.update(fields)
        (self.dev_packages if dev else self.packages).append(entry)
        self._write_lock()
        return entry

    def lock_catalog(self, name="acme/recipes", version="1.0.0", path=None):
        extra = {"klipper-rope-recipes": True}
        if path is not None:
            extra["klipper-rope-path-recipes"] = path
        return self.lock_package(
            name,
            version,
            source={"type": "git", "url": "https://github.com/acme/recipes.git", "reference": "abc123"},
            extra=extra,
        )

    def install_dir(self, name):
        path = self.root / "vendor" / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    def write_inline_recipe(self, name, manifest):
        path = self.install_dir(name) / "rope.json"
        path.write_text(json.dumps(manifest), encoding="utf-8")
        return path

    def write_catalog_recipe(self, package, folder, manifest, catalog="acme/recipes", base="recipes"):
        recipe_dir = self.install_dir(catalog) / base / package / folder
        recipe_dir.mkdir(parents=True, exist_ok=True)
        (recipe_dir / "rope.json").write_text(json.dumps(manifest), encoding="utf-8")
        return recipe_dir

    def project(self):
        return ComposerProject(str(self.root))


@pytest.fixture
def builder(tmp_path):
    """Fresh project builder rooted in a temporary directory."""
    return ProjectBuilder(tmp_path)
