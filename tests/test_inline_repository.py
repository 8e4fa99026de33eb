"""Tests for inline recipes and bundle registration."""

import pytest

from errors import RecipeDataError
from host.bundles import bundle_class_names, candidate_class_names
from host.models import Package
from repository.inline import InlineRecipeRepository

BUNDLE_SOURCE = """<?php
namespace Acme;

use Symfony\\Component\\HttpKernel\\Bundle\\Bundle;

class {name} extends Bundle
{{
}}
"""


def _widget(**fields):
    data = {
        "name": "acme/widget",
        "version": "v1.2.0",
        "source": {"type": "git", "url": "https://github.com/acme/widget.git", "reference": "def456"},
    }
    data.update(fields)
    return data


class TestInlineRecipeRepository:
    """rope.json at the package's install root."""

    def test_name(self, builder):
        assert InlineRecipeRepository(builder.project()).name == "klipper/rope-recipe-inline"

    def test_without_manifest(self, builder):
        builder.lock_package(**_widget())
        project = builder.project()
        repository = InlineRecipeRepository(project)
        package = project.find_package("acme/widget")

        assert not repository.has(package)
        assert repository.get(package, "install") is None

    def test_loads_manifest(self, builder):
        builder.lock_package(**_widget())
        builder.write_inline_recipe("acme/widget", {"env": {"WIDGET": "1"}})
        project = builder.project()
        repository = InlineRecipeRepository(project)
        package = project.find_package("acme/widget")

        recipe = repository.get(package, "install")

        assert recipe.manifest["env"] == {"WIDGET": "1"}
        assert recipe.origin == "acme/widget:1.2.0@github.com/acme/widget:v1.2.0"
        assert recipe.reference == "def456"
        assert recipe.files == {}

    def test_empty_manifest(self, builder):
        builder.lock_package(**_widget())
        builder.write_inline_recipe("acme/widget", {})
        project = builder.project()

        recipe = InlineRecipeRepository(project).get(project.find_package("acme/widget"), "install")

        assert recipe is not None
        assert not recipe.manifest

    def test_empty_array_manifest_suppresses(self, builder):
        builder.lock_package(**_widget())
        builder.write_inline_recipe("acme/widget", [])
        project = builder.project()

        recipe = InlineRecipeRepository(project).get(project.find_package("acme/widget"), "install")

        assert recipe is not None
        assert not recipe.manifest

    def test_non_empty_array_manifest(self, builder):
        builder.lock_package(**_widget())
        builder.write_inline_recipe("acme/widget", ["env"])
        project = builder.project()

        with pytest.raises(RecipeDataError):
            InlineRecipeRepository(project).get(project.find_package("acme/widget"), "install")

    def test_malformed_manifest(self, builder):
        builder.lock_package(**_widget())
        builder.write_inline_recipe("acme/widget", {"merge-symfony-recipe": "true"})
        project = builder.project()

        with pytest.raises(RecipeDataError):
            InlineRecipeRepository(project).get(project.find_package("acme/widget"), "install")


class TestBundleRegistration:
    """Bundle classes injected into the manifest of symfony-bundle packages."""

    def _bundle_project(self, builder, dev):
        builder.lock_package(
            "acme/widget-bundle",
            "1.0.0",
            dev=dev,
            type="symfony-bundle",
            autoload={"psr-4": {"Acme\\WidgetBundle\\": "src/"}},
        )
        install = builder.install_dir("acme/widget-bundle")
        (install / "src").mkdir()
        (install / "src" / "AcmeWidgetBundle.php").write_text(BUNDLE_SOURCE.format(name="AcmeWidgetBundle"))
        builder.write_inline_recipe("acme/widget-bundle", {"env": {}})
        return builder.project()

    def test_production_bundle(self, builder):
        project = self._bundle_project(builder, dev=False)
        recipe = InlineRecipeRepository(project).get(project.find_package("acme/widget-bundle"), "install")
        assert recipe.manifest.bundles == {"Acme\\WidgetBundle\\AcmeWidgetBundle": ["all"]}

    def test_dev_bundle(self, builder):
        project = self._bundle_project(builder, dev=True)
        recipe = InlineRecipeRepository(project).get(project.find_package("acme/widget-bundle"), "install")
        assert recipe.manifest.bundles == {"Acme\\WidgetBundle\\AcmeWidgetBundle": ["dev", "test"]}

    @pytest.mark.parametrize("namespace,expected", [
        ("Acme\\Blog\\", ["Acme\\Blog\\BlogBundle", "Acme\\Blog\\AcmeBlogBundle"]),
        ("Acme\\Cms\\Blog\\", [
            "Acme\\Cms\\Blog\\BlogBundle",
            "Acme\\Cms\\Blog\\AcmeBlogBundle",
            "Acme\\Cms\\Blog\\CmsBlogBundle",
            "Acme\\Cms\\Blog\\AcmeCmsBlogBundle",
        ]),
        ("Symfony\\Bundle\\FrameworkBundle\\", [
            "Symfony\\Bundle\\FrameworkBundle\\FrameworkBundle",
            "Symfony\\Bundle\\FrameworkBundle\\SymfonyFrameworkBundle",
        ]),
        ("FooBundle\\", ["FooBundle\\FooBundle"]),
    ])
    def test_candidate_class_names(self, namespace, expected):
        assert candidate_class_names(namespace) == expected

    def test_bundle_named_after_last_namespace_part(self, tmp_path):
        package = Package(
            "doctrine/doctrine-bundle",
            "2.11.0",
            type="symfony-bundle",
            autoload={"psr-4": {"Doctrine\\Bundle\\DoctrineBundle\\": "src"}},
        )
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "DoctrineBundle.php").write_text(
            "<?php\nnamespace Doctrine\\Bundle\\DoctrineBundle;\n\n"
            "use Symfony\\Component\\HttpKernel\\Bundle\\Bundle;\n\n"
            "class DoctrineBundle extends Bundle\n{\n}\n"
        )

        assert bundle_class_names(package, str(tmp_path), "install") == [
            "Doctrine\\Bundle\\DoctrineBundle\\DoctrineBundle"
        ]

    def test_psr0_class_file(self, tmp_path):
        package = Package("acme/blog", "1.0.0", type="symfony-bundle", autoload={"psr-0": {"Acme\\Blog\\": "lib"}})
        class_dir = tmp_path / "lib" / "Acme" / "Blog"
        class_dir.mkdir(parents=True)
        (class_dir / "AcmeBlogBundle.php").write_text(BUNDLE_SOURCE.format(name="AcmeBlogBundle"))

        assert bundle_class_names(package, str(tmp_path), "install") == ["Acme\\Blog\\AcmeBlogBundle"]

    @pytest.mark.parametrize("source", [
        "<?php\nnamespace Acme\\Blog;\n\ninterface BlogBundle\n{\n}\n",
        "<?php\nnamespace Acme\\Blog;\n\ntrait BlogBundle\n{\n}\n",
        "<?php\nnamespace Acme\\Blog;\n\nfinal class BlogBundleHelper extends Helper\n{\n}\n",
    ])
    def test_file_without_bundle_class_skipped(self, tmp_path, source):
        package = Package(
            "acme/blog", "1.0.0", type="symfony-bundle", autoload={"psr-4": {"Acme\\Blog\\": "src"}}
        )
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "BlogBundle.php").write_text(source)

        assert bundle_class_names(package, str(tmp_path), "install") == []

    def test_missing_class_file_skipped_except_on_uninstall(self, tmp_path):
        package = Package(
            "acme/blog", "1.0.0", type="symfony-bundle", autoload={"psr-4": {"Acme\\Blog\\": "src"}}
        )
        assert bundle_class_names(package, str(tmp_path), "install") == []
        assert bundle_class_names(package, str(tmp_path), "uninstall") == [
            "Acme\\Blog\\BlogBundle",
            "Acme\\Blog\\AcmeBlogBundle",
        ]
