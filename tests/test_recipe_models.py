"""Tests for the recipe model: manifest, origin strings, lock entries, merging."""

import pytest

from errors import RecipeDataError
from host.models import Package
from recipes.merge import merge_files, merge_manifest, replace_recursive
from recipes.models import Manifest, Recipe, RecipeFile
from recipes.origin import build_lock_entry, format_origin, parse_origin, recipe_branch, recipe_repo


class TestManifest:
    """Typed access and validation of recognized keys."""

    def test_accessors(self):
        manifest = Manifest({
            "copy-from-recipe": {"config/": "%CONFIG_DIR%/"},
            "merge-symfony-recipe": True,
            "post-install-output": ["line"],
            "custom": {"kept": 1},
        })
        assert manifest.copy_from_recipe == {"config/": "%CONFIG_DIR%/"}
        assert manifest.merge_fallback_recipe is True
        assert manifest.post_install_output == ["line"]
        assert manifest["custom"] == {"kept": 1}
        assert len(manifest) == 4

    def test_empty_manifest_is_falsy(self):
        assert not Manifest({})
        assert Manifest({"env": {}})

    def test_defaults(self):
        manifest = Manifest()
        assert manifest.bundles == {}
        assert manifest.copy_from_recipe == {}
        assert manifest.merge_fallback_recipe is False
        assert manifest.post_install_output == []

    @pytest.mark.parametrize("data", [
        {"merge-symfony-recipe": "yes"},
        {"post-install-output": "not a list"},
        {"post-install-output": [1, 2]},
        {"copy-from-recipe": ["a", "b"]},
        {"bundles": ["Acme\\Bundle"]},
    ])
    def test_malformed_recognized_keys(self, data):
        with pytest.raises(RecipeDataError):
            Manifest(data)

    def test_root_must_be_object(self):
        with pytest.raises(RecipeDataError):
            Manifest(["not", "an", "object"])

    def test_with_bundles_keeps_original(self):
        manifest = Manifest({"bundles": {"Acme\\A": ["all"]}})
        updated = manifest.with_bundles(["Acme\\B"], ["dev", "test"])
        assert updated.bundles == {"Acme\\A": ["all"], "Acme\\B": ["dev", "test"]}
        assert manifest.bundles == {"Acme\\A": ["all"]}


class TestOrigin:
    """Origin parsing and formatting."""

    def test_parse_with_branch(self):
        parts = parse_origin("acme/widget:1.2@github.com/acme/widget:main")
        assert parts.package == "acme/widget"
        assert parts.version == "1.2"
        assert parts.repo == "github.com/acme/widget"
        assert parts.branch == "main"

    def test_parse_without_branch(self):
        parts = parse_origin("acme/widget:1.2@github.com/acme/widget")
        assert parts.repo == "github.com/acme/widget"
        assert parts.branch is None

    def test_unparsable_origin(self):
        assert parse_origin("acme/widget") is None
        assert parse_origin("") is None

    def test_format(self):
        assert format_origin("acme/widget:1.2@github.com/acme/widget:main") == (
            "acme/widget (>=1.2): From github.com/acme/widget:main"
        )
        assert format_origin("garbage") == "garbage"

    def test_recipe_repo_uses_url_host(self):
        package = Package("acme/widget", "1.0.0", source_url="https://github.com/acme/widget.git")
        assert recipe_repo(package) == "github.com/acme/widget"

    def test_recipe_repo_without_url(self):
        assert recipe_repo(Package("acme/widget", "1.0.0")) == "packages/acme/widget"

    def test_recipe_branch(self):
        assert recipe_branch(Package("acme/widget", "dev-main")) == "main"
        assert recipe_branch(Package("acme/widget", "1.0.0")) == "1.0.0"


class TestBuildLockEntry:
    """Lock entries derived from the recipe origin."""

    def test_from_origin(self):
        recipe = Recipe(
            package=Package("acme/widget", "1.2.5"),
            job="install",
            manifest=Manifest({"env": {}}),
            origin="acme/widget:1.2@github.com/acme/widget:main",
            reference="abc",
        )
        assert build_lock_entry(recipe) == {
            "version": "1.2",
            "recipe": {"repo": "github.com/acme/widget", "branch": "main", "version": "1.2", "ref": "abc"},
        }

    def test_defaults_for_unparsable_origin(self):
        recipe = Recipe(
            package=Package("acme/widget", "1.2.5"),
            job="install",
            manifest=Manifest({"env": {}}),
            origin="somewhere",
        )
        entry = build_lock_entry(recipe)
        assert entry["version"] == "1.2.5"
        assert entry["recipe"]["repo"] == "klipper-rope recipe"
        assert entry["recipe"]["branch"] == "master"


class TestMerge:
    """Recursive replace merge with the fallback recipe."""

    def test_own_keys_win(self):
        merged = merge_manifest({"a": 2, "b": 3}, Manifest({"a": 1}))
        assert merged.to_dict() == {"a": 1, "b": 3}

    def test_nested_mappings_are_merged(self):
        base = {"env": {"A": "1", "B": "2"}}
        replacement = {"env": {"B": "x", "C": "3"}}
        assert replace_recursive(base, replacement) == {"env": {"A": "1", "B": "x", "C": "3"}}

    def test_lists_are_replaced_by_index(self):
        assert replace_recursive([1, 2, 3], ["a"]) == ["a", 2, 3]
        assert replace_recursive(["a"], [1, 2]) == [1, 2]

    def test_scalar_replaces_container(self):
        assert replace_recursive({"a": {"b": 1}}, {"a": None}) == {"a": None}

    def test_inputs_not_modified(self):
        base = {"a": {"b": 1}}
        replace_recursive(base, {"a": {"c": 2}})
        assert base == {"a": {"b": 1}}

    def test_files_own_paths_win(self):
        own = {"config/x.yaml": RecipeFile(b"rope")}
        fallback = {
            "config/x.yaml": {"contents": "fallback", "executable": False},
            "config/y.yaml": {"contents": ["a", "b"], "executable": True},
        }
        merged = merge_files(fallback, own)
        assert merged["config/x.yaml"].contents == b"rope"
        assert merged["config/y.yaml"] == RecipeFile(b"a\nb", True)

    def test_replace_data(self):
        recipe = Recipe(Package("acme/widget", "1.0.0"), "install", Manifest({"a": 1}), "o")
        recipe.replace_data(Manifest({"b": 2}), {"f": RecipeFile(b"")})
        assert recipe.manifest.to_dict() == {"b": 2}
        assert list(recipe.files) == ["f"]
