"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2
    DATA_ERROR = 3


class Job(Enum):
    """Job type of a package operation.

    Args:
        Enum (string): Job names as reported by the dependency manager.
    """

    INSTALL = "install"
    UPDATE = "update"
    UNINSTALL = "uninstall"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    MANIFEST_FILE = "rope.json"
    INLINE_REPOSITORY_NAME = "klipper/rope-recipe-inline"
    EXTRA_RECIPES_FLAG = "klipper-rope-recipes"
    EXTRA_RECIPES_PATH = "klipper-rope-path-recipes"
    EXTRA_BRANCH_ALIAS = "branch-alias"
    DEFAULT_RECIPES_PATH = "recipes"
    DEFAULT_VENDOR_DIR = "vendor"
    BUNDLE_PACKAGE_TYPE = "symfony-bundle"
    DEV_BRANCH_PREFIX = "dev-"
    DEFAULT_BRANCH_ALIAS_KEY = "dev-master"
    DEFAULT_LOCK_BRANCH = "master"
    DEFAULT_LOCK_REPO = "klipper-rope recipe"
    DEFAULT_REPO_HOST = "packages"
    BUNDLE_ENVS_DEV = ["dev", "test"]
    BUNDLE_ENVS_ALL = ["all"]

    # Recognized manifest keys
    MANIFEST_BUNDLES = "bundles"
    MANIFEST_COPY_FROM_RECIPE = "copy-from-recipe"
    MANIFEST_MERGE_FALLBACK = "merge-symfony-recipe"
    MANIFEST_POST_INSTALL_OUTPUT = "post-install-output"

    # Target directory options, overridable from composer.json "extra"
    TARGET_DIR_DEFAULTS = {
        "bin-dir": "bin",
        "conf-dir": "conf",
        "config-dir": "config",
        "src-dir": "src",
        "var-dir": "var",
        "public-dir": "public",
        "root-dir": ".",
    }

    COMPOSER_JSON_FILE = "composer.json"
    COMPOSER_LOCK_FILE = "composer.lock"
    RECIPE_LOCK_FILE = "symfony.lock"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "ROPE_LOG_LEVEL"
