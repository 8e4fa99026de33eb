"""Rope - recipe resolution planner for Composer projects.

Loads a Composer project and a list of package operations, resolves which
Rope recipes apply (inline ``rope.json`` files and recipe catalogs), and
prints the resulting plan: recipes to configure or unconfigure, operations
left to the fallback recipe system and the recipe lock after the run.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

import yaml

from args import parse_args
from cli_config import config_configurators, config_options, load_config
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from engine.dry_run import RecordingFallbackSystem
from engine.lock import JsonRecipeLock
from engine.resolution import RecipeResolutionEngine
from errors import ConfigurationError, RecipeDataError
from host.composer import ComposerProject
from host.operations import parse_operations
from host.options import TargetDirOptions
from repository.manager import RecipeRepositoryManager, import_recipe_repositories

logger = logging.getLogger(__name__)


def load_operations_file(path):
    """Load the operations list (YAML or JSON).

    Raises:
        ConfigurationError: the file cannot be read or is not a list.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            entries = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Failed to load operations {path}: {exc}") from exc

    if entries is None:
        return []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ConfigurationError(f"Operations file {path} must contain a list of objects")
    return entries


def build_plan(args):
    """Run the resolution engine for ``args`` and return the plan as a dict."""
    config = load_config(getattr(args, "CONFIG", None))
    project = ComposerProject(args.PROJECT, vendor_dir=getattr(args, "VENDOR_DIR", None))
    options = TargetDirOptions(project.extra, config_options(config))
    operations = parse_operations(load_operations_file(args.OPERATIONS), project)

    lock_path = getattr(args, "LOCK_FILE", None) or os.path.join(project.root_dir, Constants.RECIPE_LOCK_FILE)
    lock = JsonRecipeLock(lock_path)
    manager = import_recipe_repositories(RecipeRepositoryManager(), project, options)
    fallback = RecordingFallbackSystem(operations)
    engine = RecipeResolutionEngine(
        manager, fallback, lock, options, configurators=config_configurators(config)
    )

    if is_debug_enabled(logger):
        logger.debug(
            "Resolution start",
            extra=extra_context(
                event="function_entry", component="cli", action="build_plan",
                count=len(operations), repositories=[r.name for r in manager]
            )
        )

    result = engine.run(force=bool(getattr(args, "FORCE", False)))

    if getattr(args, "WRITE_LOCK", False):
        lock.write()

    return {
        "recipes": [
            {
                "package": recipe.name,
                "job": recipe.job,
                "origin": recipe.origin,
                "files": sorted(recipe.files),
            }
            for recipe in result.recipes
        ],
        "actions": fallback.actions,
        "fallback_operations": [
            {"job": op.job_type, "package": op.package.name} for op in result.fallback_operations
        ],
        "post_install_output": result.post_install_output,
        "lock": lock.all(),
    }


def export_json(plan, path):
    """Write the plan to ``path``."""
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(plan, file, indent=2)
        logging.info("JSON file written to %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def _setup_logging(args):
    configure_logging(getattr(args, "LOG_LEVEL", None))
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        logging.getLogger().addHandler(handler)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        plan = build_plan(args)
    except ConfigurationError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    except RecipeDataError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.DATA_ERROR.value)

    if args.OUTPUT:
        export_json(plan, args.OUTPUT)
    elif not args.QUIET:
        print(json.dumps(plan, indent=2))

    for line in plan["post_install_output"]:
        logging.info("%s", line)

    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
