"""Inlining of recipe files declared by ``copy-from-recipe``."""
from __future__ import annotations

import logging
import os
from typing import Dict, Mapping

from common.logging_utils import extra_context, is_debug_enabled
from host.options import TargetDirOptions
from recipes.models import RecipeFile

logger = logging.getLogger(__name__)


def _read_file(source: str) -> RecipeFile:
    with open(os.path.realpath(source), "rb") as fh:
        return RecipeFile(contents=fh.read(), executable=False)


def _join_target(target: str, relative: str) -> str:
    relative = relative.replace(os.sep, "/")
    if not target or target.endswith("/"):
        return target + relative
    return f"{target}/{relative}"


def find_dir(source: str, target: str, files: Dict[str, RecipeFile]) -> Dict[str, RecipeFile]:
    """Add every file below ``source`` to ``files``, keyed under ``target``."""
    for root, dirnames, filenames in os.walk(source):
        dirnames.sort()
        for filename in sorted(filenames):
            path = os.path.join(root, filename)
            relative = os.path.relpath(path, source)
            files[_join_target(target, relative)] = _read_file(path)
    return files


def find_file(source: str, target: str, files: Dict[str, RecipeFile]) -> Dict[str, RecipeFile]:
    """Add the single file ``source`` to ``files`` under ``target``."""
    files[target.replace("\\", "/")] = _read_file(source)
    return files


def collect_recipe_files(
    copy_from_recipe: Mapping[str, str],
    recipe_dir: str,
    options: TargetDirOptions,
) -> Dict[str, RecipeFile]:
    """Resolve ``copy-from-recipe`` entries into target path -> file contents.

    Sources are relative to ``recipe_dir``; targets have their directory
    placeholders expanded. Sources that do not exist are skipped.
    """
    files: Dict[str, RecipeFile] = {}
    for source, target in copy_from_recipe.items():
        source_path = os.path.realpath(os.path.join(recipe_dir, source))
        target = options.expand_target_dir(target)

        if not os.path.exists(source_path):
            if is_debug_enabled(logger):
                logger.debug(
                    "Recipe source not found, skipping",
                    extra=extra_context(
                        event="decision", component="recipe_files", action="collect",
                        outcome="missing_source", target=source_path
                    )
                )
            continue

        if os.path.isdir(source_path):
            find_dir(source_path, target, files)
        else:
            find_file(source_path, target, files)

    return files
