"""JSON file helpers shared by repositories, the lock and the project reader."""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict

from errors import RecipeDataError

logger = logging.getLogger(__name__)


def read_json_object(path: str, allow_empty_array: bool = False) -> Dict[str, Any]:
    """Read a JSON document whose root must be an object.

    With ``allow_empty_array`` an empty array root reads as an empty object,
    which is how an empty recipe manifest may be written.

    Raises:
        RecipeDataError: the file cannot be read, is not valid JSON or its
            root is not an object.
    """
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise RecipeDataError(f"Unable to read {path}: {exc}") from exc
    except ValueError as exc:
        raise RecipeDataError(f"Invalid JSON in {path}: {exc}") from exc

    if allow_empty_array and data == []:
        return {}

    if not isinstance(data, dict):
        raise RecipeDataError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    return data


def write_json_object(path: str, data: Dict[str, Any]) -> None:
    """Write ``data`` with sorted keys and 4-space indentation."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=4, sort_keys=True)
        fh.write("\n")
    logger.debug("Wrote %s", path)
