"""Recursive replace merge of recipe manifests and files."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from .models import Manifest, RecipeFile


def replace_recursive(base: Any, replacement: Any) -> Any:
    """Merge ``replacement`` into ``base``, replacement winning on conflicts.

    Mappings are merged key by key and lists index by index, recursing where
    both sides hold a container; any other value of ``replacement`` replaces
    the one of ``base``. Inputs are not modified.
    """
    if isinstance(base, Mapping) and isinstance(replacement, Mapping):
        merged: Dict[Any, Any] = dict(base)
        for key, value in replacement.items():
            merged[key] = replace_recursive(base[key], value) if key in base else value
        return merged

    if isinstance(base, list) and isinstance(replacement, list):
        result: List[Any] = list(base)
        for index, value in enumerate(replacement):
            if index < len(result):
                result[index] = replace_recursive(result[index], value)
            else:
                result.append(value)
        return result

    return replacement


def merge_manifest(fallback: Optional[Mapping[str, Any]], own: Manifest) -> Manifest:
    """Fallback manifest with ``own`` keys layered on top."""
    return Manifest(replace_recursive(dict(fallback or {}), own.to_dict()), "merged manifest")


def merge_files(
    fallback: Optional[Mapping[str, Any]], own: Dict[str, RecipeFile]
) -> Dict[str, RecipeFile]:
    """Fallback files overridden by ``own`` files sharing the same target path."""
    merged = {path: RecipeFile.from_data(data) for path, data in (fallback or {}).items()}
    merged.update(own)
    return merged
