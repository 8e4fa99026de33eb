"""Recipe model package.

- models.py: Recipe, Manifest, RecipeFile and OriginParts
- origin.py: origin strings, repository locators and lock entries
- merge.py: recursive replace merge with fallback recipes
"""

from .models import Manifest, OriginParts, Recipe, RecipeFile
from .origin import build_lock_entry, format_origin, parse_origin

__all__ = [
    "Manifest",
    "OriginParts",
    "Recipe",
    "RecipeFile",
    "build_lock_entry",
    "format_origin",
    "parse_origin",
]
