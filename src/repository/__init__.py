"""Recipe repository package.

This package locates recipes for packages:
- base.py: RecipeRepository contract and shared recipe building
- inline.py: recipes shipped as rope.json inside the package itself
- catalog.py: recipe catalog packages organized by version folders
- constraints.py: version folder index of a catalog
- files.py: copy-from-recipe file inlining
- manager.py: ordered, first-match-wins collection of repositories
"""

from .base import RecipeRepository
from .catalog import PackageRecipeRepository, is_recipe_catalog
from .constraints import VersionConstraintIndex
from .inline import InlineRecipeRepository
from .manager import RecipeRepositoryManager, import_recipe_repositories

__all__ = [
    "RecipeRepository",
    "PackageRecipeRepository",
    "is_recipe_catalog",
    "VersionConstraintIndex",
    "InlineRecipeRepository",
    "RecipeRepositoryManager",
    "import_recipe_repositories",
]
