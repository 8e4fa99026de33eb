"""Recipe resolution engine package.

This package decides, for a batch of package operations, which Rope recipes
replace, suppress or extend the fallback recipe system, keeps the recipe
lock in sync and applies the recipes.
"""

from .configurators import AbstractConfigurator, ConfiguratorRegistry
from .interfaces import FallbackRecipeSystem, RecipeLock
from .lock import InMemoryRecipeLock, JsonRecipeLock
from .resolution import RecipeDecision, RecipeResolutionEngine, ResolutionResult

__all__ = [
    "AbstractConfigurator",
    "ConfiguratorRegistry",
    "FallbackRecipeSystem",
    "RecipeLock",
    "InMemoryRecipeLock",
    "JsonRecipeLock",
    "RecipeDecision",
    "RecipeResolutionEngine",
    "ResolutionResult",
]
