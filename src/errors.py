"""Exceptions raised while locating and resolving recipes."""


class RopeError(Exception):
    """Base class for recipe resolution errors."""


class ConfigurationError(RopeError):
    """Raised for invalid setup: catalog without opt-in, bad configurator, duplicate registration."""


class RecipeDataError(RopeError):
    """Raised when a recipe catalog contains malformed data (manifest, folder names)."""


class ConstraintError(RecipeDataError):
    """Raised when a version folder name cannot be parsed as a version constraint."""
