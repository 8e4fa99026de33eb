"""Origin strings, recipe repository locators and lock entries."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from constants import Constants
from host.models import Package

from .models import OriginParts, Recipe

ORIGIN_PATTERN = re.compile(r"^([^:]+?):([^@]+)@(.+)$")


def build_origin(name: str, version: str, repo_locator: str) -> str:
    """Return ``name:version@repo_locator``."""
    return f"{name}:{version}@{repo_locator}"


def parse_origin(origin: str) -> Optional[OriginParts]:
    """Split an origin string into its parts, or None when it does not match."""
    match = ORIGIN_PATTERN.match(origin or "")
    if not match:
        return None
    repo, sep, branch = match.group(3).partition(":")
    return OriginParts(
        package=match.group(1),
        version=match.group(2),
        repo=repo,
        branch=branch if sep else None,
    )


def format_origin(origin: str) -> str:
    """Human readable origin, e.g. ``acme/widget (>=1.2): From github.com/acme/widget:main``."""
    match = ORIGIN_PATTERN.match(origin or "")
    if not match:
        return origin
    return f"{match.group(1)} (>={match.group(2)}): From {match.group(3)}"


def recipe_repo(package: Package) -> str:
    """Repository locator of a package: ``<url host or "packages">/<name>``."""
    url = package.source_url if package.source_url is not None else package.dist_url
    host = urlparse(url).hostname if url else None
    return f"{host or Constants.DEFAULT_REPO_HOST}/{package.name}"


def recipe_branch(package: Package) -> str:
    """Branch of a package: its pretty version without the ``dev-`` marker."""
    return package.pretty_version.replace(Constants.DEV_BRANCH_PREFIX, "")


def build_lock_entry(recipe: Recipe) -> Dict[str, Any]:
    """Lock entry recording which recipe was applied for ``recipe.name``."""
    parts = parse_origin(recipe.origin)
    lock_version = parts.version if parts and parts.version else recipe.package.pretty_version

    return {
        "version": lock_version,
        "recipe": {
            "repo": parts.repo if parts else Constants.DEFAULT_LOCK_REPO,
            "branch": parts.branch if parts and parts.branch else Constants.DEFAULT_LOCK_BRANCH,
            "version": lock_version,
            "ref": recipe.reference,
        },
    }
