"""Composer version handling for recipe folder matching.

Composer pretty versions (``v2.3.0``, ``2.0.0-RC1``, ``2.x-dev``) are mapped
onto ``packaging`` versions so they can be ordered and compared. A recipe
version folder ``2.0`` is read as the constraint ``>= 2.0`` with Composer's
implicit ``-dev`` floor, so pre-releases of 2.0 still match it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from packaging import version

from constants import Constants
from errors import ConstraintError

# Composer normalizes "x" wildcards of dev branch aliases to this number.
WILDCARD_COMPONENT = "9999999"

_WILDCARD_DEV = re.compile(r"^(\d+(?:\.\d+){0,2})\.[x*](?:-dev)?$", re.IGNORECASE)
_PATCH_SUFFIX = re.compile(r"[-.]?(?:patch|pl|p)(\d*)$", re.IGNORECASE)
_STABLE_SUFFIX = re.compile(r"[-.]?stable$", re.IGNORECASE)


def is_dev_branch(raw: str) -> bool:
    """True for branch versions such as ``dev-master``."""
    return raw.startswith(Constants.DEV_BRANCH_PREFIX)


def parse_version(raw: str) -> version.Version:
    """Parse a Composer version string.

    Raises:
        ConstraintError: when the string is not a version (``dev-*`` branch
            names included).
    """
    text = (raw or "").strip()
    if text[:1] in ("v", "V"):
        text = text[1:]

    wildcard = _WILDCARD_DEV.match(text)
    if wildcard:
        parts = wildcard.group(1).split(".")
        parts += [WILDCARD_COMPONENT] * (4 - len(parts))
        text = ".".join(parts) + ".dev0"
    else:
        text = _STABLE_SUFFIX.sub("", text)
        text = _PATCH_SUFFIX.sub(lambda m: ".post" + (m.group(1) or "0"), text)

    try:
        return version.Version(text)
    except version.InvalidVersion as exc:
        raise ConstraintError(f'Could not parse version "{raw}"') from exc


def lower_bound(folder_version: version.Version) -> version.Version:
    """Smallest version satisfying ``>= folder_version`` in Composer terms."""
    if folder_version.is_prerelease or folder_version.is_postrelease:
        return folder_version
    return version.Version(f"{folder_version.base_version}.dev0")


def effective_version(pretty_version: str, extra: Optional[Mapping[str, Any]] = None) -> str:
    """Version used for recipe matching.

    Dev branches are replaced by their branch alias (the alias of the branch
    itself, else the ``dev-master`` alias) when one is configured.
    """
    if not is_dev_branch(pretty_version):
        return pretty_version

    aliases = (extra or {}).get(Constants.EXTRA_BRANCH_ALIAS) or {}
    alias = aliases.get(pretty_version) or aliases.get(Constants.DEFAULT_BRANCH_ALIAS_KEY)
    return alias or pretty_version


@dataclass(frozen=True)
class FolderConstraint:
    """``>= folder`` constraint built from a recipe version folder name."""
    folder: str
    version: version.Version

    @classmethod
    def parse(cls, folder: str) -> "FolderConstraint":
        return cls(folder=folder, version=parse_version(folder))

    def matches(self, package_version: str) -> bool:
        """True when ``package_version`` satisfies ``>= folder``.

        Dev branches without an alias never match a numeric folder.
        """
        if is_dev_branch(package_version):
            return False
        return parse_version(package_version) >= lower_bound(self.version)

    def __str__(self) -> str:
        return f">={self.folder}"
