"""Data models for packages and operations reported by the dependency manager."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from constants import Job


@dataclass
class Package:
    """Metadata of an installed (or to be installed) package."""
    name: str
    pretty_version: str
    type: str = "library"
    source_url: Optional[str] = None
    dist_url: Optional[str] = None
    source_reference: Optional[str] = None
    dist_reference: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    autoload: Dict[str, Any] = field(default_factory=dict)
    alias_of: Optional["Package"] = None

    @property
    def reference(self) -> str:
        """Source reference, else dist reference, else an empty string."""
        return self.source_reference or self.dist_reference or ""

    def unwrap_alias(self) -> "Package":
        """Return the aliased package for alias packages, else self."""
        package = self
        while package.alias_of is not None:
            package = package.alias_of
        return package

    @classmethod
    def from_lock_entry(cls, data: Dict[str, Any]) -> "Package":
        """Build a package from a composer.lock ``packages`` entry."""
        source = data.get("source") or {}
        dist = data.get("dist") or {}
        return cls(
            name=data["name"],
            pretty_version=str(data.get("version", "")),
            type=data.get("type") or "library",
            source_url=source.get("url"),
            dist_url=dist.get("url"),
            source_reference=source.get("reference"),
            dist_reference=dist.get("reference"),
            extra=dict(data.get("extra") or {}),
            autoload=dict(data.get("autoload") or {}),
        )


@dataclass
class Operation:
    """A pending install/update/uninstall of one package.

    For updates ``package`` is the target package and ``initial_package`` the
    one being replaced.
    """
    job: Job
    package: Package
    initial_package: Optional[Package] = None

    @property
    def job_type(self) -> str:
        """Job name as a plain string."""
        return self.job.value

    @classmethod
    def install(cls, package: Package) -> "Operation":
        return cls(Job.INSTALL, package)

    @classmethod
    def update(cls, initial: Package, target: Package) -> "Operation":
        return cls(Job.UPDATE, target, initial_package=initial)

    @classmethod
    def uninstall(cls, package: Package) -> "Operation":
        return cls(Job.UNINSTALL, package)
