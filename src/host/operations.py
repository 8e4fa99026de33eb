"""Build operations from a plain description (the CLI's operations file).

Each entry is an object with a ``job`` (install, update, uninstall) and a
``package``: either a package name looked up in composer.lock or a full
composer.lock style package object. Updates may give the replaced version
with ``from``.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Iterable, List, Mapping

from constants import Job
from errors import ConfigurationError

from .composer import ComposerProject
from .models import Operation, Package


def _resolve_package(value: Any, project: ComposerProject) -> Package:
    if isinstance(value, Mapping):
        return Package.from_lock_entry(dict(value))
    package = project.find_package(str(value))
    if package is None:
        raise ConfigurationError(f'The package "{value}" is not locked in {project.root_dir}')
    return package


def parse_operations(entries: Iterable[Mapping[str, Any]], project: ComposerProject) -> List[Operation]:
    """Operations described by ``entries``, in order.

    Raises:
        ConfigurationError: unknown job or package.
    """
    operations: List[Operation] = []
    for entry in entries:
        try:
            job = Job(str(entry.get("job", "")).lower())
        except ValueError as exc:
            raise ConfigurationError(f"Unknown operation job in {dict(entry)!r}") from exc

        package = _resolve_package(entry.get("package"), project)

        if job is Job.UPDATE:
            initial = package
            if entry.get("from"):
                initial = dataclasses.replace(package, pretty_version=str(entry["from"]))
            operations.append(Operation.update(initial, package))
        elif job is Job.INSTALL:
            operations.append(Operation.install(package))
        else:
            operations.append(Operation.uninstall(package))

    return operations
