"""Discovery of bundle class names from a package's PSR-4/PSR-0 autoload map."""
from __future__ import annotations

import logging
import os
import re
from typing import List

from constants import Job

from .models import Package

logger = logging.getLogger(__name__)

_BUNDLE_SUFFIX = "Bundle"
_KERNEL_BUNDLE_BASES = (
    "Symfony\\Component\\HttpKernel\\Bundle\\Bundle",
    "Symfony\\Component\\HttpKernel\\Bundle\\AbstractBundle",
)


def candidate_class_names(namespace: str) -> List[str]:
    """Possible bundle class names for an autoload namespace.

    The class named after the last namespace part comes first
    (``Acme\\Blog\\`` gives ``Acme\\Blog\\BlogBundle``), then for every
    leading part other than ``Bundle`` the part alone and the accumulated
    parts are prepended to it (``Acme\\Blog\\AcmeBlogBundle``).
    """
    namespace = namespace.strip("\\")
    prefix = namespace + "\\"
    parts = namespace.split("\\")
    suffix = parts[-1]
    if not suffix.endswith(_BUNDLE_SUFFIX):
        suffix += _BUNDLE_SUFFIX

    classes = [prefix + suffix]
    acc = ""
    for part in parts[:-1]:
        if part == _BUNDLE_SUFFIX:
            continue
        classes.append(prefix + part + suffix)
        acc += part
        classes.append(prefix + acc + suffix)

    unique: List[str] = []
    for cls in classes:
        if cls not in unique:
            unique.append(cls)
    return unique


def _class_file(install_path: str, path: str, cls: str, psr4: bool) -> str:
    parts = cls.split("\\")
    base = os.path.join(install_path, path)
    if not psr4:
        base = os.path.join(base, *parts[:-1])
    return os.path.join(base, parts[-1] + ".php")


def is_bundle_class(class_file: str, cls: str) -> bool:
    """True when ``class_file`` exists and declares ``cls`` as a bundle.

    The file must either reference the HttpKernel bundle base classes or
    declare ``class <Name> extends``.
    """
    if not os.path.isfile(class_file):
        return False

    with open(class_file, encoding="utf-8", errors="replace") as fh:
        contents = fh.read()

    if any(base in contents for base in _KERNEL_BUNDLE_BASES):
        return True

    short_name = re.escape(cls.rsplit("\\", 1)[-1])
    return re.search(r"\bclass\s+" + short_name + r"\s+extends\b", contents) is not None


def bundle_class_names(package: Package, install_path: str, job: str) -> List[str]:
    """Bundle classes declared by ``package``.

    Class files are checked except on uninstall, where the code may already
    be gone.
    """
    check_files = job != Job.UNINSTALL.value
    classes: List[str] = []
    for psr, psr4 in (("psr-4", True), ("psr-0", False)):
        mapping = package.autoload.get(psr) or {}
        for namespace, paths in mapping.items():
            if not isinstance(paths, list):
                paths = [paths]
            for path in paths:
                for cls in candidate_class_names(namespace):
                    if check_files and not is_bundle_class(_class_file(install_path, path, cls, psr4), cls):
                        continue
                    classes.append(cls)

    logger.debug("Bundle classes of %s: %s", package.name, classes)
    return classes
