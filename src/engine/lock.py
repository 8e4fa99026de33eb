"""Recipe lock persisted as a JSON file (``symfony.lock`` layout)."""
from __future__ import annotations

import copy
import logging
import os
from typing import Any, Dict, Optional

from common.json_file import read_json_object, write_json_object

from .interfaces import RecipeLock

logger = logging.getLogger(__name__)


class InMemoryRecipeLock(RecipeLock):
    """Lock entries kept in a dict."""

    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        self._entries: Dict[str, Any] = copy.deepcopy(entries or {})

    def has(self, name: str) -> bool:
        return name in self._entries

    def get(self, name: str) -> Optional[Dict[str, Any]]:
        return self._entries.get(name)

    def add(self, name: str, data: Dict[str, Any]) -> None:
        self._entries[name] = data

    def remove(self, name: str) -> None:
        self._entries.pop(name, None)

    def all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._entries)


class JsonRecipeLock(InMemoryRecipeLock):
    """Lock loaded from and written back to ``path``."""

    def __init__(self, path: str):
        self.path = path
        entries = read_json_object(path) if os.path.isfile(path) else {}
        super().__init__(entries)

    def write(self) -> None:
        write_json_object(self.path, self.all())
        logger.info("Recipe lock written to %s", self.path)
