"""Target directory options used to expand ``%NAME_DIR%`` placeholders."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from constants import Constants

_PLACEHOLDER = re.compile(r"%(.+?)%")


class TargetDirOptions:
    """Directory options of the project (``config-dir``, ``src-dir``, ...).

    Values start from ``Constants.TARGET_DIR_DEFAULTS`` and are overridden by
    the mappings passed in, later mappings winning.
    """

    def __init__(self, *overrides: Optional[Mapping[str, Any]]):
        self._options: Dict[str, Any] = dict(Constants.TARGET_DIR_DEFAULTS)
        for mapping in overrides:
            if mapping:
                self._options.update(mapping)

    def get(self, name: str, default: Any = None) -> Any:
        return self._options.get(name, default)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._options)

    def expand_target_dir(self, target: str) -> str:
        """Replace ``%CONFIG_DIR%`` style placeholders with option values.

        The option name is the placeholder lowercased with ``_`` turned into
        ``-``. Unknown placeholders are left untouched; a trailing ``/`` of
        the option value is dropped.
        """
        def _replace(match: "re.Match[str]") -> str:
            option = match.group(1).lower().replace("_", "-")
            value = self._options.get(option)
            if value is None:
                return match.group(0)
            return str(value).rstrip("/")

        return _PLACEHOLDER.sub(_replace, target)
