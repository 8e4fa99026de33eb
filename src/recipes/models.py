"""Data models for recipes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from constants import Constants
from errors import RecipeDataError
from host.models import Package


class Manifest(Mapping):
    """Declarative instructions of a recipe (the decoded ``rope.json``).

    Recognized keys are validated on construction and exposed through typed
    accessors; any other key is kept as is for the configurator.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None, source: str = "manifest"):
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise RecipeDataError(f"The {source} must be a JSON object, got {type(data).__name__}")
        self._data: Dict[str, Any] = dict(data)
        self._source = source
        self._validate()

    def _validate(self) -> None:
        bundles = self._data.get(Constants.MANIFEST_BUNDLES)
        if bundles is not None and not isinstance(bundles, Mapping):
            self._fail(Constants.MANIFEST_BUNDLES, "an object")

        copy = self._data.get(Constants.MANIFEST_COPY_FROM_RECIPE)
        if copy is not None:
            if not isinstance(copy, Mapping) or not all(isinstance(v, str) for v in copy.values()):
                self._fail(Constants.MANIFEST_COPY_FROM_RECIPE, "an object of target paths")

        merge = self._data.get(Constants.MANIFEST_MERGE_FALLBACK)
        if merge is not None and not isinstance(merge, bool):
            self._fail(Constants.MANIFEST_MERGE_FALLBACK, "a boolean")

        output = self._data.get(Constants.MANIFEST_POST_INSTALL_OUTPUT)
        if output is not None:
            if not isinstance(output, list) or not all(isinstance(line, str) for line in output):
                self._fail(Constants.MANIFEST_POST_INSTALL_OUTPUT, "a list of strings")

    def _fail(self, key: str, expected: str) -> None:
        raise RecipeDataError(f'The "{key}" key of the {self._source} must be {expected}')

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Manifest({self._data!r})"

    @property
    def bundles(self) -> Dict[str, List[str]]:
        return dict(self._data.get(Constants.MANIFEST_BUNDLES) or {})

    @property
    def copy_from_recipe(self) -> Dict[str, str]:
        return dict(self._data.get(Constants.MANIFEST_COPY_FROM_RECIPE) or {})

    @property
    def merge_fallback_recipe(self) -> bool:
        return self._data.get(Constants.MANIFEST_MERGE_FALLBACK) is True

    @property
    def post_install_output(self) -> List[str]:
        return list(self._data.get(Constants.MANIFEST_POST_INSTALL_OUTPUT) or [])

    def with_bundles(self, classes: List[str], envs: List[str]) -> "Manifest":
        """Copy of the manifest with ``classes`` registered for ``envs``."""
        data = self.to_dict()
        bundles = dict(data.get(Constants.MANIFEST_BUNDLES) or {})
        for cls in classes:
            bundles[cls] = list(envs)
        data[Constants.MANIFEST_BUNDLES] = bundles
        return Manifest(data, self._source)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)


@dataclass(frozen=True)
class RecipeFile:
    """A file shipped by a recipe, keyed by its target path."""
    contents: bytes
    executable: bool = False

    @classmethod
    def from_data(cls, data: Any) -> "RecipeFile":
        """Build from a ``{contents, executable}`` mapping as returned by the fallback system."""
        if isinstance(data, RecipeFile):
            return data
        if not isinstance(data, Mapping):
            raise RecipeDataError(f"Invalid recipe file entry: {data!r}")
        contents = data.get("contents", b"")
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        elif isinstance(contents, list):
            contents = "\n".join(contents).encode("utf-8")
        return cls(contents=bytes(contents), executable=bool(data.get("executable", False)))

    def to_dict(self) -> Dict[str, Any]:
        return {"contents": self.contents, "executable": self.executable}


@dataclass
class Recipe:
    """Recipe located for one package operation."""
    package: Package
    job: str
    manifest: Manifest
    origin: str
    reference: str = ""
    files: Dict[str, RecipeFile] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.package.name

    def replace_data(self, manifest: Manifest, files: Dict[str, RecipeFile]) -> None:
        """Swap manifest and files after merging with the fallback recipe."""
        self.manifest = manifest
        self.files = dict(files)


@dataclass(frozen=True)
class OriginParts:
    """Structured view of an origin string ``package:version@repo[:branch]``."""
    package: str
    version: str
    repo: str
    branch: Optional[str] = None
