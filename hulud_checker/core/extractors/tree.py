"""Extractor for JSON-shaped npm lockfiles (package-lock.json, npm-shrinkwrap.json)."""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from ..exceptions import LockfileParseError
from .base import BaseExtractor, CandidatePair, LockfileFormat

NODE_MODULES_SEGMENT = "node_modules/"


def package_name_from_path(key: str) -> Optional[str]:
    """Derive a package name from a flat-manifest install path.

    Everything after the last ``node_modules/`` segment is the name, so
    nested overrides resolve to the innermost package and scoped names
    keep their ``@scope/`` prefix.

    Args:
        key: Install path such as ``node_modules/foo/node_modules/@s/bar``

    Returns:
        Package name, or None for the root entry and workspace folders
    """
    position = key.rfind(NODE_MODULES_SEGMENT)
    if position == -1:
        return None
    name = key[position + len(NODE_MODULES_SEGMENT):]
    return name or None


def _version_of(entry: Any) -> Optional[str]:
    if not isinstance(entry, dict):
        return None
    version = entry.get("version")
    if isinstance(version, str) and version:
        return version
    return None


class TreeExtractor(BaseExtractor):
    """Walks the ``packages`` manifest and the legacy ``dependencies`` tree."""

    def __init__(self) -> None:
        """Initialize the JSON tree extractor."""
        super().__init__()
        self.lockfile_format = LockfileFormat.JSON_TREE
        self.supported_extensions = [".json"]

    def extract(self, content: str, source: Union[str, Path] = "") -> Iterator[CandidatePair]:
        """Yield candidates from both JSON passes.

        Args:
            content: Raw JSON text
            source: Label or path of the lockfile

        Yields:
            Flat-manifest candidates, then nested-tree candidates

        Raises:
            LockfileParseError: If the content is not valid JSON or nests too deeply
        """
        try:
            document = json.loads(content)
        except (json.JSONDecodeError, RecursionError) as e:
            raise LockfileParseError(f"Error parsing JSON lockfile: {e}", str(source)) from e

        if not isinstance(document, dict):
            return

        packages = document.get("packages")
        if isinstance(packages, dict):
            yield from self._walk_manifest(packages)

        dependencies = document.get("dependencies")
        if isinstance(dependencies, dict):
            try:
                yield from self._walk_dependency_tree(dependencies)
            except RecursionError as e:
                raise LockfileParseError("Dependency tree is nested too deeply", str(source)) from e

    def _walk_manifest(self, packages: Dict[str, Any]) -> Iterator[CandidatePair]:
        """Yield one candidate per install path in a v2/v3 ``packages`` object.

        Args:
            packages: The ``packages`` object keyed by install path

        Yields:
            Candidate pairs in key order
        """
        for key, entry in packages.items():
            version = _version_of(entry)
            if version is None:
                continue

            name = package_name_from_path(key)
            if name is None:
                continue

            yield CandidatePair(name, version)

    def _walk_dependency_tree(self, dependencies: Dict[str, Any]) -> Iterator[CandidatePair]:
        """Pre-order walk of a v1 ``dependencies`` tree.

        Args:
            dependencies: A ``dependencies`` object keyed by package name

        Yields:
            Candidate pairs, parents before their children
        """
        for name, entry in dependencies.items():
            version = _version_of(entry)
            if version is not None:
                yield CandidatePair(name, version)

            # Children are walked even when the parent carries no version
            children = entry.get("dependencies") if isinstance(entry, dict) else None
            if isinstance(children, dict):
                yield from self._walk_dependency_tree(children)
