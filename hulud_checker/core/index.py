"""Affected-package dataset loading and the read-only vulnerability index."""

import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Set, Union

from ..utils.logging import get_logger
from .exceptions import DatasetError

# "<name>";"<version>", no escaping of embedded quotes
RECORD_PATTERN = re.compile(r'"([^"]+)";"([^"]+)"')

logger = get_logger("VulnerabilityIndex")


@dataclass(frozen=True)
class AffectedRecord:
    """A compromised (name, version) pair from the dataset."""

    name: str
    version: str


class VulnerabilityIndex:
    """Immutable mapping from package name to its affected version strings.

    Lookups compare names and versions byte for byte; nothing is lowercased
    or stripped, so callers pass exactly what the lockfile says.
    """

    def __init__(self, entries: Mapping[str, Iterable[str]]) -> None:
        self._entries: Mapping[str, FrozenSet[str]] = MappingProxyType(
            {name: frozenset(versions) for name, versions in entries.items()}
        )

    @classmethod
    def build(cls, records: Iterable[AffectedRecord]) -> "VulnerabilityIndex":
        """Build an index, unioning the versions of records that share a name.

        Args:
            records: Affected records in any order

        Returns:
            The populated index
        """
        merged: Dict[str, Set[str]] = {}
        for record in records:
            merged.setdefault(record.name, set()).add(record.version)
        return cls(merged)

    def has(self, name: str, version: str) -> bool:
        """Check whether an exact (name, version) pair is affected."""
        versions = self._entries.get(name)
        return versions is not None and version in versions

    def versions_for(self, name: str) -> FrozenSet[str]:
        """Affected versions of a package, empty when the name is unknown."""
        return self._entries.get(name, frozenset())

    @property
    def package_count(self) -> int:
        return len(self._entries)

    @property
    def version_count(self) -> int:
        return sum(len(versions) for versions in self._entries.values())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"VulnerabilityIndex(packages={self.package_count}, versions={self.version_count})"


def parse_affected_records(content: str) -> List[AffectedRecord]:
    """Parse dataset text into records.

    The first line is a header. Blank lines and lines without a
    ``"name";"version"`` pair are skipped.

    Args:
        content: Dataset file content

    Returns:
        Records in file order
    """
    records = []
    lines = content.strip().split("\n")

    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue

        match = RECORD_PATTERN.search(line)
        if match:
            records.append(AffectedRecord(match.group(1), match.group(2)))

    return records


def load_affected_records(dataset_path: Union[str, Path]) -> List[AffectedRecord]:
    """Read and parse the affected-packages dataset.

    Args:
        dataset_path: Path to the semicolon-delimited dataset file

    Returns:
        Records in file order

    Raises:
        DatasetError: If the file cannot be read or yields no records
    """
    dataset_path = Path(dataset_path)

    try:
        content = dataset_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DatasetError(f"Cannot read affected packages file {dataset_path}: {e}") from e

    records = parse_affected_records(content)
    if not records:
        raise DatasetError(f"No affected packages found in {dataset_path}")

    return records


def load_index(dataset_path: Union[str, Path]) -> VulnerabilityIndex:
    """Load the dataset file into a vulnerability index.

    Args:
        dataset_path: Path to the dataset file

    Returns:
        The populated index

    Raises:
        DatasetError: If the dataset cannot be loaded
    """
    index = VulnerabilityIndex.build(load_affected_records(dataset_path))
    logger.info(
        f"Loaded {index.package_count} unique packages with "
        f"{index.version_count} affected versions from {dataset_path}"
    )
    return index
