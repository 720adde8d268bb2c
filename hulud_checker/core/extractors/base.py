"""Base extractor class and data models for lockfile extraction."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Union


class LockfileFormat(Enum):
    """Extraction strategy a lockfile is routed to."""

    JSON_TREE = "json-tree"
    LINE_ORIENTED = "line-oriented"


@dataclass(frozen=True)
class CandidatePair:
    """A (name, version) pair observed in a lockfile, prior to matching."""

    name: str
    version: str

    @property
    def key(self) -> str:
        """Deduplication key in ``name@version`` form."""
        return f"{self.name}@{self.version}"

    def to_dict(self) -> Dict[str, str]:
        """Serialize using the report field names.

        Returns:
            Dictionary with ``packageName`` and ``version``
        """
        return {"packageName": self.name, "version": self.version}


class BaseExtractor(ABC):
    """Abstract base class for lockfile extractors."""

    def __init__(self) -> None:
        """Initialize the extractor."""
        self.supported_extensions: List[str] = []
        self.lockfile_format: LockfileFormat = LockfileFormat.LINE_ORIENTED

    @abstractmethod
    def extract(self, content: str, source: Union[str, Path] = "") -> Iterator[CandidatePair]:
        """Lazily yield candidate pairs found in lockfile content.

        Args:
            content: Raw lockfile text
            source: Label or path of the lockfile, used in error messages

        Yields:
            Candidate pairs in order of appearance

        Raises:
            LockfileParseError: If the content cannot be parsed at all
        """
        pass

    def extract_all(self, content: str, source: Union[str, Path] = "") -> List[CandidatePair]:
        """Materialize every candidate pair for the given content.

        Args:
            content: Raw lockfile text
            source: Label or path of the lockfile

        Returns:
            List of candidate pairs, duplicates included
        """
        return list(self.extract(content, source))
