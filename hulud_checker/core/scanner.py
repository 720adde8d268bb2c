"""Per-file scanning: pick an extractor, extract candidates, match them."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..utils.logging import get_logger
from .exceptions import LockfileParseError
from .extractors import ExtractorRegistry, registry as default_registry
from .extractors.base import CandidatePair
from .index import VulnerabilityIndex
from .matcher import VulnerabilityMatcher


@dataclass
class MatchResult:
    """Outcome of scanning one lockfile."""

    lockfile: str
    matches: List[CandidatePair] = field(default_factory=list)
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def has_issues(self) -> bool:
        return bool(self.matches)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the JSON report.

        Returns:
            Dictionary with ``lockfile`` and ``packages``
        """
        return {
            "lockfile": self.lockfile,
            "packages": [match.to_dict() for match in self.matches],
        }


@dataclass
class ScanSummary:
    """Results of a multi-file scan, in scan order."""

    results: List[MatchResult] = field(default_factory=list)

    @property
    def total_affected_packages(self) -> int:
        return sum(len(result.matches) for result in self.results)

    @property
    def lockfiles_scanned(self) -> int:
        return len(self.results)

    @property
    def lockfiles_with_issues(self) -> int:
        return len(self.results_with_issues)

    @property
    def lockfiles_with_errors(self) -> int:
        return sum(1 for result in self.results if result.error)

    @property
    def results_with_issues(self) -> List[MatchResult]:
        return [result for result in self.results if result.has_issues]


class LockfileScanner:
    """Scans lockfile content against a vulnerability index."""

    def __init__(
        self,
        index: VulnerabilityIndex,
        extractors: Optional[ExtractorRegistry] = None,
        max_workers: int = 1
    ) -> None:
        """Initialize the scanner.

        Args:
            index: Index of affected packages
            extractors: Extractor registry (uses the built-in one if None)
            max_workers: Threads used by ``scan_files``
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.index = index
        self.extractors = extractors or default_registry
        self.max_workers = max_workers
        self.matcher = VulnerabilityMatcher(index)
        self.logger = get_logger("LockfileScanner")

    def scan_content(self, content: str, source: Union[str, Path]) -> MatchResult:
        """Scan raw lockfile content.

        The extractor is chosen from ``source``. A parse failure is logged and
        recorded on the result, which then carries no matches.

        Args:
            content: Raw lockfile text
            source: Path or label of the lockfile

        Returns:
            Match result for the lockfile
        """
        path = Path(source)
        result = MatchResult(lockfile=path.name or str(source), path=path)
        extractor = self.extractors.find_extractor_for_file(source)

        try:
            result.matches = self.matcher.match(extractor.extract(content, source))
        except LockfileParseError as e:
            self.logger.warning(f"{source}: {e}")
            result.error = str(e)

        return result

    def scan_file(self, path: Union[str, Path]) -> MatchResult:
        """Read and scan a lockfile from disk.

        Args:
            path: Path to the lockfile

        Returns:
            Match result; read failures are recorded rather than raised
        """
        path = Path(path)

        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            self.logger.warning(f"Cannot read lockfile {path}: {e}")
            return MatchResult(lockfile=path.name, path=path, error=str(e))

        return self.scan_content(content, path)

    def scan_files(self, paths: Sequence[Union[str, Path]]) -> ScanSummary:
        """Scan several lockfiles, in parallel when ``max_workers > 1``.

        Args:
            paths: Lockfile paths

        Returns:
            Summary with results in the same order as ``paths``
        """
        if self.max_workers == 1 or len(paths) < 2:
            return ScanSummary([self.scan_file(path) for path in paths])

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return ScanSummary(list(executor.map(self.scan_file, paths)))


def scan_lockfile_content(
    content: str,
    file_path: Union[str, Path],
    index: VulnerabilityIndex
) -> List[CandidatePair]:
    """Convenience function returning only the matches for one lockfile.

    Args:
        content: Raw lockfile text
        file_path: Path or label deciding the extractor
        index: Index of affected packages

    Returns:
        Affected pairs in order of first occurrence
    """
    return LockfileScanner(index).scan_content(content, file_path).matches
