"""Core matching logic for hulud-checker."""

from typing import Iterable, List, Set

from ..utils.logging import get_logger
from .extractors.base import CandidatePair
from .index import VulnerabilityIndex


class VulnerabilityMatcher:
    """Checks extracted candidates against a vulnerability index.

    The matcher holds nothing but the index, which is read-only, so one
    instance can serve scans running on several threads at once.
    """

    def __init__(self, index: VulnerabilityIndex) -> None:
        """Initialize the vulnerability matcher.

        Args:
            index: Index of affected packages
        """
        self.index = index
        self.logger = get_logger("VulnerabilityMatcher")

    def match(self, candidates: Iterable[CandidatePair]) -> List[CandidatePair]:
        """Filter candidates down to the affected ones.

        Each distinct ``name@version`` is checked once; repeats (the same
        entry seen by both text scans, or a package present in several
        subtrees) are skipped. The result keeps first-occurrence order.

        Args:
            candidates: Candidate pairs from a single lockfile

        Returns:
            Affected pairs in order of first occurrence
        """
        matches = []
        checked: Set[str] = set()

        for candidate in candidates:
            key = candidate.key
            if key in checked:
                continue
            checked.add(key)

            if self.index.has(candidate.name, candidate.version):
                self.logger.debug(f"MATCH: {key}")
                matches.append(candidate)

        self.logger.debug(f"Checked {len(checked)} unique candidates, {len(matches)} affected")
        return matches


def match_candidates(
    candidates: Iterable[CandidatePair],
    index: VulnerabilityIndex
) -> List[CandidatePair]:
    """Convenience function to match candidates against an index.

    Args:
        candidates: Candidate pairs from a single lockfile
        index: Index of affected packages

    Returns:
        Affected pairs in order of first occurrence
    """
    return VulnerabilityMatcher(index).match(candidates)
