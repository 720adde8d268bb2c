"""Lockfile extraction and matching core for hulud-checker."""

from .exceptions import DatasetError, HuludCheckerError, LockfileParseError
from .extractors import CandidatePair, LockfileFormat, classify
from .index import AffectedRecord, VulnerabilityIndex, load_affected_records, load_index
from .matcher import VulnerabilityMatcher, match_candidates
from .scanner import LockfileScanner, MatchResult, ScanSummary, scan_lockfile_content

__all__ = [
    "AffectedRecord",
    "CandidatePair",
    "DatasetError",
    "HuludCheckerError",
    "LockfileFormat",
    "LockfileParseError",
    "LockfileScanner",
    "MatchResult",
    "ScanSummary",
    "VulnerabilityIndex",
    "VulnerabilityMatcher",
    "classify",
    "load_affected_records",
    "load_index",
    "match_candidates",
    "scan_lockfile_content",
]
