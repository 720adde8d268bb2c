"""hulud-checker - scan dependency lockfiles for known-compromised package versions."""

__version__ = "0.1.0"

from .core import (
    CandidatePair,
    LockfileScanner,
    VulnerabilityIndex,
    VulnerabilityMatcher,
    load_index,
    scan_lockfile_content,
)
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "CandidatePair",
    "LockfileScanner",
    "VulnerabilityIndex",
    "VulnerabilityMatcher",
    "load_index",
    "scan_lockfile_content",
    "ConsoleFormatter",
    "JSONFormatter",
]
