"""Extractor for YAML-like lockfiles (pnpm-lock.yaml, yarn.lock, bun.lock).

No YAML parser is involved. Two scans run over the raw text and their
candidates are pooled:

* the inline scan picks up ``'name@version':`` keys, as written in the
  ``packages:`` and ``snapshots:`` sections of pnpm lockfiles;
* the import scan follows the two-line form of the ``importers:`` section::

      'left-pad':
        specifier: ^1.3.0
        version: 1.3.0
"""

import re
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .base import BaseExtractor, CandidatePair, LockfileFormat

# 'name@version': or name@version:, name may start with a single @ scope marker
INLINE_ENTRY_PATTERN = re.compile(r"""['"]?(@?[^@'"\s]+)@([^'":\s]+)['"]?:""")

IMPORT_KEY_PATTERN = re.compile(r"""^\s+['"]?(@?[\w\-./]+)['"]?:\s*$""", re.ASCII)
VERSION_LINE_PATTERN = re.compile(r"""^\s+version:\s*['"]?([^'"(\s]+)""")
SPECIFIER_LINE_PATTERN = re.compile(r"^\s+specifier:")


class ScanState(Enum):
    """States of the import-block scanner."""

    IDLE = "idle"
    AWAITING_VERSION = "awaiting-version"


class ImportBlockScanner:
    """Line-fed state machine pairing a package key with its ``version:`` line.

    In ``IDLE`` an indented bare key (``  'name':``) is captured and the
    scanner moves to ``AWAITING_VERSION``. There a ``version:`` line emits
    the pair, a ``specifier:`` line is passed over, and any other line drops
    the pending name and is evaluated again from ``IDLE``.
    """

    def __init__(self) -> None:
        self.state = ScanState.IDLE
        self.pending_name: Optional[str] = None

    def reset(self) -> None:
        """Return to ``IDLE`` and forget any pending name."""
        self.state = ScanState.IDLE
        self.pending_name = None

    def feed(self, line: str) -> Optional[CandidatePair]:
        """Advance the machine by one line.

        Args:
            line: A single lockfile line without its newline

        Returns:
            A candidate pair when the line completes one, otherwise None
        """
        if self.state is ScanState.AWAITING_VERSION:
            version_match = VERSION_LINE_PATTERN.match(line)
            if version_match:
                candidate = CandidatePair(self.pending_name, version_match.group(1))
                self.reset()
                return candidate

            if SPECIFIER_LINE_PATTERN.match(line):
                return None

            # Workspace links and other version-less entries end up here
            self.reset()

        key_match = IMPORT_KEY_PATTERN.match(line)
        if key_match:
            self.pending_name = key_match.group(1)
            self.state = ScanState.AWAITING_VERSION
        return None


def scan_inline_entries(lines: List[str]) -> Iterator[CandidatePair]:
    """Yield every inline ``name@version:`` key found in the lines."""
    for line in lines:
        for match in INLINE_ENTRY_PATTERN.finditer(line):
            yield CandidatePair(match.group(1), match.group(2))


def scan_import_blocks(lines: List[str]) -> Iterator[CandidatePair]:
    """Yield pairs from two-line ``name:`` / ``version:`` blocks."""
    scanner = ImportBlockScanner()
    for line in lines:
        candidate = scanner.feed(line)
        if candidate is not None:
            yield candidate


class TextExtractor(BaseExtractor):
    """Pools the inline scan and the import-block scan over raw text."""

    def __init__(self) -> None:
        """Initialize the text extractor."""
        super().__init__()
        self.lockfile_format = LockfileFormat.LINE_ORIENTED
        self.supported_extensions = [".yaml", ".yml", ".lock", ".lockb", ""]

    def extract(self, content: str, source: Union[str, Path] = "") -> Iterator[CandidatePair]:
        """Yield candidates from both text scans.

        Args:
            content: Raw lockfile text
            source: Label or path of the lockfile (unused, text never fails)

        Yields:
            Inline-scan candidates, then import-block candidates
        """
        lines = content.split("\n")
        yield from scan_inline_entries(lines)
        yield from scan_import_blocks(lines)
