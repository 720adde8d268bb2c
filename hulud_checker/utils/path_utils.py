"""Path utilities for finding lockfiles and filtering paths."""

import fnmatch
import os
from pathlib import Path
from typing import List, Optional, Union

from .logging import get_logger

# Common lockfile names, checked first and in this order in every directory
COMMON_LOCKFILES = [
    "package-lock.json",
    "npm-shrinkwrap.json",
    "pnpm-lock.yaml",
    "yarn.lock",
    "bun.lockb",
    "bun.lock",
]

LOCKFILE_EXTENSIONS = (".json", ".yaml", ".yml", ".lock", ".lockb")

SKIP_DIRS = frozenset({
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "vendor",
    "dist",
    "build",
    ".next",
    ".nuxt",
    ".output",
    ".turbo",
    ".cache",
})

DEFAULT_LOCKS_DIR = Path("locks")

logger = get_logger("PathUtils")


def is_lockfile(filename: str) -> bool:
    """Check if a file name looks like a lockfile.

    Args:
        filename: Base name of the file

    Returns:
        True for the common lockfile names, and for names containing
        ``lock`` with a lockfile extension
    """
    lower = filename.lower()

    if lower in (name.lower() for name in COMMON_LOCKFILES):
        return True

    return "lock" in lower and lower.endswith(LOCKFILE_EXTENSIONS)


class PathFilter:
    """Decides which directories and files the lockfile search skips."""

    def __init__(self, ignore_patterns: Optional[List[str]] = None) -> None:
        """Initialize path filter.

        Args:
            ignore_patterns: Additional glob patterns matched against full paths and names
        """
        self.ignore_patterns = list(ignore_patterns or [])

    def is_ignored(self, path: Path) -> bool:
        """Check if a path matches one of the extra ignore patterns.

        Args:
            path: Path to check

        Returns:
            True if path should be ignored
        """
        path_str = str(path)

        for pattern in self.ignore_patterns:
            if fnmatch.fnmatch(path_str, pattern) or fnmatch.fnmatch(path.name, pattern):
                return True

        return False

    def should_descend(self, directory: Path) -> bool:
        """Check if the search should recurse into a directory.

        Args:
            directory: Directory to check

        Returns:
            False for dependency, VCS, build output and hidden directories
        """
        name = directory.name
        if name in SKIP_DIRS or name.startswith("."):
            return False
        return not self.is_ignored(directory)


class LockfileFinder:
    """Finds lockfiles in a project directory."""

    def __init__(self, ignore_patterns: Optional[List[str]] = None) -> None:
        """Initialize lockfile finder.

        Args:
            ignore_patterns: Additional ignore patterns
        """
        self.path_filter = PathFilter(ignore_patterns)

    def find_lockfiles(self, root_path: Path, recursive: bool = True) -> List[Path]:
        """Find lockfiles under a directory.

        Within each directory the common lockfiles come first, then any other
        lockfile-like files, then the contents of subdirectories.

        Args:
            root_path: Directory to search
            recursive: Descend into subdirectories

        Returns:
            List of lockfile paths
        """
        found: List[Path] = []

        for name in COMMON_LOCKFILES:
            candidate = root_path / name
            if candidate.is_file() and not self.path_filter.is_ignored(candidate):
                found.append(candidate)

        try:
            entries = sorted(os.scandir(root_path), key=lambda entry: entry.name)
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {root_path}: {e}")
            return found

        subdirectories = []
        for entry in entries:
            entry_path = Path(entry.path)
            # Symlinked entries are not followed
            try:
                is_file = entry.is_file(follow_symlinks=False)
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                logger.debug(f"Skipping unreadable entry {entry_path}: {e}")
                continue

            if is_file:
                if is_lockfile(entry.name) and entry_path not in found and not self.path_filter.is_ignored(entry_path):
                    found.append(entry_path)
            elif recursive and is_dir and self.path_filter.should_descend(entry_path):
                subdirectories.append(entry_path)

        for directory in subdirectories:
            found.extend(self.find_lockfiles(directory, recursive=True))

        return found


def find_lockfiles(
    root_path: Union[str, Path],
    recursive: bool = True,
    ignore_patterns: Optional[List[str]] = None
) -> List[Path]:
    """Convenience function to find lockfiles.

    Args:
        root_path: Root directory to search
        recursive: Descend into subdirectories
        ignore_patterns: Additional ignore patterns

    Returns:
        List of lockfile paths
    """
    finder = LockfileFinder(ignore_patterns)
    return finder.find_lockfiles(Path(root_path), recursive)


def resolve_lockfiles(
    path: Optional[Union[str, Path]] = None,
    recursive: bool = True,
    ignore_patterns: Optional[List[str]] = None
) -> List[Path]:
    """Turn a command-line path into the lockfiles to scan.

    Args:
        path: A lockfile, a project directory, or None for ``./locks``
        recursive: Descend into subdirectories of a project directory
        ignore_patterns: Additional ignore patterns

    Returns:
        List of lockfile paths

    Raises:
        FileNotFoundError: If the path does not exist
    """
    if path is None:
        if not DEFAULT_LOCKS_DIR.is_dir():
            return []
        return find_lockfiles(DEFAULT_LOCKS_DIR, recursive=False, ignore_patterns=ignore_patterns)

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")

    if path.is_dir():
        return find_lockfiles(path, recursive, ignore_patterns)

    return [path]
