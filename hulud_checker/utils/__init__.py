"""Utility functions and helpers for hulud-checker."""

from .logging import setup_logging, get_logger
from .path_utils import find_lockfiles, is_lockfile, resolve_lockfiles

__all__ = [
    "setup_logging",
    "get_logger",
    "find_lockfiles",
    "is_lockfile",
    "resolve_lockfiles",
]
