"""Lockfile extractors for JSON and YAML-like lockfiles."""

from .base import BaseExtractor, CandidatePair, LockfileFormat
from .registry import ExtractorRegistry, classify
from .text import ImportBlockScanner, ScanState, TextExtractor
from .tree import TreeExtractor

# Register built-in extractors
registry = ExtractorRegistry()
registry.register(TreeExtractor())
registry.register(TextExtractor())

__all__ = [
    "BaseExtractor",
    "CandidatePair",
    "LockfileFormat",
    "ExtractorRegistry",
    "classify",
    "ImportBlockScanner",
    "ScanState",
    "TextExtractor",
    "TreeExtractor",
    "registry",
]
