"""Registry mapping lockfile formats to their extractors."""

from pathlib import Path
from typing import Dict, List, Optional, Union

from .base import BaseExtractor, LockfileFormat


def classify(file_path: Union[str, Path]) -> LockfileFormat:
    """Pick the extraction strategy for a lockfile from its extension.

    Only ``.json`` files are treated as JSON trees; ``.yaml``, ``.yml``,
    ``.lock`` and extensionless files all go to the line-oriented extractor.
    The content is never sniffed.

    Args:
        file_path: Path or label of the lockfile

    Returns:
        The lockfile format
    """
    if str(file_path).endswith(".json"):
        return LockfileFormat.JSON_TREE
    return LockfileFormat.LINE_ORIENTED


class ExtractorRegistry:
    """Registry of lockfile extractors keyed by format."""

    def __init__(self) -> None:
        """Initialize the extractor registry."""
        self._extractors: Dict[LockfileFormat, BaseExtractor] = {}

    def register(self, extractor: BaseExtractor) -> None:
        """Register an extractor for the format it declares.

        Args:
            extractor: Extractor instance to register
        """
        self._extractors[extractor.lockfile_format] = extractor

    def get_extractor(self, lockfile_format: LockfileFormat) -> Optional[BaseExtractor]:
        """Get the extractor registered for a format.

        Args:
            lockfile_format: Lockfile format

        Returns:
            Extractor instance or None if not registered
        """
        return self._extractors.get(lockfile_format)

    def find_extractor_for_file(self, file_path: Union[str, Path]) -> BaseExtractor:
        """Find the extractor that handles the given file.

        Args:
            file_path: Path or label of the lockfile

        Returns:
            Extractor for the file's format

        Raises:
            LookupError: If no extractor is registered for the format
        """
        lockfile_format = classify(file_path)
        extractor = self.get_extractor(lockfile_format)
        if extractor is None:
            raise LookupError(f"No extractor registered for {lockfile_format.value} lockfiles")
        return extractor

    def get_supported_formats(self) -> List[str]:
        """Get list of registered format names.

        Returns:
            List of format names
        """
        return [lockfile_format.value for lockfile_format in self._extractors]
