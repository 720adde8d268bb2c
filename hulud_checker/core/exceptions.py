"""Exception types raised by the hulud-checker core."""


class HuludCheckerError(Exception):
    """Base class for all hulud-checker errors."""


class DatasetError(HuludCheckerError):
    """The affected-packages dataset could not be loaded.

    Fatal for a whole run: without records there is nothing to match against.
    """


class LockfileParseError(HuludCheckerError):
    """A lockfile could not be parsed by its extractor.

    Scoped to a single file; the scanner records it and moves on.
    """

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(message)
        self.source = source
