"""Logging utilities for hulud-checker."""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


class HuludLogger:
    """Logger with rich formatting, writing to stderr so reports on stdout stay clean."""

    def __init__(self, name: str, level: Optional[int] = None) -> None:
        self.logger = logging.getLogger(name)
        if level is not None:
            self.logger.setLevel(level)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup rich console handler with custom theme."""
        console = Console(stderr=True, theme=Theme({
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "critical": "red bold",
            "debug": "dim",
        }))

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )

        formatter = logging.Formatter(
            fmt="%(name)s: %(message)s",
            datefmt="[%X]"
        )
        handler.setFormatter(formatter)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)


def setup_logging(
    level: int = logging.INFO,
    verbose: bool = False,
    quiet: bool = False
) -> None:
    """Setup logging levels for hulud-checker.

    Loggers from ``get_logger`` carry their own handler and no level, so the
    root level set here is the one they obey.

    Args:
        level: Logging level
        verbose: Enable debug logging
        quiet: Only log warnings and errors
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING

    logging.getLogger().setLevel(level)


def get_logger(name: str) -> HuludLogger:
    """Get a hulud-checker logger instance.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return HuludLogger(name)
