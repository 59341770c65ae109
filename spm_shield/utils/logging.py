"""Logging utilities for SPMShield."""

import logging
import sys
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


class SPMShieldLogger:
    """Logger wrapper rendering through rich."""

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
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

    def info(self, msg: str) -> None:
        """Log info message."""
        self.logger.info(msg)

    def warning(self, msg: str) -> None:
        """Log warning message."""
        self.logger.warning(msg)

    def error(self, msg: str, exc_info: bool = False) -> None:
        """Log error message."""
        self.logger.error(msg, exc_info=exc_info)

    def debug(self, msg: str, exc_info: bool = False) -> None:
        """Log debug message."""
        self.logger.debug(msg, exc_info=exc_info)

    def critical(self, msg: str) -> None:
        """Log critical message."""
        self.logger.critical(msg)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Setup logging configuration for SPMShield.

    Args:
        level: Logging level
        log_file: Optional log file path
        verbose: Enable verbose logging
    """
    if verbose:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            *([logging.FileHandler(log_file)] if log_file else [])
        ]
    )

    # Analyzer loggers do not propagate, so set their level directly
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("spm_shield"):
            logging.getLogger(name).setLevel(level)


def get_logger(name: str) -> SPMShieldLogger:
    """Get an SPMShield logger instance.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return SPMShieldLogger(name)
