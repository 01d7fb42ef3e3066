"""Custom exceptions for the insights context."""

from pathlib import Path
from typing import Optional


class InvalidConfigError(ValueError):
    """
    Exception raised when an insights configuration cannot be used.

    Attributes:
        message: Error description
        config_path: Config file that was being read, if any
    """

    def __init__(self, message: str, config_path: Optional[Path] = None):
        self.message = message
        self.config_path = config_path

        if config_path is not None:
            message = f"{message}\nConfig file: {config_path}"
        super().__init__(message)
