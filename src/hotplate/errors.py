"""Exceptions raised by the hotplate package."""
from __future__ import annotations

from pathlib import Path


class HotplateError(Exception):
    """Base class for all hotplate errors."""


class PlateFileError(HotplateError, OSError):
    """A plate file could not be opened for reading or writing."""

    def __init__(self, path: str | Path, message: str) -> None:
        super().__init__(message)
        self.path = str(path)


class PlateFormatError(HotplateError, ValueError):
    """The contents of an imported plate file are malformed."""
