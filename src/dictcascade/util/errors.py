"""Error types raised while loading dictionaries and cascades.

Two failure kinds surface from a load: ``DictionaryIOError`` when a file
or directory cannot be read, and ``ParseError`` when its contents cannot
be turned into a dictionary. ``ConfigError`` covers bad settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class DictionaryError(Exception):
    """Base class for all dictcascade errors.

    Attributes:
        path: File or directory the error relates to, if any.
    """

    def __init__(self, message: str, path: Optional[str | Path] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None:
            return f"{self.path}: {message}"
        return message


class DictionaryIOError(DictionaryError, OSError):
    """A source file could not be opened or read, or a directory listed."""


class ParseError(DictionaryError, ValueError):
    """Source text is not valid, or does not have the dictionary schema."""


class ConfigError(DictionaryError, ValueError):
    """Invalid configuration (delimiter, source format, settings file)."""
