"""Cascade model — ordered fallback across several dictionaries.

A key is resolved by asking each dictionary in turn and taking the first
answer, so earlier dictionaries shadow later ones key by key:

    Cascade([ja, en]).translate("menu.quit")   # ja if it has it, else en
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from dictcascade.loaders.cascade_loader import list_sources, load_dictionaries
from dictcascade.models.dictionary import Dictionary

log = logging.getLogger(__name__)


class Cascade:
    """Immutable ordered list of dictionaries; index 0 has priority."""

    __slots__ = ("_dictionaries",)

    def __init__(self, dictionaries: Iterable[Dictionary] = ()) -> None:
        self._dictionaries: tuple[Dictionary, ...] = tuple(dictionaries)

    @classmethod
    def from_paths(cls, paths: Iterable[str | Path], delimiter: str = ".") -> Cascade:
        """Load a cascade from source files, highest priority first.

        Raises:
            DictionaryIOError: If any file cannot be read.
            ParseError: If any file is malformed.
        """
        cascade = cls(load_dictionaries(paths, delimiter))
        log.info("Cascade loaded: %s", ", ".join(cascade.names) or "(empty)")
        return cascade

    @classmethod
    def from_directory(
        cls, directory: str | Path, delimiter: str = ".", sort: bool = False,
    ) -> Cascade:
        """Load a cascade from every file in ``directory``.

        Priority follows file-system order, or filename order with
        ``sort=True``.
        """
        return cls.from_paths(list_sources(directory, sort=sort), delimiter)

    # -- Lookup ----------------------------------------------------------

    def resolve(self, key: str) -> Optional[tuple[Dictionary, str]]:
        """Return ``(dictionary, translation)`` from the first dictionary
        that has ``key``, or None."""
        for dictionary in self._dictionaries:
            value = dictionary.translate(key)
            if value is not None:
                return dictionary, value
        return None

    def translate(self, key: str) -> Optional[str]:
        """Return the first translation of ``key`` in priority order."""
        hit = self.resolve(key)
        return hit[1] if hit is not None else None

    # -- Views -----------------------------------------------------------

    @property
    def dictionaries(self) -> tuple[Dictionary, ...]:
        return self._dictionaries

    @property
    def names(self) -> list[str]:
        return [d.name for d in self._dictionaries]

    def flatten(self) -> dict[str, str]:
        """Merged ``{path: value}`` view where earlier dictionaries win."""
        merged: dict[str, str] = {}
        for dictionary in reversed(self._dictionaries):
            merged.update(dictionary.flatten())
        return merged

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.translate(key) is not None

    def __iter__(self) -> Iterator[Dictionary]:
        return iter(self._dictionaries)

    def __len__(self) -> int:
        return len(self._dictionaries)

    def __repr__(self) -> str:
        return f"Cascade({self.names!r})"
