"""Cascade loader — loads ordered lists of dictionaries.

Supports two modes:
  1. Explicit list of source files, kept in the order given
  2. A directory: every regular file directly inside it (non-recursive)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from dictcascade.loaders.dictionary_loader import load_dictionary
from dictcascade.models.dictionary import Dictionary
from dictcascade.util.errors import DictionaryIOError

log = logging.getLogger(__name__)


def list_sources(directory: str | Path, sort: bool = False) -> list[Path]:
    """List the source files directly inside ``directory``.

    Subdirectories are skipped. Without ``sort`` the entries come back in
    whatever order the file system yields them.

    Raises:
        DictionaryIOError: If the directory cannot be listed.
    """
    directory = Path(directory)
    try:
        with os.scandir(directory) as it:
            paths = [Path(entry.path) for entry in it if entry.is_file()]
    except OSError as exc:
        raise DictionaryIOError(exc.strerror or str(exc), directory) from exc
    if sort:
        paths.sort(key=lambda p: p.name)
    log.debug("Found %d source files in %s", len(paths), directory)
    return paths


def load_dictionaries(paths: Iterable[str | Path], delimiter: str = ".") -> list[Dictionary]:
    """Load one Dictionary per path, in order.

    The first failure aborts the whole load and propagates.
    """
    return [load_dictionary(path, delimiter) for path in paths]
