"""Dictionary loader — builds Dictionary models from source files.

Source schema (same for every format):

    name = "en"
    [map]
    greeting = "Hello"
    [map.menu]
    quit = "Quit"

The path delimiter is never read from the file; it is supplied by the
caller.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dictcascade.loaders.document_loader import load_document
from dictcascade.models.dictionary import Dictionary
from dictcascade.util.errors import ParseError

log = logging.getLogger(__name__)


def load_dictionary(path: str | Path, delimiter: str = ".", fmt: str | None = None) -> Dictionary:
    """Load one dictionary from a file.

    Args:
        path: Path to a JSON, TOML or YAML source file.
        delimiter: Separator for lookup keys.
        fmt: Force a format instead of sniffing the extension.

    Returns:
        The loaded Dictionary.

    Raises:
        DictionaryIOError: If the file cannot be read.
        ParseError: If the file is malformed or has the wrong schema.
    """
    path = Path(path)
    document = load_document(path, fmt)
    try:
        dictionary = Dictionary.build(document, delimiter)
    except ParseError as exc:
        exc.path = path
        raise
    log.info("Loaded dictionary %r from %s (%d entries)", dictionary.name, path, len(dictionary))
    return dictionary
