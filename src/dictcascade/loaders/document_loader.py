"""Document loader — deserializes source text into a generic tree.

Supported formats:
  - ``json``: the default, also used when a file has no or an unknown
    extension
  - ``toml``
  - ``yaml`` (``.yaml`` / ``.yml``)

The result is whatever the parser produces (dicts, lists, strings,
numbers …). Turning it into a dictionary tree is done by
``dictcascade.models.dictionary``.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Callable

import yaml

from dictcascade.util.errors import ConfigError, DictionaryIOError, ParseError

log = logging.getLogger(__name__)

DEFAULT_FORMAT = "json"

# File suffix (lower-case, with dot) → format name.
_SUFFIXES = {
    ".json": "json",
    ".toml": "toml",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def _parse_json(text: str) -> Any:
    return json.loads(text)


def _parse_toml(text: str) -> Any:
    return tomllib.loads(text)


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


_PARSERS: dict[str, Callable[[str], Any]] = {
    "json": _parse_json,
    "toml": _parse_toml,
    "yaml": _parse_yaml,
}

# Exceptions each parser raises for malformed input.
_PARSE_FAILURES = (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError)


def format_for_path(path: str | Path) -> str:
    """Pick the source format from a file's extension."""
    suffix = Path(path).suffix.lower()
    fmt = _SUFFIXES.get(suffix, DEFAULT_FORMAT)
    log.debug("Format for %s: %s", path, fmt)
    return fmt


def parse_document(source: bytes | str, fmt: str = DEFAULT_FORMAT) -> Any:
    """Deserialize ``source`` in format ``fmt``.

    Args:
        source: UTF-8 bytes or already-decoded text.
        fmt: One of ``json``, ``toml``, ``yaml``.

    Raises:
        ConfigError: If ``fmt`` is not a supported format.
        ParseError: If the text is not valid for the format.
    """
    parser = _PARSERS.get(fmt)
    if parser is None:
        raise ConfigError(f"unsupported source format {fmt!r}")
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"source is not valid UTF-8: {exc}") from exc
    try:
        return parser(source)
    except _PARSE_FAILURES as exc:
        raise ParseError(f"invalid {fmt}: {exc}") from exc
    except RecursionError as exc:
        raise ParseError(f"invalid {fmt}: nested too deeply") from exc


def read_source(path: str | Path) -> bytes:
    """Read a source file as bytes.

    Raises:
        DictionaryIOError: If the file cannot be opened or read.
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            return f.read()
    except OSError as exc:
        raise DictionaryIOError(exc.strerror or str(exc), path) from exc


def load_document(path: str | Path, fmt: str | None = None) -> Any:
    """Read and deserialize one source file.

    The format is taken from the file extension unless ``fmt`` is given.
    """
    path = Path(path)
    if fmt is None:
        fmt = format_for_path(path)
    try:
        return parse_document(read_source(path), fmt)
    except ParseError as exc:
        if exc.path is None:
            exc.path = path
        raise
