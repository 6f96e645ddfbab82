"""Dictionary model — one language's translation table.

A dictionary is a tree of string leaves keyed by path segments. Lookup
keys are split on the dictionary's delimiter and walked segment by
segment from the root table:

    {"menu": {"file": "File", "quit": "Quit"}}   ->   "menu.quit" -> "Quit"

The tree is built once from a generic parsed document (see
``dictcascade.loaders.document_loader``) and never changes afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from dictcascade.loaders.document_loader import parse_document
from dictcascade.util.errors import ConfigError, ParseError

log = logging.getLogger(__name__)

NAME_FIELD = "name"
MAP_FIELD = "map"


# -- Tree nodes ----------------------------------------------------------

@dataclass(frozen=True)
class Leaf:
    """A terminal node holding the translated string."""
    value: str


@dataclass(frozen=True)
class SubTable:
    """An internal node holding further nested keys."""
    entries: Mapping[str, DictionaryNode] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.entries, MappingProxyType):
            object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))


DictionaryNode = Union[Leaf, SubTable]


def convert_table(raw: Mapping[Any, Any], _prefix: tuple[str, ...] = (),
                  _seen: frozenset[int] = frozenset()) -> SubTable:
    """Convert a generic parsed mapping into a ``SubTable``.

    Mappings become ``SubTable`` and strings become ``Leaf``. Every other
    value (numbers, booleans, null, lists, dates) is dropped. Keys are
    converted with ``str()``; when two keys convert to the same string
    the later one replaces the earlier.

    Raises:
        ParseError: If a mapping contains itself (YAML alias cycle).
    """
    if id(raw) in _seen:
        raise ParseError(f"table at {'.'.join(_prefix)!r} contains itself")
    seen = _seen | {id(raw)}
    entries: dict[str, DictionaryNode] = {}
    for key, value in raw.items():
        name = str(key)
        path = _prefix + (name,)
        if isinstance(value, Mapping):
            node: DictionaryNode = convert_table(value, path, seen)
        elif isinstance(value, str):
            node = Leaf(value)
        else:
            log.debug("Dropping %s entry at %s", type(value).__name__, path)
            continue
        if name in entries:
            log.debug("Key %r at %s replaces an earlier entry", key, path)
        entries[name] = node
    return SubTable(entries)


# -- Dictionary ----------------------------------------------------------

@dataclass(frozen=True)
class Dictionary:
    """Immutable translation table.

    Attributes:
        name: Label of the table, usually a language code ("en", "ja").
        delimiter: Separator used to split lookup keys into path segments.
        root: Top-level table of the tree.
    """

    name: str
    delimiter: str = "."
    root: SubTable = field(default_factory=SubTable)

    def __post_init__(self) -> None:
        if not self.delimiter:
            raise ConfigError("delimiter must be a non-empty string")

    # -- Construction ----------------------------------------------------

    @classmethod
    def build(cls, document: Any, delimiter: str = ".") -> Dictionary:
        """Build a dictionary from a parsed document.

        The document must be a mapping with a string ``name`` field and a
        mapping ``map`` field. Other top-level fields are ignored.

        Raises:
            ParseError: If the document does not have that shape.
            ConfigError: If ``delimiter`` is empty.
        """
        if not isinstance(document, Mapping):
            raise ParseError(f"expected a table at top level, got {type(document).__name__}")
        name = document.get(NAME_FIELD)
        if not isinstance(name, str):
            raise ParseError(f"missing or non-string '{NAME_FIELD}' field")
        table = document.get(MAP_FIELD)
        if not isinstance(table, Mapping):
            raise ParseError(f"missing or non-table '{MAP_FIELD}' field")
        try:
            root = convert_table(table)
        except RecursionError as exc:
            raise ParseError(f"'{MAP_FIELD}' is nested too deeply") from exc
        return cls(name=name, delimiter=delimiter, root=root)

    @classmethod
    def build_from_source(
        cls, source: bytes | str, delimiter: str = ".", fmt: str = "json",
    ) -> Dictionary:
        """Parse ``source`` text in format ``fmt`` and build a dictionary."""
        return cls.build(parse_document(source, fmt), delimiter)

    # -- Lookup ----------------------------------------------------------

    def lookup(self, key: str) -> Optional[DictionaryNode]:
        """Return the node at ``key``, or None if the path does not exist."""
        node: DictionaryNode = self.root
        for segment in key.split(self.delimiter):
            if not isinstance(node, SubTable):
                return None
            node = node.entries.get(segment)
            if node is None:
                return None
        return node

    def translate(self, key: str) -> Optional[str]:
        """Return the translation for ``key``, or None if there is none.

        A key that ends on a sub-table, or runs past a leaf, has no
        translation.
        """
        node = self.lookup(key)
        if isinstance(node, Leaf):
            return node.value
        return None

    # -- Views -----------------------------------------------------------

    def flatten(self) -> dict[str, str]:
        """Return every leaf as ``{joined_path: value}``.

        A key that itself contains the delimiter can join to the same
        path as a nested leaf (``{"a.b": ..}`` and ``{"a": {"b": ..}}``).
        Such collisions are logged and the path keeps the value
        ``translate`` returns for it, or the first leaf seen if neither
        is reachable.
        """
        flat: dict[str, str] = {}
        for path, value in self._leaves():
            joined = self.delimiter.join(path)
            if joined in flat:
                log.warning("Leaves of %r collide at flattened path %r", self.name, joined)
                reachable = self.translate(joined)
                if reachable is not None:
                    flat[joined] = reachable
                continue
            flat[joined] = value
        return flat

    def _leaves(self) -> Iterator[tuple[tuple[str, ...], str]]:
        """Yield ``(segments, value)`` for every leaf, depth first."""
        def _walk(table: SubTable, prefix: tuple[str, ...]):
            for key, node in table.entries.items():
                path = prefix + (key,)
                if isinstance(node, Leaf):
                    yield path, node.value
                else:
                    yield from _walk(node, path)

        return _walk(self.root, ())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.translate(key) is not None

    def __iter__(self) -> Iterator[str]:
        """Iterate over the distinct flattened leaf paths."""
        return iter(self.flatten())

    def __len__(self) -> int:
        """Number of leaves in the tree."""
        return sum(1 for _ in self._leaves())
