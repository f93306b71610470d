"""Typed accessors over the YAML node model.

Loading
-------
``load`` / ``load_string`` / ``load_file`` parse YAML text with ruamel.yaml's
composer and return the root :class:`MappingNode` of the first document.
``load_all`` / ``load_file_all`` return every document, and ``document_root``
picks the root out of such a list.

Lookup
------
``find_child`` is the single lookup primitive: it returns ``None`` for an
absent key and never raises for absence.  ``get_child`` and the string
accessors are built on it, so optional lookups need no exception handling.

Traversal
---------
``map_sequence`` and ``map_mapping`` check the node kind eagerly, then return
a lazy, single-pass iterator over ``f(index, item)`` / ``f(key, value)``.

Argument order follows ``map(f, iterable)``: the node being read is always
the last positional argument.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import TextIO, TypeVar

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from yamlmenu.domain.errors import MissingKeyError, ParseError, TypeMismatchError
from yamlmenu.domain.nodes import MappingNode, Node, ScalarNode, SequenceNode, from_composed

logger = logging.getLogger(__name__)

_R = TypeVar("_R")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh safe, pure-Python parser.

    A new instance per call keeps no composer state between documents.
    The pure parser is required for ``compose_all``.
    """
    return YAML(typ="safe", pure=True)


def load_all(stream: TextIO | str) -> list[Node]:
    """Parse every document in a YAML stream (or string), in order.

    Raises:
        ParseError: The text is not well-formed YAML anywhere in the stream,
            or it nests deeper than the parser can follow.
    """
    try:
        documents = [from_composed(node) for node in _new_yaml().compose_all(stream)]
    except (YAMLError, UnicodeDecodeError) as exc:
        msg = f"Malformed YAML: {exc}"
        raise ParseError(msg) from exc
    except RecursionError as exc:
        msg = "YAML nesting is too deep to parse"
        raise ParseError(msg) from exc

    logger.debug("Parsed %d document(s)", len(documents))
    return documents


def document_root(documents: Sequence[Node]) -> MappingNode:
    """Return the root mapping of the first document.

    Raises:
        ParseError: There is no document, or the first one is not a mapping.
    """
    if not documents:
        msg = "YAML input contains no document"
        raise ParseError(msg)

    root = documents[0]
    if not isinstance(root, MappingNode):
        msg = f"Document root must be a mapping, got a {root.kind}"
        raise ParseError(msg)

    logger.debug("Root keys: %s", root.keys())
    return root


def load(stream: TextIO | str) -> MappingNode:
    """Parse YAML from a text stream (or a string) into a root mapping node.

    Every document in the stream is parsed; only the first is returned.

    Raises:
        ParseError: The text is not well-formed YAML, holds no document,
            or the first document's root is not a mapping.
    """
    return document_root(load_all(stream))


def load_string(content: str) -> MappingNode:
    """Parse a YAML document held in memory."""
    return load(content)


def load_file(path: Path | str) -> MappingNode:
    """Parse a YAML file.

    The file handle is closed on every exit path, including parse failure.
    ``OSError`` from opening the file propagates unchanged.
    """
    return document_root(load_file_all(path))


def load_file_all(path: Path | str) -> list[Node]:
    """Parse every document in a YAML file."""
    path = Path(path)
    logger.debug("Loading YAML file %s", path)
    with path.open("r", encoding="utf-8") as fh:
        return load_all(fh)


# ---------------------------------------------------------------------------
# Structural casts
# ---------------------------------------------------------------------------


def as_scalar(node: Node) -> ScalarNode:
    if not isinstance(node, ScalarNode):
        raise TypeMismatchError("scalar", node.kind, node.line)
    return node


def as_sequence(node: Node) -> SequenceNode:
    if not isinstance(node, SequenceNode):
        raise TypeMismatchError("sequence", node.kind, node.line)
    return node


def as_mapping(node: Node) -> MappingNode:
    if not isinstance(node, MappingNode):
        raise TypeMismatchError("mapping", node.kind, node.line)
    return node


def to_string(node: Node) -> str:
    """Return a scalar's text.  Sequences and mappings have no string form."""
    return as_scalar(node).text


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def find_child(key: str, node: Node) -> Node | None:
    """Return the child stored under *key*, or ``None`` when absent."""
    for entry_key, value in as_mapping(node).entries:
        if entry_key == key:
            return value
    return None


def get_child(key: str, node: Node) -> Node:
    """Return the child stored under *key*.

    Raises:
        MissingKeyError: *key* is absent.
        TypeMismatchError: *node* is not a mapping.
    """
    child = find_child(key, node)
    if child is None:
        raise MissingKeyError(key, node.line)
    return child


def get_optional_string(key: str, node: Node) -> str | None:
    """Return the text under *key*, or ``None`` when the key is absent.

    A key that is present with an empty value yields ``""``, not ``None``.
    """
    child = find_child(key, node)
    if child is None:
        return None
    return to_string(child)


def get_string(key: str, default: str, node: Node) -> str:
    """Return the text under *key*, or *default* when the key is absent."""
    value = get_optional_string(key, node)
    return default if value is None else value


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def map_sequence(f: Callable[[int, Node], _R], node: Node) -> Iterator[_R]:
    """Lazily apply ``f(index, item)`` to each sequence element in order."""
    items = as_sequence(node).items
    return (f(index, item) for index, item in enumerate(items))


def map_mapping(f: Callable[[str, Node], _R], node: Node) -> Iterator[_R]:
    """Lazily apply ``f(key, value)`` to each mapping entry in document order."""
    entries = as_mapping(node).entries
    return (f(key, value) for key, value in entries)
