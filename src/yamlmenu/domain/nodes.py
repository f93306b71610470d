"""YAML node model: a closed tagged union of scalar, sequence, and mapping.

ruamel.yaml's composer produces a representation graph whose nodes are
mutable and carry parser bookkeeping.  ``from_composed`` converts that graph
into frozen dataclasses once, so the extraction layer works on an immutable
tree and every structural cast is an explicit ``isinstance`` check.

Scalar text is kept verbatim (``3.4`` stays ``"3.4"``); no tag resolution or
type construction happens here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from ruamel.yaml import nodes as yaml_nodes

from yamlmenu.domain.errors import ParseError


@dataclass(frozen=True)
class ScalarNode:
    """Leaf node holding the scalar's source text."""

    text: str
    tag: str | None = None
    line: int | None = field(default=None, compare=False)

    kind: ClassVar[str] = "scalar"


@dataclass(frozen=True)
class SequenceNode:
    """Ordered list of child nodes."""

    items: tuple[Node, ...] = ()
    line: int | None = field(default=None, compare=False)

    kind: ClassVar[str] = "sequence"

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class MappingNode:
    """Ordered key/value pairs with unique scalar keys, in document order."""

    entries: tuple[tuple[str, Node], ...] = ()
    line: int | None = field(default=None, compare=False)

    kind: ClassVar[str] = "mapping"

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]


Node = ScalarNode | SequenceNode | MappingNode


def _line_of(node: yaml_nodes.Node) -> int | None:
    mark = getattr(node, "start_mark", None)
    if mark is None:
        return None
    return int(mark.line) + 1


def from_composed(node: yaml_nodes.Node) -> Node:
    """Convert a ruamel.yaml composed node into the immutable node model.

    Anchored nodes are converted once; every alias to them yields the same
    converted object.  Mapping keys are compared by their text alone, so
    ``1`` and ``'1'`` in one mapping are duplicates.

    Raises:
        ParseError: A mapping has a non-scalar or duplicate key, an alias
            refers to a node that contains it, or the node is of a kind
            the composer should never produce.
    """
    return _Converter().convert(node)


class _Converter:
    """Convert one composed graph, keeping the sharing that aliases create."""

    def __init__(self) -> None:
        self._done: dict[int, Node] = {}
        self._active: set[int] = set()

    def convert(self, node: yaml_nodes.Node) -> Node:
        # The composed graph is alive for the whole conversion, so ids are stable.
        key = id(node)
        if key in self._done:
            return self._done[key]
        if key in self._active:
            msg = f"Recursive alias (line {_line_of(node)}): a node cannot contain itself"
            raise ParseError(msg)

        self._active.add(key)
        try:
            converted = self._build(node)
        finally:
            self._active.discard(key)
        self._done[key] = converted
        return converted

    def _build(self, node: yaml_nodes.Node) -> Node:
        line = _line_of(node)

        if isinstance(node, yaml_nodes.ScalarNode):
            tag = None if node.tag is None else str(node.tag)
            return ScalarNode(text=str(node.value), tag=tag, line=line)

        if isinstance(node, yaml_nodes.SequenceNode):
            return SequenceNode(items=tuple(self.convert(child) for child in node.value), line=line)

        if isinstance(node, yaml_nodes.MappingNode):
            return MappingNode(entries=self._entries(node), line=line)

        msg = f"Unsupported YAML node type: {type(node).__name__}"
        raise ParseError(msg)

    def _entries(self, node: yaml_nodes.MappingNode) -> tuple[tuple[str, Node], ...]:
        entries: list[tuple[str, Node]] = []
        seen: set[str] = set()
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml_nodes.ScalarNode):
                msg = f"Mapping keys must be scalars (line {_line_of(key_node)})"
                raise ParseError(msg)
            key = str(key_node.value)
            if key in seen:
                msg = (
                    f"Duplicate mapping key '{key}' (line {_line_of(key_node)}); "
                    "keys are compared by text, whatever their tag"
                )
                raise ParseError(msg)
            seen.add(key)
            entries.append((key, self.convert(value_node)))
        return tuple(entries)
