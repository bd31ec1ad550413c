"""Closed document tree consumed by the configuration translator.

What:
  Model every value a parsed configuration document can hold as one frozen
  dataclass per node kind, and expose the lookup and rendering helpers the
  translator relies on.

Why:
  Validation code should never guess at loosely typed parser output. A closed
  set of node kinds lets every match in the translator end with
  :func:`typing.assert_never`, so a new kind cannot fall through unnoticed.

How:
  ``Node`` is the union of the dataclasses below. Mappings keep their entries
  as an ordered tuple of ``(key, value)`` pairs so nodes stay hashable and can
  themselves act as keys. :func:`render` produces a stable, multi-line debug
  rendering used verbatim inside error messages.

Interfaces:
  Node classes, ``Node``, ``NODE_TYPES``, :func:`index`, :func:`render`.

Invariants & Safety:
  - Nodes are immutable; nothing in this package mutates a tree after it has
    been composed.
  - :meth:`MappingNode.lookup` distinguishes an absent key (``None``) from a
    key explicitly mapped to :class:`NullNode`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union, assert_never


_INDENT = "    "


@dataclass(frozen=True)
class NullNode:
    """Explicit ``null``, ``~`` or empty scalar."""


@dataclass(frozen=True)
class BadValueNode:
    """Scalar the parser recognised but could not convert (e.g. ``!!int abc``)."""


@dataclass(frozen=True)
class BooleanNode:
    value: bool


@dataclass(frozen=True)
class IntegerNode:
    value: int


@dataclass(frozen=True)
class FloatNode:
    """Real number; ``text`` keeps the scalar as written in the document."""

    value: float
    text: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class StringNode:
    value: str


@dataclass(frozen=True)
class SequenceNode:
    items: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class MappingNode:
    """Ordered mapping whose keys are unique nodes."""

    entries: Tuple[Tuple["Node", "Node"], ...] = ()

    def lookup(self, key: str) -> Optional["Node"]:
        """Return the value stored under the string ``key`` or ``None`` when absent."""

        wanted = StringNode(key)
        for candidate, value in self.entries:
            if candidate == wanted:
                return value
        return None

    def get(self, key: str) -> "Node":
        """Index the mapping, yielding :class:`BadValueNode` for an absent key."""

        value = self.lookup(key)
        return BadValueNode() if value is None else value


Node = Union[
    NullNode,
    BadValueNode,
    BooleanNode,
    IntegerNode,
    FloatNode,
    StringNode,
    SequenceNode,
    MappingNode,
]

NODE_TYPES = (
    NullNode,
    BadValueNode,
    BooleanNode,
    IntegerNode,
    FloatNode,
    StringNode,
    SequenceNode,
    MappingNode,
)


def index(node: Node, key: str) -> Node:
    """Look up ``key`` on ``node`` the way a document path lookup behaves.

    What:
      Resolve a top-level section such as ``root["compression"]``.

    Why:
      Sections are optional. Treating a missing key, or a root that is not a
      mapping at all, as :class:`BadValueNode` lets the translator handle
      "absent" and "explicitly null" in a single branch.

    Args:
      node: Node to index, usually the document root.
      key: Literal string key.

    Returns:
      The stored node, or :class:`BadValueNode` when there is nothing to find.
    """

    if isinstance(node, MappingNode):
        return node.get(key)
    return BadValueNode()


def render(node: Node) -> str:
    """Return the stable debug rendering of ``node``.

    The layout names the node kind and nests its payload four spaces deeper,
    for example ``String(\\n    "yooo"\\n)``. The output only depends on the
    node's value, so error messages built from it are deterministic.
    """

    return _render(node, 0)


def _render(node: Node, depth: int) -> str:
    inner = _INDENT * (depth + 1)
    outer = _INDENT * depth
    if isinstance(node, NullNode):
        return "Null"
    if isinstance(node, BadValueNode):
        return "BadValue"
    if isinstance(node, BooleanNode):
        return f"Boolean(\n{inner}{'true' if node.value else 'false'}\n{outer})"
    if isinstance(node, IntegerNode):
        return f"Integer(\n{inner}{node.value}\n{outer})"
    if isinstance(node, FloatNode):
        text = repr(node.value) if node.text is None else node.text
        return f"Real(\n{inner}{_quote(text)}\n{outer})"
    if isinstance(node, StringNode):
        return f"String(\n{inner}{_quote(node.value)}\n{outer})"
    if isinstance(node, SequenceNode):
        return f"Array(\n{inner}{_render_items(node, depth + 1)}\n{outer})"
    if isinstance(node, MappingNode):
        return f"Hash(\n{inner}{_render_entries(node, depth + 1)}\n{outer})"
    assert_never(node)


def _render_items(node: SequenceNode, depth: int) -> str:
    if not node.items:
        return "[]"
    pad = _INDENT * (depth + 1)
    body = ",\n".join(pad + _render(item, depth + 1) for item in node.items)
    return f"[\n{body}\n{_INDENT * depth}]"


def _render_entries(node: MappingNode, depth: int) -> str:
    if not node.entries:
        return "{}"
    pad = _INDENT * (depth + 1)
    body = ",\n".join(
        f"{pad}{_render(key, depth + 1)}: {_render(value, depth + 1)}"
        for key, value in node.entries
    )
    return f"{{\n{body}\n{_INDENT * depth}}}"


def _quote(text: str) -> str:
    escaped = []
    for char in text:
        if char == "\\":
            escaped.append("\\\\")
        elif char == '"':
            escaped.append('\\"')
        elif char == "\n":
            escaped.append("\\n")
        elif char == "\r":
            escaped.append("\\r")
        elif char == "\t":
            escaped.append("\\t")
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            escaped.append(f"\\u{{{ord(char):x}}}")
        else:
            escaped.append(char)
    return '"' + "".join(escaped) + '"'
