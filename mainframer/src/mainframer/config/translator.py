"""Translate a composed document tree into :class:`IntermediateConfig`.

What:
  Walk the fixed set of known sections (``remoteMachine`` then
  ``compression``), validate presence, node kind and value range of each
  recognised field, and build the immutable intermediate model.

Why:
  Every consumer of the configuration should receive a fully validated
  structure instead of re-checking loosely typed document values. Unknown keys
  are ignored so newer files keep loading with older releases.

How:
  Each section and field is handled by a small function that matches on the
  closed node kinds and ends with :func:`typing.assert_never`. The first
  failure raises a :class:`TranslationError` subclass and aborts the whole
  translation; nothing is accumulated.

Interfaces:
  :func:`translate`, :func:`translate_text`.

Invariants & Safety:
  - Absent, ``null`` and bad-value sections or fields become ``None``; they are
    never filled with defaults.
  - Compression levels outside ``1..=9`` are rejected, never clamped.
  - The input tree is never mutated and no state survives between calls.
"""
from __future__ import annotations

from typing import Optional, assert_never

from . import yamlshim
from .errors import FieldTypeError, LevelRangeError, SectionShapeError
from .nodes import (
    BadValueNode,
    BooleanNode,
    FloatNode,
    IntegerNode,
    MappingNode,
    Node,
    NullNode,
    SequenceNode,
    StringNode,
    index,
)
from .schema import (
    MAX_COMPRESSION_LEVEL,
    MIN_COMPRESSION_LEVEL,
    IntermediateCompression,
    IntermediateConfig,
    IntermediateRemoteMachine,
)


REMOTE_MACHINE = "remoteMachine"
COMPRESSION = "compression"

_LEVEL_EXPECTATION = (
    f"a positive integer from {MIN_COMPRESSION_LEVEL} to {MAX_COMPRESSION_LEVEL}"
)


def translate(root: Node) -> IntermediateConfig:
    """Build the intermediate configuration from a document root.

    Args:
      root: Root node of the parsed document.

    Returns:
      The validated :class:`IntermediateConfig`.

    Raises:
      TranslationError: On the first section or field that fails validation.
    """

    remote_machine = _remote_machine(index(root, REMOTE_MACHINE))
    compression = _compression(index(root, COMPRESSION))
    return IntermediateConfig(remote_machine=remote_machine, compression=compression)


def translate_text(text: str) -> IntermediateConfig:
    """Parse YAML ``text`` and translate it; syntax errors surface as ``DocumentSyntaxError``."""

    return translate(yamlshim.compose(text))


def _remote_machine(node: Node) -> Optional[IntermediateRemoteMachine]:
    if isinstance(node, (NullNode, BadValueNode)):
        return None
    if isinstance(node, MappingNode):
        return IntermediateRemoteMachine(host=_host(node.lookup("host")))
    if isinstance(node, (BooleanNode, IntegerNode, FloatNode, StringNode, SequenceNode)):
        raise SectionShapeError(REMOTE_MACHINE, node)
    assert_never(node)


def _host(node: Optional[Node]) -> Optional[str]:
    if node is None or isinstance(node, NullNode):
        return None
    if isinstance(node, StringNode):
        return node.value
    if isinstance(
        node,
        (BadValueNode, BooleanNode, IntegerNode, FloatNode, SequenceNode, MappingNode),
    ):
        raise FieldTypeError(f"{REMOTE_MACHINE}.host", "a string", node, echo_value=False)
    assert_never(node)


def _compression(node: Node) -> Optional[IntermediateCompression]:
    if isinstance(node, (NullNode, BadValueNode)):
        return None
    if isinstance(node, MappingNode):
        local = _level(node, "local")
        remote = _level(node, "remote")
        return IntermediateCompression(local=local, remote=remote)
    if isinstance(node, (BooleanNode, IntegerNode, FloatNode, StringNode, SequenceNode)):
        # This message has never echoed the offending value.
        raise SectionShapeError(COMPRESSION, node, echo_value=False)
    assert_never(node)


def _level(section: MappingNode, name: str) -> Optional[int]:
    field = f"{COMPRESSION}.{name}"
    node = section.lookup(name)
    if node is None or isinstance(node, (NullNode, BadValueNode)):
        return None
    if isinstance(node, IntegerNode):
        if not MIN_COMPRESSION_LEVEL <= node.value <= MAX_COMPRESSION_LEVEL:
            raise LevelRangeError(
                field,
                node.value,
                minimum=MIN_COMPRESSION_LEVEL,
                maximum=MAX_COMPRESSION_LEVEL,
            )
        return node.value
    if isinstance(node, (BooleanNode, FloatNode, StringNode, SequenceNode, MappingNode)):
        raise FieldTypeError(field, _LEVEL_EXPECTATION, node)
    assert_never(node)
