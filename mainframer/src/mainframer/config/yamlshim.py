"""YAML adapter producing the closed node tree.

What:
  Expose ``compose`` and ``dump`` helpers around PyYAML. ``compose`` turns
  document text into a :mod:`mainframer.config.nodes` tree; ``dump`` writes
  plain Python data back as YAML text that ``compose`` reads identically.

Why:
  The translator must only ever see the closed node kinds. PyYAML's default
  resolver follows YAML 1.1, where ``yes`` is a boolean and ``0o17`` a string;
  configuration files are read with YAML 1.2 core-schema rules instead, so the
  adapter installs its own implicit resolvers on both the loader and the
  dumper.

How:
  The PyYAML composer builds its representation graph using
  :class:`CoreSchemaLoader`. The graph is then walked once, each scalar being
  converted according to its resolved tag. Conversions that fail yield
  :class:`BadValueNode` rather than an error, mirroring how the document model
  flags semantically invalid scalars.

Interfaces:
  ``compose``, ``dump``, :class:`CoreSchemaLoader`, :class:`CoreSchemaDumper`.

Invariants & Safety:
  - Only the first document of a stream is returned, but the whole stream must
    parse.
  - Integers are limited to the signed 64-bit range; wider plain integers
    become :class:`FloatNode` values carrying their source text.
  - Only the lowercase ``null``, ``true`` and ``false`` literals (plus ``~``
    and the empty scalar) resolve to null or boolean; ``Null`` or ``TRUE``
    stay strings.
  - No Python objects are ever constructed from tags.
"""
from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Set

import yaml

from .errors import DocumentSyntaxError
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
    render,
)


_TAG_NULL = "tag:yaml.org,2002:null"
_TAG_BOOL = "tag:yaml.org,2002:bool"
_TAG_INT = "tag:yaml.org,2002:int"
_TAG_FLOAT = "tag:yaml.org,2002:float"
_TAG_STR = "tag:yaml.org,2002:str"

_NULL_RE = re.compile(r"^(?:~|null|)$")
_BOOL_RE = re.compile(r"^(?:true|false)$")
_INT_RE = re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$")
_FLOAT_RE = re.compile(
    r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
    |[-+]?\.(?:inf|Inf|INF)
    |\.(?:nan|NaN|NAN))$""",
    re.X,
)

_INT_MIN = -(2 ** 63)
_INT_MAX = 2 ** 63 - 1


def _install_core_resolvers(cls: type) -> type:
    """Replace the YAML 1.1 implicit resolvers of ``cls`` with core-schema ones."""

    cls.yaml_implicit_resolvers = {}
    cls.add_implicit_resolver(_TAG_NULL, _NULL_RE, ["~", "n", ""])
    cls.add_implicit_resolver(_TAG_BOOL, _BOOL_RE, list("tf"))
    # Registered before floats so plain digits resolve to integers.
    cls.add_implicit_resolver(_TAG_INT, _INT_RE, list("-+0123456789"))
    cls.add_implicit_resolver(_TAG_FLOAT, _FLOAT_RE, list("-+0123456789."))
    return cls


@_install_core_resolvers
class CoreSchemaLoader(yaml.SafeLoader):
    """Safe loader resolving plain scalars with YAML 1.2 core-schema rules."""


@_install_core_resolvers
class CoreSchemaDumper(yaml.SafeDumper):
    """Safe dumper that quotes any string the core-schema loader would retype."""


def compose(text: str) -> Node:
    """Parse ``text`` into a node tree.

    What:
      Convert YAML document text into the closed node representation consumed
      by the translator.

    Why:
      Keeps PyYAML types out of validation code and gives syntax failures a
      single, typed error.

    How:
      Compose every document in the stream with :class:`CoreSchemaLoader`,
      then convert the first graph. An empty stream is an empty document and
      maps to :class:`NullNode`.

    Args:
      text: Document contents.

    Returns:
      Root node of the first document.

    Raises:
      DocumentSyntaxError: If PyYAML rejects the stream, a mapping repeats a
        key, or an alias refers back to one of its own ancestors.
    """

    try:
        documents = list(yaml.compose_all(text, Loader=CoreSchemaLoader))
    except yaml.YAMLError as exc:
        raise DocumentSyntaxError(str(exc)) from exc
    if not documents:
        return NullNode()
    return _Converter().convert(documents[0])


def dump(data: Any) -> str:
    """Serialise plain Python data into YAML text.

    Keys keep their insertion order and nested mappings use block style, so
    the output reads like a hand-written configuration file.
    """

    return yaml.dump(data, Dumper=CoreSchemaDumper, sort_keys=False, default_flow_style=False)


class _Converter:
    """Single-use walker turning a PyYAML graph into nodes."""

    def __init__(self) -> None:
        self._active: Set[int] = set()
        self._done: Dict[int, Node] = {}

    def convert(self, node: yaml.Node) -> Node:
        key = id(node)
        if key in self._done:
            return self._done[key]
        if key in self._active:
            raise DocumentSyntaxError(f"recursive alias {_mark(node)}")
        self._active.add(key)
        try:
            if isinstance(node, yaml.ScalarNode):
                result = _convert_scalar(node)
            elif isinstance(node, yaml.SequenceNode):
                result = SequenceNode(tuple(self.convert(child) for child in node.value))
            elif isinstance(node, yaml.MappingNode):
                result = self._convert_mapping(node)
            else:  # pragma: no cover - PyYAML only emits the three kinds above
                raise DocumentSyntaxError(f"unsupported node {type(node).__name__}")
        finally:
            self._active.discard(key)
        self._done[key] = result
        return result

    def _convert_mapping(self, node: yaml.MappingNode) -> MappingNode:
        entries: List[tuple[Node, Node]] = []
        seen: Set[Node] = set()
        for key_node, value_node in node.value:
            key = self.convert(key_node)
            if key in seen:
                raise DocumentSyntaxError(f"duplicate key {render(key)} {_mark(key_node)}")
            seen.add(key)
            entries.append((key, self.convert(value_node)))
        return MappingNode(tuple(entries))


def _convert_scalar(node: yaml.ScalarNode) -> Node:
    text = node.value
    if node.tag == _TAG_STR:
        return StringNode(text)
    if node.tag == _TAG_NULL:
        return NullNode() if _NULL_RE.match(text) else BadValueNode()
    if node.tag == _TAG_BOOL:
        if not _BOOL_RE.match(text):
            return BadValueNode()
        return BooleanNode(text == "true")
    if node.tag == _TAG_INT:
        return _convert_int(text)
    if node.tag == _TAG_FLOAT:
        return _convert_float(text)
    # Unknown or application tags keep their textual payload.
    return StringNode(text)


def _convert_int(text: str) -> Node:
    if not _INT_RE.match(text):
        return BadValueNode()
    if text.startswith("0o"):
        value = int(text[2:], 8)
    elif text.startswith("0x"):
        value = int(text[2:], 16)
    else:
        value = int(text, 10)
    if not _INT_MIN <= value <= _INT_MAX:
        # Too wide for a 64-bit integer: kept as a real with its source text.
        return FloatNode(_int_to_float(value), text)
    return IntegerNode(value)


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _convert_float(text: str) -> Node:
    if not _FLOAT_RE.match(text):
        return BadValueNode()
    lowered = text.lower()
    if lowered.endswith(".inf"):
        return FloatNode(-math.inf if lowered.startswith("-") else math.inf, text)
    if lowered == ".nan":
        return FloatNode(math.nan, text)
    return FloatNode(float(text), text)


def _mark(node: yaml.Node) -> str:
    mark = node.start_mark
    return f"at line {mark.line + 1}, column {mark.column + 1}"
