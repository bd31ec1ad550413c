"""
Module: tests/unit/test_nodes.py

What:
    Validate the closed node tree: key lookup semantics and the debug
    rendering embedded in error messages.

Why:
    Error messages echo rendered nodes verbatim, so the rendering must be
    stable. Lookup must keep "absent" and "explicitly null" apart.

How:
    Build small trees by hand and assert on lookup results and rendered text.

Interfaces:
    test_lookup_distinguishes_absent_from_null, test_index_non_mapping,
    test_render_scalars, test_render_nested_collections, test_render_escapes
"""

import math

from mainframer.config.nodes import (
    BadValueNode,
    BooleanNode,
    FloatNode,
    IntegerNode,
    MappingNode,
    NullNode,
    SequenceNode,
    StringNode,
    index,
    render,
)


def test_lookup_distinguishes_absent_from_null():
    """
    What:
        ``lookup`` returns ``None`` for a missing key and the stored node
        otherwise, while ``get`` maps a missing key to a bad value.
    """
    mapping = MappingNode(((StringNode("host"), NullNode()), (IntegerNode(1), StringNode("one"))))
    assert mapping.lookup("host") == NullNode()
    assert mapping.lookup("user") is None
    assert mapping.lookup("1") is None
    assert mapping.get("user") == BadValueNode()


def test_index_non_mapping():
    """
    What:
        Indexing anything but a mapping yields a bad value.
    """
    assert index(StringNode("remoteMachine"), "remoteMachine") == BadValueNode()
    assert index(NullNode(), "compression") == BadValueNode()
    root = MappingNode(((StringNode("compression"), IntegerNode(3)),))
    assert index(root, "compression") == IntegerNode(3)


def test_nodes_are_hashable_values():
    """
    What:
        Equal nodes compare and hash equal, so they can key mappings.
    """
    left = SequenceNode((IntegerNode(1), StringNode("a")))
    right = SequenceNode((IntegerNode(1), StringNode("a")))
    assert left == right
    assert len({left, right}) == 1
    assert IntegerNode(1) != BooleanNode(True)


def test_render_scalars():
    """
    What:
        Scalars render as ``Kind(\\n    value\\n)``; null and bad values as
        bare names.
    """
    assert render(NullNode()) == "Null"
    assert render(BadValueNode()) == "BadValue"
    assert render(BooleanNode(False)) == "Boolean(\n    false\n)"
    assert render(IntegerNode(-3)) == "Integer(\n    -3\n)"
    assert render(FloatNode(1.5)) == 'Real(\n    "1.5"\n)'
    assert render(FloatNode(math.inf)) == 'Real(\n    "inf"\n)'
    assert render(FloatNode(1000.0, "1e3")) == 'Real(\n    "1e3"\n)'
    assert FloatNode(1000.0, "1e3") == FloatNode(1000.0)
    assert render(StringNode("yooo")) == 'String(\n    "yooo"\n)'


def test_render_nested_collections():
    """
    What:
        Collections nest their members four spaces deeper per level.
    """
    sequence = SequenceNode((IntegerNode(1), StringNode("a")))
    assert render(sequence) == (
        "Array(\n"
        "    [\n"
        "        Integer(\n"
        "            1\n"
        "        ),\n"
        "        String(\n"
        '            "a"\n'
        "        )\n"
        "    ]\n"
        ")"
    )
    mapping = MappingNode(((StringNode("k"), NullNode()),))
    assert render(mapping) == (
        "Hash(\n"
        "    {\n"
        "        String(\n"
        '            "k"\n'
        "        ): Null\n"
        "    }\n"
        ")"
    )
    assert render(SequenceNode()) == "Array(\n    []\n)"
    assert render(MappingNode()) == "Hash(\n    {}\n)"


def test_render_escapes():
    """
    What:
        Quotes, backslashes and control characters are escaped.
    """
    assert render(StringNode('a"b\\c\n\t\x01')) == 'String(\n    "a\\"b\\\\c\\n\\t\\u{1}"\n)'
