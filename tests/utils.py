"""Test utilities for the structedit test suite.

This module provides the schema used across the tests and small builder
functions for writing documents inline. Builders accept ``<name>`` tags inside
strings; the tag positions are collected so tests can place the cursor
without counting offsets by hand:

    >>> built = doc(p("one<cursor>"))
    >>> built.tags["cursor"]
    4

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Union

from prosemirror.model import Mark, Node, Schema

from structedit import NodeSelection, TextSelection, Transaction, create_transaction

TAG_PATTERN = re.compile(r"<(\w+)>")

CELL_ATTRS = {
    "colspan": {"default": 1},
    "rowspan": {"default": 1},
    "colwidth": {"default": None},
    "pretty": {"default": True},
    "ugly": {"default": False},
}

schema = Schema(
    {
        "nodes": {
            "doc": {"content": "block+"},
            "paragraph": {"content": "inline*", "group": "block"},
            "blockquote": {"content": "block+", "group": "block"},
            "table": {"content": "table_row+", "group": "block", "isolating": True},
            "table_row": {"content": "(table_cell | table_header)*"},
            "table_cell": {"content": "block+", "attrs": CELL_ATTRS, "isolating": True, "marks": "_"},
            "table_header": {"content": "block+", "attrs": CELL_ATTRS, "isolating": True, "marks": "_"},
            "atomBlock": {"group": "block", "atom": True},
            "atomInline": {"group": "inline", "inline": True, "atom": True},
            "text": {"group": "inline"},
        },
        "marks": {
            "strong": {},
            "em": {},
        },
    }
)


@dataclass
class Tagged:
    """A built node and the tag positions inside its content."""

    node: Node
    tags: dict[str, int] = field(default_factory=dict)


@dataclass
class MarkedRun:
    """Text nodes produced by a mark builder, and the tags inside them."""

    nodes: list[Node]
    tags: dict[str, int] = field(default_factory=dict)


Child = Union[str, Tagged, MarkedRun]


def _flatten(children: tuple[Child, ...], marks: list[Mark]) -> tuple[list[Node], dict[str, int]]:
    nodes: list[Node] = []
    tags: dict[str, int] = {}
    pos = 0
    for child in children:
        if isinstance(child, str):
            text = ""
            at = 0
            for match in TAG_PATTERN.finditer(child):
                text += child[at : match.start()]
                tags[match.group(1)] = pos + len(text)
                at = match.end()
            text += child[at:]
            if text:
                nodes.append(schema.text(text, marks))
                pos += len(text)
        elif isinstance(child, MarkedRun):
            tags.update({name: pos + offset for name, offset in child.tags.items()})
            nodes.extend(child.nodes)
            pos += sum(node.node_size for node in child.nodes)
        else:
            tags.update({name: pos + 1 + offset for name, offset in child.tags.items()})
            nodes.append(child.node)
            pos += child.node.node_size
    return nodes, tags


def node_builder(type_name: str, **attrs: Any) -> Callable[..., Tagged]:
    """Return a builder for nodes of ``type_name`` with fixed attributes."""

    def build(*children: Child) -> Tagged:
        nodes, tags = _flatten(children, [])
        return Tagged(schema.nodes[type_name].create_checked(attrs or None, nodes), tags)

    return build


def mark_builder(type_name: str) -> Callable[..., MarkedRun]:
    """Return a builder wrapping its text children in a mark of ``type_name``."""

    def build(*children: Child) -> MarkedRun:
        nodes, tags = _flatten(children, [schema.marks[type_name].create()])
        return MarkedRun(nodes, tags)

    return build


doc = node_builder("doc")
p = node_builder("paragraph")
blockquote = node_builder("blockquote")
table = node_builder("table")
row = node_builder("table_row")
td = node_builder("table_cell")
th = node_builder("table_header")
atom_block = node_builder("atomBlock")
atom_inline = node_builder("atomInline")
strong = mark_builder("strong")
em = mark_builder("em")

td_cursor = td(p("<cursor>"))
td_empty = td(p())
th_empty = th(p())


def paragraph(text: str = "") -> Node:
    """Build a detached paragraph holding ``text``."""
    return schema.nodes["paragraph"].create_checked(None, schema.text(text) if text else None)


def create_tr(built: Tagged) -> Transaction:
    """Start a transaction on a built document.

    A ``<cursor>`` tag places a text cursor, a ``<node>`` tag selects the node
    after it, and ``<anchor>``/``<head>`` tags make a range selection. Without
    tags the selection starts at the beginning of the document.
    """
    document = built.node
    tags = built.tags
    if "cursor" in tags:
        selection = TextSelection.create(document, tags["cursor"])
    elif "node" in tags:
        selection = NodeSelection.create(document, tags["node"])
    elif "anchor" in tags:
        selection = TextSelection.create(document, tags["anchor"], tags.get("head"))
    else:
        selection = None
    return create_transaction(document, selection)


def assert_doc_equal(actual: Node, expected: Union[Node, Tagged]) -> None:
    """Assert that two documents have the same structure and content."""
    if isinstance(expected, Tagged):
        expected = expected.node
    assert actual.eq(expected), f"{actual.to_json()} != {expected.to_json()}"
