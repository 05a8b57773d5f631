#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes
iter_nodes : Walk a subtree in document order

Examples
--------
Extract text from a heading:

    >>> from orghugo.ast import Heading, Text, Emphasis
    >>> from orghugo.ast.utils import extract_text
    >>>
    >>> heading = Heading(level=1, content=[
    ...     Text(content="Hello "),
    ...     Emphasis(content=[Text(content="world")])
    ... ])
    >>> extract_text(heading, joiner="")
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Union

from orghugo.ast.nodes import Code, FootnoteReference, Text, get_node_children

if TYPE_CHECKING:
    from orghugo.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = " ") -> str:
    """Extract plain text from a node or list of nodes.

    Text and inline code content is concatenated recursively. Footnote
    references are skipped, so a heading carrying a note still yields its
    plain title.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = " "
        String to use for joining text parts. Use "" when Text nodes already
        carry their own whitespace (heading titles, link descriptions).

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        text_parts = []
        for node in node_or_nodes:
            extracted = extract_text(node, joiner=joiner)
            if extracted:
                text_parts.append(extracted)
        return joiner.join(text_parts)

    node = node_or_nodes
    if isinstance(node, (Text, Code)):
        return node.content
    if isinstance(node, FootnoteReference):
        return ""

    text_parts = []
    for child in get_node_children(node):
        extracted = extract_text(child, joiner=joiner)
        if extracted:
            text_parts.append(extracted)

    return joiner.join(text_parts)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order.

    Inline footnote definitions are visited right after their reference,
    which matches the order in which a reader meets them.

    Parameters
    ----------
    node : Node
        Root of the walk

    Yields
    ------
    Node
        Nodes in pre-order

    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_node_children(current)))


__all__ = [
    "extract_text",
    "iter_nodes",
]
