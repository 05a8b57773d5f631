#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/ast/__init__.py
"""Abstract Syntax Tree (AST) module for Org document representation.

The Org parser builds these nodes and the export engine walks them. Each
node class carries a ``kind`` tag; backends register one transcoder per
kind, so rendering is a table lookup rather than a method on the node.

Examples
--------
    >>> from orghugo.ast import Document, Heading, Paragraph, Text
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> doc.children[0].kind
    'heading'

"""

from __future__ import annotations

from orghugo.ast.nodes import (
    BLOCK_KINDS,
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Node,
    Paragraph,
    Section,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    Underline,
    get_node_children,
)
from orghugo.ast.utils import extract_text, iter_nodes

__all__ = [
    "BLOCK_KINDS",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "DefinitionDescription",
    "DefinitionList",
    "DefinitionTerm",
    "Document",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "Heading",
    "Image",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "MathBlock",
    "MathInline",
    "Node",
    "Paragraph",
    "Section",
    "Strikethrough",
    "Strong",
    "Subscript",
    "Superscript",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "Underline",
    "extract_text",
    "get_node_children",
    "iter_nodes",
]
