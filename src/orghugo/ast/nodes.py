#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/ast/nodes.py
"""AST node classes for Org document representation.

This module defines the node hierarchy produced by the Org parser and walked
by the export engine. Every node class carries a ``kind`` tag: the export
engine looks the tag up in a backend's transcoder table to find the rule
that renders the node, so nodes do not know how they are rendered.

Node Hierarchy
--------------
Block-level nodes represent structural document elements:
    - Document, Section, Heading, Paragraph, CodeBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell
    - ThematicBreak, FootnoteDefinition, DefinitionList, MathBlock

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Code
    - Link, Image, LineBreak
    - Strikethrough, Underline, Superscript, Subscript
    - FootnoteReference, MathInline

"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Optional


class Node(ABC):
    """Base class for all AST nodes.

    Attributes
    ----------
    kind : str
        Node kind tag used by the export engine for transcoder lookup
    metadata : dict
        Arbitrary metadata associated with this node

    """

    kind: ClassVar[str] = "node"
    metadata: dict[str, Any]

    @property
    def is_block(self) -> bool:
        """Return True for block-level nodes."""
        return self.kind in BLOCK_KINDS


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    The Document node holds a flat list of block-level children: headings are
    siblings of the content that follows them, the way the Org parser emits
    them. File-level keywords (``#+TITLE:``, ``#+HUGO_EXPORT_PATH:`` ...) are
    stored in ``metadata``.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document metadata (title, author, keywords)

    """

    kind: ClassVar[str] = "document"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Section(Node):
    """Run of block content between two headings.

    Sections are not produced by the parser; the export engine groups the
    document's non-heading blocks into sections before rendering, so that a
    backend can post-process each section body as a whole.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes of the section
    metadata : dict, default = empty dict
        Section metadata

    """

    kind: ClassVar[str] = "section"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Heading(Node):
    """Heading node (Org headline).

    Parameters
    ----------
    level : int
        Number of stars (1 is the outermost level)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    metadata : dict, default = empty dict
        Heading metadata (``org_todo_state``, ``org_priority``, ``org_tags``,
        ``org_properties``)

    """

    kind: ClassVar[str] = "heading"

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate heading level is positive."""
        if self.level < 1:
            raise ValueError(f"Heading level must be >= 1, got {self.level}")


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    kind: ClassVar[str] = "paragraph"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class CodeBlock(Node):
    """Source block (``#+BEGIN_SRC``) with optional language.

    Parameters
    ----------
    content : str
        Code content, verbatim
    language : str or None, default = None
        Language name from the block header
    metadata : dict, default = empty dict
        Code block metadata (``org_header_args``)

    """

    kind: ClassVar[str] = "code-block"

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements."""

    kind: ClassVar[str] = "block-quote"

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists

    """

    kind: ClassVar[str] = "list"

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ListItem(Node):
    """List item node containing block content."""

    kind: ClassVar[str] = "list-item"

    children: list[Node] = field(default_factory=list)
    task_status: Optional[Literal["checked", "unchecked"]] = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Table(Node):
    """Table node with optional header row."""

    kind: ClassVar[str] = "table"

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class TableRow(Node):
    """Table row node containing cells."""

    kind: ClassVar[str] = "table-row"

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class TableCell(Node):
    """Table cell node containing inline content."""

    kind: ClassVar[str] = "table-cell"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ThematicBreak(Node):
    """Horizontal rule (five or more dashes)."""

    kind: ClassVar[str] = "thematic-break"

    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class FootnoteDefinition(Node):
    """Footnote definition node (block).

    Represents ``[fn:label] content`` at the start of a paragraph. The export
    engine indexes definitions by label; the org backend re-emits them at the
    end of the section holding their first reference.

    Parameters
    ----------
    identifier : str
        Footnote label matching one or more FootnoteReference nodes
    content : list of Node, default = empty list
        Block-level content of the footnote

    """

    kind: ClassVar[str] = "footnote-definition"

    identifier: str
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DefinitionList(Node):
    """Definition list (``- term :: description``).

    Parameters
    ----------
    items : list of tuple, default = empty list
        List of (DefinitionTerm, list[DefinitionDescription]) tuples

    """

    kind: ClassVar[str] = "definition-list"

    items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DefinitionTerm(Node):
    """Term of a definition list item."""

    kind: ClassVar[str] = "definition-term"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class DefinitionDescription(Node):
    """Description of a definition list item."""

    kind: ClassVar[str] = "definition-description"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class MathBlock(Node):
    """Display math (``\\[ ... \\]``), LaTeX source without delimiters."""

    kind: ClassVar[str] = "math-block"

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node."""

    kind: ClassVar[str] = "text"

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Emphasis(Node):
    """Italic text (``/text/``)."""

    kind: ClassVar[str] = "emphasis"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Strong(Node):
    """Bold text (``*text*``)."""

    kind: ClassVar[str] = "strong"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Code(Node):
    """Inline code or verbatim (``=code=`` / ``~verbatim~``)."""

    kind: ClassVar[str] = "code"

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Link(Node):
    """Link node.

    Mirrors the parts of an Org link the exporters care about: the raw
    target as written, the link type and the path that follows the type.

    Parameters
    ----------
    url : str
        Raw link target as written in the source (e.g. ``file:posts/a.org``)
    content : list of Node, default = empty list
        Inline nodes of the description; empty for ``[[target]]`` links
    link_type : str or None, default = None
        Link type tag (``"file"``, ``"https"``, ``"id"`` ...); None for fuzzy
        links such as ``[[Some heading]]``
    path : str or None, default = None
        Target without the type prefix (``posts/a.org``); defaults to ``url``

    Examples
    --------
    >>> link = Link(url="file:posts/a.org", link_type="file", path="posts/a.org",
    ...             content=[Text(content="A")])
    >>> link.path
    'posts/a.org'

    """

    kind: ClassVar[str] = "link"

    url: str
    content: list[Node] = field(default_factory=list)
    link_type: Optional[str] = None
    path: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Default the path to the raw target."""
        if self.path is None:
            self.path = self.url


@dataclass
class Image(Node):
    """Inline image (a link to an image file without description)."""

    kind: ClassVar[str] = "image"

    url: str
    alt_text: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class LineBreak(Node):
    """Explicit line break (``\\\\`` at end of line)."""

    kind: ClassVar[str] = "line-break"

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Strikethrough(Node):
    """Struck-through text (``+text+``)."""

    kind: ClassVar[str] = "strikethrough"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Underline(Node):
    """Underlined text (``_text_``)."""

    kind: ClassVar[str] = "underline"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Superscript(Node):
    """Superscript (``^{text}``)."""

    kind: ClassVar[str] = "superscript"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class Subscript(Node):
    """Subscript (``_{text}``)."""

    kind: ClassVar[str] = "subscript"

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class FootnoteReference(Node):
    """Footnote reference node (inline).

    Covers the three Org forms:

    - ``[fn:label]``: reference to a labelled definition elsewhere
    - ``[fn:label:text]``: inline definition with a label
    - ``[fn::text]``: anonymous inline definition

    Two references with the same label are distinct nodes that share one
    definition; the export engine numbers each of them separately.

    Parameters
    ----------
    identifier : str
        Footnote label (empty for anonymous notes)
    definition : list of Node or None, default = None
        Inline definition content, when the note is defined in place

    """

    kind: ClassVar[str] = "footnote-reference"

    identifier: str
    definition: Optional[list[Node]] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_inline(self) -> bool:
        """Return True when the reference carries its own definition."""
        return self.definition is not None


@dataclass
class MathInline(Node):
    """Inline math (``\\( ... \\)`` or ``$...$``), LaTeX source without delimiters."""

    kind: ClassVar[str] = "math-inline"

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


BLOCK_KINDS = frozenset(
    {
        "document",
        "section",
        "heading",
        "paragraph",
        "code-block",
        "block-quote",
        "list",
        "list-item",
        "table",
        "table-row",
        "table-cell",
        "thematic-break",
        "footnote-definition",
        "definition-list",
        "definition-term",
        "definition-description",
        "math-block",
    }
)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Inline definitions of footnote references are included, so a walk over
    the tree reaches references nested inside other footnotes.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    """
    if isinstance(node, (Document, Section, BlockQuote, ListItem)):
        return list(node.children)

    if isinstance(
        node,
        (
            Heading,
            Paragraph,
            Emphasis,
            Strong,
            Strikethrough,
            Underline,
            Superscript,
            Subscript,
            Link,
            TableCell,
            DefinitionTerm,
            DefinitionDescription,
            FootnoteDefinition,
        ),
    ):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    if isinstance(node, DefinitionList):
        dl_children: list[Node] = []
        for term, descriptions in node.items:
            dl_children.append(term)
            dl_children.extend(descriptions)
        return dl_children

    if isinstance(node, FootnoteReference) and node.definition is not None:
        return list(node.definition)

    return []
