#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/ast/sections.py
"""Outline utilities for Org document ASTs.

The Org parser produces a flat list of blocks in which headings are siblings
of the content that follows them. This module provides the outline view on
top of that list: a heading plus everything up to the next heading of the
same or higher level is a *subtree*, and a maximal run of non-heading blocks
is a *section*.

Functions
---------
get_all_subtrees : Extract every heading subtree of a document
get_preamble : Get content before the first heading
find_subtree : Find a subtree by heading text or index
subtree_document : Turn a subtree into a standalone document
prune_subtrees : Drop subtrees selected by a predicate
is_excluded : Whether a heading is left out of the export
is_folded : Whether a heading's content is hidden in a folded outline
group_sections : Wrap runs of non-heading blocks into Section nodes

Examples
--------
    >>> subtree = find_subtree(doc, "Introduction")
    >>> standalone = subtree_document(doc, subtree)
    >>> pruned = prune_subtrees(doc, lambda h: is_excluded(h, ["noexport"]))

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Union

from orghugo.ast.nodes import Document, FootnoteDefinition, Heading, Node, Section
from orghugo.ast.utils import extract_text
from orghugo.constants import (
    COMMENT_HEADING_KEYWORD,
    FOLDED_VISIBILITY_VALUES,
    FOOTNOTE_SECTION_HEADING,
    VISIBILITY_PROPERTY,
)


@dataclass
class Subtree:
    """A heading together with its content and subheadings.

    Parameters
    ----------
    heading : Heading
        The heading node of this subtree
    content : list of Node
        All nodes between this heading and the next same-or-higher level heading
    level : int
        Heading level
    start_index : int
        Index of the heading in the parent document's children list
    end_index : int
        Exclusive end index (one past the last content node)

    """

    heading: Heading
    content: list[Node] = field(default_factory=list)
    level: int = 1
    start_index: int = 0
    end_index: int = 0

    def get_heading_text(self) -> str:
        """Extract plain text from the heading."""
        return heading_text(self.heading)


def heading_text(heading: Heading) -> str:
    """Return the plain title of a heading (without TODO keyword or tags)."""
    return extract_text(heading.content, joiner="").strip()


def get_all_subtrees(doc: Document) -> list[Subtree]:
    """Extract the subtree of every heading, in document order.

    Nested headings produce their own subtree in addition to being part of
    their parent's content.

    Parameters
    ----------
    doc : Document
        Document to extract subtrees from

    Returns
    -------
    list of Subtree
        One subtree per heading

    """
    subtrees: list[Subtree] = []
    children = doc.children
    for idx, node in enumerate(children):
        if not isinstance(node, Heading):
            continue
        end = idx + 1
        while end < len(children):
            sibling = children[end]
            if isinstance(sibling, Heading) and sibling.level <= node.level:
                break
            end += 1
        subtrees.append(
            Subtree(heading=node, content=children[idx + 1 : end], level=node.level, start_index=idx, end_index=end)
        )
    return subtrees


def get_preamble(doc: Document) -> list[Node]:
    """Get all content before the first heading."""
    preamble = []
    for node in doc.children:
        if isinstance(node, Heading):
            break
        preamble.append(node)

    return preamble


def find_subtree(doc: Document, selector: Union[str, int]) -> Subtree | None:
    """Find a subtree by heading text or by index.

    Parameters
    ----------
    doc : Document
        Document to search
    selector : str or int
        Heading title (compared after stripping whitespace) or 0-based index
        into the list of all headings

    Returns
    -------
    Subtree or None
        The matching subtree, or None when nothing matches

    """
    subtrees = get_all_subtrees(doc)
    if isinstance(selector, int):
        if 0 <= selector < len(subtrees):
            return subtrees[selector]
        return None

    wanted = selector.strip()
    for subtree in subtrees:
        if subtree.get_heading_text() == wanted:
            return subtree
    return None


def subtree_document(doc: Document, subtree: Subtree) -> Document:
    """Build a standalone document from one subtree.

    Heading levels are shifted so that the subtree heading becomes a
    top-level heading. Footnote definitions found elsewhere in the document
    are carried along, so references inside the subtree still resolve. The
    document title becomes the heading's ``EXPORT_TITLE`` property, or its
    text.

    Parameters
    ----------
    doc : Document
        Source document
    subtree : Subtree
        Subtree of ``doc`` to export

    Returns
    -------
    Document
        New document; ``doc`` is not modified

    """
    shift = subtree.level - 1
    children: list[Node] = []
    for node in [subtree.heading, *subtree.content]:
        if isinstance(node, Heading) and shift:
            node = Heading(level=node.level - shift, content=node.content, metadata=node.metadata)
        children.append(node)

    for idx, node in enumerate(doc.children):
        if subtree.start_index <= idx < subtree.end_index:
            continue
        if isinstance(node, FootnoteDefinition):
            children.append(node)

    properties = subtree.heading.metadata.get("org_properties", {})
    title = properties.get("EXPORT_TITLE") or subtree.get_heading_text()
    keywords = dict(doc.metadata.get("keywords", {}))
    keywords["TITLE"] = [title]
    metadata = dict(doc.metadata)
    metadata["keywords"] = keywords
    metadata["title"] = title
    return Document(children=children, metadata=metadata)


def prune_subtrees(doc: Document, predicate: Callable[[Heading], bool], keep_heading: bool = False) -> Document:
    """Drop the subtrees of headings selected by ``predicate``.

    Footnote definitions inside a dropped subtree are kept, since references
    elsewhere in the document may point at them.

    Parameters
    ----------
    doc : Document
        Source document
    predicate : callable
        Returns True for headings whose subtree is dropped
    keep_heading : bool, default False
        Keep the heading line itself and drop only what is below it

    Returns
    -------
    Document
        New document; ``doc`` is not modified

    """
    children: list[Node] = []
    cut_level: int | None = None

    for node in doc.children:
        if isinstance(node, Heading):
            if cut_level is not None and node.level <= cut_level:
                cut_level = None
            if cut_level is None and predicate(node):
                cut_level = node.level
                if keep_heading:
                    children.append(node)
                continue
        if cut_level is None or isinstance(node, FootnoteDefinition):
            children.append(node)

    return Document(children=children, metadata=doc.metadata)


def is_excluded(heading: Heading, exclude_tags: Iterable[str]) -> bool:
    """Whether a heading and its subtree are left out of the export.

    Headings tagged with one of ``exclude_tags``, commented headings
    (``* COMMENT ...``) and the footnote section heading are excluded.
    """
    tags = set(heading.metadata.get("org_tags", []))
    if tags.intersection(exclude_tags):
        return True
    title = heading_text(heading)
    if title == FOOTNOTE_SECTION_HEADING:
        return True
    first_word = title.split(None, 1)[0] if title else ""
    return first_word == COMMENT_HEADING_KEYWORD


def is_folded(heading: Heading) -> bool:
    """Whether a heading's content is hidden when the outline is folded."""
    properties = heading.metadata.get("org_properties", {})
    value = str(properties.get(VISIBILITY_PROPERTY, "")).strip().lower()
    return value in FOLDED_VISIBILITY_VALUES


def group_sections(children: list[Node]) -> list[Node]:
    """Wrap runs of non-heading blocks into Section nodes.

    Every heading is followed by exactly one section (possibly empty), so a
    backend can attach material such as footnote definitions to it. The
    heading is recorded in the section's ``metadata["heading"]``. Content
    before the first heading becomes a section only when there is some.

    Parameters
    ----------
    children : list of Node
        Flat block list of a document

    Returns
    -------
    list of Node
        Headings and sections, alternating

    """
    grouped: list[Node] = []
    current: list[Node] = []
    heading: Heading | None = None

    for node in children:
        if isinstance(node, Heading):
            if heading is not None or current:
                grouped.append(Section(children=current, metadata={"heading": heading}))
            grouped.append(node)
            current = []
            heading = node
        else:
            current.append(node)

    if heading is not None or current:
        grouped.append(Section(children=current, metadata={"heading": heading}))

    return grouped


__all__ = [
    "Subtree",
    "find_subtree",
    "get_all_subtrees",
    "get_preamble",
    "group_sections",
    "heading_text",
    "is_excluded",
    "is_folded",
    "prune_subtrees",
    "subtree_document",
]
