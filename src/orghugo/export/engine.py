#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/export/engine.py
"""Generic export engine.

An export pass walks the document tree and hands every node to the
*transcoder* a backend registers for the node's kind. A transcoder is a
plain function::

    transcoder(node, contents, info) -> str

where ``contents`` is the already rendered text of the node's children (for
containers whose children are simply concatenated) or None, and ``info`` is
the :class:`ExportInfo` of the pass. The backend's table is consulted first;
kinds it does not register fall back to its parent backend, and so on up
the chain. A derived backend therefore only lists the kinds it changes and
can hand a node back to its parent with :meth:`Backend.delegate`.

Examples
--------
    >>> def shout(node, contents, info):
    ...     return contents.upper()
    >>> loud = ORG_BACKEND.derive("loud", {"paragraph": shout})
    >>> export_document(doc, loud, OrgExportOptions())

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional, Union

from orghugo.ast import (
    DefinitionTerm,
    Document,
    Emphasis,
    FootnoteReference,
    Heading,
    Link,
    Node,
    Paragraph,
    Section,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    TableCell,
    Underline,
)
from orghugo.ast.sections import group_sections
from orghugo.constants import KIND_DOCUMENT
from orghugo.exceptions import RenderingError
from orghugo.export.footnotes import FootnoteIndex
from orghugo.options.org import OrgExportOptions
from orghugo.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

Transcoder = Callable[[Node, Optional[str], "ExportInfo"], str]

# Containers whose contents are the concatenation of their inline children
_INLINE_CONTAINERS = (
    Paragraph,
    Heading,
    Emphasis,
    Strong,
    Strikethrough,
    Underline,
    Superscript,
    Subscript,
    Link,
    TableCell,
    DefinitionTerm,
)


class Backend:
    """Named transcoder table with an optional parent backend.

    Parameters
    ----------
    name : str
        Backend name (e.g. ``"org"``, ``"hugo"``)
    transcoders : Mapping[str, Transcoder]
        Node kind to transcoder
    parent : Backend, optional
        Backend consulted for kinds missing from ``transcoders``

    """

    def __init__(self, name: str, transcoders: Mapping[str, Transcoder], parent: Optional[Backend] = None):
        """Initialize the backend with its table and parent."""
        self.name = name
        self.transcoders: dict[str, Transcoder] = dict(transcoders)
        self.parent = parent

    def __repr__(self) -> str:
        """Return a short description naming the backend chain."""
        chain = [self.name]
        backend = self.parent
        while backend is not None:
            chain.append(backend.name)
            backend = backend.parent
        return f"Backend({' -> '.join(chain)})"

    def derive(self, name: str, transcoders: Mapping[str, Transcoder]) -> Backend:
        """Create a backend that overrides some of this backend's transcoders."""
        return Backend(name, transcoders, parent=self)

    def transcoder_for(self, kind: str) -> Transcoder:
        """Return the transcoder for ``kind``, searching up the parent chain.

        Raises
        ------
        RenderingError
            If no backend in the chain registers ``kind``

        """
        backend: Optional[Backend] = self
        while backend is not None:
            transcoder = backend.transcoders.get(kind)
            if transcoder is not None:
                return transcoder
            backend = backend.parent
        raise RenderingError(f"No transcoder registered for node kind '{kind}' in {self!r}", rendering_stage=kind)

    def delegate(self, kind: str, node: Node, contents: Optional[str], info: ExportInfo) -> str:
        """Render ``node`` with the parent backend's transcoder for ``kind``.

        Raises
        ------
        RenderingError
            If this backend has no parent or no parent handles ``kind``

        """
        if self.parent is None:
            raise RenderingError(f"Backend '{self.name}' has no parent to delegate '{kind}' to", rendering_stage=kind)
        return self.parent.transcoder_for(kind)(node, contents, info)


@dataclass(frozen=True)
class ExportInfo:
    """State of one export pass, handed to every transcoder.

    Parameters
    ----------
    options : OrgExportOptions
        Configuration of the pass (a HugoExportOptions for the hugo backend)
    document : Document
        The tree being exported
    footnotes : FootnoteIndex
        Footnote definitions and numbers of ``document``
    backend : Backend
        Backend of the pass

    """

    options: OrgExportOptions
    document: Document
    footnotes: FootnoteIndex
    backend: Backend

    def with_options(self, **kwargs: Any) -> ExportInfo:
        """Return a copy whose options carry the given overrides.

        Neither this info nor its options are modified.
        """
        return replace(self, options=self.options.create_updated(**kwargs))

    def export_data(self, data: Union[Node, list[Node]]) -> str:
        """Render a node or a list of nodes with this pass's backend."""
        return export_data(data, self)

    def footnote_definition(self, reference: FootnoteReference) -> list[Node]:
        """Return the definition of ``reference`` (raises UnresolvedFootnoteError)."""
        return self.footnotes.definition(reference)

    def footnote_number(self, reference: FootnoteReference) -> int:
        """Return the 1-based occurrence number of ``reference``."""
        return self.footnotes.number(reference)


def _render_contents(node: Node, info: ExportInfo) -> Optional[str]:
    if isinstance(node, Section):
        return join_blocks(export_data(child, info) for child in node.children)
    if isinstance(node, _INLINE_CONTAINERS):
        return "".join(export_data(child, info) for child in node.content)
    return None


def join_blocks(blocks: Any) -> str:
    """Join rendered blocks with blank lines, skipping empty ones."""
    return "\n\n".join(block for block in blocks if block)


def export_data(data: Union[Node, list[Node]], info: ExportInfo) -> str:
    """Render a node, or a list of nodes, through the backend's transcoders.

    Lists of block nodes are joined with blank lines, lists of inline nodes
    are concatenated.

    Parameters
    ----------
    data : Node or list of Node
        What to render
    info : ExportInfo
        State of the pass

    Returns
    -------
    str
        Rendered text

    """
    if isinstance(data, list):
        if data and data[0].is_block:
            return join_blocks(export_data(node, info) for node in data)
        return "".join(export_data(node, info) for node in data)

    node = data
    if isinstance(node, FootnoteReference) and not info.options.with_footnotes:
        return ""
    contents = _render_contents(node, info)
    return info.backend.transcoder_for(node.kind)(node, contents, info)


def _cleanup_output(text: str) -> str:
    text = re.sub(r"\n{4,}", "\n\n\n", text)
    return text.strip("\n")


def export_document(
    document: Document,
    backend: Backend,
    options: OrgExportOptions,
    *,
    body_only: bool = False,
) -> str:
    """Export a whole document.

    The document's blocks are grouped into headings and sections, each is
    rendered through ``backend``, and the joined body is passed to the
    backend's ``document`` transcoder (the template) unless ``body_only``.

    Parameters
    ----------
    document : Document
        Parsed (and already filtered) document
    backend : Backend
        Backend of the pass
    options : OrgExportOptions
        Configuration of the pass; passed to every transcoder, never mutated
    body_only : bool, default False
        Return the body without running the template

    Returns
    -------
    str
        Exported text

    Raises
    ------
    RenderingError
        If a transcoder fails (UnresolvedFootnoteError for dangling footnotes)

    """
    with debug_timer(logger, f"Export ({backend.name})"):
        info = ExportInfo(
            options=options, document=document, footnotes=FootnoteIndex.build(document), backend=backend
        )
        logger.debug("Exporting with %r: %d footnote references", backend, len(info.footnotes))

        blocks = group_sections(document.children)
        body = _cleanup_output(join_blocks(export_data(block, info) for block in blocks))
        if body_only:
            return body
        return backend.transcoder_for(KIND_DOCUMENT)(document, body, info)


__all__ = [
    "Backend",
    "ExportInfo",
    "Transcoder",
    "export_data",
    "export_document",
    "join_blocks",
]
