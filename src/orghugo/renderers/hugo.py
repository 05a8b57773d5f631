#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/renderers/hugo.py
"""Hugo export backend.

``HUGO_BACKEND`` derives from the default org backend and overrides four
node kinds; everything else is rendered by the org transcoders.

footnote-reference
    With ``use_sidenotes``, the reference becomes
    ``{{< sidenote id="N" >}}TEXT{{< /sidenote >}}`` where N is the
    reference's occurrence number and TEXT its rendered, trimmed definition.
link
    ``file:`` links become Hugo ``ref`` shortcodes,
    ``[[{{< ref "PATH" >}}][TEXT]]``, so Hugo resolves same-site targets.
section
    With ``use_sidenotes``, the section body is returned as is (no trailing
    footnote definitions).
document (template)
    The ``# Created`` file stamp is always suppressed; with
    ``add_current_date`` a ``#+DATE: YYYY-MM-DD`` line is prepended.

All four read their settings from ``info.options`` (a HugoExportOptions)
and hand anything they do not handle back to the org backend.

Examples
--------
    >>> from orghugo.export.engine import export_document
    >>> from orghugo.options import HugoExportOptions
    >>> text = export_document(doc, HUGO_BACKEND, HugoExportOptions(use_sidenotes=True))

"""

from __future__ import annotations

from datetime import date
from typing import Optional

from orghugo.ast import Document, FootnoteReference, Link, Section
from orghugo.constants import (
    HUGO_REF_LINK_BARE_TEMPLATE,
    HUGO_REF_LINK_TEMPLATE,
    HUGO_SIDENOTE_TEMPLATE,
    KIND_DOCUMENT,
    KIND_FOOTNOTE_REFERENCE,
    KIND_LINK,
    KIND_SECTION,
)
from orghugo.export.engine import ExportInfo
from orghugo.renderers.org import ORG_BACKEND


def _today() -> date:
    return date.today()


def hugo_footnote_reference(node: FootnoteReference, contents: Optional[str], info: ExportInfo) -> str:
    """Render a footnote reference as an inline sidenote shortcode.

    Parameters
    ----------
    node : FootnoteReference
        The reference
    contents : str or None
        Unused; references have no rendered children
    info : ExportInfo
        State of the pass

    Returns
    -------
    str
        ``{{< SHORTCODE id="N" >}}TEXT{{< /SHORTCODE >}}``, or the org
        rendering when sidenotes are off

    Raises
    ------
    UnresolvedFootnoteError
        If the reference has no definition

    """
    options = info.options
    if not options.use_sidenotes:
        return HUGO_BACKEND.delegate(KIND_FOOTNOTE_REFERENCE, node, contents, info)

    definition = info.footnote_definition(node)
    text = info.export_data(definition).strip()
    return HUGO_SIDENOTE_TEMPLATE.format(
        shortcode=options.sidenote_shortcode,
        number=info.footnote_number(node),
        text=text,
    )


def hugo_link(node: Link, contents: Optional[str], info: ExportInfo) -> str:
    """Render ``file:`` links as Hugo ``ref`` shortcode links.

    The path is used verbatim. A file link without a description is
    written ``[[{{< ref "PATH" >}}]]``. Links of any other type are
    rendered by the org backend.
    """
    if node.link_type != "file":
        return HUGO_BACKEND.delegate(KIND_LINK, node, contents, info)
    if not contents:
        return HUGO_REF_LINK_BARE_TEMPLATE.format(path=node.path)
    return HUGO_REF_LINK_TEMPLATE.format(path=node.path, text=contents)


def hugo_section(node: Section, contents: Optional[str], info: ExportInfo) -> str:
    """Drop the trailing footnote definitions when footnotes are sidenotes."""
    if info.options.use_sidenotes:
        return contents or ""
    return HUGO_BACKEND.delegate(KIND_SECTION, node, contents, info)


def hugo_template(node: Document, contents: Optional[str], info: ExportInfo) -> str:
    """Run the org template without the file stamp, optionally dating the output.

    The stamp is switched off on a copy of the options, so the options
    shared with the rest of the pass keep their value.
    """
    date_line = f"#+DATE: {_today():%Y-%m-%d}\n" if info.options.add_current_date else ""
    return date_line + HUGO_BACKEND.delegate(KIND_DOCUMENT, node, contents, info.with_options(time_stamp_file=False))


HUGO_TRANSCODERS = {
    KIND_FOOTNOTE_REFERENCE: hugo_footnote_reference,
    KIND_LINK: hugo_link,
    KIND_SECTION: hugo_section,
    KIND_DOCUMENT: hugo_template,
}

HUGO_BACKEND = ORG_BACKEND.derive("hugo", HUGO_TRANSCODERS)

__all__ = [
    "HUGO_BACKEND",
    "HUGO_TRANSCODERS",
    "hugo_footnote_reference",
    "hugo_link",
    "hugo_section",
    "hugo_template",
]
