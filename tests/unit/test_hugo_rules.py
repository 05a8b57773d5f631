#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_hugo_rules.py
"""Unit tests for the four hugo backend rules.

Tests cover:
- footnote-reference: sidenote shortcodes, numbering, delegation
- link: ref shortcodes for file links, delegation for everything else
- section: pass-through with sidenotes, footnote block without
- template: date line, file stamp suppression, options left untouched

"""

from datetime import date

import pytest

from orghugo.ast import Document, FootnoteDefinition, FootnoteReference, Link, Paragraph, Section, Strong, Text
from orghugo.exceptions import UnresolvedFootnoteError
from orghugo.export import ExportInfo, FootnoteIndex
from orghugo.options import HugoExportOptions
from orghugo.renderers.hugo import (
    HUGO_BACKEND,
    hugo_footnote_reference,
    hugo_link,
    hugo_section,
    hugo_template,
)
from orghugo.renderers.org import ORG_BACKEND


def _para(*content):
    return Paragraph(content=list(content))


def _info(document: Document, **options) -> ExportInfo:
    return ExportInfo(
        options=HugoExportOptions(**options),
        document=document,
        footnotes=FootnoteIndex.build(document),
        backend=HUGO_BACKEND,
    )


@pytest.fixture
def noted_document():
    """A paragraph with two references to one note and one inline note."""
    first = FootnoteReference(identifier="n")
    inline = FootnoteReference(identifier="", definition=[Text(content=" inline "), Strong(content=[Text(content="x")])])
    second = FootnoteReference(identifier="n")
    doc = Document(
        children=[
            _para(Text(content="a"), first, Text(content="b"), inline, Text(content="c"), second),
            FootnoteDefinition(identifier="n", content=[_para(Text(content="  The note.  "))]),
        ]
    )
    return doc, first, inline, second


@pytest.mark.unit
class TestBackendRegistration:
    """Tests for the hugo backend table."""

    def test_derives_from_org(self) -> None:
        """Test hugo registers exactly the four rules on top of org."""
        assert HUGO_BACKEND.parent is ORG_BACKEND
        assert set(HUGO_BACKEND.transcoders) == {"footnote-reference", "link", "section", "document"}
        assert HUGO_BACKEND.transcoder_for("paragraph") is ORG_BACKEND.transcoder_for("paragraph")


@pytest.mark.unit
class TestFootnoteReferenceRule:
    """Tests for sidenote rendering."""

    def test_sidenote(self, noted_document) -> None:
        """Test a labelled reference becomes a numbered sidenote with trimmed text."""
        doc, first, _, _ = noted_document
        info = _info(doc, use_sidenotes=True)

        assert hugo_footnote_reference(first, None, info) == '{{< sidenote id="1" >}}The note.{{< /sidenote >}}'

    def test_shared_definition_gets_own_numbers(self, noted_document) -> None:
        """Test two references to one note differ only by number."""
        doc, first, _, second = noted_document
        info = _info(doc, use_sidenotes=True)

        assert hugo_footnote_reference(second, None, info) == '{{< sidenote id="3" >}}The note.{{< /sidenote >}}'
        assert hugo_footnote_reference(first, None, info).replace('id="1"', 'id="3"') == hugo_footnote_reference(
            second, None, info
        )

    def test_inline_note_rendered_through_rules(self, noted_document) -> None:
        """Test inline definitions are rendered with the active rules and trimmed."""
        doc, _, inline, _ = noted_document
        info = _info(doc, use_sidenotes=True)

        assert hugo_footnote_reference(inline, None, info) == '{{< sidenote id="2" >}}inline *x*{{< /sidenote >}}'

    def test_custom_shortcode(self, noted_document) -> None:
        """Test the shortcode name comes from the options."""
        doc, first, _, _ = noted_document
        info = _info(doc, use_sidenotes=True, sidenote_shortcode="marginnote")

        assert hugo_footnote_reference(first, None, info) == '{{< marginnote id="1" >}}The note.{{< /marginnote >}}'

    def test_delegates_without_sidenotes(self, noted_document) -> None:
        """Test the org rendering is used when sidenotes are off."""
        doc, first, inline, _ = noted_document
        info = _info(doc)

        assert hugo_footnote_reference(first, None, info) == "[fn:n]"
        assert hugo_footnote_reference(inline, None, info) == "[fn:: inline *x*]"

    def test_unresolved_reference_propagates(self) -> None:
        """Test a dangling reference raises instead of rendering."""
        ghost = FootnoteReference(identifier="ghost")
        info = _info(Document(children=[_para(ghost)]), use_sidenotes=True)

        with pytest.raises(UnresolvedFootnoteError):
            hugo_footnote_reference(ghost, None, info)


@pytest.mark.unit
class TestLinkRule:
    """Tests for ref shortcode links."""

    def test_file_link(self) -> None:
        """Test a described file link becomes a ref shortcode link."""
        link = Link(url="file:posts/my post.org", link_type="file", path="posts/my post.org")
        info = _info(Document())

        assert hugo_link(link, "My *post*", info) == '[[{{< ref "posts/my post.org" >}}][My *post*]]'

    def test_file_link_without_description(self) -> None:
        """Test an undescribed file link keeps only the shortcode."""
        link = Link(url="file:a.org", link_type="file", path="a.org")

        assert hugo_link(link, "", _info(Document())) == '[[{{< ref "a.org" >}}]]'

    def test_file_link_ignores_sidenote_setting(self) -> None:
        """Test link rewriting does not depend on other options."""
        link = Link(url="file:a.org", link_type="file", path="a.org")

        assert hugo_link(link, "A", _info(Document(), use_sidenotes=True)) == '[[{{< ref "a.org" >}}][A]]'

    @pytest.mark.parametrize(
        "link,contents",
        [
            (Link(url="https://gohugo.io", link_type="https", path="//gohugo.io"), "Hugo"),
            (Link(url="id:1234", link_type="id", path="1234"), ""),
            (Link(url="Some heading"), "heading"),
            (Link(url="https://gohugo.io", link_type="https", metadata={"org_plain": True}), ""),
        ],
    )
    def test_other_links_delegate(self, link: Link, contents: str) -> None:
        """Test every non-file link renders exactly as the org backend does."""
        info = _info(Document())

        assert hugo_link(link, contents, info) == ORG_BACKEND.transcoder_for("link")(link, contents, info)


@pytest.mark.unit
class TestSectionRule:
    """Tests for section pass-through."""

    def test_pass_through_with_sidenotes(self, noted_document) -> None:
        """Test the section body is returned unchanged."""
        doc, *_ = noted_document
        section = Section(children=doc.children)
        info = _info(doc, use_sidenotes=True)

        assert hugo_section(section, "BODY", info) == "BODY"
        assert hugo_section(section, None, info) == ""

    def test_footnote_block_without_sidenotes(self, noted_document) -> None:
        """Test the org section rule appends the definitions."""
        doc, *_ = noted_document
        section = Section(children=doc.children)
        info = _info(doc)

        assert hugo_section(section, "BODY", info) == "BODY\n\n[fn:n] The note."


@pytest.mark.unit
class TestTemplateRule:
    """Tests for document finalization."""

    def test_date_line_prepended(self, frozen_clock: date) -> None:
        """Test the current date leads the output."""
        info = _info(Document(), add_current_date=True, title="Post")

        assert hugo_template(Document(), "Body.", info) == "#+DATE: 2025-03-14\n#+TITLE: Post\n\nBody.\n"

    def test_file_stamp_always_suppressed(self, frozen_clock: date) -> None:
        """Test no '# Created' line appears even when the stamp is requested."""
        info = _info(Document(), time_stamp_file=True)

        text = hugo_template(Document(), "Body.", info)

        assert text == "Body.\n"
        assert "# Created" not in text

    def test_override_is_local(self, frozen_clock: date) -> None:
        """Test the stamp override does not touch the pass's options."""
        info = _info(Document(), add_current_date=True)

        hugo_template(Document(), "Body.", info)

        assert info.options.time_stamp_file is True
        assert info.options.add_current_date is True
