#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_hugo_export_properties.py
"""Integration tests for the observable behavior of the Hugo export.

Tests cover:
- Equivalence with the org export when sidenotes are off
- Sidenote numbering, content and definition suppression
- ref shortcodes for file links
- Date line and file stamp handling
- Output file naming and the export path check
- Repeatability

"""

from datetime import date
from pathlib import Path

import pytest

from orghugo.api import export_to_buffer, export_to_file, output_path_for
from orghugo.exceptions import ConfigurationError
from orghugo.export import export_document
from orghugo.options import HugoExportOptions, resolve_export_options
from orghugo.parsers import OrgParser
from orghugo.renderers import HUGO_BACKEND, ORG_BACKEND

MIXED_DOCUMENT = """#+TITLE: Field Notes
#+AUTHOR: Sam

Opening paragraph with a note[fn:intro].

* Setup
Install the tools[fn:tools] and read [[https://gohugo.io/documentation/][the docs]].

- first step
- second step[fn:tools]

| Tool | Version |
|------+---------|
| hugo | 0.120   |

** Details
An inline note[fn:: with /emphasis/] and an anonymous one.

#+BEGIN_SRC sh
hugo server
#+END_SRC

* Wrap-up
Back to the start, see [[Setup]].

[fn:intro] Why this exists.

[fn:tools] Hugo and Emacs.
"""

NO_NOTES = """#+TITLE: Plain

* Only heading
Just a paragraph with *markup* and a [[https://example.com][link]].
"""

SHARED_NOTE = """#+TITLE: Shared

* Notes
First use[fn:n] and second use[fn:n].

[fn:n]   The same note.
"""

LISTING_WITH_MARKUP = """#+TITLE: Listing

* Build
Start the server[fn:1] like this:

#+BEGIN_SRC python
x = a[fn:1] + my_var_name
see = "[[file:a.org][a]]"
#+END_SRC

Then read [[file:posts/next.org][the next post]][fn:2].

[fn:1] Note.

[fn:2] Last note.
"""


def _org_reference(org: str) -> str:
    """Export with the org backend, without the file stamp."""
    doc = OrgParser().parse(org)
    options = resolve_export_options(doc).create_updated(time_stamp_file=False)
    return export_document(doc, ORG_BACKEND, options)


@pytest.mark.integration
class TestSidenotesOff:
    """With sidenotes off the output matches the org export."""

    @pytest.mark.parametrize("org", [MIXED_DOCUMENT, NO_NOTES, SHARED_NOTE])
    def test_same_as_org_export(self, org: str, frozen_clock: date) -> None:
        """Test the hugo rules change nothing without sidenotes or file links."""
        assert export_to_buffer(org) == _org_reference(org)

    def test_same_as_org_export_engine_level(self, frozen_clock: date) -> None:
        """Test the two backends agree on a parsed document."""
        doc = OrgParser().parse(MIXED_DOCUMENT)
        options = resolve_export_options(doc)

        hugo = export_document(doc, HUGO_BACKEND, options)
        org = export_document(doc, ORG_BACKEND, options.create_updated(time_stamp_file=False))

        assert hugo == org

    def test_definitions_printed_after_sections(self) -> None:
        """Test footnote definitions stay in their org form."""
        text = export_to_buffer(MIXED_DOCUMENT)

        assert "[fn:intro] Why this exists." in text
        assert "[fn:tools] Hugo and Emacs." in text
        assert "{{<" not in text


@pytest.mark.integration
class TestSidenotesOn:
    """With sidenotes on, references become numbered shortcodes."""

    def test_no_definition_block(self) -> None:
        """Test no org footnote syntax is left in the output."""
        text = export_to_buffer(MIXED_DOCUMENT, overrides={"use_sidenotes": True})

        assert "[fn:" not in text
        assert "Why this exists." in text

    def test_numbering_follows_occurrence_order(self) -> None:
        """Test each reference gets its 1-based position among all references."""
        text = export_to_buffer(MIXED_DOCUMENT, overrides={"use_sidenotes": True})

        expected = [
            '{{< sidenote id="1" >}}Why this exists.{{< /sidenote >}}',
            '{{< sidenote id="2" >}}Hugo and Emacs.{{< /sidenote >}}',
            '{{< sidenote id="3" >}}Hugo and Emacs.{{< /sidenote >}}',
            '{{< sidenote id="4" >}}with /emphasis/{{< /sidenote >}}',
        ]
        positions = [text.index(shortcode) for shortcode in expected]
        assert positions == sorted(positions)

    def test_shared_definition(self) -> None:
        """Test two references to one definition differ only by number."""
        text = export_to_buffer(SHARED_NOTE, overrides={"use_sidenotes": True}, body_only=True)

        assert text == (
            "* Notes\n\n"
            'First use{{< sidenote id="1" >}}The same note.{{< /sidenote >}} '
            'and second use{{< sidenote id="2" >}}The same note.{{< /sidenote >}}.'
        )

    def test_definition_rendered_with_hugo_rules(self) -> None:
        """Test links inside a sidenote are rewritten like any other link."""
        org = "See this[fn:1].\n\n[fn:1] Compare [[file:posts/older.org][the older post]].\n"

        text = export_to_buffer(org, overrides={"use_sidenotes": True}, body_only=True)

        assert text == (
            'See this{{< sidenote id="1" >}}Compare [[{{< ref "posts/older.org" >}}][the older post]].'
            "{{< /sidenote >}}."
        )

    def test_keyword_turns_sidenotes_on(self) -> None:
        """Test the file-local keyword wins over the caller's override."""
        org = "#+HUGO_USE_SIDENOTES: t\n#+HUGO_SIDENOTE_SHORTCODE: marginnote\n\nText[fn:1].\n\n[fn:1] Aside.\n"

        text = export_to_buffer(org, overrides={"use_sidenotes": False}, body_only=True)

        assert text == 'Text{{< marginnote id="1" >}}Aside.{{< /marginnote >}}.'

    def test_source_block_left_alone(self) -> None:
        """Test footnote and link syntax inside a source block is neither numbered nor rewritten."""
        text = export_to_buffer(LISTING_WITH_MARKUP, overrides={"use_sidenotes": True}, body_only=True)

        assert text == (
            "* Build\n\n"
            'Start the server{{< sidenote id="1" >}}Note.{{< /sidenote >}} like this:\n\n'
            "#+BEGIN_SRC python\n"
            "x = a[fn:1] + my_var_name\n"
            'see = "[[file:a.org][a]]"\n'
            "#+END_SRC\n\n"
            'Then read [[{{< ref "posts/next.org" >}}][the next post]]'
            '{{< sidenote id="2" >}}Last note.{{< /sidenote >}}.'
        )

    def test_multi_paragraph_note(self) -> None:
        """Test every paragraph of a definition ends up inside the sidenote."""
        org = "Text[fn:1].\n\n[fn:1] First para.\n\nSecond para of note.\n"

        text = export_to_buffer(org, overrides={"use_sidenotes": True}, body_only=True)

        assert text == 'Text{{< sidenote id="1" >}}First para.\n\nSecond para of note.{{< /sidenote >}}.'

    def test_multi_paragraph_note_without_sidenotes(self) -> None:
        """Test the org definition block keeps all its paragraphs."""
        org = "Text[fn:1].\n\n[fn:1] First para.\n\nSecond para of note.\n"

        assert export_to_buffer(org, body_only=True) == "Text[fn:1].\n\n[fn:1] First para.\n\nSecond para of note."


@pytest.mark.integration
class TestLinks:
    """File links become ref shortcodes; other links are untouched."""

    def test_file_link(self) -> None:
        """Test the path is used verbatim and the description is rendered."""
        text = export_to_buffer("Read [[file:../notes/a-post.org][*this* post]].", body_only=True)

        assert text == 'Read [[{{< ref "../notes/a-post.org" >}}][*this* post]].'

    @pytest.mark.parametrize(
        "link",
        [
            "[[https://gohugo.io][Hugo]]",
            "[[https://gohugo.io]]",
            "[[Setup][the setup section]]",
            "[[id:0b3f][by id]]",
        ],
    )
    def test_other_links_unchanged(self, link: str) -> None:
        """Test non-file links render exactly as the org export does."""
        org = f"See {link}."

        assert export_to_buffer(org, body_only=True) == f"See {link}."


@pytest.mark.integration
class TestTemplate:
    """Date line and file stamp handling."""

    def test_date_line_first(self, frozen_clock: date) -> None:
        """Test the output starts with today's date and has no file stamp."""
        text = export_to_buffer(MIXED_DOCUMENT, overrides={"add_current_date": True, "time_stamp_file": True})

        assert text.startswith("#+DATE: 2025-03-14\n#+TITLE: Field Notes\n#+AUTHOR: Sam\n\n")
        assert "# Created" not in text

    def test_no_date_line_by_default(self, frozen_clock: date) -> None:
        """Test the date line is opt-in."""
        text = export_to_buffer(MIXED_DOCUMENT)

        assert text.startswith("#+TITLE: Field Notes\n")
        assert "#+DATE:" not in text
        assert "# Created" not in text

    def test_date_line_on_untitled_document(self, frozen_clock: date) -> None:
        """Test the date line precedes the body when there is no header."""
        assert export_to_buffer("Body.", overrides={"add_current_date": True}) == "#+DATE: 2025-03-14\nBody.\n"


@pytest.mark.integration
class TestExportToFile:
    """Output location and the export path check."""

    def test_empty_export_path_writes_nothing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the configuration error leaves the file system untouched."""

        def fail(*args, **kwargs):
            raise AssertionError("nothing may be written")

        monkeypatch.setattr("orghugo.api.write_content", fail)
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError):
            export_to_file(MIXED_DOCUMENT)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.parametrize(
        "title,expected",
        [("My Great Post", "/out/my-great-post.org"), ("A   B", "/out/a-b.org")],
    )
    def test_destination(self, title: str, expected: str) -> None:
        """Test the title slug names the output file."""
        assert output_path_for(HugoExportOptions(export_path="/out"), title) == Path(expected)

    def test_written_file_matches_buffer(self, tmp_path: Path) -> None:
        """Test the file holds exactly the buffer export."""
        overrides = {"export_path": str(tmp_path), "use_sidenotes": True}

        path = export_to_file(MIXED_DOCUMENT, overrides=overrides)

        assert path == tmp_path / "field-notes.org"
        assert path.read_text(encoding="utf-8") == export_to_buffer(MIXED_DOCUMENT, overrides=overrides)


@pytest.mark.integration
class TestRepeatability:
    """Repeated exports of an unchanged document are identical."""

    @pytest.mark.parametrize("overrides", [{}, {"use_sidenotes": True}, {"add_current_date": True}])
    def test_twice_same_output(self, overrides: dict, frozen_clock: date) -> None:
        """Test two runs produce the same text."""
        assert export_to_buffer(MIXED_DOCUMENT, overrides=overrides) == export_to_buffer(
            MIXED_DOCUMENT, overrides=overrides
        )

    def test_parsed_document_reusable(self) -> None:
        """Test exporting does not modify the parsed document."""
        doc = OrgParser().parse(MIXED_DOCUMENT)

        first = export_to_buffer(doc, overrides={"use_sidenotes": True})
        second = export_to_buffer(doc, overrides={"use_sidenotes": True})

        assert first == second
