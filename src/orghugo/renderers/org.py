#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/renderers/org.py
"""Default org backend.

This module registers one transcoder per node kind in ``ORG_BACKEND``, the
backend that writes a document back out as Org-Mode text. Every other
backend derives from it and inherits whatever it does not override:

- footnote references are re-emitted as written (``[fn:label]``, or the
  inline ``[fn:label:text]`` / ``[fn::text]`` forms)
- footnote definitions are not printed where they stand; each section ends
  with the ``[fn:label] text`` definitions of the notes first referenced in it
- the template emits the ``# Created ...`` file stamp (when
  ``time_stamp_file``), the ``#+TITLE:``/``#+AUTHOR:``/``#+DATE:`` lines and
  the body

"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from orghugo.ast import (
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
)
from orghugo.constants import TIME_STAMP_FILE_FORMAT
from orghugo.export.engine import Backend, ExportInfo, Transcoder, join_blocks


def _now() -> datetime:
    return datetime.now()


# ============================================================================
# Document structure
# ============================================================================


def org_template(node: Document, contents: Optional[str], info: ExportInfo) -> str:
    """Wrap the exported body with the file stamp and the header keywords.

    Parameters
    ----------
    node : Document
        The exported document
    contents : str
        Rendered body
    info : ExportInfo
        State of the pass; ``time_stamp_file``, ``with_title``,
        ``with_author`` and ``with_date`` select the header lines

    Returns
    -------
    str
        Complete Org text, ending with a newline

    """
    options = info.options
    header: list[str] = []
    if options.time_stamp_file:
        header.append(_now().strftime(TIME_STAMP_FILE_FORMAT))
    if options.with_title and options.title:
        header.append(f"#+TITLE: {options.title}")
    if options.with_author and options.author:
        header.append(f"#+AUTHOR: {options.author}")
    if options.with_date and options.date:
        header.append(f"#+DATE: {options.date}")

    parts = ["\n".join(header), contents or ""]
    output = join_blocks(parts)
    return output + "\n" if output else ""


def org_section(node: Section, contents: Optional[str], info: ExportInfo) -> str:
    """Render a section followed by its footnote definitions.

    A labelled note's definition is printed at the end of the section that
    holds the note's first reference (the heading just above the section
    counts as part of it).

    Raises
    ------
    UnresolvedFootnoteError
        If a referenced label has no definition

    """
    body = contents or ""
    if not info.options.with_footnotes:
        return body

    references: list[FootnoteReference] = []
    heading = node.metadata.get("heading")
    if heading is not None:
        references.extend(info.footnotes.first_references_in(heading))
    references.extend(info.footnotes.first_references_in(node))

    definitions = []
    for reference in references:
        text = info.export_data(info.footnote_definition(reference)).strip()
        definitions.append(f"[fn:{reference.identifier}] {text}")
    return join_blocks([body, *definitions])


def org_heading(node: Heading, contents: Optional[str], info: ExportInfo) -> str:
    """Render a headline with its TODO keyword, priority, tags and properties."""
    metadata = node.metadata

    parts = ["*" * node.level]
    if metadata.get("org_todo_state"):
        parts.append(metadata["org_todo_state"])
    if metadata.get("org_priority"):
        parts.append(f"[#{metadata['org_priority']}]")
    if contents:
        parts.append(contents)
    if metadata.get("org_tags"):
        parts.append(":" + ":".join(metadata["org_tags"]) + ":")
    line = " ".join(parts)

    properties = metadata.get("org_properties")
    if properties:
        drawer = [":PROPERTIES:"]
        drawer.extend(f":{key}: {value}".rstrip() for key, value in properties.items())
        drawer.append(":END:")
        line += "\n" + "\n".join(drawer)
    return line


def org_paragraph(node: Paragraph, contents: Optional[str], info: ExportInfo) -> str:
    """Render a paragraph."""
    return contents or ""


# ============================================================================
# Block-level nodes
# ============================================================================


def org_code_block(node: CodeBlock, contents: Optional[str], info: ExportInfo) -> str:
    """Render source, example and other verbatim blocks."""
    block_type = node.metadata.get("org_block_type", "src")
    body = node.content if node.content.endswith("\n") or not node.content else node.content + "\n"

    if block_type == "fixed-width":
        return "\n".join(f": {line}".rstrip() for line in node.content.split("\n"))

    if block_type == "src":
        header = " ".join(part for part in (node.language, node.metadata.get("org_header_args")) if part)
    else:
        header = node.metadata.get("org_block_parameters", "")
    begin = f"#+BEGIN_{block_type.upper()} {header}".rstrip()
    return f"{begin}\n{body}#+END_{block_type.upper()}"


def org_block_quote(node: BlockQuote, contents: Optional[str], info: ExportInfo) -> str:
    """Render a quote block."""
    inner = info.export_data(node.children)
    return f"#+BEGIN_QUOTE\n{inner}\n#+END_QUOTE" if inner else "#+BEGIN_QUOTE\n#+END_QUOTE"


def org_list(node: List, contents: Optional[str], info: ExportInfo) -> str:
    """Render a plain or ordered list, indenting item continuation lines."""
    lines = []
    for i, item in enumerate(node.items):
        marker = f"{node.start + i}. " if node.ordered else "- "
        if item.task_status == "checked":
            marker += "[X] "
        elif item.task_status == "unchecked":
            marker += "[ ] "
        item_content = info.export_data(item)
        item_lines = item_content.split("\n")
        lines.append(marker + item_lines[0])
        indent = " " * (2 if not node.ordered else len(f"{node.start + i}. "))
        lines.extend(f"{indent}{line}" if line.strip() else "" for line in item_lines[1:])
    return "\n".join(lines)


def org_list_item(node: ListItem, contents: Optional[str], info: ExportInfo) -> str:
    """Render the blocks of a list item, one per line."""
    return "\n".join(part for part in (info.export_data(child) for child in node.children) if part)


def org_table(node: Table, contents: Optional[str], info: ExportInfo) -> str:
    """Render a table with aligned columns and a rule under the header row."""
    rows_to_render: list[TableRow] = []
    if node.header:
        rows_to_render.append(node.header)
    rows_to_render.extend(node.rows)
    if not rows_to_render:
        return ""

    grid = [[info.export_data(cell) for cell in row.cells] for row in rows_to_render]
    num_cols = max(len(row) for row in grid)
    for row in grid:
        row.extend([""] * (num_cols - len(row)))

    col_widths = [max(len(row[i]) for row in grid) for i in range(num_cols)]

    lines = []
    for i, row_cells in enumerate(grid):
        lines.append("| " + " | ".join(cell.ljust(col_widths[j]) for j, cell in enumerate(row_cells)) + " |")
        if i == 0 and node.header:
            lines.append("|" + "+".join("-" * (width + 2) for width in col_widths) + "|")
    return "\n".join(lines)


def org_table_row(node: TableRow, contents: Optional[str], info: ExportInfo) -> str:
    """Render a single table row without alignment."""
    return "| " + " | ".join(info.export_data(cell) for cell in node.cells) + " |"


def org_thematic_break(node: ThematicBreak, contents: Optional[str], info: ExportInfo) -> str:
    """Render a horizontal rule."""
    return "-----"


def org_footnote_definition(node: FootnoteDefinition, contents: Optional[str], info: ExportInfo) -> str:
    """Footnote definitions are printed by their section, not where they stand."""
    return ""


def org_definition_list(node: DefinitionList, contents: Optional[str], info: ExportInfo) -> str:
    """Render ``- term :: description`` items."""
    lines = []
    for term, descriptions in node.items:
        described = "\n  ".join(info.export_data(description) for description in descriptions)
        lines.append(f"- {info.export_data(term)} :: {described}")
    return "\n".join(lines)


def org_definition_description(node: DefinitionDescription, contents: Optional[str], info: ExportInfo) -> str:
    """Render the blocks of a definition description."""
    return info.export_data(node.content)


def org_math_block(node: MathBlock, contents: Optional[str], info: ExportInfo) -> str:
    """Render display math."""
    return f"\\[\n{node.content}\n\\]"


# ============================================================================
# Inline nodes
# ============================================================================


def org_text(node: Text, contents: Optional[str], info: ExportInfo) -> str:
    """Render plain text."""
    return node.content


def org_contents(node: Node, contents: Optional[str], info: ExportInfo) -> str:
    """Render a container as its contents."""
    return contents or ""


def _wrap(marker: str) -> Transcoder:
    def transcoder(node: Node, contents: Optional[str], info: ExportInfo) -> str:
        return f"{marker}{contents or ''}{marker}"

    return transcoder


def org_code(node: Code, contents: Optional[str], info: ExportInfo) -> str:
    """Render inline code (``=code=``) or verbatim (``~verbatim~``)."""
    marker = node.metadata.get("org_marker", "=")
    return f"{marker}{node.content}{marker}"


def org_superscript(node: Superscript, contents: Optional[str], info: ExportInfo) -> str:
    """Render ``^{text}``."""
    return f"^{{{contents or ''}}}"


def org_subscript(node: Subscript, contents: Optional[str], info: ExportInfo) -> str:
    """Render ``_{text}``."""
    return f"_{{{contents or ''}}}"


def org_link(node: Link, contents: Optional[str], info: ExportInfo) -> str:
    """Render a link as ``[[target][description]]``.

    Links without a description, or whose description equals the target,
    are written ``[[target]]``; plain URLs found in running text stay plain.
    """
    if node.metadata.get("org_plain"):
        return node.url
    if contents and contents != node.url:
        return f"[[{node.url}][{contents}]]"
    return f"[[{node.url}]]"


def org_image(node: Image, contents: Optional[str], info: ExportInfo) -> str:
    """Render an inline image link."""
    if node.alt_text and node.alt_text != node.url:
        return f"[[{node.url}][{node.alt_text}]]"
    return f"[[{node.url}]]"


def org_line_break(node: LineBreak, contents: Optional[str], info: ExportInfo) -> str:
    """Render a hard line break."""
    return "\\\\"


def org_footnote_reference(node: FootnoteReference, contents: Optional[str], info: ExportInfo) -> str:
    """Re-emit a footnote reference in the form it was written."""
    if node.definition is None:
        return f"[fn:{node.identifier}]"
    return f"[fn:{node.identifier}:{info.export_data(node.definition)}]"


def org_math_inline(node: MathInline, contents: Optional[str], info: ExportInfo) -> str:
    """Render inline math with its original delimiters."""
    if node.metadata.get("org_delimiter") == "dollar":
        return f"${node.content}$"
    return f"\\({node.content}\\)"


ORG_TRANSCODERS = {
    Document.kind: org_template,
    Section.kind: org_section,
    Heading.kind: org_heading,
    Paragraph.kind: org_paragraph,
    CodeBlock.kind: org_code_block,
    BlockQuote.kind: org_block_quote,
    List.kind: org_list,
    ListItem.kind: org_list_item,
    Table.kind: org_table,
    TableRow.kind: org_table_row,
    TableCell.kind: org_contents,
    ThematicBreak.kind: org_thematic_break,
    FootnoteDefinition.kind: org_footnote_definition,
    DefinitionList.kind: org_definition_list,
    DefinitionTerm.kind: org_contents,
    DefinitionDescription.kind: org_definition_description,
    MathBlock.kind: org_math_block,
    Text.kind: org_text,
    Emphasis.kind: _wrap("/"),
    Strong.kind: _wrap("*"),
    Code.kind: org_code,
    Link.kind: org_link,
    Image.kind: org_image,
    LineBreak.kind: org_line_break,
    Strikethrough.kind: _wrap("+"),
    Underline.kind: _wrap("_"),
    Superscript.kind: org_superscript,
    Subscript.kind: org_subscript,
    FootnoteReference.kind: org_footnote_reference,
    MathInline.kind: org_math_inline,
}

ORG_BACKEND = Backend("org", ORG_TRANSCODERS)

__all__ = ["ORG_BACKEND", "ORG_TRANSCODERS", "org_template", "org_section", "org_link", "org_footnote_reference"]
