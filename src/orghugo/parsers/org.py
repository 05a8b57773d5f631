#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/parsers/org.py
"""Org-Mode to AST converter.

This module converts Org-Mode documents into the orghugo AST using the
orgparse parser for the outline (headings, TODO keywords, tags, property
drawers) and regular expressions for the block and inline markup inside
each heading's body.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

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
from orghugo.constants import (
    DEPS_ORG,
    FOOTNOTE_DEFINITION_END_BLANK_LINES,
    IMAGE_EXTENSIONS,
    ORG_IMPLICIT_FILE_PREFIXES,
    ORG_LINK_TYPES,
)
from orghugo.exceptions import ParsingError
from orghugo.options.org import OrgParserOptions
from orghugo.parsers.base import BaseParser, SourceInput
from orghugo.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

_KEYWORD_RE = re.compile(r"^[ \t]*#\+([A-Za-z][\w-]*):[ \t]*(.*?)[ \t]*$")
_HEADLINE_RE = re.compile(r"^\*+\s")
_BLOCK_BEGIN_RE = re.compile(r"^[ \t]*#\+begin_(\w+)(.*)$", re.IGNORECASE)
_FOOTNOTE_DEF_RE = re.compile(r"^\[fn:([\w-]+)\][ \t]*(.*)$", re.DOTALL)

# Org emphasis only starts after whitespace or opening punctuation and only
# ends before whitespace or closing punctuation.
_PRE = r"(?<![^\s\-({'\"])"
_POST = r"(?=[\s\-.,;:!?')}\"\\]|$)"


def _markup(marker: str, name: str) -> str:
    m = re.escape(marker)
    return _PRE + m + "(?P<" + name + ">[^\\s" + m + "]|[^\\s" + m + "].*?[^\\s])" + m + _POST


_INLINE_RE = re.compile(
    r"(?P<linebreak>\\\\[ \t]*$)"
    r"|(?P<footnote>\[fn:(?P<fn_label>[\w-]*)(?P<fn_sep>[\]:]))"
    r"|\[\[(?P<link_target>[^\]]+?)\](?:\[(?P<link_desc>[^\]]+)\])?\]"
    r"|\\\((?P<math_paren>.+?)\\\)"
    r"|(?<![\w$])\$(?P<math_dollar>[^$\s](?:[^$]*?[^$\s])?)\$(?![\w$])"
    r"|\^\{(?P<sup>[^}]+)\}"
    r"|_\{(?P<sub>[^}]+)\}"
    r"|" + _markup("*", "bold") + r"|" + _markup("/", "italic") + r"|" + _markup("=", "code") + r"|"
    + _markup("~", "verbatim") + r"|" + _markup("_", "underline") + r"|" + _markup("+", "strike") + r"|"
    r"(?P<url>(?:https?|ftp|mailto)://[^\s<>\"{}|\\^`\[\]]+)",
    re.MULTILINE,
)


def split_link_target(target: str) -> tuple[Optional[str], str, Optional[str]]:
    """Split a raw link target into type, path and search option.

    Parameters
    ----------
    target : str
        Link target as written between ``[[`` and ``]]``

    Returns
    -------
    tuple
        ``(link_type, path, search_option)``. ``link_type`` is None for fuzzy
        links (``[[Some heading]]``).

    Examples
    --------
    >>> split_link_target("file:posts/a.org::*Intro")
    ('file', 'posts/a.org', '*Intro')
    >>> split_link_target("./notes.org")
    ('file', './notes.org', None)
    >>> split_link_target("https://gohugo.io")
    ('https', '//gohugo.io', None)

    """
    prefix, sep, rest = target.partition(":")
    if sep and prefix.lower() in ORG_LINK_TYPES:
        link_type = prefix.lower()
        if link_type == "file":
            path, _, search = rest.partition("::")
            return link_type, path, search or None
        return link_type, rest, None

    if target.startswith(ORG_IMPLICIT_FILE_PREFIXES):
        path, _, search = target.partition("::")
        return "file", path, search or None
    if target.startswith("#"):
        return "custom-id", target[1:], None
    return None, target, None


def _find_closing_bracket(text: str, start: int) -> int:
    depth = 1
    for idx in range(start, len(text)):
        char = text[idx]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return idx
    return -1


class OrgParser(BaseParser):
    r"""Convert Org-Mode to AST representation.

    Parameters
    ----------
    options : OrgParserOptions or None, default = None
        Parser configuration options

    Notes
    -----
    File-level keywords (``#+TITLE:``, ``#+HUGO_EXPORT_PATH:`` ...) are read
    from the text before the first headline and stored in
    ``Document.metadata["keywords"]`` as lists of values in buffer order.

    Footnotes are recognised in all three Org forms: ``[fn:label]`` with a
    ``[fn:label] text`` definition block, ``[fn:label:text]`` and
    ``[fn::text]``.

    Examples
    --------
        >>> parser = OrgParser()
        >>> doc = parser.parse("* Heading\n\nSee [[file:other.org][the other post]].")
        >>> link = doc.children[1].content[1]
        >>> (link.link_type, link.path)
        ('file', 'other.org')

    """

    def __init__(self, options: OrgParserOptions | None = None):
        """Initialize the Org parser with options."""
        BaseParser._validate_options_type(options, OrgParserOptions, "org")
        options = options or OrgParserOptions()
        super().__init__(options)
        self.options: OrgParserOptions = options

    @requires_dependencies("org", DEPS_ORG)
    def parse(self, input_data: SourceInput) -> Document:
        """Parse Org-Mode input into AST Document.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Org-Mode input to parse

        Returns
        -------
        Document
            AST document node

        Raises
        ------
        DependencyError
            If orgparse is not installed
        ParsingError
            If parsing fails

        """
        org_content = self._load_text_content(input_data)

        import orgparse

        try:
            root = orgparse.loads(org_content)
        except Exception as e:
            raise ParsingError(f"Failed to parse Org-Mode: {e}", parsing_stage="outline", original_error=e) from e

        metadata = self.extract_metadata(org_content) if self.options.extract_metadata else {}

        children: list[Node] = []

        # Use format='raw' to preserve link syntax
        root_body = (
            root.get_body(format="raw").strip()
            if hasattr(root, "get_body")
            else (root.body.strip() if root.body else "")
        )
        if root_body:
            # File-level keywords are already in the metadata
            filtered_lines = [line for line in root_body.split("\n") if not _KEYWORD_RE.match(line)]
            filtered_body = "\n".join(filtered_lines).strip()
            if filtered_body:
                children.extend(self._process_body(filtered_body))

        for node in root.children:
            children.extend(self._process_node(node))

        logger.debug("Parsed Org document: %d top-level blocks", len(children))
        return Document(children=children, metadata=metadata)

    def extract_metadata(self, org_content: str) -> dict[str, Any]:
        """Collect the file-level keywords before the first headline.

        Parameters
        ----------
        org_content : str
            Raw Org text

        Returns
        -------
        dict
            ``{"keywords": {NAME: [values...]}, "title": ..., "author": ..., "date": ...}``

        """
        keywords: dict[str, list[str]] = {}
        in_block = False
        for line in org_content.splitlines():
            if _HEADLINE_RE.match(line):
                break
            stripped = line.strip().lower()
            if stripped.startswith("#+begin_"):
                in_block = True
                continue
            if stripped.startswith("#+end_"):
                in_block = False
                continue
            if in_block:
                continue
            match = _KEYWORD_RE.match(line)
            if match:
                keywords.setdefault(match.group(1).upper(), []).append(match.group(2))

        metadata: dict[str, Any] = {"keywords": keywords}
        for name in ("TITLE", "AUTHOR", "DATE"):
            if keywords.get(name):
                metadata[name.lower()] = keywords[name][-1]
        return metadata

    def _process_node(self, node: Any) -> list[Node]:
        """Process an orgparse node and its descendants into AST nodes.

        Parameters
        ----------
        node : orgparse.OrgNode
            Orgparse node to process

        Returns
        -------
        list[Node]
            Heading followed by its body blocks and its children's nodes

        """
        result: list[Node] = []

        heading_ast = self._process_headline(node)
        if heading_ast:
            result.append(heading_ast)

        body_text = (
            node.get_body(format="raw").strip()
            if hasattr(node, "get_body")
            else (node.body.strip() if node.body else "")
        )
        if body_text:
            result.extend(self._process_body(body_text))

        for child in node.children:
            result.extend(self._process_node(child))

        return result

    def _process_headline(self, node: Any) -> Heading | None:
        """Process an orgparse headline node.

        Parameters
        ----------
        node : orgparse.OrgNode
            Orgparse node representing a headline

        Returns
        -------
        Heading or None
            Heading AST node with metadata for TODO state, priority, tags and
            properties

        """
        if not node.heading:
            return None

        # orgparse only knows the keywords of #+TODO: lines, so configured
        # keywords it missed are split off the heading text here
        todo_state = None
        heading_text = node.heading
        if node.todo and node.todo in self.options.todo_keywords:
            todo_state = node.todo
        elif not node.todo:
            heading_parts = heading_text.split(None, 1)
            if heading_parts and heading_parts[0] in self.options.todo_keywords:
                todo_state = heading_parts[0]
                heading_text = heading_text[len(todo_state) :].lstrip()
        elif node.todo:
            heading_text = f"{node.todo} {heading_text}"

        heading_metadata: dict[str, Any] = {}
        if todo_state:
            heading_metadata["org_todo_state"] = todo_state
        if getattr(node, "priority", None):
            heading_metadata["org_priority"] = node.priority
        if self.options.parse_tags and getattr(node, "shallow_tags", None):
            heading_metadata["org_tags"] = sorted(node.shallow_tags)
        if self.options.parse_properties and getattr(node, "properties", None):
            heading_metadata["org_properties"] = {key: str(value) for key, value in node.properties.items()}

        return Heading(level=node.level, content=self._parse_inline(heading_text), metadata=heading_metadata)

    def _split_blocks(self, body_text: str) -> list[tuple[str, int]]:
        """Split body text at blank lines, keeping #+BEGIN/#+END blocks whole.

        Each block is paired with the number of blank lines in front of it,
        which decides where a footnote definition ends.
        """
        blocks: list[tuple[str, int]] = []
        current: list[str] = []
        gap = 0
        blank_lines = 0
        block_end: str | None = None

        for line in body_text.split("\n"):
            if block_end is not None:
                current.append(line)
                if line.strip().lower().startswith(block_end):
                    block_end = None
                continue
            if not line.strip():
                if current:
                    blocks.append(("\n".join(current), gap))
                    current = []
                blank_lines += 1
                continue

            begin = _BLOCK_BEGIN_RE.match(line)
            if begin and current:
                blocks.append(("\n".join(current), gap))
                current = []
            if not current:
                gap = blank_lines
            blank_lines = 0
            current.append(line)
            if begin:
                block_end = f"#+end_{begin.group(1).lower()}"

        if current:
            blocks.append(("\n".join(current), gap))
        return blocks

    def _process_body(self, body_text: str) -> list[Node]:
        """Process body text into AST nodes.

        A ``[fn:label] ...`` definition takes in the blocks after it until
        the next definition or two consecutive blank lines, as in Org.

        Parameters
        ----------
        body_text : str
            Body text content

        Returns
        -------
        list[Node]
            List of AST nodes; footnote definitions come last

        """
        result: list[Node] = []
        footnote_defs: list[FootnoteDefinition] = []
        open_definition: FootnoteDefinition | None = None

        for block, gap in self._split_blocks(body_text):
            block = block.strip()
            if not block:
                continue

            footnote_match = _FOOTNOTE_DEF_RE.match(block)
            if footnote_match:
                first_text = footnote_match.group(2).strip()
                content: list[Node] = [Paragraph(content=self._parse_inline(first_text))] if first_text else []
                open_definition = FootnoteDefinition(identifier=footnote_match.group(1), content=content)
                footnote_defs.append(open_definition)
                continue

            if open_definition is not None and gap < FOOTNOTE_DEFINITION_END_BLANK_LINES:
                open_definition.content.append(self._parse_block(block))
                continue

            open_definition = None
            result.append(self._parse_block(block))

        result.extend(footnote_defs)
        return result

    def _parse_block(self, block: str) -> Node:
        """Build the node for one body block (anything but a footnote definition)."""
        if re.match(r"^-{5,}$", block):
            return ThematicBreak()

        math_block_match = re.match(r"^\\\[(.+?)\\\]$", block, re.DOTALL)
        if math_block_match:
            return MathBlock(content=math_block_match.group(1).strip())

        # Only the opening line names the block
        begin = _BLOCK_BEGIN_RE.match(block.split("\n", 1)[0])
        if begin:
            return self._parse_greater_block(block, begin.group(1).lower(), begin.group(2).strip())

        if block.startswith("|"):
            return self._parse_table(block)

        if re.search(r"^-\s+.+?\s+::\s+", block, re.MULTILINE):
            def_list = self._parse_definition_list(block)
            if def_list:
                return def_list

        if re.match(r"^(?:[\-\+]|\d+[\.\)])\s", block):
            return self._parse_list(block)

        if all(line.strip().startswith(": ") or line.strip() == ":" for line in block.split("\n")):
            return self._parse_fixed_width(block)

        return Paragraph(content=self._parse_inline(block))

    def _parse_greater_block(self, block: str, block_type: str, parameters: str) -> Node:
        """Parse a ``#+BEGIN_TYPE ... #+END_TYPE`` block.

        Source and example blocks keep their content verbatim, quote blocks
        are parsed recursively. Any other block type is kept verbatim as a
        code block so that it survives the round trip.
        """
        lines = block.split("\n")
        inner_lines = lines[1:]
        if inner_lines and inner_lines[-1].strip().lower().startswith("#+end_"):
            inner_lines = inner_lines[:-1]
        inner = "\n".join(inner_lines)

        if block_type == "quote":
            return BlockQuote(children=self._process_body(inner.strip()))

        metadata: dict[str, Any] = {"org_block_type": block_type}
        language = None
        if block_type == "src" and parameters:
            language, _, header_args = parameters.partition(" ")
            if header_args.strip():
                metadata["org_header_args"] = header_args.strip()
        elif parameters:
            metadata["org_block_parameters"] = parameters
        return CodeBlock(content=inner, language=language or None, metadata=metadata)

    def _parse_inline(self, text: str) -> list[Node]:
        r"""Parse inline formatting in text.

        Handles Org-Mode inline formatting:
        - *bold* -> Strong, /italic/ -> Emphasis, _underline_ -> Underline,
          +strike+ -> Strikethrough (contents parsed recursively)
        - =code= or ~verbatim~ -> Code
        - [[target][description]] -> Link (Image for undescribed image files)
        - [fn:label], [fn:label:text], [fn::text] -> FootnoteReference
        - \\(...\\) or $...$ -> MathInline
        - ^{text} -> Superscript, _{text} -> Subscript
        - \\\\ at end of line -> LineBreak

        Parameters
        ----------
        text : str
            Text with inline formatting

        Returns
        -------
        list[Node]
            List of inline AST nodes

        """
        result: list[Node] = []
        pos = 0
        scan = 0

        while scan < len(text):
            match = _INLINE_RE.search(text, scan)
            if not match:
                break
            node, end = self._inline_node(match, text)
            if node is None:
                scan = match.start() + 1
                continue
            if match.start() > pos:
                result.append(Text(content=text[pos : match.start()]))
            result.append(node)
            pos = scan = end

        if pos < len(text):
            result.append(Text(content=text[pos:]))

        return result

    def _inline_node(self, match: re.Match[str], text: str) -> tuple[Optional[Node], int]:
        """Build the node for one inline match; returns (None, 0) for false positives."""
        groups = match.groupdict()

        if groups["linebreak"]:
            return LineBreak(), match.end()

        if groups["footnote"]:
            label = groups["fn_label"]
            if groups["fn_sep"] == "]":
                if not label:
                    return None, 0
                return FootnoteReference(identifier=label), match.end()
            close = _find_closing_bracket(text, match.end())
            if close < 0:
                return None, 0
            definition = self._parse_inline(text[match.end() : close].strip())
            return FootnoteReference(identifier=label, definition=definition), close + 1

        if groups["link_target"]:
            return self._make_link(groups["link_target"], groups["link_desc"]), match.end()

        if groups["math_paren"]:
            return MathInline(content=groups["math_paren"], metadata={"org_delimiter": "paren"}), match.end()
        if groups["math_dollar"]:
            return MathInline(content=groups["math_dollar"], metadata={"org_delimiter": "dollar"}), match.end()
        if groups["sup"]:
            return Superscript(content=[Text(content=groups["sup"])]), match.end()
        if groups["sub"]:
            return Subscript(content=[Text(content=groups["sub"])]), match.end()

        if groups["bold"]:
            return Strong(content=self._parse_inline(groups["bold"])), match.end()
        if groups["italic"]:
            return Emphasis(content=self._parse_inline(groups["italic"])), match.end()
        if groups["code"]:
            return Code(content=groups["code"]), match.end()
        if groups["verbatim"]:
            return Code(content=groups["verbatim"], metadata={"org_marker": "~"}), match.end()
        if groups["underline"]:
            return Underline(content=self._parse_inline(groups["underline"])), match.end()
        if groups["strike"]:
            return Strikethrough(content=self._parse_inline(groups["strike"])), match.end()

        url = groups["url"]
        link_type, path, _ = split_link_target(url)
        return Link(url=url, link_type=link_type, path=path, metadata={"org_plain": True}), match.end()

    def _make_link(self, target: str, description: Optional[str]) -> Node:
        """Build a Link (or Image) node from a bracket link."""
        target = target.strip()
        link_type, path, search_option = split_link_target(target)

        if description is None and link_type in ("file", "http", "https") and path.lower().endswith(IMAGE_EXTENSIONS):
            return Image(url=target, metadata={"org_link_type": link_type})

        metadata: dict[str, Any] = {}
        if search_option:
            metadata["org_search_option"] = search_option
        content = self._parse_inline(description) if description else []
        return Link(url=target, content=content, link_type=link_type, path=path, metadata=metadata)

    def _parse_table(self, block: str) -> Table:
        """Parse an Org table.

        Parameters
        ----------
        block : str
            Table block text

        Returns
        -------
        Table
            Table AST node

        """
        rows: list[TableRow] = []
        header: Optional[TableRow] = None

        for line in block.split("\n"):
            line = line.strip()
            if not line or line.startswith("|-") or line.startswith("|="):
                # Separator line - indicates header row above it
                if rows and not header and line:
                    header = TableRow(cells=rows.pop().cells, is_header=True)
                continue

            if line.startswith("|"):
                cells_text = [cell.strip() for cell in line.strip("|").split("|")]
                cells = [TableCell(content=self._parse_inline(cell_text)) for cell_text in cells_text]
                rows.append(TableRow(cells=cells, is_header=False))

        return Table(header=header, rows=rows)

    def _parse_list(self, block: str) -> List:
        """Parse an Org list.

        Continuation lines (indented, not starting a new item) are joined to
        the item above.

        Parameters
        ----------
        block : str
            List block text

        Returns
        -------
        List
            List AST node

        """
        ordered = bool(re.match(r"^\d+[\.\)]", block.lstrip()))
        item_re = re.compile(r"^\d+[\.\)]\s+(.*)$") if ordered else re.compile(r"^[\-\+]\s+(.*)$")
        item_texts: list[str] = []

        for line in block.split("\n"):
            match = item_re.match(line)
            if match:
                item_texts.append(match.group(1))
            elif item_texts and line.strip():
                item_texts[-1] += "\n" + line.strip()

        items = []
        for item_text in item_texts:
            task_status = None
            checkbox = re.match(r"^\[([ Xx-])\]\s+", item_text)
            if checkbox:
                task_status = "unchecked" if checkbox.group(1) == " " else "checked"
                item_text = item_text[checkbox.end() :]
            items.append(
                ListItem(children=[Paragraph(content=self._parse_inline(item_text))], task_status=task_status)
            )

        start = 1
        if ordered:
            start = int(re.match(r"^\s*(\d+)", block).group(1))  # type: ignore[union-attr]
        return List(ordered=ordered, items=items, start=start)

    def _parse_definition_list(self, block: str) -> DefinitionList | None:
        """Parse an Org definition list (``- term :: definition``)."""
        items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = []

        for line in block.split("\n"):
            match = re.match(r"^-\s+(.+?)\s+::\s+(.+)$", line.strip())
            if match:
                term = DefinitionTerm(content=self._parse_inline(match.group(1)))
                definition = DefinitionDescription(content=[Paragraph(content=self._parse_inline(match.group(2)))])
                items.append((term, [definition]))

        if not items:
            return None

        return DefinitionList(items=items)

    def _parse_fixed_width(self, block: str) -> CodeBlock:
        """Parse fixed-width lines (``: text``) into a verbatim block."""
        lines = [line.strip()[2:] if line.strip().startswith(": ") else "" for line in block.split("\n")]
        return CodeBlock(content="\n".join(lines), metadata={"org_block_type": "fixed-width"})
