#  Copyright (c) 2025 Tom Villani, Ph.D.

# orghugo/options/org.py
"""Configuration options for Org-Mode parsing and the default org export.

This module defines the parser options and the host export options shared
by every backend, together with the helpers that read option values from
in-buffer keywords (``#+TITLE:``, ``#+OPTIONS: timestamp:nil`` ...).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from orghugo.constants import (
    DEFAULT_EXCLUDE_TAGS,
    DEFAULT_ORG_PARSE_PROPERTIES,
    DEFAULT_ORG_PARSE_TAGS,
    DEFAULT_ORG_TODO_KEYWORDS,
    KEYWORD_OPTIONS,
    OPTIONS_ITEMS,
    ORG_FALSE_VALUES,
    ORG_TRUE_VALUES,
)
from orghugo.exceptions import ConfigurationError
from orghugo.options.base import BaseParserOptions, CloneFrozenMixin

_OPTIONS_ITEM_RE = re.compile(r"(\S+?):(\S*)")


@dataclass(frozen=True)
class OrgParserOptions(BaseParserOptions):
    """Configuration options for Org-Mode-to-AST parsing.

    Parameters
    ----------
    parse_properties : bool, default True
        Whether to parse Org properties within drawers.
        When True, properties are extracted and stored in heading metadata.
    parse_tags : bool, default True
        Whether to parse heading tags (e.g., :work:urgent:).
    todo_keywords : list[str], default ["TODO", "DONE"]
        List of TODO keywords to recognize in headings.

    Examples
    --------
    Custom TODO keywords:
        >>> options = OrgParserOptions(
        ...     todo_keywords=["TODO", "IN-PROGRESS", "DONE", "CANCELLED"]
        ... )

    """

    parse_properties: bool = field(
        default=DEFAULT_ORG_PARSE_PROPERTIES,
        metadata={
            "help": "Parse Org properties within drawers",
            "cli_name": "no-parse-properties",
            "importance": "core",
        },
    )
    parse_tags: bool = field(
        default=DEFAULT_ORG_PARSE_TAGS,
        metadata={
            "help": "Parse heading tags (e.g., :work:urgent:)",
            "cli_name": "no-parse-tags",
            "importance": "core",
        },
    )
    todo_keywords: list[str] = field(
        default_factory=lambda: list(DEFAULT_ORG_TODO_KEYWORDS),
        metadata={"help": "List of TODO keywords to recognize", "cli_name": "todo-keywords", "importance": "core"},
    )


@dataclass(frozen=True)
class OrgExportOptions(CloneFrozenMixin):
    """Options of the host export pass (the default org backend).

    Parameters
    ----------
    title : str or None, default None
        Document title (``#+TITLE:``)
    author : str or None, default None
        Document author (``#+AUTHOR:``)
    date : str or None, default None
        Document date (``#+DATE:``)
    with_title, with_author, with_date : bool, default True
        Whether the template emits the corresponding header line
    time_stamp_file : bool, default True
        Whether the template emits the ``# Created ...`` file creation stamp
    with_footnotes : bool, default True
        Whether footnotes are exported at all (``#+OPTIONS: f:nil``)
    exclude_tags : list[str], default ["noexport"]
        Headings carrying one of these tags are dropped with their subtree

    """

    title: Optional[str] = field(
        default=None,
        metadata={"help": "Document title", "type": str, "importance": "core"},
    )
    author: Optional[str] = field(
        default=None,
        metadata={"help": "Document author", "type": str, "importance": "core"},
    )
    date: Optional[str] = field(
        default=None,
        metadata={"help": "Document date", "type": str, "importance": "core"},
    )
    with_title: bool = field(
        default=True,
        metadata={"help": "Emit the #+TITLE: line", "type": bool, "importance": "advanced"},
    )
    with_author: bool = field(
        default=True,
        metadata={"help": "Emit the #+AUTHOR: line", "type": bool, "importance": "advanced"},
    )
    with_date: bool = field(
        default=True,
        metadata={"help": "Emit the #+DATE: line", "type": bool, "importance": "advanced"},
    )
    time_stamp_file: bool = field(
        default=True,
        metadata={"help": "Emit the '# Created' file creation stamp", "type": bool, "importance": "advanced"},
    )
    with_footnotes: bool = field(
        default=True,
        metadata={"help": "Export footnotes", "type": bool, "importance": "advanced"},
    )
    exclude_tags: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_TAGS),
        metadata={"help": "Tags marking subtrees to leave out of the export", "type": list, "importance": "core"},
    )


def parse_org_bool(value: Any, setting: str) -> bool:
    """Interpret an Org-style boolean (``t``/``nil``, ``yes``/``no`` ...).

    Parameters
    ----------
    value : Any
        Raw value, usually a keyword string
    setting : str
        Name of the setting, used in the error message

    Returns
    -------
    bool
        Parsed value

    Raises
    ------
    ConfigurationError
        If the value is not a recognised boolean spelling

    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ORG_TRUE_VALUES:
        return True
    if text in ORG_FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value {value!r} for '{setting}' (use t or nil)", setting, value)


def _coerce(options_field: Any, raw: str) -> Any:
    value_type = options_field.metadata.get("type", str)
    if value_type is bool:
        return parse_org_bool(raw, options_field.name)
    if value_type is list:
        return raw.split()
    return raw.strip()


def parse_options_line(line: str) -> dict[str, str]:
    """Split an ``#+OPTIONS:`` line into its ``item:value`` pairs.

    Examples
    --------
    >>> parse_options_line("timestamp:nil f:t toc:nil")
    {'timestamp': 'nil', 'f': 't', 'toc': 'nil'}

    """
    return {match.group(1): match.group(2) for match in _OPTIONS_ITEM_RE.finditer(line)}


def keyword_overrides(keywords: dict[str, list[str]], options_cls: type) -> dict[str, Any]:
    """Translate in-buffer keywords into option field values.

    Only fields that ``options_cls`` actually has are returned, so the same
    keyword table serves every backend. For repeated keywords the last
    occurrence wins, except ``#+OPTIONS:`` whose lines are all read in order.

    Parameters
    ----------
    keywords : dict
        Keyword name (upper case) to the list of its values in buffer order
    options_cls : type
        Options dataclass the values are meant for

    Returns
    -------
    dict
        Field name to coerced value

    Raises
    ------
    ConfigurationError
        If a keyword holds a value that cannot be interpreted

    """
    by_name = {f.name: f for f in fields(options_cls)}
    overrides: dict[str, Any] = {}

    for options_line in keywords.get("OPTIONS", []):
        for item, raw in parse_options_line(options_line).items():
            name = OPTIONS_ITEMS.get(item)
            if name in by_name:
                overrides[name] = _coerce(by_name[name], raw)

    for keyword, name in KEYWORD_OPTIONS.items():
        values = keywords.get(keyword)
        if not values or name not in by_name:
            continue
        overrides[name] = _coerce(by_name[name], values[-1])

    return overrides
