#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Org parsing and export.

Every options record is a frozen dataclass. Use ``create_updated`` to derive
a modified copy; the original instance is never changed.
"""

from __future__ import annotations

from orghugo.options.base import BaseParserOptions, CloneFrozenMixin
from orghugo.options.hugo import HugoExportOptions, resolve_export_options
from orghugo.options.org import (
    OrgExportOptions,
    OrgParserOptions,
    keyword_overrides,
    parse_options_line,
    parse_org_bool,
)

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "OrgParserOptions",
    "OrgExportOptions",
    "HugoExportOptions",
    "keyword_overrides",
    "parse_options_line",
    "parse_org_bool",
    "resolve_export_options",
]
