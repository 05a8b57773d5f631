#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for orghugo.

This module centralizes the default configuration values, keyword names and
literal markup fragments used across the package.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Org Parsing and Rendering - Defaults for the org parser and org backend
3. Hugo Export - Defaults for the hugo backend (the export configuration)
4. Configuration - In-buffer keywords and config file discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OrgHeadingStyle = Literal["stars"]

# Node kinds with a special meaning for the export engine
KIND_DOCUMENT = "document"
KIND_SECTION = "section"
KIND_HEADING = "heading"
KIND_LINK = "link"
KIND_FOOTNOTE_REFERENCE = "footnote-reference"
KIND_FOOTNOTE_DEFINITION = "footnote-definition"

# =============================================================================
# Org Parsing and Rendering
# =============================================================================

DEPS_ORG = [("orgparse", "orgparse", ">=0.4")]

DEFAULT_ORG_HEADING_STYLE: OrgHeadingStyle = "stars"
DEFAULT_ORG_TODO_KEYWORDS = ["TODO", "DONE"]
DEFAULT_ORG_PARSE_PROPERTIES = True
DEFAULT_ORG_PARSE_TAGS = True

# Link types recognised in [[type:path]] links. Anything else is a fuzzy link.
ORG_LINK_TYPES = frozenset(
    {
        "file",
        "http",
        "https",
        "ftp",
        "mailto",
        "id",
        "doi",
        "news",
        "shell",
        "elisp",
        "help",
        "info",
        "attachment",
        "custom-id",
    }
)
# Paths Org treats as file links even without the "file:" prefix
ORG_IMPLICIT_FILE_PREFIXES = ("./", "../", "/", "~/")
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp")

DEFAULT_EXCLUDE_TAGS = ["noexport"]
COMMENT_HEADING_KEYWORD = "COMMENT"
# Heading collecting footnote definitions; left out of the export, its definitions are kept
FOOTNOTE_SECTION_HEADING = "Footnotes"

# Consecutive blank lines that end a footnote definition
FOOTNOTE_DEFINITION_END_BLANK_LINES = 2

VISIBILITY_PROPERTY = "VISIBILITY"
FOLDED_VISIBILITY_VALUES = frozenset({"folded"})

# strftime format of the host's file creation stamp (# Created ...)
TIME_STAMP_FILE_FORMAT = "# Created %Y-%m-%d %a %H:%M"

# =============================================================================
# Hugo Export
# =============================================================================

DEFAULT_USE_SIDENOTES = False
DEFAULT_SIDENOTE_SHORTCODE = "sidenote"
DEFAULT_ADD_CURRENT_DATE = False
DEFAULT_EXPORT_PATH = ""

HUGO_REF_LINK_TEMPLATE = '[[{{{{< ref "{path}" >}}}}][{text}]]'
HUGO_REF_LINK_BARE_TEMPLATE = '[[{{{{< ref "{path}" >}}}}]]'
HUGO_SIDENOTE_TEMPLATE = '{{{{< {shortcode} id="{number}" >}}}}{text}{{{{< /{shortcode} >}}}}'
HUGO_OUTPUT_EXTENSION = ".org"

# =============================================================================
# Configuration
# =============================================================================

# In-buffer keywords (#+KEYWORD: value) mapped to option field names
KEYWORD_OPTIONS = {
    "TITLE": "title",
    "AUTHOR": "author",
    "DATE": "date",
    "EXCLUDE_TAGS": "exclude_tags",
    "HUGO_USE_SIDENOTES": "use_sidenotes",
    "HUGO_SIDENOTE_SHORTCODE": "sidenote_shortcode",
    "HUGO_ADD_CURRENT_DATE": "add_current_date",
    "HUGO_EXPORT_PATH": "export_path",
}

# Items of #+OPTIONS: mapped to option field names
OPTIONS_ITEMS = {
    "timestamp": "time_stamp_file",
    "title": "with_title",
    "author": "with_author",
    "date": "with_date",
    "f": "with_footnotes",
}

ORG_TRUE_VALUES = frozenset({"t", "yes", "true", "on", "1"})
ORG_FALSE_VALUES = frozenset({"nil", "no", "false", "off", "0"})

CONFIG_FILENAMES = [".orghugo.toml", ".orghugo.yaml", ".orghugo.yml", ".orghugo.json"]
CONFIG_ENV_VAR = "ORGHUGO_CONFIG"
PYPROJECT_TOOL_SECTION = "orghugo"

# Worker threads for asynchronous exports
DEFAULT_ASYNC_WORKERS = 4

# =============================================================================
# Command-line exit codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
