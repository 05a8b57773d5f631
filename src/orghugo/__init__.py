"""orghugo - export Org-mode documents for Hugo sites.

orghugo parses Org-mode files and writes them back out as Org text prepared
for a Hugo site: same-site ``file:`` links become Hugo ``ref`` shortcodes,
footnotes can be rendered inline as sidenote shortcodes, and the output can
be stamped with the current date.

The export runs on a small export engine: every node kind is rendered by a
*transcoder* registered in a backend, and the ``hugo`` backend derives from
the default ``org`` backend, overriding only footnote references, links,
sections and the document template.

Requirements
------------
- Python 3.10+
- orgparse

Examples
--------
Export to a string:

    >>> from orghugo import export_to_buffer
    >>> text = export_to_buffer("post.org", overrides={"use_sidenotes": True})

Write ``content/posts/<slug>.org``:

    >>> from orghugo import export_to_file
    >>> path = export_to_file("post.org", overrides={"export_path": "content/posts"})

Asynchronous export:

    >>> future = export_to_buffer("post.org", async_export=True)
    >>> text = future.result()

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise RuntimeError(
        "orghugo requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from orghugo.api import export_to_buffer, export_to_file, output_path_for, title_slug  # noqa: E402
from orghugo.ast import Document  # noqa: E402
from orghugo.exceptions import (  # noqa: E402
    ConfigurationError,
    DependencyError,
    FileError,
    InvalidOptionsError,
    OrgHugoError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    UnresolvedFootnoteError,
    ValidationError,
)
from orghugo.export import Backend, ExportInfo, export_document  # noqa: E402
from orghugo.options import HugoExportOptions, OrgExportOptions, OrgParserOptions  # noqa: E402
from orghugo.parsers import OrgParser  # noqa: E402
from orghugo.renderers import BACKENDS, HUGO_BACKEND, ORG_BACKEND  # noqa: E402

__all__ = [
    "__version__",
    # API
    "export_to_buffer",
    "export_to_file",
    "output_path_for",
    "title_slug",
    # Engine
    "BACKENDS",
    "Backend",
    "Document",
    "ExportInfo",
    "HUGO_BACKEND",
    "ORG_BACKEND",
    "OrgParser",
    "export_document",
    # Options
    "HugoExportOptions",
    "OrgExportOptions",
    "OrgParserOptions",
    # Exceptions
    "ConfigurationError",
    "DependencyError",
    "FileError",
    "InvalidOptionsError",
    "OrgHugoError",
    "OutputWriteError",
    "ParsingError",
    "RenderingError",
    "UnresolvedFootnoteError",
    "ValidationError",
]
