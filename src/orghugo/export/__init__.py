#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Generic export engine: backends, transcoder dispatch and footnote resolution."""

from orghugo.export.engine import Backend, ExportInfo, Transcoder, export_data, export_document
from orghugo.export.footnotes import FootnoteIndex

__all__ = [
    "Backend",
    "ExportInfo",
    "FootnoteIndex",
    "Transcoder",
    "export_data",
    "export_document",
]
