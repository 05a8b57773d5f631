#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/utils/__init__.py
"""Utility modules for the orghugo package.

This package contains the dependency checks, timing helpers and output
writers shared by the parser, the export engine and the entry points.
"""

from orghugo.utils.decorators import debug_timer, requires_dependencies
from orghugo.utils.io_utils import write_content

__all__ = [
    "debug_timer",
    "requires_dependencies",
    "write_content",
]
