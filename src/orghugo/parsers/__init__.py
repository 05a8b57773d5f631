#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Org-Mode parser producing the orghugo AST."""

from orghugo.parsers.base import BaseParser, source_path
from orghugo.parsers.org import OrgParser, split_link_target

__all__ = ["BaseParser", "OrgParser", "source_path", "split_link_target"]
