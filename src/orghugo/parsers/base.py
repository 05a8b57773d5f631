#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class of the Org parser together with
the input loading helpers shared by the parser and the API layer.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Optional, Union

from orghugo.ast import Document
from orghugo.exceptions import FileNotFoundError as OrgHugoFileNotFoundError
from orghugo.exceptions import InvalidOptionsError
from orghugo.options.base import BaseParserOptions

logger = logging.getLogger(__name__)

SourceInput = Union[str, Path, IO[bytes], IO[str], bytes]

_FALLBACK_ENCODINGS = ["utf-8", "utf-8-sig", "latin-1"]


def decode_text(data: bytes) -> str:
    """Decode raw bytes, trying UTF-8 first and Latin-1 last.

    Parameters
    ----------
    data : bytes
        Raw file content

    Returns
    -------
    str
        Decoded text

    """
    for encoding in _FALLBACK_ENCODINGS:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue
        logger.debug(f"Successfully decoded with encoding: {encoding}")
        return text
    return data.decode("utf-8", errors="replace")


def source_path(input_data: SourceInput) -> Optional[Path]:
    """Return the file path behind ``input_data``, if it names an existing file.

    Strings are treated as paths only when they are short, single-line and
    point at an existing file; anything else is Org text.

    Parameters
    ----------
    input_data : str, Path, IO, or bytes
        Export source

    Returns
    -------
    Path or None
        Path of the source file

    """
    if isinstance(input_data, Path):
        return input_data
    if isinstance(input_data, str):
        # Linux has a 255 char limit for path components, and calling
        # path.exists() on very long strings raises OSError
        if len(input_data) <= 260 and "\n" not in input_data:
            try:
                path = Path(input_data)
                if path.is_file():
                    return path
            except OSError:
                return None
        return None
    name = getattr(input_data, "name", None)
    if isinstance(name, str) and name and not name.startswith("<"):
        return Path(name)
    return None


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: SourceInput) -> Document:
        """Parse the input document into an AST.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            The input document to parse. Can be:
            - File path (str or Path)
            - File-like object in binary or text mode
            - Raw document bytes
            - Document text

        Returns
        -------
        Document
            AST Document node representing the parsed document structure

        Raises
        ------
        ParsingError
            If parsing fails
        FileNotFoundError
            If a Path input does not exist

        """

    @staticmethod
    def _load_text_content(input_data: SourceInput) -> str:
        """Load content from various input types.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Input data to load

        Returns
        -------
        str
            Document text

        Raises
        ------
        FileNotFoundError
            If ``input_data`` is a Path that does not exist

        """
        if isinstance(input_data, bytes):
            return decode_text(input_data)
        if isinstance(input_data, Path):
            try:
                return decode_text(input_data.read_bytes())
            except OSError as e:
                raise OrgHugoFileNotFoundError(str(input_data), original_error=e) from e
        if isinstance(input_data, str):
            path = source_path(input_data)
            if path is not None:
                return decode_text(path.read_bytes())
            return input_data

        content = input_data.read()
        if isinstance(content, bytes):
            return decode_text(content)
        return content
