#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/utils/io_utils.py
"""I/O utilities for handling output destinations.

This module provides centralized utilities for writing exported text to
files or text streams.

"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import IO, Union

from orghugo.exceptions import OutputWriteError

logger = logging.getLogger(__name__)


def write_content(content: str, output: Union[str, Path, IO[str], None]) -> Union[StringIO, Path, None]:
    """Write exported text to an output destination.

    Parameters
    ----------
    content : str
        Exported text
    output : str, Path, IO[str], or None
        Output destination. Can be:
        - None: Returns content as StringIO
        - str or Path: Writes content to the file at that path, creating
          missing parent directories
        - IO[str]: Writes content to a text stream

    Returns
    -------
    StringIO, Path, or None
        - If output is None: a StringIO holding the content
        - If output is a path: the path that was written
        - Otherwise: None after writing to the stream

    Raises
    ------
    OutputWriteError
        If the file cannot be written
    TypeError
        If output type is not supported

    Examples
    --------
        >>> result = write_content("* Title", None)
        >>> result.read()
        '* Title'

    """
    if output is None:
        return StringIO(content)

    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(str(output_path), original_error=e) from e
        logger.info("Wrote %s", output_path)
        return output_path

    if hasattr(output, "write"):
        output.write(content)
        return None

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["write_content"]
