#  Copyright (c) 2025 Tom Villani, Ph.D.

# orghugo/options/hugo.py
"""Configuration options for the Hugo export backend.

``HugoExportOptions`` is the single configuration record of a Hugo export
pass. One instance is resolved at the start of every export call and handed
to every rule through the export info; nothing reads package-level settings.

Resolution order (highest priority first):

1. File-local keywords in the document (``#+HUGO_USE_SIDENOTES: t`` ...)
2. Overrides passed by the caller (API arguments, CLI flags, config file)
3. The defaults declared below
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Optional

from orghugo.constants import (
    DEFAULT_ADD_CURRENT_DATE,
    DEFAULT_EXPORT_PATH,
    DEFAULT_SIDENOTE_SHORTCODE,
    DEFAULT_USE_SIDENOTES,
)
from orghugo.exceptions import ConfigurationError, InvalidOptionsError
from orghugo.options.org import OrgExportOptions, keyword_overrides

if TYPE_CHECKING:
    from orghugo.ast.nodes import Document

logger = logging.getLogger(__name__)

_SHORTCODE_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_/.-]*$")


@dataclass(frozen=True)
class HugoExportOptions(OrgExportOptions):
    """Configuration of a Hugo export pass.

    Parameters
    ----------
    use_sidenotes : bool, default False
        Render footnotes inline as sidenote shortcodes and drop the trailing
        footnote-definitions block of each section
    sidenote_shortcode : str, default "sidenote"
        Name of the Hugo shortcode wrapping a sidenote
    add_current_date : bool, default False
        Prepend ``#+DATE: YYYY-MM-DD`` (today, local time) to the output
    export_path : str, default ""
        Directory the exported file is written to; required for file export

    Examples
    --------
    >>> options = HugoExportOptions(use_sidenotes=True, export_path="content/posts")
    >>> options.create_updated(time_stamp_file=False).use_sidenotes
    True

    """

    use_sidenotes: bool = field(
        default=DEFAULT_USE_SIDENOTES,
        metadata={
            "help": "Render footnotes as inline sidenote shortcodes",
            "cli_name": "sidenotes",
            "type": bool,
            "importance": "core",
        },
    )
    sidenote_shortcode: str = field(
        default=DEFAULT_SIDENOTE_SHORTCODE,
        metadata={
            "help": "Name of the shortcode wrapping sidenotes",
            "cli_name": "sidenote-shortcode",
            "type": str,
            "importance": "core",
        },
    )
    add_current_date: bool = field(
        default=DEFAULT_ADD_CURRENT_DATE,
        metadata={
            "help": "Prepend '#+DATE: YYYY-MM-DD' with today's date",
            "cli_name": "add-date",
            "type": bool,
            "importance": "core",
        },
    )
    export_path: str = field(
        default=DEFAULT_EXPORT_PATH,
        metadata={
            "help": "Directory exported files are written to",
            "cli_name": "export-path",
            "type": str,
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate the shortcode name.

        Raises
        ------
        ConfigurationError
            If the shortcode name is empty or not usable inside ``{{< >}}``

        """
        if not _SHORTCODE_NAME_RE.match(self.sidenote_shortcode or ""):
            raise ConfigurationError(
                f"Invalid sidenote shortcode name: {self.sidenote_shortcode!r}",
                setting="sidenote_shortcode",
                value=self.sidenote_shortcode,
            )


def resolve_export_options(
    document: Document,
    options: Optional[HugoExportOptions] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> HugoExportOptions:
    """Build the configuration record for one export call.

    Parameters
    ----------
    document : Document
        Parsed document; its ``keywords`` metadata holds the file-local settings
    options : HugoExportOptions, optional
        Starting point instead of the defaults
    overrides : Mapping, optional
        Caller-supplied field values (config file, CLI flags, API keywords)

    Returns
    -------
    HugoExportOptions
        Fresh options instance; ``options`` is left untouched

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a HugoExportOptions instance
    ConfigurationError
        If an override names an unknown field or a keyword value is malformed

    """
    if options is None:
        options = HugoExportOptions()
    elif not isinstance(options, HugoExportOptions):
        raise InvalidOptionsError("hugo", HugoExportOptions, type(options))

    if overrides:
        known = HugoExportOptions.field_names()
        normalized: dict[str, Any] = {}
        for key, value in overrides.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ConfigurationError(f"Unknown export option '{key}'", setting=str(key), value=value)
            normalized[name] = value
        options = options.create_updated(**normalized)

    keywords = document.metadata.get("keywords", {})
    from_buffer = keyword_overrides(keywords, HugoExportOptions)
    if from_buffer:
        logger.debug("File-local settings: %s", from_buffer)
        options = options.create_updated(**from_buffer)

    return options
