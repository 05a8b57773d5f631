"""Base classes for parser and export options.

This module defines the foundation classes for the option records used
throughout the orghugo export pipeline. Every option record is a frozen
dataclass: an export pass never changes the options it was handed, it asks
for an updated copy instead.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from orghugo.exceptions import ConfigurationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> set[str]:
        """Return the names of all dataclass fields of this options class."""
        return {f.name for f in fields(cls)}  # type: ignore[arg-type]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build an options instance from a plain mapping.

        Keys may use dashes instead of underscores, as they do in
        configuration files (``use-sidenotes`` for ``use_sidenotes``).

        Parameters
        ----------
        data : dict
            Field values keyed by field name

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ConfigurationError
            If ``data`` names a field this options class does not have

        """
        known = cls.field_names()
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ConfigurationError(f"Unknown option '{key}' for {cls.__name__}", setting=str(key), value=value)
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parameters
    ----------
    extract_metadata : bool
        Whether to collect file-level keywords (``#+TITLE:`` ...) into the
        document metadata

    """

    extract_metadata: bool = field(
        default=True,
        metadata={"help": "Collect file-level #+KEYWORD: lines into document metadata", "importance": "core"},
    )
