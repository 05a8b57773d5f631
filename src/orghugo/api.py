"""The major exported API functions for Hugo export."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/orghugo/api.py
import logging
import re
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Mapping, Optional, Union, cast

from orghugo.ast.nodes import Document
from orghugo.ast.sections import find_subtree, is_excluded, is_folded, prune_subtrees, subtree_document
from orghugo.constants import DEFAULT_ASYNC_WORKERS, HUGO_OUTPUT_EXTENSION
from orghugo.exceptions import ConfigurationError, ValidationError
from orghugo.export.engine import export_document
from orghugo.options.hugo import HugoExportOptions, resolve_export_options
from orghugo.options.org import OrgParserOptions
from orghugo.parsers.base import SourceInput, source_path
from orghugo.parsers.org import OrgParser
from orghugo.renderers.hugo import HUGO_BACKEND
from orghugo.utils.decorators import debug_timer
from orghugo.utils.io_utils import write_content

logger = logging.getLogger(__name__)

ExportSource = Union[SourceInput, Document]

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=DEFAULT_ASYNC_WORKERS, thread_name_prefix="orghugo-export")
        return _executor


def title_slug(title: str) -> str:
    """Turn a document title into a file name stem.

    The title is lower-cased and every run of whitespace becomes a single
    hyphen. Nothing else is changed.

    Examples
    --------
    >>> title_slug("My First  Post")
    'my-first-post'

    """
    return re.sub(r"\s+", "-", title.lower())


def output_path_for(options: HugoExportOptions, title: str) -> Path:
    """Return ``{export_path}/{slug}.org`` for a document title.

    Raises
    ------
    ConfigurationError
        If ``options.export_path`` is empty

    """
    _require_export_path(options)
    return Path(options.export_path) / f"{title_slug(title)}{HUGO_OUTPUT_EXTENSION}"


def _require_export_path(options: HugoExportOptions) -> None:
    if not options.export_path:
        raise ConfigurationError(
            "No export path configured; set HUGO_EXPORT_PATH or pass export_path",
            setting="export_path",
            value=options.export_path,
        )


def _prepare(
    source: ExportSource,
    *,
    subtree: Union[str, int, None],
    visible_only: bool,
    overrides: Optional[Mapping[str, Any]],
    options: Optional[HugoExportOptions],
    parser_options: Optional[OrgParserOptions],
) -> tuple[Document, HugoExportOptions]:
    """Parse ``source``, narrow it to the export scope and resolve the options."""
    if isinstance(source, Document):
        document = source
    else:
        document = OrgParser(parser_options).parse(source)

    if subtree is not None:
        found = find_subtree(document, subtree)
        if found is None:
            raise ValidationError(
                f"No heading matches subtree selector {subtree!r}",
                parameter_name="subtree",
                parameter_value=subtree,
            )
        document = subtree_document(document, found)

    resolved = resolve_export_options(document, options, overrides)

    exclude_tags = resolved.exclude_tags
    document = prune_subtrees(document, lambda heading: is_excluded(heading, exclude_tags))
    if visible_only:
        document = prune_subtrees(document, is_folded, keep_heading=True)

    return document, resolved


def _render(document: Document, options: HugoExportOptions, body_only: bool) -> str:
    return export_document(document, HUGO_BACKEND, options, body_only=body_only)


def export_to_buffer(
    source: ExportSource,
    *,
    async_export: bool = False,
    subtree: Union[str, int, None] = None,
    visible_only: bool = False,
    body_only: bool = False,
    overrides: Optional[Mapping[str, Any]] = None,
    options: Optional[HugoExportOptions] = None,
    parser_options: Optional[OrgParserOptions] = None,
) -> Union[str, "Future[str]"]:
    """Export an Org document with the Hugo backend and return the text.

    Parameters
    ----------
    source : str, Path, IO, bytes or Document
        Org text, a path to an Org file, a file-like object, raw bytes, or an
        already parsed document
    async_export : bool, default False
        Render on a worker thread and return a Future
    subtree : str or int, optional
        Export only the heading with this title (or 0-based heading index)
        and its content; the heading becomes the document title
    visible_only : bool, default False
        Leave out content hidden by folded headings (``:VISIBILITY: folded``)
    body_only : bool, default False
        Skip the template: no ``#+TITLE:``/``#+DATE:`` header
    overrides : Mapping, optional
        Option values ranking above ``options`` and below file-local keywords
    options : HugoExportOptions, optional
        Starting configuration instead of the defaults
    parser_options : OrgParserOptions, optional
        Parser configuration

    Returns
    -------
    str or Future[str]
        Exported text, or a Future resolving to it when ``async_export``

    Raises
    ------
    ValidationError
        If ``subtree`` does not name a heading
    ConfigurationError
        If an option or file-local keyword has an invalid value
    RenderingError
        If rendering fails (UnresolvedFootnoteError for dangling footnotes)

    Examples
    --------
    >>> text = export_to_buffer("#+TITLE: Post\\n\\nHello[fn:1]\\n\\n[fn:1] Aside", overrides={"use_sidenotes": True})

    """
    document, resolved = _prepare(
        source,
        subtree=subtree,
        visible_only=visible_only,
        overrides=overrides,
        options=options,
        parser_options=parser_options,
    )

    if async_export:
        logger.debug("Submitting asynchronous export")
        return _get_executor().submit(_render, document, resolved, body_only)
    return _render(document, resolved, body_only)


def _write_export(document: Document, options: HugoExportOptions, body_only: bool, path: Path) -> Path:
    with debug_timer(logger, f"Export to {path}"):
        text = _render(document, options, body_only)
        written = write_content(text, path)
    # write_content returns the path it wrote when given a path
    return cast(Path, written)


def export_to_file(
    source: ExportSource,
    *,
    async_export: bool = False,
    subtree: Union[str, int, None] = None,
    visible_only: bool = False,
    body_only: bool = False,
    overrides: Optional[Mapping[str, Any]] = None,
    options: Optional[HugoExportOptions] = None,
    parser_options: Optional[OrgParserOptions] = None,
) -> Union[Path, "Future[Path]"]:
    """Export an Org document with the Hugo backend to ``{export_path}/{slug}.org``.

    The slug is derived from the document title (the ``#+TITLE:`` keyword,
    the subtree heading, or else the stem of the source file name). The
    configuration is checked before anything is rendered, so a missing
    export path leaves no partial output behind. Parent directories of the
    output file are created as needed.

    Parameters are those of :func:`export_to_buffer`.

    Returns
    -------
    Path or Future[Path]
        Path of the written file, or a Future resolving to it

    Raises
    ------
    ConfigurationError
        If no export path is configured, or no title can be determined
    ValidationError
        If ``subtree`` does not name a heading
    OutputWriteError
        If the file cannot be written

    """
    document, resolved = _prepare(
        source,
        subtree=subtree,
        visible_only=visible_only,
        overrides=overrides,
        options=options,
        parser_options=parser_options,
    )
    _require_export_path(resolved)

    title = resolved.title
    if not title:
        path_hint = None if isinstance(source, Document) else source_path(source)
        if path_hint is None:
            raise ConfigurationError(
                "Cannot name the output file: the document has no #+TITLE: and no source file name",
                setting="title",
            )
        title = path_hint.stem

    path = output_path_for(resolved, title)
    logger.debug("Export target: %s", path)

    if async_export:
        return _get_executor().submit(_write_export, document, resolved, body_only, path)
    return _write_export(document, resolved, body_only, path)


__all__ = [
    "ExportSource",
    "export_to_buffer",
    "export_to_file",
    "output_path_for",
    "title_slug",
]
