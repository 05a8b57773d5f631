#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for orghugo.

Exports an Org file with the Hugo backend, either to standard output or to
``{export_path}/{slug}.org``.

Configuration File Support
--------------------------
Defaults for the export options are read from the first configuration file
found: the file named by ``--config``, the file named by the
``ORGHUGO_CONFIG`` environment variable, or a ``.orghugo.toml``,
``.orghugo.yaml``, ``.orghugo.json`` or ``pyproject.toml`` (with a
``[tool.orghugo]`` table) in the current directory, its parents, or the
home directory. Command-line flags override the configuration file, and
file-local keywords in the document (``#+HUGO_USE_SIDENOTES: t`` ...)
override both.

Examples
--------
Export to standard output::

    $ orghugo post.org

Write ``content/posts/my-post.org`` with inline sidenotes::

    $ orghugo post.org --to-file --export-path content/posts --sidenotes

Export a single subtree, dated today::

    $ orghugo notes.org --subtree "Travel log" --add-date

"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from orghugo import __version__
from orghugo.api import export_to_buffer, export_to_file
from orghugo.config import load_config_file, load_config_with_priority, merge_configs
from orghugo.constants import (
    CONFIG_ENV_VAR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from orghugo.exceptions import FileError, FileNotFoundError, OrgHugoError, ValidationError
from orghugo.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser of the ``orghugo`` command."""
    parser = argparse.ArgumentParser(
        prog="orghugo",
        description="Export Org-mode documents for a Hugo site.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Exit codes: 0 success, 1 export error, 2 invalid options or configuration, 3 file error.\n"
            f"Set {CONFIG_ENV_VAR} to the path of a configuration file to use it by default."
        ),
    )
    parser.add_argument("input", metavar="INPUT", help="Org file to export ('-' reads standard input)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    output = parser.add_argument_group("output")
    output.add_argument(
        "--to-file",
        action="store_true",
        help="Write {export-path}/{slug}.org instead of printing to standard output",
    )
    output.add_argument("--export-path", help="Directory exported files are written to")
    output.add_argument("--body-only", action="store_true", help="Omit the #+TITLE:/#+DATE: header")

    hugo = parser.add_argument_group("hugo")
    hugo.add_argument(
        "--sidenotes",
        dest="use_sidenotes",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Render footnotes as inline sidenote shortcodes",
    )
    hugo.add_argument("--sidenote-shortcode", help="Name of the shortcode wrapping sidenotes (default: sidenote)")
    hugo.add_argument(
        "--add-date",
        dest="add_current_date",
        action="store_true",
        default=None,
        help="Prepend '#+DATE: YYYY-MM-DD' with today's date",
    )

    scope = parser.add_argument_group("scope")
    scope.add_argument("--subtree", metavar="HEADING", help="Export only the subtree under this heading")
    scope.add_argument(
        "--visible-only",
        action="store_true",
        help="Leave out the content of folded headings (:VISIBILITY: folded)",
    )

    config = parser.add_argument_group("configuration")
    config.add_argument("--config", metavar="FILE", help="Configuration file (.toml, .yaml, .json, pyproject.toml)")
    config.add_argument(
        "--no-config",
        action="store_true",
        help=f"Ignore {CONFIG_ENV_VAR} and auto-discovered configuration files",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    logging_group.add_argument("--rich", action="store_true", help="Use rich formatting for log and error messages")

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(
        log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        use_rich=parsed_args.rich,
    )


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def _load_config(parsed_args: argparse.Namespace) -> dict[str, Any]:
    """Load the configuration file selected by the arguments and environment."""
    if parsed_args.no_config:
        return load_config_file(parsed_args.config) if parsed_args.config else {}
    return load_config_with_priority(explicit_path=parsed_args.config, env_var_path=os.environ.get(CONFIG_ENV_VAR))


def _cli_overrides(parsed_args: argparse.Namespace) -> dict[str, Any]:
    """Collect the export options set on the command line."""
    overrides: dict[str, Any] = {}
    for name in ("export_path", "use_sidenotes", "sidenote_shortcode", "add_current_date"):
        value = getattr(parsed_args, name)
        if value is not None:
            overrides[name] = value
    return overrides


def _read_source(input_arg: str) -> Any:
    if input_arg == "-":
        return sys.stdin.read()
    path = Path(input_arg)
    if not path.is_file():
        raise FileNotFoundError(input_arg)
    return path


def _report_error(error: Exception, use_rich: bool) -> None:
    if use_rich:
        from rich.console import Console

        console = Console(stderr=True)
        console.print(f"[bold red]Error:[/bold red] {error}", highlight=False)
    else:
        print(f"Error: {error}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the ``orghugo`` command.

    Parameters
    ----------
    argv : sequence of str, optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    try:
        _setup_logging_level(parsed_args)
        config = _load_config(parsed_args)
        overrides = merge_configs(config, _cli_overrides(parsed_args))
        logger.debug("Export overrides: %s", overrides)

        source = _read_source(parsed_args.input)
        scope = {
            "subtree": parsed_args.subtree,
            "visible_only": parsed_args.visible_only,
            "body_only": parsed_args.body_only,
            "overrides": overrides,
        }

        if parsed_args.to_file:
            path = export_to_file(source, **scope)
            print(path)
        else:
            text = export_to_buffer(source, **scope)
            sys.stdout.write(text)
    except OrgHugoError as e:
        logger.debug("Export failed", exc_info=True)
        _report_error(e, parsed_args.rich)
        return get_exit_code_for_exception(e)

    return EXIT_SUCCESS


__all__ = ["create_parser", "get_exit_code_for_exception", "main"]
