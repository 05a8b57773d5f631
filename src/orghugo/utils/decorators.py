#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/orghugo/utils/decorators.py
"""Dependency checks and timing helpers for the parser and the export engine."""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Iterator, Optional, Sequence, Tuple

from orghugo.exceptions import DependencyError
from orghugo.utils.packages import check_version_requirement

PackageSpec = Tuple[str, str, str]


def find_dependency_problems(
    packages: Sequence[PackageSpec],
) -> Tuple[list[tuple[str, str]], list[tuple[str, str, str]], Optional[ImportError]]:
    """Import each package and compare its installed version with the requirement.

    Parameters
    ----------
    packages : sequence of (install_name, import_name, version_spec)
        ``version_spec`` may be empty to accept any version

    Returns
    -------
    tuple
        ``(missing, version_mismatches, first_import_error)``

    """
    missing: list[tuple[str, str]] = []
    mismatches: list[tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None

    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue
        if version_spec:
            ok, installed = check_version_requirement(install_name, version_spec)
            if not ok:
                mismatches.append((install_name, version_spec, installed or "unknown"))

    return missing, mismatches, first_error


def requires_dependencies(component: str, packages: Sequence[PackageSpec]) -> Callable:
    """Raise DependencyError instead of calling the method when ``packages`` are unusable.

    The packages are checked on the first call; once they pass, later calls
    go straight to the method.

    Examples
    --------
        >>> @requires_dependencies("org", [("orgparse", "orgparse", ">=0.4")])
        ... def parse(self, input_data):
        ...     import orgparse

    """

    def decorator(method: Callable) -> Callable:
        satisfied = False

        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            nonlocal satisfied
            if not satisfied:
                missing, mismatches, error = find_dependency_problems(packages)
                if missing or mismatches:
                    raise DependencyError(
                        converter_name=component,
                        missing_packages=missing,
                        version_mismatches=mismatches,
                        original_import_error=error,
                    ) from error
                satisfied = True
            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Iterator[None]:
    """Log the duration of the enclosed block at DEBUG level.

    Nothing is measured when ``logger`` does not emit DEBUG records. A block
    that raises is logged as failed and the exception propagates.

    Examples
    --------
        >>> with debug_timer(logger, "Export (hugo)"):
        ...     text = export_document(doc, HUGO_BACKEND, options)
        ... # Logs: "Export (hugo) took 1.2 ms"

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    start = time.perf_counter()
    try:
        yield
    except Exception:
        logger.debug("%s failed after %.1f ms", operation, (time.perf_counter() - start) * 1000)
        raise
    logger.debug("%s took %.1f ms", operation, (time.perf_counter() - start) * 1000)
