"""Pytest configuration and shared fixtures for the orghugo test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
from datetime import date, datetime
from pathlib import Path

import pytest

from orghugo.constants import CONFIG_ENV_VAR

FIXED_TODAY = date(2025, 3, 14)
FIXED_NOW = datetime(2025, 3, 14, 9, 30)

SAMPLE_POST = """#+TITLE: My Great Post
#+AUTHOR: Jane Doe

* Introduction
Hugo renders this page[fn:1] and links to [[file:posts/other.org][the other post]].

[fn:1] A note about rendering.

* Details
See [[https://gohugo.io][Hugo]] for more.[fn:2]

[fn:2] Second note.
"""


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_post() -> str:
    """Provide a small Org post with footnotes and links."""
    return SAMPLE_POST


@pytest.fixture
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> date:
    """Pin the dates seen by the org and hugo templates.

    Returns
    -------
    date
        The date the hugo template will print

    """
    monkeypatch.setattr("orghugo.renderers.hugo._today", lambda: FIXED_TODAY)
    monkeypatch.setattr("orghugo.renderers.org._now", lambda: FIXED_NOW)
    return FIXED_TODAY


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty working directory with no discoverable configuration.

    Returns
    -------
    Path
        The working directory

    """
    workdir = tmp_path / "work"
    home = tmp_path / "home"
    workdir.mkdir()
    home.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return workdir


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Remove the handlers configure_logging installed and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in [h for h in root.handlers if getattr(h, "_orghugo_handler", False)]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
