"""Pytest fixtures.

This file adjusts sys.path for src-layout imports.
"""

# ruff: noqa: E402

import os
import sys

# Ensure `src` is on sys.path so imports like `from ucover.core...` resolve during tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if os.path.isdir(SRC):
    sys.path.insert(0, SRC)
sys.path.insert(0, ROOT)

import pytest
from rich.traceback import install

from tests.utils import catalog_metadata
from ucover.core.catalog.catalog import Catalog
from ucover.core.protocols.sources import DirectoryRepositoryRoot
from ucover.core.sherlock.sherlock import Sherlock

# Enable readable tracebacks in development / test environments.
# Can be disabled with PYTEST_RICH=0
if os.getenv("PYTEST_RICH", "1") == "1":
    install(
        show_locals=True,  # show local variables for each frame
        width=None,  # use terminal width
        word_wrap=True,  # wrap long lines
        extra_lines=1,  # some context around lines
        suppress=["/usr/lib/python3", "site-packages"],  # hide "noisy" third-party frames
    )


@pytest.fixture
def repository(tmp_path):
    """Empty local repository root."""
    root = tmp_path / "m2" / "repository"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def sherlock(repository):
    """Sherlock bound to the temporary repository."""
    return Sherlock(DirectoryRepositoryRoot(repository))


@pytest.fixture
def catalog():
    """Catalog with a single `widget 1.0.0` entry."""
    return Catalog({"widget": catalog_metadata("widget", "1.0.0")})
