"""Injectable sources of global state.

The process environment and the local repository location are read through
these small interfaces so that resolution is a function of supplied inputs.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from ucover.core.exceptions import MissingRepositoryRootError


@runtime_checkable
class EnvironmentSource(Protocol):
    """Structural interface for environment variable providers."""

    def variables(self) -> Mapping[str, str]:
        """Return the current variables. Called once per resolution pass."""
        ...


@runtime_checkable
class RepositoryRoot(Protocol):
    """Structural interface for the local artifact repository location."""

    def resolve(self) -> Path:
        """Return the repository root.

        Raises:
            MissingRepositoryRootError: If the root directory does not exist.
        """
        ...


class OsEnvironment:
    """Process environment, read fresh on every call."""

    def variables(self) -> Mapping[str, str]:
        return dict(os.environ)


class StaticEnvironment:
    """Fixed set of variables, mainly for tests."""

    def __init__(self, variables: Mapping[str, str] | None = None):
        self._variables = dict(variables or {})

    def variables(self) -> Mapping[str, str]:
        return dict(self._variables)


class DirectoryRepositoryRoot:
    """Repository root at a fixed directory."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def resolve(self) -> Path:
        if not self.path.is_dir():
            raise MissingRepositoryRootError(str(self.path))
        return self.path

    def __repr__(self) -> str:
        return f"DirectoryRepositoryRoot({str(self.path)!r})"
