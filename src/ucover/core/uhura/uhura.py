"""Uhura environment override scanner.

Any environment variable whose name ends with ``.jpi`` (case-sensitive) or
``_JPI`` (case-insensitive) names a plugin package to use instead of the
catalog entry, e.g.::

    WIDGET_JPI=/tmp/widget-2.0.0.hpi
    widget.jpi=../widget/target/widget.hpi

The ``_JPI`` form exists because most shells reject dots in variable names.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from ucover.core.dto.catalog_dto import EnvironmentOverrideEntry
from ucover.core.exceptions import MissingOverrideFileError

logger = logging.getLogger(__name__)


class Uhura:
    """Scanner turning environment variables into override entries.

    Entries are recomputed on every scan and never cached.

    Famous quote from Uhura in Star Trek:
    "Hailing frequencies open, sir."
    """

    FILE_SUFFIX = ".jpi"
    TOKEN_SUFFIX = "_JPI"

    def is_plugin_variable(self, name: str) -> bool:
        """Check whether an environment variable names a plugin package."""
        if name.endswith(self.FILE_SUFFIX):
            return True
        return name.upper().endswith(self.TOKEN_SUFFIX)

    def scan(self, environment: Mapping[str, str]) -> list[EnvironmentOverrideEntry]:
        """Collect override entries from ``environment``.

        Every qualifying variable must point at an existing file; all of them
        are checked before anything is returned. The result is sorted by
        variable name for stable logs, callers must not depend on that order.

        Raises:
            MissingOverrideFileError: If a variable points at a missing file.
        """
        entries: list[EnvironmentOverrideEntry] = []
        for name in sorted(environment):
            if not self.is_plugin_variable(name):
                continue
            file = Path(environment[name]).expanduser()
            if not file.is_file():
                raise MissingOverrideFileError(str(file.absolute()), variable_name=name)
            logger.debug("Environment override %s -> %s", name, file)
            entries.append(EnvironmentOverrideEntry(variable_name=name, file_path=str(file)))
        return entries


EnvironmentOverrideScanner = Uhura
