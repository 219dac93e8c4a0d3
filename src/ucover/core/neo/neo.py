"""Neo catalog override resolver.

Neo rewrites catalog entries with locally built plugins in one pass:

1. Local-snapshot phase (only when enabled): every catalog entry with a newer
   snapshot build in the local repository is replaced by that build. Failures
   are logged and isolated to the entry.
2. Environment phase (always): every plugin package named by an environment
   variable is inserted into the catalog, replacing whatever was there.

Environment overrides are read and validated before the catalog is touched,
so a fatal error in that phase leaves the catalog unchanged.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from ucover.core.catalog.catalog import Catalog
from ucover.core.dto.catalog_dto import EnvironmentOverrideEntry, OverrideDecision, PluginMetadata
from ucover.core.exceptions import ConflictingOverrideError, NameMismatchError, UCOverError
from ucover.core.morpheus.plugin_archive import read_override_metadata
from ucover.core.protocols.sources import EnvironmentSource, OsEnvironment
from ucover.core.sherlock.sherlock import Sherlock
from ucover.core.uhura.uhura import Uhura

logger = logging.getLogger(__name__)

ArchiveReader = Callable[[str | Path], PluginMetadata]
EnvironmentOverrides = dict[str, tuple[EnvironmentOverrideEntry, PluginMetadata]]


class Neo:
    """Catalog decorator applying local plugin overrides.

    Famous quote from Neo in Matrix:
    "I know kung fu."
    """

    def __init__(
        self,
        *,
        sherlock: Sherlock | None,
        uhura: Uhura | None = None,
        environment: EnvironmentSource | None = None,
        local_snapshots: bool = False,
        read_archive: ArchiveReader = read_override_metadata,
    ):
        """Create a Neo instance.

        Args:
            sherlock: Local repository scanner; None disables the snapshot phase.
            uhura: Environment override scanner.
            environment: Source of environment variables.
            local_snapshots: Enable the local-snapshot phase.
            read_archive: Builds override metadata from a package file.
        """
        self.sherlock = sherlock
        self.uhura = uhura or Uhura()
        self.environment = environment or OsEnvironment()
        self.local_snapshots = local_snapshots
        self._read_archive = read_archive
        logger.debug("Neo created (local_snapshots=%s)", local_snapshots)

    def decorate(self, catalog: Catalog) -> list[OverrideDecision]:
        """Apply local overrides to ``catalog`` in place.

        Returns:
            One decision per applied override, in application order.

        Raises:
            MissingOverrideFileError: An environment override names a missing file.
            MalformedManifestError: An environment override file is not a plugin.
            ConflictingOverrideError: Two environment overrides resolve to the same plugin.
        """
        overrides = self._collect_environment_overrides()

        decisions: list[OverrideDecision] = []
        if self.local_snapshots and self.sherlock is not None:
            decisions.extend(self._apply_local_snapshots(catalog))
        decisions.extend(self._apply_environment_overrides(catalog, overrides))
        return decisions

    # =========================================================================
    # LOCAL SNAPSHOTS
    # =========================================================================

    def _apply_local_snapshots(self, catalog: Catalog) -> list[OverrideDecision]:
        decisions = []
        for name, stock in catalog.iterate_entries():
            try:
                decision = self._override_with_local_build(catalog, name, stock)
            except (UCOverError, OSError):
                logger.error("Could not apply local build for '%s'", name, exc_info=True)
                continue
            if decision is not None:
                decisions.append(decision)
        return decisions

    def _override_with_local_build(
        self, catalog: Catalog, name: str, stock: PluginMetadata
    ) -> OverrideDecision | None:
        result = self.sherlock.find_local_build(stock.coordinate)
        if not result.is_ok():
            logger.debug("No local build for '%s': %s", name, result.detail.message)
            return None

        selected = result.selected
        metadata = self._read_archive(selected.file)
        if metadata.name != name:
            raise NameMismatchError(name, metadata.name, context={"file": selected.file})

        logger.info(
            "Overriding %s %s with local build of %s", name, stock.version, metadata.version
        )
        catalog.replace(name, metadata)
        return OverrideDecision(
            name=name,
            old_version=stock.version,
            new_version=metadata.version,
            source="local_snapshot",
            file=selected.file,
        )

    # =========================================================================
    # ENVIRONMENT OVERRIDES
    # =========================================================================

    def _collect_environment_overrides(self) -> EnvironmentOverrides:
        entries = self.uhura.scan(self.environment.variables())

        overrides: EnvironmentOverrides = {}
        for entry in entries:
            metadata = self._read_archive(entry.file_path)
            if metadata.name in overrides:
                raise ConflictingOverrideError(
                    metadata.name, [overrides[metadata.name][0].variable_name, entry.variable_name]
                )
            overrides[metadata.name] = (entry, metadata)
        return overrides

    def _apply_environment_overrides(
        self, catalog: Catalog, overrides: EnvironmentOverrides
    ) -> list[OverrideDecision]:
        decisions = []
        for name, (entry, metadata) in overrides.items():
            stock = catalog.get(name)
            if stock is None:
                logger.info("Creating new plugin %s with local build of %s", name, metadata.version)
            else:
                logger.info(
                    "Overriding %s %s with local build of %s", name, stock.version, metadata.version
                )
            catalog.replace(name, metadata)
            decisions.append(
                OverrideDecision(
                    name=name,
                    old_version=stock.version if stock is not None else None,
                    new_version=metadata.version,
                    source="environment",
                    file=metadata.file or entry.file_path,
                )
            )
        return decisions


CatalogOverrideResolver = Neo
