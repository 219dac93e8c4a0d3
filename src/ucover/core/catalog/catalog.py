"""Catalog of available plugins.

The catalog maps a plugin name to its currently selected metadata. It is owned
by the caller and mutated in place by catalog decorators; every mutation goes
through `replace`, which swaps in a new immutable PluginMetadata.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from ucover.core.dto.catalog_dto import ArtifactCoordinate, PluginDependency, PluginMetadata
from ucover.core.exceptions import NameMismatchError

logger = logging.getLogger(__name__)


class Catalog:
    """Mapping of plugin name to PluginMetadata with auditable mutation.

    Example:
        >>> catalog = Catalog()
        >>> catalog.replace("widget", widget_metadata)
        >>> catalog.get("widget").version
        '1.0.0'
        >>> for name, metadata in catalog.iterate_entries():
        ...     print(name, metadata.version)
    """

    def __init__(self, entries: Mapping[str, PluginMetadata] | None = None):
        """Create a catalog, optionally seeded with entries.

        Args:
            entries: Initial name -> metadata mapping. Each key must match the
                metadata's own name.
        """
        self._plugins: dict[str, PluginMetadata] = {}
        for name, metadata in (entries or {}).items():
            self.replace(name, metadata)

    def get(self, name: str) -> PluginMetadata | None:
        """Return the metadata for ``name``, or None."""
        return self._plugins.get(name)

    def names(self) -> list[str]:
        return list(self._plugins)

    def iterate_entries(self) -> list[tuple[str, PluginMetadata]]:
        """Snapshot of (name, metadata) pairs.

        The snapshot is detached from the catalog, so entries may be replaced
        while iterating over it.
        """
        return list(self._plugins.items())

    def replace(self, name: str, metadata: PluginMetadata) -> PluginMetadata | None:
        """Insert or replace the entry for ``name``.

        Returns:
            The previous metadata, or None if the entry is new.

        Raises:
            NameMismatchError: If ``metadata.name`` differs from ``name``.
        """
        if metadata.name != name:
            raise NameMismatchError(name, metadata.name, context={"version": metadata.version})
        previous = self._plugins.get(name)
        self._plugins[name] = metadata
        logger.debug(
            "Catalog entry '%s' set to %s (%s)", name, metadata.version, metadata.origin.value
        )
        return previous

    def snapshot(self) -> dict[str, PluginMetadata]:
        """Plain dict copy of the current entries."""
        return dict(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._plugins))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return self._plugins == other._plugins

    def __repr__(self) -> str:
        return f"Catalog({len(self._plugins)} plugins)"

    # =========================================================================
    # UPDATE CENTER DOCUMENT
    # =========================================================================

    @classmethod
    def from_update_center(cls, document: Mapping[str, Any]) -> "Catalog":
        """Build a catalog from an update-center JSON document.

        Only the ``plugins`` map is read; of each plugin entry only ``name``,
        ``version``, ``gav``, ``title``, ``url``, ``requiredCore`` and
        ``dependencies`` are used. Entries without a ``name``
        or a usable ``gav``, or with mistyped fields, are skipped with a warning.

        Raises:
            ValueError: If the document has no ``plugins`` object.
        """
        plugins = document.get("plugins") if isinstance(document, Mapping) else None
        if not isinstance(plugins, Mapping):
            raise ValueError("Update center document must contain a 'plugins' object")

        catalog = cls()
        for key, entry in plugins.items():
            if not isinstance(entry, Mapping):
                logger.warning("Skipping update center entry '%s': not an object", key)
                continue
            try:
                metadata = _entry_metadata(entry)
            except (ValueError, TypeError, AttributeError) as e:
                # pydantic ValidationError is a ValueError
                logger.warning("Skipping update center entry '%s': %s", key, e)
                continue
            catalog.replace(metadata.name, metadata)

        logger.info("Loaded %d plugins from update center document", len(catalog))
        return catalog


def _entry_metadata(entry: Mapping[str, Any]) -> PluginMetadata:
    name = entry.get("name")
    if not name:
        raise ValueError("no 'name'")
    coordinate = ArtifactCoordinate.parse(entry.get("gav", ""))
    dependencies = tuple(
        PluginDependency(
            name=dep["name"],
            version=dep["version"],
            optional=bool(dep.get("optional", False)),
        )
        for dep in entry.get("dependencies") or []
        if isinstance(dep, Mapping) and dep.get("name") and dep.get("version")
    )
    return PluginMetadata(
        name=name,
        version=entry.get("version") or coordinate.version,
        coordinate=coordinate,
        title=entry.get("title"),
        url=entry.get("url"),
        required_core=entry.get("requiredCore"),
        dependencies=dependencies,
    )


PluginCatalog = Catalog
