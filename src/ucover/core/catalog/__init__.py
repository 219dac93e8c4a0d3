"""Plugin catalog module."""

from ucover.core.catalog.catalog import Catalog, PluginCatalog

__all__ = ["Catalog", "PluginCatalog"]
