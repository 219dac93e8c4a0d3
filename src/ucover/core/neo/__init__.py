"""Neo catalog override resolver module."""

from ucover.core.neo.neo import CatalogOverrideResolver, Neo

__all__ = ["CatalogOverrideResolver", "Neo"]
