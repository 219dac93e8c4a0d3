"""Morpheus module: catalog decorators and plugin archive reading."""

from ucover.core.morpheus.morpheus import DecoratorManager, Morpheus
from ucover.core.morpheus.plugin_archive import read_override_metadata, read_plugin_archive
from ucover.core.morpheus.plugin_manifest import PluginManifest

__all__ = [
    "DecoratorManager",
    "Morpheus",
    "PluginManifest",
    "read_override_metadata",
    "read_plugin_archive",
]
