"""Spock configuration manager module."""

from ucover.core.spock.spock import ConfigManager, Spock

__all__ = ["ConfigManager", "Spock"]
