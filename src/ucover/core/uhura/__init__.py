"""Uhura environment override scanner module."""

from ucover.core.uhura.uhura import EnvironmentOverrideScanner, Uhura

__all__ = ["EnvironmentOverrideScanner", "Uhura"]
