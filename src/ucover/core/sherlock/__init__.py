"""Sherlock local repository scanner module."""

from ucover.core.sherlock.sherlock import LocalRepositoryScanner, Sherlock, read_manifest_versions

__all__ = ["LocalRepositoryScanner", "Sherlock", "read_manifest_versions"]
