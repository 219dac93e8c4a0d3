"""Version parsing and ordering."""

from ucover.core.versioning.generic_version import (
    GenericVersion,
    VersionIdentifier,
    compare,
    parse,
)

__all__ = ["GenericVersion", "VersionIdentifier", "compare", "parse"]
