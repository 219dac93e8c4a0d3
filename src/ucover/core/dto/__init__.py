"""DTO package for ucover core.

Provides the catalog data model and the BaseResult pattern.
"""

from .catalog_dto import (
    ArtifactCoordinate,
    EnvironmentOverrideEntry,
    Origin,
    OverrideDecision,
    PluginDependency,
    PluginMetadata,
)
from .result_dto import BaseResult, StatusCode, StatusDetail
from .sherlock_dto import LocalBuildCandidate, LocalBuildResult

__all__ = [
    "ArtifactCoordinate",
    "BaseResult",
    "EnvironmentOverrideEntry",
    "LocalBuildCandidate",
    "LocalBuildResult",
    "Origin",
    "OverrideDecision",
    "PluginDependency",
    "PluginMetadata",
    "StatusCode",
    "StatusDetail",
]
