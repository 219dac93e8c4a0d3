"""DTOs for Sherlock local repository lookups.

LocalBuildResult represents the outcome of probing the local repository for
one coordinate. "No local build" is an expected state returned with
status="error", never raised.
"""

from pydantic import BaseModel, Field

from ucover.core.dto.catalog_dto import ArtifactCoordinate
from ucover.core.dto.result_dto import BaseResult


class LocalBuildCandidate(BaseModel):
    """A snapshot build found on disk."""

    version: str
    file: str

    model_config = {"frozen": True, "extra": "forbid"}


class LocalBuildResult(BaseResult):
    """Result of Sherlock local build discovery.

    [Result Pattern] Check result.is_ok() before using result.selected.

    Attributes:
        coordinate: The coordinate that was looked up.
        candidates: Every qualifying build, in manifest order.
        selected: The build chosen to override the catalog entry.

    Status codes:
        - success: A newer snapshot build exists on disk
        - error + detail(NOT_FOUND): No artifact directory or manifest
        - error + detail(NO_REPOSITORY): Repository root is missing
        - error + detail(NO_NEWER_BUILD): Nothing newer than the catalog version
        - error + detail(INVALID): Manifest or catalog version unreadable
    """

    coordinate: ArtifactCoordinate | None = Field(default=None, description="Probed coordinate")
    candidates: list[LocalBuildCandidate] = Field(default_factory=list)
    selected: LocalBuildCandidate | None = Field(default=None)
