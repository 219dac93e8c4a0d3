"""DTOs describing catalog entries and override decisions.

All models are frozen: a catalog replacement is always a new instance, so a
reader never observes a half-updated record.
"""

from enum import Enum
from pathlib import Path
from typing import Literal, Self

from pydantic import BaseModel, Field

from ucover.core.versioning import GenericVersion

DEFAULT_GROUP_ID = "org.jenkins-ci.plugins"


class Origin(str, Enum):
    """Where a catalog entry came from."""

    CATALOG = "catalog"
    LOCAL_OVERRIDE = "local_override"


class ArtifactCoordinate(BaseModel):
    """Group/artifact/version triple locating a built package.

    Attributes:
        group_id: Dot-separated namespace (e.g. "org.jenkins-ci.plugins").
        artifact_id: Artifact identifier inside the namespace.
        version: Version string as published.
    """

    group_id: str = Field(min_length=1)
    artifact_id: str = Field(min_length=1)
    version: str = Field(min_length=1)

    model_config = {"frozen": True, "extra": "forbid"}

    @classmethod
    def parse(cls, gav: str) -> Self:
        """Parse a ``group:artifact:version`` string.

        ``group:artifact:packaging:version`` and
        ``group:artifact:packaging:classifier:version`` are accepted too; the
        version is always the last segment.

        Raises:
            ValueError: If the string has fewer than three segments.
        """
        if gav is not None and not isinstance(gav, str):
            raise ValueError(f"Invalid artifact coordinate: {gav!r}")
        parts = [p.strip() for p in (gav or "").split(":")]
        if len(parts) < 3 or len(parts) > 5 or not all(parts):
            raise ValueError(f"Invalid artifact coordinate: {gav!r}")
        return cls(group_id=parts[0], artifact_id=parts[1], version=parts[-1])

    def artifact_dir(self, root: Path) -> Path:
        """Directory holding every local version of this artifact."""
        return Path(root).joinpath(*self.group_id.split("."), self.artifact_id)

    def artifact_file(self, root: Path, version: str, extension: str) -> Path:
        """Expected path of the package built for ``version``."""
        return self.artifact_dir(root) / version / f"{self.artifact_id}-{version}.{extension}"

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


class PluginDependency(BaseModel):
    """Dependency declared by a plugin."""

    name: str
    version: str
    optional: bool = False

    model_config = {"frozen": True, "extra": "forbid"}


class PluginMetadata(BaseModel):
    """Metadata for one plugin in the catalog.

    ``name`` always comes from the artifact's own packaging manifest (or the
    catalog document), never from a map key.
    """

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    coordinate: ArtifactCoordinate
    origin: Origin = Origin.CATALOG
    title: str | None = None
    url: str | None = None
    required_core: str | None = None
    dependencies: tuple[PluginDependency, ...] = ()
    file: str | None = Field(default=None, description="Local package file for overrides")

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def parsed_version(self) -> GenericVersion:
        """Version parsed for ordering; raises MalformedVersionError."""
        return GenericVersion.parse(self.version)

    @classmethod
    def local_override(cls, path: str | Path) -> "PluginMetadata":
        """Build override metadata from a plugin archive on disk."""
        from ucover.core.morpheus.plugin_archive import read_override_metadata

        return read_override_metadata(path)


class EnvironmentOverrideEntry(BaseModel):
    """An environment variable naming an override package file."""

    variable_name: str
    file_path: str

    model_config = {"frozen": True, "extra": "forbid"}


class OverrideDecision(BaseModel):
    """Record of one applied override, kept for test-run provenance."""

    name: str
    old_version: str | None = None
    new_version: str
    source: Literal["local_snapshot", "environment"]
    file: str

    model_config = {"frozen": True, "extra": "forbid"}
