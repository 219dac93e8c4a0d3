"""Sherlock local repository scanner.

Sherlock looks for locally built snapshot packages of a plugin in a Maven
style repository::

    <root>/<group as path>/<artifactId>/maven-metadata-local.xml
    <root>/<group as path>/<artifactId>/<version>/<artifactId>-<version>.hpi

Nothing found is an expected state: every lookup returns a LocalBuildResult
and never raises for a missing or broken local build.
"""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from ucover.core.dto.catalog_dto import ArtifactCoordinate
from ucover.core.dto.result_dto import StatusCode, StatusDetail
from ucover.core.dto.sherlock_dto import LocalBuildCandidate, LocalBuildResult
from ucover.core.exceptions import (
    MalformedManifestError,
    MalformedVersionError,
    MissingRepositoryRootError,
)
from ucover.core.protocols.sources import RepositoryRoot
from ucover.core.versioning import GenericVersion

logger = logging.getLogger(__name__)

DEFAULT_METADATA_FILENAME = "maven-metadata-local.xml"
DEFAULT_PACKAGE_EXTENSION = "hpi"

# Local builds stamp their version, e.g. "1.1-SNAPSHOT (private-2024-01-01-jdoe)"
_BUILD_STAMP_RE = re.compile(r"\s*\([^()]*\)\s*$")


def strip_build_stamp(version: str) -> str:
    """Drop a trailing parenthesised build stamp from a version string."""
    return _BUILD_STAMP_RE.sub("", version)


def read_manifest_versions(path: Path) -> list[str]:
    """Return every ``<version>`` text of a repository manifest, in document order.

    Raises:
        MalformedManifestError: If the document cannot be read or parsed.
    """
    try:
        tree = ET.parse(path)
    except (ET.ParseError, OSError) as e:
        raise MalformedManifestError(
            f"Invalid repository manifest {path}: {type(e).__name__}: {e}", path=str(path)
        ) from e

    versions = []
    for element in tree.getroot().iter():
        # ignore XML namespaces
        if not isinstance(element.tag, str) or element.tag.rsplit("}", 1)[-1] != "version":
            continue
        text = (element.text or "").strip()
        if text:
            versions.append(text)
    return versions


class Sherlock:
    """Local repository scanner for snapshot builds.

    Famous quote from Sherlock Holmes:
    "You see, but you do not observe."
    """

    def __init__(
        self,
        repository_root: RepositoryRoot,
        *,
        package_extension: str = DEFAULT_PACKAGE_EXTENSION,
        metadata_filename: str = DEFAULT_METADATA_FILENAME,
    ):
        """Create a Sherlock instance.

        Args:
            repository_root: Provider of the local repository location.
            package_extension: Extension of built plugin packages.
            metadata_filename: Name of the per-artifact manifest document.
        """
        self.repository_root = repository_root
        self.package_extension = package_extension.lstrip(".")
        self.metadata_filename = metadata_filename
        logger.debug("Sherlock created with repository_root=%r", repository_root)

    def find_local_build(self, coordinate: ArtifactCoordinate) -> LocalBuildResult:
        """Find a local snapshot build newer than ``coordinate.version``.

        [Result Pattern] Check result.is_ok() before using result.selected.

        Only snapshot versions strictly greater than the coordinate's version
        qualify, and only when their package file exists. If several qualify,
        the highest version is selected; equal versions resolve to the last
        one listed in the manifest.
        """
        try:
            root = self.repository_root.resolve()
        except MissingRepositoryRootError as e:
            logger.debug("No local repository: %s", e)
            return LocalBuildResult.fail(
                StatusDetail(code=StatusCode.NO_REPOSITORY, message=str(e), context=e.context),
                coordinate=coordinate,
            )

        artifact_dir = coordinate.artifact_dir(root)
        metadata = artifact_dir / self.metadata_filename
        if not metadata.is_file():
            return LocalBuildResult.fail(
                StatusDetail(
                    code=StatusCode.NOT_FOUND,
                    message=f"No local builds of {coordinate}",
                    context={"metadata": str(metadata)},
                ),
                coordinate=coordinate,
            )

        try:
            current = GenericVersion.parse(strip_build_stamp(coordinate.version))
        except MalformedVersionError as e:
            logger.warning("Cannot compare local builds of %s: %s", coordinate, e)
            return LocalBuildResult.fail(
                StatusDetail(code=StatusCode.INVALID, message=str(e), context=e.context),
                coordinate=coordinate,
            )

        try:
            listed = read_manifest_versions(metadata)
        except MalformedManifestError as e:
            logger.error("Cannot inspect local builds of %s: %s", coordinate, e, exc_info=True)
            return LocalBuildResult.fail(
                StatusDetail(code=StatusCode.INVALID, message=str(e), context=e.context),
                coordinate=coordinate,
            )

        candidates: list[tuple[GenericVersion, LocalBuildCandidate]] = []
        for text in listed:
            try:
                version = GenericVersion.parse(text)
            except MalformedVersionError as e:
                logger.debug("Skipping local version of %s: %s", coordinate, e)
                continue
            if not version.is_snapshot or version <= current:
                continue
            package = coordinate.artifact_file(root, text, self.package_extension)
            if not package.is_file():
                logger.debug("No package for local version %s of %s: %s", text, coordinate, package)
                continue
            candidates.append((version, LocalBuildCandidate(version=text, file=str(package))))

        if not candidates:
            return LocalBuildResult.fail(
                StatusDetail(
                    code=StatusCode.NO_NEWER_BUILD,
                    message=f"No local snapshot newer than {coordinate.version}",
                    context={"listed": listed},
                ),
                coordinate=coordinate,
            )

        selected = candidates[0]
        for candidate in candidates[1:]:
            if candidate[0] >= selected[0]:
                selected = candidate

        return LocalBuildResult.success(
            coordinate=coordinate,
            candidates=[c for _, c in candidates],
            selected=selected[1],
        )


LocalRepositoryScanner = Sherlock
