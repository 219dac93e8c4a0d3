"""Read plugin metadata from a packaged plugin archive.

A plugin archive (``.hpi``/``.jpi``) is a zip file whose
``META-INF/MANIFEST.MF`` describes the plugin. The plugin name used for the
catalog is always the ``Short-Name`` found there, never the file name.
"""

import logging
import zipfile
import zlib
from pathlib import Path

from ucover.core.dto.catalog_dto import ArtifactCoordinate, Origin, PluginMetadata
from ucover.core.exceptions import MalformedManifestError, MissingOverrideFileError
from ucover.core.morpheus.plugin_manifest import PluginManifest

logger = logging.getLogger(__name__)

MANIFEST_ENTRY = "META-INF/MANIFEST.MF"

# RuntimeError: encrypted entry. NotImplementedError: unsupported compression.
_ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    RuntimeError,
    NotImplementedError,
    OSError,
)


def parse_manifest_text(text: str) -> dict[str, str]:
    """Parse the main section of a jar manifest.

    Continuation lines start with a single space and are appended to the
    previous attribute value. Parsing stops at the first blank line.
    """
    attributes: dict[str, str] = {}
    last_key: str | None = None
    for line in text.splitlines():
        if not line.strip():
            if attributes:
                break
            continue
        if line.startswith(" "):
            if last_key is None:
                raise ValueError("continuation line without attribute")
            attributes[last_key] += line[1:]
            continue
        key, sep, value = line.partition(":")
        if not sep or not key.strip():
            raise ValueError(f"invalid manifest line: {line!r}")
        last_key = key.strip()
        attributes[last_key] = value[1:] if value.startswith(" ") else value
    return attributes


def read_plugin_archive(path: str | Path) -> PluginManifest:
    """Read and normalize the manifest of a plugin archive.

    Raises:
        MissingOverrideFileError: If the archive does not exist.
        MalformedManifestError: If the archive or its manifest is unreadable.
    """
    archive = Path(path)
    if not archive.is_file():
        raise MissingOverrideFileError(str(archive.absolute()))

    try:
        with zipfile.ZipFile(archive) as zf:
            raw = zf.read(MANIFEST_ENTRY)
    except KeyError as e:
        raise MalformedManifestError(
            f"{archive} has no {MANIFEST_ENTRY}", path=str(archive)
        ) from e
    except _ARCHIVE_ERRORS as e:
        raise MalformedManifestError(
            f"Cannot open plugin archive {archive}: {type(e).__name__}: {e}", path=str(archive)
        ) from e

    try:
        attributes = parse_manifest_text(raw.decode("utf-8"))
        manifest = PluginManifest.from_manifest_attributes(attributes)
    except KeyError as e:
        raise MalformedManifestError(
            f"Manifest of {archive} is missing required attribute {e.args[0]}",
            path=str(archive),
        ) from e
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedManifestError(
            f"Invalid manifest in {archive}: {type(e).__name__}: {e}", path=str(archive)
        ) from e

    logger.debug(
        "Read plugin archive %s: name=%s version=%s", archive, manifest.short_name, manifest.version
    )
    return manifest


def read_override_metadata(path: str | Path) -> PluginMetadata:
    """Build LOCAL_OVERRIDE catalog metadata from a plugin archive."""
    manifest = read_plugin_archive(path)
    coordinate = ArtifactCoordinate(
        group_id=manifest.group_id,
        artifact_id=manifest.artifact_id or manifest.short_name,
        version=manifest.version,
    )
    return PluginMetadata(
        name=manifest.short_name,
        version=manifest.version,
        coordinate=coordinate,
        origin=Origin.LOCAL_OVERRIDE,
        title=manifest.title,
        url=manifest.url,
        required_core=manifest.jenkins_version,
        dependencies=manifest.dependencies,
        file=str(Path(path).absolute()),
    )
