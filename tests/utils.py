"""Test helpers and shared constants."""

import zipfile
from pathlib import Path

from ucover.core.dto.catalog_dto import ArtifactCoordinate, PluginMetadata

GROUP_ID = "org.jenkins-ci.plugins"


def write_plugin_archive(
    path: Path,
    short_name: str,
    version: str,
    *,
    extra: dict[str, str] | None = None,
    manifest_text: str | None = None,
    compression: int = zipfile.ZIP_STORED,
) -> Path:
    """Write a minimal plugin archive with a jar manifest."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if manifest_text is None:
        lines = [
            "Manifest-Version: 1.0",
            f"Short-Name: {short_name}",
            f"Plugin-Version: {version}",
            f"Group-Id: {GROUP_ID}",
        ]
        lines.extend(f"{k}: {v}" for k, v in (extra or {}).items())
        manifest_text = "\r\n".join(lines) + "\r\n\r\n"
    with zipfile.ZipFile(path, "w", compression=compression) as zf:
        zf.writestr("META-INF/MANIFEST.MF", manifest_text)
        zf.writestr("WEB-INF/lib/placeholder.txt", "x")
    return path


def corrupt_manifest_entry(path: Path) -> Path:
    """Break the compressed manifest data of an archive, leaving the zip directory intact."""
    with zipfile.ZipFile(path) as zf:
        offset = zf.getinfo("META-INF/MANIFEST.MF").header_offset
    data = bytearray(path.read_bytes())
    name_len = int.from_bytes(data[offset + 26 : offset + 28], "little")
    extra_len = int.from_bytes(data[offset + 28 : offset + 30], "little")
    # deflate block type 0b11 is reserved
    data[offset + 30 + name_len + extra_len] = 0xFF
    path.write_bytes(bytes(data))
    return path


def write_repository_manifest(artifact_dir: Path, versions: list[str]) -> Path:
    """Write a maven-metadata-local.xml listing ``versions``."""
    artifact_dir.mkdir(parents=True, exist_ok=True)
    body = "".join(f"<version>{v}</version>" for v in versions)
    path = artifact_dir / "maven-metadata-local.xml"
    path.write_text(
        "<?xml version='1.0' encoding='UTF-8'?>"
        "<metadata><groupId>org.jenkins-ci.plugins</groupId>"
        f"<versioning><versions>{body}</versions></versioning></metadata>",
        encoding="utf-8",
    )
    return path


def install_local_build(root: Path, name: str, version: str, *, short_name: str | None = None):
    """Lay out a local snapshot build of ``name`` under a repository root."""
    coordinate = ArtifactCoordinate(group_id=GROUP_ID, artifact_id=name, version=version)
    package = coordinate.artifact_file(root, version, "hpi")
    return write_plugin_archive(package, short_name or name, version)


def catalog_metadata(name: str, version: str) -> PluginMetadata:
    """Return a catalog entry as loaded from the update center."""
    return PluginMetadata(
        name=name,
        version=version,
        coordinate=ArtifactCoordinate(group_id=GROUP_ID, artifact_id=name, version=version),
    )
