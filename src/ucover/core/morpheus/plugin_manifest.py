"""Plugin manifest model and normalization helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

import inflection
from pydantic import BaseModel

from ucover.core.dto.catalog_dto import DEFAULT_GROUP_ID, PluginDependency


class PluginManifest(BaseModel):
    """Normalized plugin metadata.

    This model is built from the attributes of the ``META-INF/MANIFEST.MF``
    packaged inside a plugin archive.
    """

    short_name: str
    version: str
    long_name: str | None = None
    url: str | None = None
    jenkins_version: str | None = None
    group_id: str = DEFAULT_GROUP_ID
    artifact_id: str | None = None
    dependencies: tuple[PluginDependency, ...] = ()

    model_config = {"frozen": True}

    # manifest attribute -> model field
    _ATTRIBUTES: ClassVar[dict[str, str]] = {
        "Short-Name": "short_name",
        "Plugin-Version": "version",
        "Long-Name": "long_name",
        "Url": "url",
        "Jenkins-Version": "jenkins_version",
        "Hudson-Version": "jenkins_version",
        "Group-Id": "group_id",
        "Artifact-Id": "artifact_id",
    }
    _REQUIRED: ClassVar[tuple[str, ...]] = ("Short-Name", "Plugin-Version")

    @classmethod
    def from_manifest_attributes(cls, attributes: Mapping[str, str]) -> PluginManifest:
        """Map raw manifest attributes onto the model.

        Raises:
            KeyError: If a required attribute is missing or empty.
        """
        for required in cls._REQUIRED:
            if cls.normalize_str(attributes.get(required)) is None:
                raise KeyError(required)

        data: dict[str, Any] = {}
        for attribute, field_name in cls._ATTRIBUTES.items():
            value = cls.normalize_str(attributes.get(attribute))
            # Jenkins-Version wins over the legacy Hudson-Version
            if value is not None and field_name not in data:
                data[field_name] = value

        data["dependencies"] = cls.parse_dependencies(attributes.get("Plugin-Dependencies"))
        return cls(**data)

    @property
    def title(self) -> str:
        """Display name; falls back to the humanized short name."""
        return self.long_name or inflection.humanize(self.short_name.replace("-", "_"))

    @staticmethod
    def normalize_str(value: Any) -> str | None:
        """Normalize a value into a trimmed non-empty string.

        Args:
            value: Any value.

        Returns:
            A trimmed string, or None if the value is empty/None.
        """
        if value is None:
            return None
        if isinstance(value, str):
            s = value.strip()
            return s if s else None
        s = str(value).strip()
        return s if s else None

    @staticmethod
    def parse_dependencies(value: Any) -> tuple[PluginDependency, ...]:
        """Parse a ``Plugin-Dependencies`` attribute.

        Entries are comma separated ``name:version`` pairs, optionally followed
        by ``;resolution:=optional``.

        Args:
            value: The raw attribute value.

        Returns:
            Parsed dependencies; malformed entries are dropped.
        """
        s = PluginManifest.normalize_str(value)
        if s is None:
            return ()
        out: list[PluginDependency] = []
        for entry in s.split(","):
            head, _, params = entry.strip().partition(";")
            name, sep, version = head.partition(":")
            name, version = name.strip(), version.strip()
            if not sep or not name or not version:
                continue
            optional = "resolution:=optional" in params.replace(" ", "")
            out.append(PluginDependency(name=name, version=version, optional=optional))
        return tuple(out)
