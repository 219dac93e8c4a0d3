"""Core ucover facade.

This module defines the main entry point used by acceptance-test harnesses:
load configuration, then rewrite every freshly loaded catalog with local
plugin builds.
"""

import logging
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv

from ucover.core.catalog.catalog import Catalog
from ucover.core.dto.catalog_dto import OverrideDecision
from ucover.core.morpheus.morpheus import Morpheus
from ucover.core.neo.neo import Neo
from ucover.core.protocols.sources import (
    DirectoryRepositoryRoot,
    EnvironmentSource,
    OsEnvironment,
    StaticEnvironment,
)
from ucover.core.sherlock.sherlock import Sherlock
from ucover.core.spock.spock import Spock
from ucover.core.uhura.uhura import Uhura

logger = logging.getLogger(__name__)
load_dotenv()

LOCAL_OVERRIDE_DECORATOR = "local_override"


class UCOverride:
    """Core facade for the update-center override resolver."""

    def __init__(self, *args, **kwargs):
        """Prevent direct construction; use `UCOverride.create(...)` instead."""
        raise RuntimeError("Use: instance = UCOverride.create(...)")

    def _initialize(self, *, config_path: str | None, environment: EnvironmentSource):
        """Initialize internal components.

        Args:
            config_path: Path to JSON configuration file
            environment: Source of environment variables
        """
        self.environment = environment
        self.spock = Spock(config_path=config_path, environ=environment.variables())
        self.morpheus = Morpheus()

        # Alias
        self.config_manager = self.spock
        self.decorator_manager = self.morpheus
        logger.debug("UCOverride instance created.")

    def _build_resolver(self) -> Neo:
        sherlock = Sherlock(
            DirectoryRepositoryRoot(self.spock.repository_root),
            package_extension=self.spock.get("package_extension"),
            metadata_filename=self.spock.get("metadata_filename"),
        )
        return Neo(
            sherlock=sherlock,
            uhura=Uhura(),
            environment=self.environment,
            local_snapshots=self.spock.local_snapshots,
        )

    @classmethod
    def create(
        cls,
        *,
        config_path: str | None = None,
        config: dict[str, Any] | None = None,
        environment: EnvironmentSource | Mapping[str, str] | None = None,
        decorators: Mapping[str, Any] | None = None,
        discover: bool = False,
    ):
        """Factory method to create and initialize UCOverride.

        Args:
            config_path: Path to JSON configuration file
            config: Optional configuration dictionary
            environment: Environment source, or a plain mapping of variables.
                Defaults to the process environment.
            decorators: Extra catalog decorators, applied after local overrides
            discover: Also register decorators from installed entry points
        """
        if environment is None:
            environment = OsEnvironment()
        elif isinstance(environment, Mapping):
            environment = StaticEnvironment(environment)

        instance = cls.__new__(cls)  # bypass __init__
        instance._initialize(config_path=config_path, environment=environment)
        # Load configuration first
        instance.spock.load(config=config)
        # Local overrides always run first
        instance.neo = instance._build_resolver()
        instance.resolver = instance.neo
        instance.morpheus.add(LOCAL_OVERRIDE_DECORATOR, instance.neo)
        for name, decorator in (decorators or {}).items():
            instance.morpheus.add(name, decorator)
        if discover:
            instance.morpheus.find_decorators()
        return instance

    def apply(self, catalog: Catalog) -> list[OverrideDecision]:
        """Run every catalog decorator over ``catalog``.

        Returns:
            The override decisions made by the local override resolver.
        """
        results = self.morpheus.decorate(catalog)
        decisions = results.get(LOCAL_OVERRIDE_DECORATOR) or []
        logger.info("Applied %d local plugin overrides", len(decisions))
        return decisions

    def load_catalog(self, document: Mapping[str, Any]) -> Catalog:
        """Build a catalog from an update-center document and apply overrides."""
        catalog = Catalog.from_update_center(document)
        self.apply(catalog)
        return catalog
