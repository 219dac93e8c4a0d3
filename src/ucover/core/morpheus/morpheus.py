"""Morpheus catalog decorator manager.

Morpheus keeps an ordered registry of catalog decorators, discovers more of
them from installed packages, and applies them to a freshly loaded catalog.
"""

import logging
from importlib.metadata import entry_points
from typing import Any

from ucover.core.catalog.catalog import Catalog
from ucover.core.protocols.decorator import CatalogDecorator, register

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "ucover.decorators"


class Morpheus:
    """Core class for managing catalog decorators.

    Famous quote from Morpheus in Matrix:
    "What is real? How do you define 'real'? If you're talking about what you can
    feel, what you can smell, what you can taste and see, then 'real' is simply
    electrical signals interpreted by your brain."
    """

    def __init__(self):
        """Create a Morpheus instance with an empty registry."""
        self.decorators: dict[str, CatalogDecorator] = {}
        logger.debug("Morpheus instance created")

    def add(self, name: str, decorator: object) -> None:
        """Register a decorator; it runs after those already registered.

        Raises:
            TypeError: If decorator does not implement CatalogDecorator.
            ValueError: If the name is already registered.
        """
        if name in self.decorators:
            raise ValueError(f"Catalog decorator '{name}' is already registered")
        register(self.decorators, name, decorator)
        logger.debug("Registered catalog decorator '%s'", name)

    def find_decorators(self) -> None:
        """Register decorators exposed by installed packages.

        Each entry point in the ``ucover.decorators`` group must load a callable
        returning a CatalogDecorator. Broken entry points are logged and skipped.
        """
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            if ep.name in self.decorators:
                logger.debug("Decorator '%s' already registered, skipping entry point", ep.name)
                continue
            try:
                factory = ep.load()

                if not callable(factory):
                    logger.warning(f"Entry point '{ep.name}' is not callable")
                    continue

                self.add(ep.name, factory())
                logger.info(f"✅ Loaded catalog decorator '{ep.name}' from entry point")
            except Exception as e:
                logger.error(
                    f"Failed to load catalog decorator from entry point '{ep.name}': {e}",
                    exc_info=True,
                )

    def decorate(self, catalog: Catalog) -> dict[str, Any]:
        """Apply every registered decorator to ``catalog`` in registration order.

        Decorator errors propagate to the caller.

        Returns:
            Mapping of decorator name to whatever its ``decorate`` returned.
        """
        results: dict[str, Any] = {}
        for name, decorator in self.decorators.items():
            logger.debug("Applying catalog decorator '%s'", name)
            results[name] = decorator.decorate(catalog)
        return results


DecoratorManager = Morpheus
