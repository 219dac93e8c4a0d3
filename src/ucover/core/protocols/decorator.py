"""Catalog decorator protocol definitions."""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ucover.core.catalog.catalog import Catalog


@runtime_checkable
class CatalogDecorator(Protocol):
    """Structural interface for anything that rewrites a loaded catalog."""

    def decorate(self, catalog: "Catalog") -> Any:
        """Mutate ``catalog`` in place. The return value is collected by the caller."""
        ...


def register(reg: dict[str, CatalogDecorator], name: str, obj: object) -> None:
    """Register a catalog decorator in a registry.

    Args:
        reg: Registry mapping from name to decorator.
        name: Registry key.
        obj: Candidate decorator object.

    Raises:
        TypeError: If obj does not implement the CatalogDecorator protocol.
    """
    if not isinstance(obj, CatalogDecorator):
        raise TypeError(f"{name} does not implement CatalogDecorator (missing decorate)")
    reg[name] = obj
