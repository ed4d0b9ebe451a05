"""
Gatherer Base Classes

Defines the gatherer interface and a base implementation.

A gatherer collects one category of inventory data. It exposes a single
contract: run with a sub-policy, return one InventoryItem or raise.
Timeouts and cancellation are the gatherer's own business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, TYPE_CHECKING, runtime_checkable

from core.schemas.inventory import DEFAULT_ITEM_SCHEMA_VERSION, InventoryItem
from core.times import to_iso8601_utc

if TYPE_CHECKING:
    from .context import GathererContext


@runtime_checkable
class Gatherer(Protocol):
    """
    Protocol defining the gatherer interface.

    All gatherers must implement this protocol.
    """

    @property
    def name(self) -> str:
        """Inventory type name, e.g. AWS:Application."""
        ...

    def run(self, ctx: "GathererContext", policy: Any) -> InventoryItem:
        """Collect data according to ``policy``."""
        ...


class BaseGatherer(ABC):
    """
    Abstract base class for gatherers.

    Subclasses implement ``collect`` and return the raw content; the base
    class wraps it into an InventoryItem stamped with the capture time.
    """

    _name: str
    _schema_version: str = DEFAULT_ITEM_SCHEMA_VERSION

    def __init__(self, *, name: Optional[str] = None) -> None:
        self._name_override = name

    @property
    def name(self) -> str:
        return self._name_override or getattr(self, "_name", self.__class__.__name__)

    @property
    def schema_version(self) -> str:
        return self._schema_version

    @abstractmethod
    def collect(self, ctx: "GathererContext", policy: Any) -> Any:
        """Return the collected content for this inventory type."""

    def run(self, ctx: "GathererContext", policy: Any) -> InventoryItem:
        ctx.logger.debug(f"Running gatherer {self.name}")
        content = self.collect(ctx, policy)
        return InventoryItem(
            name=self.name,
            schema_version=self.schema_version,
            capture_time=to_iso8601_utc(ctx.now()),
            content=content,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
