"""
Gatherer Registry

Maps inventory type names to gatherer implementations.

Lifecycle is write-once, read-many: the loader registers every gatherer
and seals the registry before the first inventory cycle. After that it
is read-only, so lookups need no locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from .base import Gatherer


@dataclass
class GathererEntry:
    """
    Entry in the gatherer registry.
    """
    name: str
    gatherer: Gatherer
    metadata: dict[str, Any] = field(default_factory=dict)


class GathererRegistry:
    """
    Registry for gatherer implementations.

    Usage:
        registry = GathererRegistry()
        registry.register("AWS:Application", ApplicationGatherer())
        registry.seal()

        gatherer, found = registry.lookup("AWS:Application")
    """

    def __init__(self) -> None:
        self._by_name: dict[str, GathererEntry] = {}
        self._sealed = False

    def register(
        self,
        name: str,
        gatherer: Gatherer,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Register a gatherer under ``name``.

        Raises:
            RuntimeError: If the registry has been sealed
            ValueError: If the name is empty or already registered
        """
        if self._sealed:
            raise RuntimeError(f"Gatherer registry is sealed; cannot register {name}")
        if not name:
            raise ValueError("Gatherer name must not be empty")
        if name in self._by_name:
            raise ValueError(f"Gatherer already registered: {name}")

        self._by_name[name] = GathererEntry(
            name=name,
            gatherer=gatherer,
            metadata=metadata or {},
        )

    def seal(self) -> "GathererRegistry":
        """Make the registry read-only. Returns self for chaining."""
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    def lookup(self, name: str) -> tuple[Optional[Gatherer], bool]:
        """
        Find a gatherer by name.

        Returns:
            (gatherer, True) if registered, (None, False) otherwise
        """
        entry = self._by_name.get(name)
        if entry is None:
            return None, False
        return entry.gatherer, True

    def names(self) -> list[str]:
        """Registered names, in registration order."""
        return list(self._by_name)

    def list_gatherers(self) -> list[GathererEntry]:
        return list(self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)
