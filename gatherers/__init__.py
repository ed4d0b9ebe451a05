"""
Inventory Gatherers

Provides the gatherer contract, the registry, and the built-in gatherers.

Public API:
- Gatherer / BaseGatherer: Gatherer interface and base implementation
- GathererRegistry: Write-once registry of gatherers by name
- GathererContext: Dependencies handed to gatherers
- load_gatherers: Build and seal the default registry
"""

from __future__ import annotations

from .application import ApplicationGatherer
from .base import BaseGatherer, Gatherer
from .context import GathererContext
from .instance_info import InstanceInformationGatherer
from .registry import GathererEntry, GathererRegistry


def load_gatherers() -> GathererRegistry:
    """
    Build the default registry with every built-in gatherer, sealed.

    Called once at startup, before the first inventory cycle.
    """
    registry = GathererRegistry()
    for gatherer in (InstanceInformationGatherer(), ApplicationGatherer()):
        registry.register(gatherer.name, gatherer)
    return registry.seal()


__all__ = [
    "ApplicationGatherer",
    "BaseGatherer",
    "Gatherer",
    "GathererContext",
    "GathererEntry",
    "GathererRegistry",
    "InstanceInformationGatherer",
    "load_gatherers",
]
