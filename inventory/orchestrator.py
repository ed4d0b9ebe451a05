"""
Inventory Orchestrator

Runs the gatherers an inventory policy names and assembles one batch.

All-or-nothing: any lookup failure, gatherer failure or size breach
voids the whole cycle and no partial batch is returned. Size limits
mirror the inventory service's hard caps.

Gatherers run sequentially, in policy order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.config import InventoryConfig, get_default_config
from core.schemas.canonical import serialized_size
from core.schemas.errors import (
    GathererExecutionException,
    SizeLimitExceededException,
    UnregisteredGathererException,
)
from core.schemas.inventory import InventoryBatch, InventoryItem, InventoryPolicy

from gatherers.context import GathererContext
from gatherers.registry import GathererRegistry


logger = logging.getLogger(__name__)

BYTES_PER_KB = 1000


@dataclass(frozen=True)
class SizeLimits:
    """Per-item and per-batch size caps, in bytes."""
    per_item_bytes: int
    total_bytes: int

    @classmethod
    def from_kb(cls, per_item_kb: float, total_kb: float) -> "SizeLimits":
        return cls(
            per_item_bytes=int(per_item_kb * BYTES_PER_KB),
            total_bytes=int(total_kb * BYTES_PER_KB),
        )

    @classmethod
    def from_config(cls, config: InventoryConfig) -> "SizeLimits":
        return cls.from_kb(config.size_limit_kb_per_type, config.total_size_limit_kb)


def verify_inventory_data_size(item_size: int, total_size: int, limits: SizeLimits) -> bool:
    """True if both the item and the batch so far are within their limits."""
    return item_size <= limits.per_item_bytes and total_size <= limits.total_bytes


class InventoryOrchestrator:
    """
    Verifies that every gatherer in a policy is registered and runs it.

    The registry is injected; it must be fully populated before the
    first run.

    Usage:
        orchestrator = InventoryOrchestrator(load_gatherers())
        batch = orchestrator.run(policy)
    """

    def __init__(
        self,
        registry: GathererRegistry,
        *,
        context: Optional[GathererContext] = None,
        limits: Optional[SizeLimits] = None,
    ) -> None:
        self.registry = registry
        self.context = context or GathererContext.create(get_default_config())
        self.limits = limits or SizeLimits.from_config(self.context.config.inventory)

    def run(self, policy: InventoryPolicy) -> InventoryBatch:
        """
        Run every gatherer in the policy and return the complete batch.

        Raises:
            UnregisteredGathererException: A named gatherer is not registered
            GathererExecutionException: A gatherer failed
            SizeLimitExceededException: An item or the batch is too large
        """
        logger.info("Verifying if gatherers are registered and then running them")

        items: list[InventoryItem] = []
        total_size = 0

        for name, sub_policy in policy.gatherers.items():
            gatherer, found = self.registry.lookup(name)
            if not found:
                logger.error(f"Unrecognized inventory gatherer - {name}")
                raise UnregisteredGathererException(name)

            logger.info(f"Invoking gatherer - {name}")
            try:
                item = gatherer.run(self.context, sub_policy)
                if not isinstance(item, InventoryItem):
                    raise TypeError(f"gatherer returned {type(item).__name__}, expected InventoryItem")
                item_size = serialized_size(item)
            except Exception as e:
                logger.error(f"Encountered error while executing {name}. Error - {e}")
                raise GathererExecutionException(name, e) from e

            items.append(item)
            total_size += item_size

            if not verify_inventory_data_size(item_size, total_size, self.limits):
                logger.error(f"Size limit exceeded for collected data after {name}")
                raise SizeLimitExceededException(
                    gatherer=name,
                    item_size=item_size,
                    total_size=total_size,
                    item_limit=self.limits.per_item_bytes,
                    total_limit=self.limits.total_bytes,
                )

        return InventoryBatch(items=tuple(items), total_size_bytes=total_size)
