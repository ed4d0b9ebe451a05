"""
Inventory Plugin

Applies the inventory policy file once per scheduler tick:
read the policy, run the orchestrator, hand the batch to the uploader.

A missing or unreadable policy skips the tick. Failed cycles are logged
and counted; upload failures are only logged. Nothing is queued or
retried here.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from core.config import RuntimeConfig, get_default_config
from core.schemas.errors import (
    AgentError,
    InvalidInventoryPolicyException,
    InventoryCycleException,
)
from core.schemas.inventory import InventoryBatch, InventoryPolicy

from gatherers import load_gatherers
from gatherers.context import GathererContext
from gatherers.registry import GathererRegistry

from inventory.orchestrator import InventoryOrchestrator, SizeLimits
from inventory.stop_policy import StopPolicy
from inventory.uploader import InventoryUploader


logger = logging.getLogger(__name__)

INVENTORY_PLUGIN_NAME = "Inventory"


@dataclass
class InventoryCycleResult:
    """Outcome of one apply_inventory_policy call."""
    ok: bool = False
    skipped: bool = False
    reason: str = ""
    batch: InventoryBatch = field(default_factory=InventoryBatch.empty)
    error: Optional[AgentError] = None
    uploaded: bool = False

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "skipped": self.skipped,
            "reason": self.reason,
            "items": self.batch.names(),
            "total_size_bytes": self.batch.total_size_bytes,
            "error": self.error.model_dump() if self.error else None,
            "uploaded": self.uploaded,
        }


def load_policy(path: Path) -> Optional[InventoryPolicy]:
    """
    Read an inventory policy file.

    Returns:
        The policy, or None if the file does not exist

    Raises:
        InvalidInventoryPolicyException: If the file cannot be read or decoded
    """
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return InventoryPolicy.model_validate(data)
    except OSError as e:
        raise InvalidInventoryPolicyException(
            f"Unable to read inventory policy from {path}: {e}", path=str(path)
        ) from e
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        raise InvalidInventoryPolicyException(
            f"Encountered error while reading inventory policy at {path}: {e}", path=str(path)
        ) from e


class InventoryPlugin:
    """
    Entry point for the external inventory scheduler.

    Usage:
        plugin = InventoryPlugin(config=config, uploader=my_uploader)
        scheduler.every(config.inventory.frequency_minutes, plugin.apply_inventory_policy)
    """

    def __init__(
        self,
        *,
        config: Optional[RuntimeConfig] = None,
        registry: Optional[GathererRegistry] = None,
        uploader: Optional[InventoryUploader] = None,
        context: Optional[GathererContext] = None,
    ) -> None:
        self.config = config or get_default_config()
        self.registry = registry if registry is not None else load_gatherers()
        self.uploader = uploader
        self.context = context or GathererContext.create(self.config)
        self.stop_policy = StopPolicy(INVENTORY_PLUGIN_NAME, self.config.inventory.error_threshold)
        self.orchestrator = InventoryOrchestrator(
            self.registry,
            context=self.context,
            limits=SizeLimits.from_config(self.config.inventory),
        )

    @property
    def name(self) -> str:
        return INVENTORY_PLUGIN_NAME

    @property
    def is_enabled(self) -> bool:
        return self.config.inventory.enabled

    @property
    def policy_path(self) -> Path:
        return self.config.inventory.policy_path

    def apply_inventory_policy(self) -> InventoryCycleResult:
        """Run one inventory cycle. Never raises for cycle-level failures."""
        if not self.is_enabled:
            logger.debug(f"Skipping execution of {self.name} plugin since its disabled")
            return InventoryCycleResult(skipped=True, reason="disabled")

        logger.info(f"Looking for inventory policy in {self.policy_path}")
        try:
            policy = load_policy(self.policy_path)
        except InvalidInventoryPolicyException as e:
            logger.info(f"{e.message}. Skipping execution of inventory policy doc.")
            return InventoryCycleResult(skipped=True, reason="unreadable", error=e.to_error_model())

        if policy is None:
            logger.info("No inventory policy to apply")
            return InventoryCycleResult(skipped=True, reason="absent")

        logger.info("Applying inventory policy")
        try:
            batch = self.orchestrator.run(policy)
        except InventoryCycleException as e:
            logger.info(f"Encountered error while executing inventory policy: {e.message}")
            self.stop_policy.add_error()
            return InventoryCycleResult(error=e.to_error_model())

        self.stop_policy.reset()
        logger.debug(f"Collected inventory data: {batch.names()} ({batch.total_size_bytes} bytes)")

        return InventoryCycleResult(ok=True, batch=batch, uploaded=self._upload(batch))

    def _upload(self, batch: InventoryBatch) -> bool:
        if self.uploader is None:
            logger.info("No inventory uploader configured, skipping upload")
            return False

        try:
            items = self.uploader.convert(batch)
        except Exception as e:
            logger.error(f"Encountered error in converting data to inventory items - {e}. Skipping upload")
            return False

        try:
            self.uploader.send(items)
        except Exception as e:
            logger.error(f"Failed to send inventory data: {e}")
            return False
        return True
