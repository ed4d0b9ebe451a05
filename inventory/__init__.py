"""
Inventory Collection

Turns an inventory policy into a validated, size-checked batch and hands
it to an uploader.

Public API:
- InventoryOrchestrator: Runs the gatherers a policy names, all-or-nothing
- SizeLimits: Per-item and aggregate size caps
- InventoryPlugin: One policy-file-driven cycle per scheduler tick
- InventoryCycleResult: Outcome of a cycle
- StopPolicy: Caller-owned consecutive error counter
- InventoryUploader / BaseInventoryUploader: Upload adapter contract
"""

from inventory.orchestrator import (
    BYTES_PER_KB,
    InventoryOrchestrator,
    SizeLimits,
    verify_inventory_data_size,
)
from inventory.plugin import (
    INVENTORY_PLUGIN_NAME,
    InventoryCycleResult,
    InventoryPlugin,
    load_policy,
)
from inventory.stop_policy import StopPolicy
from inventory.uploader import (
    BaseInventoryUploader,
    InventoryUploader,
    convert_item,
    convert_to_ssm_inventory_items,
)


__all__ = [
    "BYTES_PER_KB",
    "InventoryOrchestrator",
    "SizeLimits",
    "verify_inventory_data_size",
    "INVENTORY_PLUGIN_NAME",
    "InventoryCycleResult",
    "InventoryPlugin",
    "load_policy",
    "StopPolicy",
    "BaseInventoryUploader",
    "InventoryUploader",
    "convert_item",
    "convert_to_ssm_inventory_items",
]
