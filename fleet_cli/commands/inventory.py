"""
CLI Inventory Command

Run one inventory cycle with the built-in gatherers and print the batch.
No uploader is attached, so nothing leaves the host.

Usage:
    fleet inventory [--policy ./InventoryPolicy.json] [--json]
"""

from __future__ import annotations

import copy
import json
import sys
from argparse import Namespace
from pathlib import Path

from core.config import RuntimeConfig
from inventory import InventoryCycleResult, InventoryPlugin


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_INPUT = 2


def _with_policy_path(config: RuntimeConfig, policy: str | None) -> RuntimeConfig:
    if not policy:
        return config
    path = Path(policy)
    config = copy.deepcopy(config)
    config.inventory.policy_location = str(path.parent)
    config.inventory.policy_doc_name = path.name
    return config


def print_result(result: InventoryCycleResult) -> None:
    """Print a human-readable cycle summary."""
    if result.skipped:
        print(f"Inventory skipped: {result.reason}")
        if result.error:
            print(f"  {result.error.message}")
        return

    if not result.ok:
        print(f"Inventory cycle failed [{result.error.code}]: {result.error.message}")
        return

    print(f"Collected {len(result.batch)} item(s), {result.batch.total_size_bytes} bytes")
    for item in result.batch.items:
        print(f"  - {item.name} (schema {item.schema_version}, captured {item.capture_time})")


def inventory_cmd(args: Namespace) -> int:
    """Handle inventory command."""
    config = _with_policy_path(args.runtime_config, args.policy)
    plugin = InventoryPlugin(config=config)

    result = plugin.apply_inventory_policy()

    if args.json:
        data = result.to_dict()
        data["content"] = {
            item.name: item.content for item in result.batch.items
        }
        print(json.dumps(data, indent=2, default=str))
    else:
        print_result(result)

    if result.ok or result.reason in ("disabled", "absent"):
        return EXIT_SUCCESS
    if result.reason == "unreadable" or result.error is not None:
        return EXIT_INVALID_INPUT
    return EXIT_RUNTIME_ERROR
