"""
Upload Adapter contract.

The orchestrator hands finished batches to an uploader exposing
``convert`` and ``send``. Transmission is external; this module owns the
conversion to the inventory service's item shape:

    {
        "TypeName": "AWS:Application",
        "SchemaVersion": "1.0",
        "CaptureTime": "2026-01-01T00:00:00.000Z",
        "Content": [{"Name": "...", "Version": "..."}],
        "ContentHash": "<sha256 hex of canonical Content>",
    }

Content is always a list of flat string maps.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from core.schemas.canonical import dumps_canonical
from core.schemas.inventory import InventoryBatch, InventoryItem

WireItem = dict[str, Any]


@runtime_checkable
class InventoryUploader(Protocol):
    """Converts a batch to the wire format and transmits it."""

    def convert(self, batch: InventoryBatch) -> list[WireItem]:
        ...

    def send(self, items: list[WireItem]) -> None:
        """Transmit converted items. Raises on failure."""
        ...


def _flatten_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return dumps_canonical(value)


def _content_entries(content: Any) -> list[dict[str, str]]:
    if content is None:
        return []
    if isinstance(content, dict):
        rows = [content]
    elif isinstance(content, (list, tuple)):
        rows = list(content)
    else:
        rows = [{"Value": content}]

    entries = []
    for row in rows:
        if not isinstance(row, dict):
            row = {"Value": row}
        entries.append({str(k): _flatten_value(v) for k, v in row.items()})
    return entries


def content_hash(entries: list[dict[str, str]]) -> str:
    return hashlib.sha256(dumps_canonical(entries).encode("utf-8")).hexdigest()


def convert_item(item: InventoryItem) -> WireItem:
    entries = _content_entries(item.content)
    return {
        "TypeName": item.name,
        "SchemaVersion": item.schema_version,
        "CaptureTime": item.capture_time,
        "Content": entries,
        "ContentHash": content_hash(entries),
    }


def convert_to_ssm_inventory_items(batch: InventoryBatch) -> list[WireItem]:
    """Convert every item in the batch, preserving order."""
    return [convert_item(item) for item in batch.items]


class BaseInventoryUploader(ABC):
    """
    Uploader with the standard conversion; subclasses provide transport.
    """

    def convert(self, batch: InventoryBatch) -> list[WireItem]:
        return convert_to_ssm_inventory_items(batch)

    @abstractmethod
    def send(self, items: list[WireItem]) -> None:
        """Transmit converted items. Raises on failure."""
