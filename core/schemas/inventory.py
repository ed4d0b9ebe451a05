"""
Core Schemas
File: inventory.py

Purpose: Inventory policy, collected items and the finished batch.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_ITEM_SCHEMA_VERSION = "1.0"


class InventoryPolicy(BaseModel):
    """
    Gatherer name -> opaque sub-policy.

    The policy file wraps the mapping as ``{"InventoryPolicy": {...}}``;
    a bare mapping is accepted too. Only the "InventoryPolicy" key marks
    the wrapper; every other top-level key is a gatherer name. Gatherers
    run in the order their names appear in the document.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    gatherers: dict[str, Any] = Field(default_factory=dict, alias="InventoryPolicy")

    @model_validator(mode="before")
    @classmethod
    def accept_bare_mapping(cls, data: Any) -> Any:
        if isinstance(data, dict) and "InventoryPolicy" not in data:
            return {"InventoryPolicy": data}
        return data

    @property
    def gatherer_names(self) -> list[str]:
        return list(self.gatherers)

    def __len__(self) -> int:
        return len(self.gatherers)


class InventoryItem(BaseModel):
    """One category of collected inventory data. Content is opaque here."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    name: str = Field(..., alias="Name", min_length=1)
    schema_version: str = Field(default=DEFAULT_ITEM_SCHEMA_VERSION, alias="SchemaVersion")
    capture_time: str = Field(default="", alias="CaptureTime")
    content: Any = Field(default=None, alias="Content")


class InventoryBatch(BaseModel):
    """
    A complete inventory snapshot.

    Only built once every gatherer in the policy succeeded and every
    size check passed.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    items: tuple[InventoryItem, ...] = Field(default_factory=tuple)
    total_size_bytes: int = Field(default=0, ge=0)

    def __len__(self) -> int:
        return len(self.items)

    def names(self) -> list[str]:
        return [item.name for item in self.items]

    @classmethod
    def empty(cls) -> "InventoryBatch":
        return cls()
