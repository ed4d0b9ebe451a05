"""
Core Schemas
File: canonical.py

Purpose: Deterministic JSON serialization. Inventory size limits and
content hashes are computed over these bytes, so equal payloads always
measure and hash the same regardless of key insertion order.
"""

import json
import math
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from core.times import format_datetime_canonical

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


class CanonicalizationError(ValueError):
    """Raised when a value has no canonical JSON form."""


def canonicalize_value(value: Any, path: str = "") -> Any:
    """
    Recursively convert a value into a JSON-serializable canonical form.

    Pydantic models are dumped by alias so the canonical form matches the
    wire form. None values inside mappings are kept: an inventory payload
    with an explicit null is a different payload.

    Raises:
        CanonicalizationError: On NaN/Infinity floats or unsupported types.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CanonicalizationError(f"Non-finite float at {path or '<root>'}: {value}")
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, BaseModel):
        return canonicalize_value(value.model_dump(mode="json", by_alias=True), path)

    if isinstance(value, dict):
        return {
            str(k): canonicalize_value(v, f"{path}.{k}" if path else str(k))
            for k, v in value.items()
        }

    if isinstance(value, (list, tuple)):
        return [canonicalize_value(item, f"{path}[{i}]") for i, item in enumerate(value)]

    if isinstance(value, bytes):
        return value.hex()

    raise CanonicalizationError(
        f"Cannot canonicalize value of type {type(value).__name__} at {path or '<root>'}"
    )


def dumps_canonical(obj: Any) -> str:
    """Serialize to canonical JSON: sorted keys, no whitespace, UTF-8 kept as-is."""
    return json.dumps(
        canonicalize_value(obj),
        sort_keys=True,
        separators=CANONICAL_JSON_SEPARATORS,
        ensure_ascii=False,
    )


def serialized_size(obj: Any) -> int:
    """Byte length of the canonical UTF-8 JSON encoding of ``obj``."""
    return len(dumps_canonical(obj).encode("utf-8"))
