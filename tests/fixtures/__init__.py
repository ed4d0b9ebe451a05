"""
Test fixtures package for agent core tests.

This package provides factory functions and fakes for creating test objects.
Organized into layers:
- common.py: Association messages and document bodies
- inventory_fixtures.py: Fake gatherers, sized items, registries and uploaders

Usage:
    from tests.fixtures import make_association_message, make_registry

    def test_something():
        raw = make_association_message(association_id="assoc-1")
        registry = make_registry(StaticGatherer("app", {"k": "v"}))
"""

from .common import (
    DEFAULT_CREATE_DATE,
    make_association_message,
    make_legacy_document,
    make_step_document,
)

from .inventory_fixtures import (
    FailingGatherer,
    RecordingUploader,
    SizedGatherer,
    StaticGatherer,
    make_item_of_size,
    make_registry,
)

__all__ = [
    # Common
    "DEFAULT_CREATE_DATE",
    "make_association_message",
    "make_legacy_document",
    "make_step_document",
    # Inventory
    "FailingGatherer",
    "RecordingUploader",
    "SizedGatherer",
    "StaticGatherer",
    "make_item_of_size",
    "make_registry",
]
