"""
Pytest configuration and shared fixtures for agent core tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from core.clock import FrozenClock
from core.config import AgentConfig, InventoryConfig, RuntimeConfig
from gatherers.context import GathererContext
from association import DocumentCompiler


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def frozen_clock():
    """A FrozenClock at 2026-01-01T00:00:00.000Z."""
    return FrozenClock()


@pytest.fixture
def runtime_config(tmp_path):
    """A RuntimeConfig rooted in a temporary directory."""
    return RuntimeConfig(
        agent=AgentConfig(data_store_path=str(tmp_path / "ssm")),
        inventory=InventoryConfig(policy_location=str(tmp_path / "policy")),
    )


@pytest.fixture
def compiler(runtime_config, frozen_clock):
    """A DocumentCompiler with a temporary data store and frozen time."""
    return DocumentCompiler(config=runtime_config, clock=frozen_clock)


@pytest.fixture
def gatherer_context(runtime_config, frozen_clock):
    """A GathererContext with frozen time."""
    return GathererContext(config=runtime_config, clock=frozen_clock)


@pytest.fixture(autouse=True)
def _clear_fleet_env(monkeypatch):
    """Keep FLEET_* variables from the developer's shell or .env out of tests."""
    for key in list(os.environ):
        if key.startswith("FLEET_"):
            monkeypatch.delenv(key, raising=False)
