"""
Runtime Configuration Module

Provides configuration loading and management for the agent core.
"""

from .runtime import (
    AgentConfig,
    InventoryConfig,
    RuntimeConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "AgentConfig",
    "InventoryConfig",
    "RuntimeConfig",
    "get_default_config",
    "set_default_config",
]
