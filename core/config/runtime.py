"""
Runtime Configuration

Central configuration for document compilation and inventory collection.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "FLEET_"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "enabled")


@dataclass
class AgentConfig:
    """Host identity and the layout used to place orchestration artifacts."""
    instance_id: str = ""
    data_store_path: str = "/var/lib/amazon/ssm"
    document_root_dir_name: str = "document"
    orchestration_root_dir: str = "orchestration"


@dataclass
class InventoryConfig:
    """Configuration for the inventory policy applier."""
    enabled: bool = True
    policy_location: str = "/etc/amazon/ssm"
    policy_doc_name: str = "InventoryPolicy.json"
    frequency_minutes: int = 5
    # Hard caps enforced by the inventory service; 1 KB = 1000 bytes
    size_limit_kb_per_type: float = 200
    total_size_limit_kb: float = 1024
    error_threshold: int = 10

    @property
    def policy_path(self) -> Path:
        return Path(self.policy_location) / self.policy_doc_name


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the agent core.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    agent: AgentConfig = field(default_factory=AgentConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - FLEET_INSTANCE_ID: Identifier of the managed instance
        - FLEET_DATA_STORE_PATH: Root of the agent data store
        - FLEET_ORCHESTRATION_ROOT_DIR: Orchestration directory segment
        - FLEET_INVENTORY_ENABLED: Enable inventory collection (true/false)
        - FLEET_INVENTORY_POLICY_LOCATION: Directory holding the policy file
        - FLEET_INVENTORY_SIZE_LIMIT_KB: Per-item size limit
        - FLEET_INVENTORY_TOTAL_SIZE_LIMIT_KB: Aggregate size limit
        - FLEET_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}INSTANCE_ID"):
            overrides.setdefault("agent", {})["instance_id"] = os.getenv(f"{ENV_PREFIX}INSTANCE_ID")
        if os.getenv(f"{ENV_PREFIX}DATA_STORE_PATH"):
            overrides.setdefault("agent", {})["data_store_path"] = os.getenv(f"{ENV_PREFIX}DATA_STORE_PATH")
        if os.getenv(f"{ENV_PREFIX}ORCHESTRATION_ROOT_DIR"):
            overrides.setdefault("agent", {})["orchestration_root_dir"] = os.getenv(
                f"{ENV_PREFIX}ORCHESTRATION_ROOT_DIR"
            )

        if os.getenv(f"{ENV_PREFIX}INVENTORY_ENABLED"):
            overrides.setdefault("inventory", {})["enabled"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}INVENTORY_ENABLED", "true")
            )
        if os.getenv(f"{ENV_PREFIX}INVENTORY_POLICY_LOCATION"):
            overrides.setdefault("inventory", {})["policy_location"] = os.getenv(
                f"{ENV_PREFIX}INVENTORY_POLICY_LOCATION"
            )
        if os.getenv(f"{ENV_PREFIX}INVENTORY_SIZE_LIMIT_KB"):
            overrides.setdefault("inventory", {})["size_limit_kb_per_type"] = float(
                os.getenv(f"{ENV_PREFIX}INVENTORY_SIZE_LIMIT_KB", "200")
            )
        if os.getenv(f"{ENV_PREFIX}INVENTORY_TOTAL_SIZE_LIMIT_KB"):
            overrides.setdefault("inventory", {})["total_size_limit_kb"] = float(
                os.getenv(f"{ENV_PREFIX}INVENTORY_TOTAL_SIZE_LIMIT_KB", "1024")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        agent_data = data.get("agent", {})
        inventory_data = data.get("inventory", {})

        agent = AgentConfig(**agent_data) if agent_data else AgentConfig()
        inventory = InventoryConfig(**inventory_data) if inventory_data else InventoryConfig()

        return cls(
            agent=agent,
            inventory=inventory,
            log_level=data.get("log_level", "INFO"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        Allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("agent", {}).items():
            setattr(new_config.agent, key, value)

        for key, value in overrides.get("inventory", {}).items():
            setattr(new_config.inventory, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "agent": {
                "instance_id": self.agent.instance_id,
                "data_store_path": self.agent.data_store_path,
                "document_root_dir_name": self.agent.document_root_dir_name,
                "orchestration_root_dir": self.agent.orchestration_root_dir,
            },
            "inventory": {
                "enabled": self.inventory.enabled,
                "policy_location": self.inventory.policy_location,
                "policy_doc_name": self.inventory.policy_doc_name,
                "frequency_minutes": self.inventory.frequency_minutes,
                "size_limit_kb_per_type": self.inventory.size_limit_kb_per_type,
                "total_size_limit_kb": self.inventory.total_size_limit_kb,
                "error_threshold": self.inventory.error_threshold,
            },
            "log_level": self.log_level,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
