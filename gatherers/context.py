"""
Gatherer Context

Dependencies handed to gatherers on every run:
- Configuration
- Clock (can be frozen for determinism)
- Logger
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from core.clock import Clock, FrozenClock, RealClock
from core.config import RuntimeConfig, get_default_config


@dataclass
class GathererContext:
    """
    Context providing dependencies to gatherers.

    Usage:
        ctx = GathererContext.create(config)
        item = gatherer.run(ctx, sub_policy)
    """

    config: RuntimeConfig = field(default_factory=RuntimeConfig)
    clock: Clock = field(default_factory=RealClock)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("gatherers"))
    extra: dict[str, Any] = field(default_factory=dict)

    def now(self) -> datetime:
        return self.clock.now()

    @classmethod
    def create(
        cls,
        config: Optional[RuntimeConfig] = None,
        *,
        clock: Optional[Clock] = None,
    ) -> "GathererContext":
        """Create a context for production use."""
        config = config or get_default_config()
        extra: dict[str, Any] = {}
        if config.agent.instance_id:
            extra["instance_id"] = config.agent.instance_id
        return cls(
            config=config,
            clock=clock or RealClock(),
            extra=extra,
        )

    @classmethod
    def create_frozen(cls, frozen_time: Optional[datetime] = None) -> "GathererContext":
        """Create a context with a frozen clock, for tests."""
        return cls(clock=FrozenClock(frozen_time))
