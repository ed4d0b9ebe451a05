"""
AWS:InstanceInformation gatherer.

Reports basic facts about the host the agent runs on.
"""

from __future__ import annotations

import platform
import socket
from importlib import metadata
from typing import Any

from .base import BaseGatherer
from .context import GathererContext

AGENT_TYPE = "fleet-agent"
_DISTRIBUTION = "fleet-agent-core"


def agent_version() -> str:
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _ip_address(hostname: str) -> str:
    try:
        return socket.gethostbyname(hostname)
    except OSError:
        # Hosts without a resolvable name still report everything else
        return ""


class InstanceInformationGatherer(BaseGatherer):
    """Collects agent and operating system details for this instance."""

    _name = "AWS:InstanceInformation"

    def collect(self, ctx: GathererContext, policy: Any) -> dict[str, str]:
        hostname = socket.gethostname()
        return {
            "AgentType": AGENT_TYPE,
            "AgentVersion": agent_version(),
            "ComputerName": hostname,
            "InstanceId": str(ctx.extra.get("instance_id") or ctx.config.agent.instance_id),
            "IpAddress": _ip_address(hostname),
            "PlatformName": platform.system(),
            "PlatformType": platform.system(),
            "PlatformVersion": platform.release(),
            "Architecture": platform.machine(),
        }
