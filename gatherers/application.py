"""
AWS:Application gatherer.

Lists the Python distributions installed in the agent's environment.
"""

from __future__ import annotations

from importlib import metadata
from typing import Any

from .base import BaseGatherer
from .context import GathererContext

COLLECTION_DISABLED = "Disabled"


def collection_enabled(policy: Any) -> bool:
    """A sub-policy may switch collection off with ``{"Collection": "Disabled"}``."""
    if isinstance(policy, dict):
        return policy.get("Collection") != COLLECTION_DISABLED
    return True


class ApplicationGatherer(BaseGatherer):
    """Collects name/version pairs of installed distributions, sorted by name."""

    _name = "AWS:Application"

    def collect(self, ctx: GathererContext, policy: Any) -> list[dict[str, str]]:
        if not collection_enabled(policy):
            ctx.logger.info(f"Collection disabled for {self.name}")
            return []

        applications: dict[str, dict[str, str]] = {}
        for dist in metadata.distributions():
            name = dist.metadata.get("Name")
            if not name:
                continue
            applications[name.lower()] = {
                "Name": name,
                "Version": dist.version or "",
                "Summary": dist.metadata.get("Summary") or "",
            }
        return [applications[key] for key in sorted(applications)]
