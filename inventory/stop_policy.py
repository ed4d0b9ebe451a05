"""
Error counter for a periodically invoked plugin.

Owned by the caller of the orchestrator, not by the orchestrator. Each
failed cycle adds an error, a successful cycle resets the count.
"""

from __future__ import annotations

import logging


logger = logging.getLogger(__name__)


class StopPolicy:
    """Tracks consecutive failures against a threshold."""

    def __init__(self, name: str, threshold: int) -> None:
        self.name = name
        self.threshold = threshold
        self._error_count = 0

    @property
    def error_count(self) -> int:
        return self._error_count

    def add_error(self, count: int = 1) -> None:
        self._error_count += count
        if not self.is_healthy():
            logger.warning(
                f"{self.name} has failed {self._error_count} consecutive time(s) "
                f"(threshold {self.threshold})"
            )

    def reset(self) -> None:
        self._error_count = 0

    def is_healthy(self) -> bool:
        return self._error_count < self.threshold

    def __repr__(self) -> str:
        return f"StopPolicy(name={self.name!r}, errors={self._error_count}, threshold={self.threshold})"
