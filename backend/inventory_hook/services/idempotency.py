"""
Process-wide record of ids whose side effects have been applied.

Development only: state lives in memory, is never evicted and is not shared
between processes. Checks and marks are not atomic, so two deliveries of the
same id racing each other can both pass ``seen``. A production deployment
should swap in an external store with an atomic check-and-set and a TTL,
keeping the same first-observer-wins contract.
"""

import logging

logger = logging.getLogger(__name__)


class ProcessedRegistry:
    def __init__(self, kind: str):
        self.kind = kind
        self._ids: set[str] = set()

    def seen(self, key: str) -> bool:
        return key in self._ids

    def mark(self, key: str) -> None:
        self._ids.add(key)
        logger.debug(f"{self.kind} {key} marked as processed")

    def clear(self) -> None:
        self._ids.clear()

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, key: object) -> bool:
        return key in self._ids
