"""In-memory ingestion queue shared by request handlers and the persister.

One lock guards both the append and the drain swap, so every accepted
item is observed by exactly one drain. The lock is never held across I/O.
"""

from __future__ import annotations

import threading

from core.constants import QUEUE_FULL_MESSAGE
from core.errors import QueueFullError
from core.types import QueuedRequest


class IngestionQueue:
    """Lock-guarded, append-only queue drained as one unit."""

    def __init__(self, max_size: int | None = None) -> None:
        self._lock = threading.Lock()
        self._items: list[QueuedRequest] = []
        self._max_size = max_size

    @property
    def max_size(self) -> int | None:
        """Optional bound, ``None`` when the queue is unbounded."""
        return self._max_size

    def enqueue(self, item: QueuedRequest) -> None:
        """Append one accepted request.

        Args:
            item: Validated request to persist later.

        Raises:
            QueueFullError: If a bound is configured and already reached.
        """
        with self._lock:
            if self._max_size is not None and len(self._items) >= self._max_size:
                raise QueueFullError(QUEUE_FULL_MESSAGE)
            self._items.append(item)

    def drain_all(self) -> list[QueuedRequest]:
        """Take every queued item and reset the queue to empty.

        Returns:
            Items in insertion order; empty list when nothing is queued.
        """
        with self._lock:
            drained = self._items
            self._items = []
        return drained

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
