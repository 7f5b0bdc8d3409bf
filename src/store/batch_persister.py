"""Background batch persister for queued payloads.

This module owns the single long-lived writer that wakes on a fixed
interval, swaps out the ingestion queue and writes each item to disk.
Per-item failures are logged and dropped; the loop keeps running.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Literal

from core.constants import DEFAULT_FLUSH_INTERVAL_SECONDS
from core.errors import SinkPersistError
from core.logging_config import get_logger
from core.types import FlushReport, QueuedRequest
from ingest.ingestion_queue import IngestionQueue
from store.payload_writer import ensure_directory, write_payload

_LOGGER = get_logger(__name__)

PersisterState = Literal["idle", "draining", "writing"]


class BatchPersister:
    """Interval-driven writer that drains an ingestion queue."""

    def __init__(
        self,
        queue: IngestionQueue,
        output_root: Path,
        interval_seconds: float = DEFAULT_FLUSH_INTERVAL_SECONDS,
    ) -> None:
        self._queue = queue
        self._output_root = output_root
        self._interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._state: PersisterState = "idle"

    @property
    def state(self) -> PersisterState:
        """Current cycle phase."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Create the output root and launch the background loop.

        Raises:
            DirectoryCreateError: If the output root cannot be created.
        """
        if self.is_running:
            return
        ensure_directory(self._output_root)
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="jsonsink-batch-persister",
            daemon=True,
        )
        self._thread.start()
        _LOGGER.info(
            "persister_started",
            output_root=str(self._output_root),
            interval_seconds=self._interval_seconds,
        )

    def stop(self, flush: bool = True) -> FlushReport:
        """Stop the background loop.

        Args:
            flush: Write whatever is still queued before returning.

        Returns:
            Report for the final flush, empty when ``flush`` is false.
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        report = self.flush_once() if flush else FlushReport()
        _LOGGER.info("persister_stopped", final_written=report.written_count)
        return report

    def flush_once(self) -> FlushReport:
        """Run one drain-and-write cycle.

        Returns:
            Counts of drained, written and failed items.
        """
        if len(self._queue) == 0:
            return FlushReport()
        self._state = "draining"
        items = self._queue.drain_all()
        self._state = "writing"
        try:
            written_count = sum(1 for item in items if self._write_item(item))
        finally:
            self._state = "idle"
        report = FlushReport(
            drained_count=len(items),
            written_count=written_count,
            failed_count=len(items) - written_count,
        )
        _LOGGER.info(
            "batch_flushed",
            drained=report.drained_count,
            written=report.written_count,
            failed=report.failed_count,
        )
        return report

    def _write_item(self, item: QueuedRequest) -> bool:
        """Write one item, logging and dropping it on failure."""
        try:
            write_payload(self._output_root, item)
        except SinkPersistError as error:
            _LOGGER.error(
                "payload_write_failed",
                name=item.name,
                major_run_id=item.major_run_id,
                error_type=type(error).__name__,
                error=str(error),
            )
            return False
        return True

    def _run_loop(self) -> None:
        while not self._stop_event.wait(self._interval_seconds):
            try:
                self.flush_once()
            except Exception:
                _LOGGER.exception("persister_cycle_failed")
