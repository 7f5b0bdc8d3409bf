"""Process-level wiring for the ingestion server.

This module owns the shared queue, the batch persister and the Flask
app so their lifetimes are explicit and start/stop together.
"""

from __future__ import annotations

from core.config import SinkConfig
from core.constants import WRITE_MODE_BATCH
from core.logging_config import get_logger
from core.types import FlushReport
from ingest.ingestion_queue import IngestionQueue
from serve.http_app import create_app
from store.batch_persister import BatchPersister
from store.payload_writer import ensure_directory

_LOGGER = get_logger(__name__)


class SinkServer:
    """Queue, persister and HTTP app sharing one configuration."""

    def __init__(self, config: SinkConfig) -> None:
        self.config = config
        self.queue = IngestionQueue(max_size=config.max_queue_size)
        self.persister = BatchPersister(
            self.queue,
            config.output_root,
            interval_seconds=config.flush_interval_seconds,
        )
        self.app = create_app(config, self.queue)

    def start_background(self) -> None:
        """Prepare the output root and start the persister in batch mode.

        Raises:
            DirectoryCreateError: If the output root cannot be created.
        """
        if self.config.write_mode == WRITE_MODE_BATCH:
            self.persister.start()
        else:
            ensure_directory(self.config.output_root)

    def stop_background(self) -> FlushReport:
        """Stop the persister, flushing anything still queued."""
        if self.config.write_mode != WRITE_MODE_BATCH:
            return FlushReport()
        return self.persister.stop(flush=True)

    def serve_forever(self) -> None:
        """Run the HTTP server until interrupted, then flush the queue."""
        self.start_background()
        _LOGGER.info(
            "server_starting",
            host=self.config.host,
            port=self.config.port,
            write_mode=self.config.write_mode,
            origin_check=self.config.origin_check_enabled,
        )
        try:
            self.app.run(host=self.config.host, port=self.config.port, threaded=True)
        finally:
            self.stop_background()
            _LOGGER.info("server_stopped")
