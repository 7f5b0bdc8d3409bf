"""Public SDK surface for jsonsink.

This module provides a stable import path for embedding the server.
It re-exports the config model, the app factory and the queue/persister pair.
"""

from __future__ import annotations

from core.config import SinkConfig
from core.types import FlushReport, QueuedRequest, ValidatedPayload
from ingest.ingestion_queue import IngestionQueue
from ingest.origin_filter import is_origin_allowed
from ingest.payload_validator import validate_payload
from serve.http_app import create_app
from serve.sink_server import SinkServer
from store.batch_persister import BatchPersister

__all__ = [
    "BatchPersister",
    "FlushReport",
    "IngestionQueue",
    "QueuedRequest",
    "SinkConfig",
    "SinkServer",
    "ValidatedPayload",
    "create_app",
    "is_origin_allowed",
    "validate_payload",
]
