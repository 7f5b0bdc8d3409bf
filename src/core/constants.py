"""Core constants used across jsonsink modules.

This module centralizes defaults, header values and response messages.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_OUTPUT_ROOT = Path("json_out")
DEFAULT_FLUSH_INTERVAL_SECONDS = 5.0
DEFAULT_ALLOWED_ORIGINS = (
    "https://yudshj.synology.me",
    "http://127.0.0.1",
)
WRITE_MODE_BATCH = "batch"
WRITE_MODE_DIRECT = "direct"
SUPPORTED_WRITE_MODES = (WRITE_MODE_BATCH, WRITE_MODE_DIRECT)
SAVE_ROUTE = "/save"
PAYLOAD_FILE_SUFFIX = ".json"
NAME_FIELD = "name"
MAJOR_RUN_ID_FIELD = "majorRunId"
MINOR_RUN_ID_FIELD = "minorRunId"
ALLOWED_METHODS_HEADER = "POST, OPTIONS"
ALLOWED_HEADERS_HEADER = "Content-Type"
SUCCESS_MESSAGE = "JSON received successfully"
INVALID_ORIGIN_MESSAGE = "Forbidden: Invalid origin"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"
BODY_READ_FAILED_MESSAGE = "Unable to read request body"
INVALID_JSON_MESSAGE = "Invalid JSON"
MISSING_NAME_MESSAGE = "Missing or invalid 'name' field in JSON"
QUEUE_FULL_MESSAGE = "Ingestion queue is full"
PERSIST_FAILED_MESSAGE = "Unable to save JSON"
