"""Flask application exposing the ``/save`` ingestion endpoint.

Request flow: origin check, method dispatch, body read,
validation, then either enqueue (batch mode) or a synchronous write
(direct mode). Request-path errors become plain-text responses.
Once the origin passes, every response, errors included, carries the
CORS headers.
"""

from __future__ import annotations

from flask import Flask, Response, g, request
from werkzeug.exceptions import ClientDisconnected

from core.config import SinkConfig
from core.constants import (
    ALLOWED_HEADERS_HEADER,
    ALLOWED_METHODS_HEADER,
    BODY_READ_FAILED_MESSAGE,
    INVALID_ORIGIN_MESSAGE,
    METHOD_NOT_ALLOWED_MESSAGE,
    PERSIST_FAILED_MESSAGE,
    SAVE_ROUTE,
    SUCCESS_MESSAGE,
    WRITE_MODE_DIRECT,
)
from core.errors import (
    BodyReadError,
    InvalidOriginError,
    SinkPersistError,
    SinkRequestError,
    UnsupportedMethodError,
)
from core.logging_config import get_logger
from core.types import QueuedRequest
from ingest.ingestion_queue import IngestionQueue
from ingest.origin_filter import is_origin_allowed
from ingest.payload_validator import validate_payload
from store.payload_writer import write_payload

_LOGGER = get_logger(__name__)

# Every method is routed to the view so the origin check runs before the 405.
_ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(config: SinkConfig, queue: IngestionQueue) -> Flask:
    """Build the Flask application around a shared ingestion queue.

    Args:
        config: Validated runtime configuration.
        queue: Queue drained by the batch persister.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    allowed_origins = frozenset(config.allowed_origins)

    @app.route(SAVE_ROUTE, methods=_ROUTED_METHODS)
    def save_json() -> Response:
        origin = request.headers.get("Origin", "")
        if not is_origin_allowed(origin, config.origin_check_enabled, allowed_origins):
            _LOGGER.warning("origin_rejected", origin=origin)
            raise InvalidOriginError(INVALID_ORIGIN_MESSAGE)
        g.cors_origin = origin
        if request.method == "OPTIONS":
            return Response(status=200)
        if request.method != "POST":
            raise UnsupportedMethodError(METHOD_NOT_ALLOWED_MESSAGE)
        body = _read_body()
        item = QueuedRequest.from_payload(validate_payload(body), body)
        if config.write_mode == WRITE_MODE_DIRECT:
            _write_direct(config, item)
        else:
            queue.enqueue(item)
            _LOGGER.debug("payload_queued", name=item.name, major_run_id=item.major_run_id)
        return _plain_text(SUCCESS_MESSAGE, 200)

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        origin = g.get("cors_origin")
        if origin is None:
            return response
        return _with_cors_headers(response, origin)

    @app.errorhandler(SinkRequestError)
    def handle_request_error(error: SinkRequestError) -> Response:
        return _plain_text(str(error), error.status_code)

    @app.errorhandler(SinkPersistError)
    def handle_persist_error(error: SinkPersistError) -> Response:
        return _plain_text(PERSIST_FAILED_MESSAGE, error.status_code)

    return app


def _read_body() -> bytes:
    """Read the full raw request body."""
    try:
        return request.get_data(cache=False)
    except (ClientDisconnected, OSError) as error:
        _LOGGER.warning("body_read_failed", error=str(error))
        raise BodyReadError(BODY_READ_FAILED_MESSAGE) from error


def _write_direct(config: SinkConfig, item: QueuedRequest) -> None:
    """Persist one payload synchronously, flat under the output root."""
    try:
        target_path = write_payload(config.output_root, item, use_major_run_id=False)
    except SinkPersistError as error:
        _LOGGER.error("payload_write_failed", name=item.name, error=str(error))
        raise
    _LOGGER.debug("payload_written", name=item.name, path=str(target_path))


def _with_cors_headers(response: Response, origin: str) -> Response:
    response.headers["Access-Control-Allow-Origin"] = origin
    response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS_HEADER
    response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS_HEADER
    return response


def _plain_text(message: str, status_code: int) -> Response:
    return Response(message, status=status_code, mimetype="text/plain")
