"""jsonsink exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Request-path errors carry the HTTP status the endpoint answers with.
"""

from __future__ import annotations


class SinkError(Exception):
    """Base exception for all jsonsink failures."""


class SinkConfigError(SinkError):
    """Raised for invalid runtime configuration."""


class SinkRequestError(SinkError):
    """Base for failures surfaced synchronously to the HTTP caller."""

    status_code = 400


class InvalidOriginError(SinkRequestError):
    """Raised when the request origin is not in the allowlist."""

    status_code = 403


class UnsupportedMethodError(SinkRequestError):
    """Raised for methods other than POST and OPTIONS."""

    status_code = 405


class BodyReadError(SinkRequestError):
    """Raised when the request body cannot be read."""


class MalformedJsonError(SinkRequestError):
    """Raised when the request body is not valid JSON."""


class MissingNameError(SinkRequestError):
    """Raised when the payload lacks a non-empty string ``name``."""


class QueueFullError(SinkRequestError):
    """Raised when a bounded ingestion queue cannot accept more items."""

    status_code = 503


class SinkPersistError(SinkError):
    """Base for payload persistence failures."""

    status_code = 500


class DirectoryCreateError(SinkPersistError):
    """Raised when an output directory cannot be created."""


class FileWriteError(SinkPersistError):
    """Raised when a payload file cannot be written."""
