"""Runtime configuration model for jsonsink.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_ALLOWED_ORIGINS,
    DEFAULT_FLUSH_INTERVAL_SECONDS,
    DEFAULT_HOST,
    DEFAULT_OUTPUT_ROOT,
    DEFAULT_PORT,
    SUPPORTED_WRITE_MODES,
    WRITE_MODE_BATCH,
)
from core.errors import SinkConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(frozen=True)
class SinkConfig:
    """Validated runtime configuration.

    Attributes:
        host: Interface the HTTP server listens on.
        port: TCP port the HTTP server listens on.
        origin_check_enabled: Whether the Origin allowlist is enforced.
        allowed_origins: Exact Origin values accepted when checking is on.
        output_root: Root directory for persisted payload files.
        flush_interval_seconds: Batch persister wake interval.
        write_mode: ``batch`` (queued) or ``direct`` (synchronous) writes.
        max_queue_size: Optional queue bound; ``None`` means unbounded.
    """

    host: str
    port: int
    origin_check_enabled: bool
    allowed_origins: tuple[str, ...]
    output_root: Path
    flush_interval_seconds: float
    write_mode: str
    max_queue_size: int | None

    @classmethod
    def from_env(cls) -> "SinkConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SinkConfigError: If environment values are invalid.
        """
        output_root_value = os.getenv("JSONSINK_OUTPUT_ROOT", str(DEFAULT_OUTPUT_ROOT))
        return cls(
            host=os.getenv("JSONSINK_HOST", DEFAULT_HOST),
            port=parse_port(os.getenv("JSONSINK_PORT", str(DEFAULT_PORT))),
            origin_check_enabled=_parse_bool(
                "JSONSINK_ORIGIN_CHECK", os.getenv("JSONSINK_ORIGIN_CHECK", "true")
            ),
            allowed_origins=_parse_origins(os.getenv("JSONSINK_ALLOWED_ORIGINS")),
            output_root=Path(output_root_value).expanduser().resolve(),
            flush_interval_seconds=parse_flush_interval(
                os.getenv("JSONSINK_FLUSH_INTERVAL", str(DEFAULT_FLUSH_INTERVAL_SECONDS))
            ),
            write_mode=parse_write_mode(os.getenv("JSONSINK_WRITE_MODE", WRITE_MODE_BATCH)),
            max_queue_size=_parse_max_queue_size(os.getenv("JSONSINK_MAX_QUEUE_SIZE")),
        )


def parse_port(raw_value: str) -> int:
    """Parse and range-check a listen port.

    Args:
        raw_value: Raw port string.

    Returns:
        Port number in [1, 65535].

    Raises:
        SinkConfigError: If value is not an integer port.
    """
    try:
        port = int(raw_value)
    except ValueError as error:
        raise SinkConfigError(
            f"Invalid JSONSINK_PORT value: expected integer, got '{raw_value}'. "
            "Set JSONSINK_PORT to a numeric value."
        ) from error
    if not 1 <= port <= 65535:
        raise SinkConfigError(
            f"Invalid JSONSINK_PORT value: {port} is outside 1-65535. "
            "Choose a valid TCP port."
        )
    return port


def parse_flush_interval(raw_value: str) -> float:
    """Parse the persister interval in seconds.

    Args:
        raw_value: Raw interval string.

    Returns:
        Positive interval in seconds.

    Raises:
        SinkConfigError: If value is not a positive number.
    """
    try:
        interval = float(raw_value)
    except ValueError as error:
        raise SinkConfigError(
            f"Invalid JSONSINK_FLUSH_INTERVAL value: expected number, got '{raw_value}'."
        ) from error
    if interval <= 0:
        raise SinkConfigError(
            f"Invalid JSONSINK_FLUSH_INTERVAL value: {interval} must be greater than zero."
        )
    return interval


def parse_write_mode(raw_value: str) -> str:
    """Validate the write mode name."""
    write_mode = raw_value.strip().lower()
    if write_mode not in SUPPORTED_WRITE_MODES:
        raise SinkConfigError(
            f"Invalid JSONSINK_WRITE_MODE value '{raw_value}'. "
            f"Supported modes: {', '.join(SUPPORTED_WRITE_MODES)}."
        )
    return write_mode


def _parse_bool(variable_name: str, raw_value: str) -> bool:
    """Parse a boolean flag value.

    Args:
        variable_name: Environment variable name for error context.
        raw_value: Raw flag string.

    Returns:
        Parsed boolean.

    Raises:
        SinkConfigError: If value is not a recognized boolean literal.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise SinkConfigError(
        f"Invalid {variable_name} value '{raw_value}': expected one of "
        f"{', '.join(_TRUE_VALUES + _FALSE_VALUES)}."
    )


def _parse_origins(raw_value: str | None) -> tuple[str, ...]:
    """Split a comma-separated origin allowlist, keeping defaults when unset."""
    if raw_value is None:
        return DEFAULT_ALLOWED_ORIGINS
    return tuple(origin.strip() for origin in raw_value.split(",") if origin.strip())


def _parse_max_queue_size(raw_value: str | None) -> int | None:
    """Parse the optional queue bound.

    Args:
        raw_value: Raw bound string, or ``None`` when unset.

    Returns:
        Positive bound, or ``None`` for an unbounded queue.

    Raises:
        SinkConfigError: If value is not a positive integer.
    """
    if raw_value is None or not raw_value.strip():
        return None
    try:
        max_size = int(raw_value)
    except ValueError as error:
        raise SinkConfigError(
            f"Invalid JSONSINK_MAX_QUEUE_SIZE value: expected integer, got '{raw_value}'. "
            "Unset it for an unbounded queue."
        ) from error
    if max_size <= 0:
        raise SinkConfigError(
            f"Invalid JSONSINK_MAX_QUEUE_SIZE value: {max_size} must be greater than zero."
        )
    return max_size
