"""jsonsink CLI entry point.

This module parses server flags and maps them onto the runtime config.
Flags override environment values for a single run.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from core.config import SinkConfig, parse_flush_interval, parse_port
from core.constants import SUPPORTED_WRITE_MODES
from core.errors import SinkConfigError, SinkPersistError
from serve.sink_server import SinkServer


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="jsonsink",
        description="Accept JSON payloads over HTTP and save them under a run directory tree",
    )
    parser.add_argument("--host", help="The host to listen on (JSONSINK_HOST)")
    parser.add_argument("--port", help="The port to listen on (JSONSINK_PORT)")
    parser.add_argument(
        "--enable-origin-check",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Enable or disable origin check (JSONSINK_ORIGIN_CHECK)",
    )
    parser.add_argument("--output-root", help="Directory for saved payloads (JSONSINK_OUTPUT_ROOT)")
    parser.add_argument(
        "--flush-interval",
        help="Seconds between batch writes (JSONSINK_FLUSH_INTERVAL)",
    )
    parser.add_argument(
        "--write-mode",
        choices=SUPPORTED_WRITE_MODES,
        help="Queue payloads for batch writes or write each one directly",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the jsonsink server.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
    except SinkConfigError as error:
        print(f"config_error={error}")
        return 2
    server = SinkServer(config)
    try:
        server.serve_forever()
    except SinkPersistError as error:
        print(f"startup_error={error}")
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


def _build_config(args: argparse.Namespace) -> SinkConfig:
    """Build config from the environment with CLI overrides applied.

    Args:
        args: Parsed CLI args.

    Returns:
        Validated config.

    Raises:
        SinkConfigError: If an environment value or flag is invalid.
    """
    config = SinkConfig.from_env()
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = parse_port(args.port)
    if args.enable_origin_check is not None:
        overrides["origin_check_enabled"] = args.enable_origin_check
    if args.output_root:
        overrides["output_root"] = Path(args.output_root).expanduser().resolve()
    if args.flush_interval is not None:
        overrides["flush_interval_seconds"] = parse_flush_interval(args.flush_interval)
    if args.write_mode:
        overrides["write_mode"] = args.write_mode
    return replace(config, **overrides)
