"""Shared typed models.

This module defines immutable data models passed between the HTTP
endpoint, the ingestion queue and the persistence layer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidatedPayload:
    """Identifiers extracted from an accepted JSON body.

    Attributes:
        name: Required non-empty identifier, used as base filename.
        major_run_id: Optional grouping directory, empty when absent.
        minor_run_id: Optional secondary grouping id, empty when absent.
    """

    name: str
    major_run_id: str = ""
    minor_run_id: str = ""


@dataclass(frozen=True)
class QueuedRequest:
    """One accepted submission awaiting persistence.

    Attributes:
        name: Required identifier, used as base filename.
        raw_body: Exact received bytes, written verbatim.
        major_run_id: Subdirectory under the output root, empty for none.
        minor_run_id: Secondary grouping id, not used for placement.
    """

    name: str
    raw_body: bytes
    major_run_id: str = ""
    minor_run_id: str = ""

    @classmethod
    def from_payload(cls, payload: ValidatedPayload, raw_body: bytes) -> "QueuedRequest":
        """Pair validated identifiers with the untouched request body."""
        return cls(
            name=payload.name,
            raw_body=bytes(raw_body),
            major_run_id=payload.major_run_id,
            minor_run_id=payload.minor_run_id,
        )


@dataclass(frozen=True)
class FlushReport:
    """Outcome of one persister drain-and-write cycle."""

    drained_count: int = 0
    written_count: int = 0
    failed_count: int = 0
