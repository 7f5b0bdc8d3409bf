"""Origin allowlist check for cross-origin submissions."""

from __future__ import annotations

from typing import Iterable

from core.constants import DEFAULT_ALLOWED_ORIGINS


def is_origin_allowed(
    origin: str,
    check_enabled: bool,
    allowed_origins: Iterable[str] = DEFAULT_ALLOWED_ORIGINS,
) -> bool:
    """Decide whether a request origin may submit payloads.

    Comparison is exact string equality: no wildcards and no scheme or
    port normalization.

    Args:
        origin: Raw ``Origin`` header value, empty when absent.
        check_enabled: When false every origin is allowed.
        allowed_origins: Static allowlist of permitted origins.

    Returns:
        True if the request may proceed.
    """
    if not check_enabled:
        return True
    return origin in frozenset(allowed_origins)
