"""Filesystem layout and verbatim writes for accepted payloads.

Files land at ``<output_root>/<major_run_id>/<name>.json``, or directly
under the output root when no major run id is given.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import PAYLOAD_FILE_SUFFIX
from core.errors import DirectoryCreateError, FileWriteError
from core.types import QueuedRequest


def resolve_target_path(output_root: Path, name: str, major_run_id: str = "") -> Path:
    """Compute the file path for one payload.

    Args:
        output_root: Root directory for persisted payloads.
        name: Payload name, used as base filename.
        major_run_id: Optional subdirectory name.

    Returns:
        Target file path.

    Raises:
        FileWriteError: If the path would escape the output root.
    """
    file_name = f"{name.lstrip('/')}{PAYLOAD_FILE_SUFFIX}"
    target_path = _target_directory(output_root, major_run_id) / file_name
    try:
        resolved_path = target_path.resolve()
    except (OSError, ValueError) as error:
        raise FileWriteError(f"Invalid target path {target_path!r}: {error}.") from error
    if not resolved_path.is_relative_to(output_root.resolve()):
        raise FileWriteError(
            f"Refusing to write {target_path}: resolved path is outside output root {output_root}."
        )
    return target_path


def ensure_directory(directory: Path) -> None:
    """Create a directory and its parents when absent.

    Raises:
        DirectoryCreateError: If the directory cannot be created.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise DirectoryCreateError(
            f"Unable to create output directory {directory}: {error}."
        ) from error


def write_payload(output_root: Path, item: QueuedRequest, use_major_run_id: bool = True) -> Path:
    """Write one payload verbatim, overwriting any previous file.

    Args:
        output_root: Root directory for persisted payloads.
        item: Accepted request to persist.
        use_major_run_id: Place the file under the major run subdirectory.

    Returns:
        Path of the written file.

    Raises:
        DirectoryCreateError: If the target directory cannot be created.
        FileWriteError: If the file cannot be written.
    """
    major_run_id = item.major_run_id if use_major_run_id else ""
    target_path = resolve_target_path(output_root, item.name, major_run_id)
    ensure_directory(_target_directory(output_root, major_run_id))
    try:
        target_path.write_bytes(item.raw_body)
    except OSError as error:
        raise FileWriteError(f"Unable to write file {target_path}: {error}.") from error
    return target_path


def _target_directory(output_root: Path, major_run_id: str) -> Path:
    # Leading separators stay under the root instead of replacing it.
    relative_run_dir = major_run_id.lstrip("/")
    return output_root / relative_run_dir if relative_run_dir else output_root
