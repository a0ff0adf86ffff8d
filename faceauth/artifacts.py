"""Transient probe artifacts.

A probe image is written to a uniquely named file for the duration of one
comparison request and removed on every exit path.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from faceauth.logging_config import get_logger

logger = get_logger(__name__)


@contextmanager
def probe_artifact(
    image_bytes: bytes,
    temp_dir: str | Path,
    filename: str = "probe.jpg",
) -> Iterator[Path]:
    """Write probe bytes to a unique temp file and delete it on exit.

    Args:
        image_bytes: Raw probe image bytes
        temp_dir: Directory for the artifact (created if missing)
        filename: Original upload name; only its base name is kept

    Yields:
        Path of the written artifact.

    Example:
        >>> with probe_artifact(data, "uploads/temp", "me.jpg") as path:
        ...     descriptor = extractor.extract_file(path)
    """
    temp_dir = Path(temp_dir)
    temp_dir.mkdir(parents=True, exist_ok=True)

    base_name = Path(filename).name or "probe"
    path = temp_dir / f"{uuid.uuid4().hex}-{base_name}"

    try:
        path.write_bytes(image_bytes)
        logger.debug(f"Created probe artifact {path}")
        yield path
    finally:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed probe artifact {path}")
