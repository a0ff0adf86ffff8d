"""Directory-backed storage for enrolled images."""

from __future__ import annotations

from pathlib import Path

from faceauth.errors import ImageUnavailable
from faceauth.logging_config import get_logger

logger = get_logger(__name__)


class DirectoryImageStore:
    """Resolve image references to files inside a root directory.

    A reference is a file name relative to ``root``. References that would
    point outside ``root`` are treated as unavailable.

    Attributes:
        root: Directory holding the enrolled images
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Initialized DirectoryImageStore at {self.root}")

    def _path_for(self, image_reference: str) -> Path:
        root = self.root.resolve()
        path = (root / image_reference).resolve()
        if root not in path.parents:
            raise ImageUnavailable(
                f"Image reference escapes store root: {image_reference}",
                reference=image_reference,
            )
        return path

    def resolve(self, image_reference: str) -> bytes:
        """Read the bytes of a stored image.

        Args:
            image_reference: File name relative to the store root

        Returns:
            Raw image bytes.

        Raises:
            ImageUnavailable: If the file is missing or cannot be read.
        """
        path = self._path_for(image_reference)

        if not path.is_file():
            raise ImageUnavailable(
                f"Image not found: {image_reference}", reference=image_reference
            )

        try:
            return path.read_bytes()
        except OSError as e:
            raise ImageUnavailable(
                f"Could not read image {image_reference}: {e}",
                reference=image_reference,
            ) from e

    def save(self, image_reference: str, data: bytes) -> str:
        """Store image bytes under the base name of ``image_reference``.

        An existing file with the same name is overwritten.

        Returns:
            The reference to use with ``resolve``.
        """
        reference = Path(image_reference).name
        if not reference:
            raise ValueError(f"Invalid image reference: {image_reference!r}")

        path = self._path_for(reference)
        path.write_bytes(data)

        logger.info(f"Saved image {reference} ({len(data)} bytes)")
        return reference

    def __repr__(self) -> str:
        """String representation of the store."""
        return f"DirectoryImageStore(root='{self.root}')"
