"""Descriptor extraction from raw image bytes.

The extractor decodes an image, runs a face detector, keeps the single
most confident face and asks an embedder for its descriptor. Images with
several faces are reduced to that one face; the others are ignored.
"""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from faceauth.errors import ExtractionError, FaceAuthError, ImageUnavailable, NoFaceDetected
from faceauth.interfaces import Detector, Embedder, FaceDescriptor
from faceauth.logging_config import get_logger

logger = get_logger(__name__)


def decode_image(image_bytes: bytes) -> np.ndarray:
    """Decode encoded image bytes (JPEG, PNG, ...) into a BGR array.

    Raises:
        ImageUnavailable: If the bytes are empty or cannot be decoded.
    """
    if not image_bytes:
        raise ImageUnavailable("Empty image data")

    buffer = np.frombuffer(image_bytes, dtype=np.uint8)
    frame = cv2.imdecode(buffer, cv2.IMREAD_COLOR)

    if frame is None or frame.size == 0:
        raise ImageUnavailable("Could not decode image data")

    return frame


class DescriptorExtractor:
    """Turns image bytes into a single face descriptor.

    Attributes:
        detector: Face detector
        embedder: Descriptor extractor for a detected face region

    Example:
        >>> extractor = DescriptorExtractor(DlibDetector(), DlibEmbedder())
        >>> descriptor = extractor.extract(Path("alice.jpg").read_bytes())
        >>> descriptor.shape
        (128,)
    """

    def __init__(self, detector: Detector, embedder: Embedder):
        self.detector = detector
        self.embedder = embedder

    def extract(self, image_bytes: bytes) -> FaceDescriptor:
        """Extract the descriptor of the most confident face in an image.

        Args:
            image_bytes: Encoded image bytes

        Returns:
            Descriptor, shape [D].

        Raises:
            ImageUnavailable: If the bytes cannot be decoded.
            NoFaceDetected: If the detector finds no face.
            ExtractionError: If the detector or embedder fails.
        """
        frame = decode_image(image_bytes)

        try:
            detections = self.detector.detect(frame)
        except FaceAuthError:
            raise
        except Exception as e:
            raise ExtractionError(f"Face detection failed: {e}") from e

        if not detections:
            raise NoFaceDetected("No face detected in image")

        # max() keeps the first of equally scored faces
        best = max(detections, key=lambda d: d.score)
        if len(detections) > 1:
            logger.debug(
                f"Detected {len(detections)} faces, using best (score={best.score:.3f})"
            )

        h, w = frame.shape[:2]
        bbox = best.bbox.clamp(w, h)

        try:
            descriptor = self.embedder.embed_from_frame(frame, bbox)
        except FaceAuthError:
            raise
        except Exception as e:
            raise ExtractionError(f"Descriptor computation failed: {e}") from e

        return np.asarray(descriptor, dtype=np.float64)

    def extract_file(self, path: str | Path) -> FaceDescriptor:
        """Extract the descriptor from an image file.

        Raises:
            ImageUnavailable: If the file cannot be read or decoded.
            NoFaceDetected: If the detector finds no face.
        """
        path = Path(path)
        try:
            image_bytes = path.read_bytes()
        except OSError as e:
            raise ImageUnavailable(
                f"Could not read image file {path}: {e}", reference=str(path)
            ) from e

        return self.extract(image_bytes)

    def __repr__(self) -> str:
        """String representation of extractor."""
        return f"DescriptorExtractor(detector={self.detector}, embedder={self.embedder})"
