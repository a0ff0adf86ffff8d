"""Dlib embedder for face descriptors using the face_recognition library.

``face_recognition.face_encodings`` locates the facial landmarks inside the
given face region (68-point or 5-point shape predictor) and feeds the
aligned face to dlib's ResNet-34 model, producing a 128-D descriptor.
"""

from __future__ import annotations

from typing import Literal

import cv2
import face_recognition
import numpy as np

from faceauth.errors import ExtractionError, NoFaceDetected
from faceauth.interfaces import BBox
from faceauth.logging_config import get_logger

logger = get_logger(__name__)


class DlibEmbedder:
    """Dlib embedder for extracting 128-D face descriptors.

    Descriptors are returned as computed by dlib, without normalization, so
    Euclidean distances keep their usual scale (about 0.6 separates the same
    person from different people).

    Attributes:
        model: Landmark model ("large" = 68 points, "small" = 5 points)
        num_jitters: Number of times to re-sample face for encoding
        embedding_dim: Dimension of output descriptors (128 for dlib)

    Example:
        >>> embedder = DlibEmbedder(model="large")
        >>> descriptor = embedder.embed_from_frame(frame, detection.bbox)
        >>> assert descriptor.shape == (128,)
    """

    def __init__(
        self,
        model: Literal["large", "small"] = "large",
        num_jitters: int = 1,
    ):
        """Initialize dlib embedder.

        Args:
            model: Landmark model used to align the face before encoding.
            num_jitters: Number of times to re-sample the face when calculating
                        encoding. Higher values are more accurate but slower.
        """
        if model not in ("large", "small"):
            raise ValueError(f"model must be 'large' or 'small', got '{model}'")
        if num_jitters < 1:
            raise ValueError(f"num_jitters must be >= 1, got {num_jitters}")

        self.model = model
        self.num_jitters = num_jitters
        self.embedding_dim = 128

        logger.info(
            f"Initialized dlib embedder (model={model}, num_jitters={num_jitters})"
        )

    def embed_from_frame(self, frame_bgr: np.ndarray, bbox: BBox) -> np.ndarray:
        """Extract the descriptor of the face inside ``bbox``.

        Args:
            frame_bgr: Full frame in BGR format.
            bbox: Face region from the detector.

        Returns:
            Descriptor vector, shape [128], dtype float64.

        Raises:
            NoFaceDetected: If no encoding could be computed for the region.
            ExtractionError: If dlib returns an unexpected descriptor size.
        """
        if frame_bgr is None or frame_bgr.size == 0:
            raise ValueError("Empty frame provided")

        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        encodings = face_recognition.face_encodings(
            frame_rgb,
            known_face_locations=[bbox.to_trbl()],
            num_jitters=self.num_jitters,
            model=self.model,
        )

        if not encodings:
            raise NoFaceDetected("Could not compute face encoding at given location")

        descriptor = np.asarray(encodings[0], dtype=np.float64)

        if descriptor.shape[0] != self.embedding_dim:
            raise ExtractionError(
                f"Unexpected descriptor dimension {descriptor.shape[0]}, "
                f"expected {self.embedding_dim}"
            )

        return descriptor

    def __repr__(self) -> str:
        """String representation of embedder."""
        return (
            f"DlibEmbedder(model='{self.model}', "
            f"num_jitters={self.num_jitters}, dim={self.embedding_dim})"
        )
