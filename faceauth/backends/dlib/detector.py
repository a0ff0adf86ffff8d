"""Dlib face detector with confidence scores.

Uses the detectors bundled with the face_recognition library. Unlike
``face_recognition.face_locations``, the raw dlib calls used here expose a
confidence per face, which the extractor uses to pick the best one.
"""

from __future__ import annotations

from typing import List, Literal

import cv2
import face_recognition
import numpy as np

from faceauth.interfaces import BBox, Detection
from faceauth.logging_config import get_logger

logger = get_logger(__name__)


class DlibDetector:
    """Face detector using dlib via the face_recognition library.

    Supports two detection models:
    - HOG: Faster, suitable for CPU, score is the SVM margin
    - CNN: More accurate, requires GPU for real-time performance, score is
      the MMOD confidence

    Attributes:
        model: Detection model ("hog" or "cnn")
        upsample: Number of times to upsample image (higher = detect smaller faces)

    Example:
        >>> detector = DlibDetector(model="hog")
        >>> detections = detector.detect(frame)
        >>> print(f"Found {len(detections)} faces")
    """

    def __init__(
        self,
        model: Literal["hog", "cnn"] = "hog",
        upsample: int = 1,
    ):
        """Initialize dlib detector.

        Args:
            model: "hog" (faster, CPU-friendly) or "cnn" (more accurate)
            upsample: Number of times to upsample image before detection.
        """
        if model not in ("hog", "cnn"):
            raise ValueError(f"model must be 'hog' or 'cnn', got '{model}'")
        if upsample < 0:
            raise ValueError(f"upsample must be >= 0, got {upsample}")

        self.model = model
        self.upsample = upsample

        logger.info(f"Initialized dlib detector (model={model}, upsample={upsample})")

    def _raw_detections(self, frame_rgb: np.ndarray) -> List[tuple]:
        """Run dlib and return (rect, score) pairs."""
        if self.model == "cnn":
            mmod_rects = face_recognition.api.cnn_face_detector(frame_rgb, self.upsample)
            return [(r.rect, float(r.confidence)) for r in mmod_rects]

        # adjust_threshold=0.0 keeps dlib's default acceptance margin
        rects, scores, _ = face_recognition.api.face_detector.run(
            frame_rgb, self.upsample, 0.0
        )
        return [(rect, float(score)) for rect, score in zip(rects, scores)]

    def detect(self, frame_bgr: np.ndarray) -> List[Detection]:
        """Detect faces in an image.

        Args:
            frame_bgr: Input image in BGR format (OpenCV convention), shape [H, W, 3]

        Returns:
            List of Detection objects, sorted by score (descending).
            Empty list if no faces are detected.
        """
        if frame_bgr is None or frame_bgr.size == 0:
            logger.warning("Empty frame provided to detector")
            return []

        # face_recognition expects RGB
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        h, w = frame_bgr.shape[:2]

        detections = []
        for rect, score in self._raw_detections(frame_rgb):
            bbox = BBox(
                x1=rect.left(), y1=rect.top(), x2=rect.right(), y2=rect.bottom()
            ).clamp(w, h)
            detections.append(Detection(bbox=bbox, score=score))

        detections.sort(key=lambda d: d.score, reverse=True)

        if detections:
            logger.debug(f"Detected {len(detections)} faces (model={self.model})")

        return detections

    def __repr__(self) -> str:
        """String representation of detector."""
        return f"DlibDetector(model='{self.model}', upsample={self.upsample})"
