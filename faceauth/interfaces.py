"""Core interfaces and data structures for the face authentication engine.

This module defines the data classes passed between components and the
Protocols the engine depends on, so that detectors, embedders, roster
stores and image stores can be swapped without touching ranking logic.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

# Fixed-length embedding vector, shape [D]
FaceDescriptor = np.ndarray


@dataclass
class BBox:
    """Bounding box for a detected face.

    Attributes:
        x1: Left edge x-coordinate (pixels)
        y1: Top edge y-coordinate (pixels)
        x2: Right edge x-coordinate (pixels)
        y2: Bottom edge y-coordinate (pixels)
    """

    x1: int
    y1: int
    x2: int
    y2: int

    @property
    def width(self) -> int:
        """Get bounding box width in pixels."""
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        """Get bounding box height in pixels."""
        return self.y2 - self.y1

    @property
    def area(self) -> int:
        """Get bounding box area in square pixels."""
        return self.width * self.height

    def to_trbl(self) -> Tuple[int, int, int, int]:
        """Return the box as (top, right, bottom, left), the face_recognition order."""
        return (self.y1, self.x2, self.y2, self.x1)

    def clamp(self, img_width: int, img_height: int) -> BBox:
        """Clamp bounding box coordinates to image boundaries.

        Args:
            img_width: Image width in pixels
            img_height: Image height in pixels

        Returns:
            New BBox with clamped coordinates.
        """
        return BBox(
            x1=max(0, min(self.x1, img_width - 1)),
            y1=max(0, min(self.y1, img_height - 1)),
            x2=max(0, min(self.x2, img_width - 1)),
            y2=max(0, min(self.y2, img_height - 1)),
        )


@dataclass
class Detection:
    """Face detection result.

    Attributes:
        bbox: Bounding box around detected face
        score: Detector confidence. HOG scores are SVM margins and are not
               bounded to [0, 1]; only their ordering is meaningful.
    """

    bbox: BBox
    score: float

    def __repr__(self) -> str:
        """String representation of detection."""
        return f"Detection(bbox={self.bbox}, score={self.score:.3f})"


@dataclass
class EnrolledIdentity:
    """A registered user with a stored reference image.

    Attributes:
        identity_id: Stable handle, e.g. the username
        image_reference: Opaque locator resolved by an ImageStore
        active: Only active identities are compared against a probe
    """

    identity_id: str
    image_reference: str
    active: bool = True


@dataclass
class Candidate:
    """One scored comparison between the probe and an eligible identity.

    Attributes:
        identity_id: Identity the probe was compared against
        similarity: Similarity percentage, clamped to [0, 100]
        image_reference: Reference of the enrolled image used
        distance: Raw Euclidean distance between the descriptors
    """

    identity_id: str
    similarity: float
    image_reference: str
    distance: float

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Candidate(identity_id='{self.identity_id}', "
            f"similarity={self.similarity:.2f}, distance={self.distance:.4f})"
        )


@dataclass(frozen=True)
class Decision:
    """Terminal output of one comparison request.

    Attributes:
        access_granted: True only when the best candidate clears the grant threshold
        matched_identity_id: Best identity when it reaches the report threshold, else None
    """

    access_granted: bool
    matched_identity_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Return the decision as a plain dict."""
        return asdict(self)


@runtime_checkable
class Detector(Protocol):
    """Protocol for face detection models."""

    def detect(self, frame_bgr: np.ndarray) -> List[Detection]:
        """Detect faces in an image.

        Args:
            frame_bgr: Input image in BGR format (OpenCV convention), shape [H, W, 3]

        Returns:
            List of Detection objects, possibly empty.
        """
        ...


@runtime_checkable
class Embedder(Protocol):
    """Protocol for face descriptor computation."""

    def embed_from_frame(self, frame_bgr: np.ndarray, bbox: BBox) -> FaceDescriptor:
        """Compute the descriptor of the face inside ``bbox``.

        Args:
            frame_bgr: Full image in BGR format, shape [H, W, 3]
            bbox: Face region returned by a Detector

        Returns:
            Fixed-length descriptor, shape [D].
        """
        ...


@runtime_checkable
class RosterStore(Protocol):
    """Roster mutation interface consumed by the engine."""

    def list_all(self) -> List[EnrolledIdentity]:
        """Return a snapshot of every enrolled identity, in enrollment order."""
        ...

    def set_active(self, identity_id: str, active: bool) -> None:
        """Activate or deactivate an identity."""
        ...

    def enroll(self, identity_id: str, image_reference: str) -> EnrolledIdentity:
        """Register a new active identity."""
        ...


@runtime_checkable
class ImageStore(Protocol):
    """Image resolution interface consumed by the engine."""

    def resolve(self, image_reference: str) -> bytes:
        """Return the stored image bytes.

        Raises:
            ImageUnavailable: If the image is missing or unreadable.
        """
        ...
