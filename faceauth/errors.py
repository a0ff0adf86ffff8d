"""Error taxonomy for the face authentication engine.

Probe-side failures abort a comparison request. The same errors raised while
processing one enrolled identity are soft: the ranker logs them and skips
that identity.
"""

from __future__ import annotations

from typing import Optional


class FaceAuthError(Exception):
    """Base class for all engine errors.

    Attributes:
        identity_id: Enrolled identity being processed, if any
        reference: Image reference or path involved, if any
    """

    kind = "error"

    def __init__(
        self,
        message: str,
        *,
        identity_id: Optional[str] = None,
        reference: Optional[str] = None,
    ):
        super().__init__(message)
        self.identity_id = identity_id
        self.reference = reference


class NoFaceDetected(FaceAuthError):
    """Raised when extraction finds zero faces in an image."""

    kind = "no_face_detected"


class DimensionMismatch(FaceAuthError):
    """Raised when two descriptors cannot be compared."""

    kind = "dimension_mismatch"


class ImageUnavailable(FaceAuthError):
    """Raised when image bytes are missing, unreadable or undecodable."""

    kind = "image_unavailable"


class ExtractionError(FaceAuthError):
    """Raised when the detection or embedding backend itself fails."""

    kind = "extraction_error"


class IdentityNotFound(FaceAuthError):
    """Raised when a roster operation targets an unknown identity."""

    kind = "identity_not_found"
