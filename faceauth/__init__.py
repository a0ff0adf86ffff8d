"""Face authentication engine.

Matches a probe face image against enrolled users and classifies the best
match into an access decision.
"""

from faceauth.decision import GRANT_THRESHOLD, REPORT_THRESHOLD, decide
from faceauth.errors import (
    DimensionMismatch,
    ExtractionError,
    FaceAuthError,
    IdentityNotFound,
    ImageUnavailable,
    NoFaceDetected,
)
from faceauth.interfaces import Candidate, Decision, EnrolledIdentity
from faceauth.roster import eligible
from faceauth.scoring import score

__version__ = "0.1.0"

__all__ = [
    "GRANT_THRESHOLD",
    "REPORT_THRESHOLD",
    "decide",
    "eligible",
    "score",
    "Candidate",
    "Decision",
    "EnrolledIdentity",
    "FaceAuthError",
    "NoFaceDetected",
    "DimensionMismatch",
    "ImageUnavailable",
    "ExtractionError",
    "IdentityNotFound",
]
