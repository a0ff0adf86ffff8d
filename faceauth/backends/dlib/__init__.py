"""dlib backend for face authentication.

Components:
- DlibDetector: HOG or CNN face detection with confidence scores
- DlibEmbedder: 128-D face descriptors using ResNet-34
"""

from faceauth.backends.dlib.detector import DlibDetector
from faceauth.backends.dlib.embedder import DlibEmbedder

__all__ = [
    "DlibDetector",
    "DlibEmbedder",
]
