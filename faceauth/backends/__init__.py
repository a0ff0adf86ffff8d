"""Backend implementations for face authentication.

This package contains the dlib backend (HOG/CNN detector + ResNet-34
descriptors) and the factory that wires it into the services.
"""

from faceauth.backends.factory import (
    create_extractor,
    create_services,
    BackendType,
    ServiceComponents,
)

__all__ = [
    "create_extractor",
    "create_services",
    "BackendType",
    "ServiceComponents",
]
