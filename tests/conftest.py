"""Shared fixtures and fakes for the test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Union

import numpy as np
import pytest

from faceauth.errors import ImageUnavailable, NoFaceDetected

DIM = 128


def descriptor_at(similarity: float, dim: int = DIM) -> np.ndarray:
    """Descriptor whose similarity to the zero probe is ``similarity``."""
    descriptor = np.zeros(dim, dtype=np.float64)
    descriptor[0] = (100.0 - similarity) / 100.0
    return descriptor


class FakeImageStore:
    """Image store backed by a dict of reference -> bytes."""

    def __init__(self, images: Dict[str, bytes]):
        self.images = dict(images)

    def resolve(self, image_reference: str) -> bytes:
        try:
            return self.images[image_reference]
        except KeyError:
            raise ImageUnavailable(
                f"Image not found: {image_reference}", reference=image_reference
            ) from None


class FakeExtractor:
    """Extractor mapping image bytes to prepared descriptors.

    Bytes mapped to ``None`` behave like an image without a face.
    """

    def __init__(self, descriptors: Dict[bytes, Union[np.ndarray, None]]):
        self.descriptors = dict(descriptors)
        self.calls = []

    def extract(self, image_bytes: bytes) -> np.ndarray:
        self.calls.append(image_bytes)
        if image_bytes not in self.descriptors:
            raise ImageUnavailable("Could not decode image data")
        descriptor = self.descriptors[image_bytes]
        if descriptor is None:
            raise NoFaceDetected("No face detected in image")
        return descriptor

    def extract_file(self, path: Union[str, Path]) -> np.ndarray:
        return self.extract(Path(path).read_bytes())


@pytest.fixture
def probe_descriptor():
    """Zero descriptor used as the probe."""
    return np.zeros(DIM, dtype=np.float64)
