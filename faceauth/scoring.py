"""Similarity scoring between face descriptors.

Descriptors are compared with the Euclidean distance, which is then mapped
to a percentage: ``similarity = (1 - distance) * 100``. Distances above 1
would give negative values, so the result is clamped to [0, 100].
"""

from __future__ import annotations

import numpy as np

from faceauth.errors import DimensionMismatch
from faceauth.interfaces import FaceDescriptor

MIN_SIMILARITY = 0.0
MAX_SIMILARITY = 100.0


def _as_vector(descriptor: FaceDescriptor) -> np.ndarray:
    vec = np.asarray(descriptor, dtype=np.float64)
    if vec.ndim != 1:
        raise DimensionMismatch(f"Expected a 1-D descriptor, got shape {vec.shape}")
    return vec


def euclidean_distance(d1: FaceDescriptor, d2: FaceDescriptor) -> float:
    """Compute the Euclidean distance between two descriptors.

    Args:
        d1: First descriptor, shape [D]
        d2: Second descriptor, shape [D]

    Returns:
        Non-negative distance. 0.0 for identical descriptors.

    Raises:
        DimensionMismatch: If the descriptors are not 1-D or differ in length.
    """
    v1 = _as_vector(d1)
    v2 = _as_vector(d2)

    if v1.shape[0] != v2.shape[0]:
        raise DimensionMismatch(
            f"Descriptor length mismatch: {v1.shape[0]} vs {v2.shape[0]}"
        )

    return float(np.linalg.norm(v1 - v2))


def distance_to_similarity(distance: float) -> float:
    """Map a Euclidean distance to a similarity percentage in [0, 100]."""
    similarity = (1.0 - distance) * 100.0
    return float(np.clip(similarity, MIN_SIMILARITY, MAX_SIMILARITY))


def score(d1: FaceDescriptor, d2: FaceDescriptor) -> float:
    """Compute the similarity percentage between two descriptors.

    The score is symmetric and deterministic: ``score(a, b) == score(b, a)``.

    Args:
        d1: First descriptor, shape [D]
        d2: Second descriptor, shape [D]

    Returns:
        Similarity in [0, 100]; 100 for identical descriptors.

    Raises:
        DimensionMismatch: If the descriptors differ in length.

    Example:
        >>> a = np.zeros(128)
        >>> b = np.zeros(128); b[0] = 0.3
        >>> round(score(a, b), 2)
        70.0
    """
    return distance_to_similarity(euclidean_distance(d1, d2))
