"""Ranking of eligible identities against a probe descriptor.

Each eligible identity is compared independently. A failure for one
identity (missing image, no face, mismatched descriptor) is logged and that
identity is left out; the remaining identities are still ranked.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from faceauth.errors import FaceAuthError
from faceauth.extractor import DescriptorExtractor
from faceauth.interfaces import Candidate, EnrolledIdentity, FaceDescriptor, ImageStore
from faceauth.logging_config import get_logger
from faceauth.scoring import distance_to_similarity, euclidean_distance

logger = get_logger(__name__)


class MatchRanker:
    """Scores a probe against eligible identities and ranks the results.

    Comparisons run on a bounded thread pool. Results are collected in the
    order of the eligible list, then stably sorted by similarity, so the
    output never depends on task completion order.

    Attributes:
        extractor: Descriptor extractor for enrolled images
        image_store: Resolves image references to bytes
        max_workers: Pool size; 1 runs comparisons in the calling thread

    Example:
        >>> ranker = MatchRanker(extractor, DirectoryImageStore("uploads"))
        >>> ranked = ranker.rank(probe_descriptor, eligible(store.list_all()))
        >>> ranked[0].identity_id if ranked else None
        'alice'
    """

    def __init__(
        self,
        extractor: DescriptorExtractor,
        image_store: ImageStore,
        max_workers: int = 4,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self.extractor = extractor
        self.image_store = image_store
        self.max_workers = max_workers

    def compare(self, probe: FaceDescriptor, identity: EnrolledIdentity) -> Candidate:
        """Score the probe against one enrolled identity.

        Raises:
            ImageUnavailable: If the enrolled image cannot be resolved or decoded.
            NoFaceDetected: If the enrolled image has no face.
            DimensionMismatch: If the descriptors differ in length.
        """
        image_bytes = self.image_store.resolve(identity.image_reference)
        descriptor = self.extractor.extract(image_bytes)
        distance = euclidean_distance(probe, descriptor)

        return Candidate(
            identity_id=identity.identity_id,
            similarity=distance_to_similarity(distance),
            image_reference=identity.image_reference,
            distance=distance,
        )

    def _try_compare(
        self, probe: FaceDescriptor, identity: EnrolledIdentity
    ) -> Optional[Candidate]:
        try:
            candidate = self.compare(probe, identity)
        except FaceAuthError as e:
            logger.warning(
                f"Skipping '{identity.identity_id}' ({e.kind}): {e}"
            )
            return None
        except Exception as e:
            logger.error(
                f"Skipping '{identity.identity_id}' (unexpected error): {e}",
                exc_info=True,
            )
            return None

        logger.debug(
            f"Compared '{candidate.identity_id}': similarity={candidate.similarity:.2f}, "
            f"distance={candidate.distance:.4f}"
        )
        return candidate

    def rank(
        self,
        probe: FaceDescriptor,
        eligible: Sequence[EnrolledIdentity],
    ) -> List[Candidate]:
        """Compare the probe with every eligible identity and rank the successes.

        Args:
            probe: Probe descriptor
            eligible: Active identities, in roster order

        Returns:
            Candidates sorted by descending similarity; ties keep eligible
            order. Empty if nothing is eligible or every comparison failed.
        """
        if not eligible:
            logger.info("No eligible identities to compare against")
            return []

        if self.max_workers == 1 or len(eligible) == 1:
            results = [self._try_compare(probe, identity) for identity in eligible]
        else:
            workers = min(self.max_workers, len(eligible))
            with ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="MatchRanker"
            ) as executor:
                futures = [
                    executor.submit(self._try_compare, probe, identity)
                    for identity in eligible
                ]
                results = [future.result() for future in futures]

        candidates = [c for c in results if c is not None]

        skipped = len(eligible) - len(candidates)
        if skipped:
            logger.info(f"Skipped {skipped} of {len(eligible)} eligible identities")

        # sorted() is stable, also with reverse=True
        return sorted(candidates, key=lambda c: c.similarity, reverse=True)

    def __repr__(self) -> str:
        """String representation of ranker."""
        return f"MatchRanker(max_workers={self.max_workers}, image_store={self.image_store})"
