"""Authentication service: one probe image in, one access decision out.

Workflow:
1. Snapshot the roster
2. Write the probe to a temp artifact and extract its descriptor
3. Filter active identities → rank → decide
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from faceauth.artifacts import probe_artifact
from faceauth.decision import GRANT_THRESHOLD, REPORT_THRESHOLD, decide
from faceauth.errors import ImageUnavailable
from faceauth.extractor import DescriptorExtractor
from faceauth.interfaces import Decision, EnrolledIdentity, RosterStore
from faceauth.logging_config import get_logger
from faceauth.ranking import MatchRanker
from faceauth.roster import eligible

logger = get_logger(__name__)


class AuthenticationService:
    """Service that authenticates a probe face against the roster.

    Failures on the probe image are hard: ``NoFaceDetected``,
    ``ImageUnavailable`` or ``ExtractionError`` propagate to the caller and no
    decision is produced. Failures on individual enrolled images only
    shrink the candidate list.

    Attributes:
        roster_store: Source of enrolled identities
        extractor: Descriptor extractor for the probe
        ranker: Ranker for eligible identities
        temp_dir: Directory for probe artifacts
        grant_threshold: Exclusive grant boundary
        report_threshold: Inclusive report boundary

    Example:
        >>> service = create_services(config).authentication
        >>> decision = service.authenticate(Path("probe.jpg").read_bytes())
        >>> decision.access_granted, decision.matched_identity_id
        (True, 'alice')
    """

    def __init__(
        self,
        roster_store: RosterStore,
        extractor: DescriptorExtractor,
        ranker: MatchRanker,
        temp_dir: str | Path,
        grant_threshold: float = GRANT_THRESHOLD,
        report_threshold: float = REPORT_THRESHOLD,
    ):
        """Initialize authentication service.

        Raises:
            ValueError: If the thresholds are out of order or out of range.
        """
        if not 0.0 <= report_threshold <= grant_threshold <= 100.0:
            raise ValueError(
                f"Thresholds must satisfy 0 <= report <= grant <= 100, "
                f"got report={report_threshold}, grant={grant_threshold}"
            )

        self.roster_store = roster_store
        self.extractor = extractor
        self.ranker = ranker
        self.temp_dir = Path(temp_dir)
        self.grant_threshold = grant_threshold
        self.report_threshold = report_threshold

        logger.info(
            f"Initialized AuthenticationService (grant>{grant_threshold:.1f}, "
            f"report>={report_threshold:.1f})"
        )

    def authenticate(
        self,
        probe_bytes: bytes,
        filename: str = "probe.jpg",
        roster: Optional[Sequence[EnrolledIdentity]] = None,
    ) -> Decision:
        """Authenticate a probe image.

        Args:
            probe_bytes: Raw probe image bytes
            filename: Original upload name, used in the artifact name
            roster: Roster snapshot to use instead of the store's

        Returns:
            Access decision.

        Raises:
            ImageUnavailable: If the probe is empty or cannot be decoded.
            NoFaceDetected: If the probe contains no face.
            ExtractionError: If the backend fails on the probe.
        """
        if not probe_bytes:
            raise ImageUnavailable("No probe image provided")

        snapshot = list(roster) if roster is not None else self.roster_store.list_all()

        with probe_artifact(probe_bytes, self.temp_dir, filename) as probe_path:
            probe = self.extractor.extract_file(probe_path)

            candidates = eligible(snapshot)
            logger.debug(f"{len(candidates)} of {len(snapshot)} identities eligible")

            ranked = self.ranker.rank(probe, candidates)

        decision = decide(ranked, self.grant_threshold, self.report_threshold)

        if ranked:
            best = ranked[0]
            logger.info(
                f"Decision: granted={decision.access_granted}, "
                f"matched={decision.matched_identity_id} "
                f"(best='{best.identity_id}' at {best.similarity:.2f}, "
                f"{len(ranked)} candidates)"
            )
        else:
            logger.info("Decision: granted=False, no candidates")

        return decision

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"AuthenticationService(grant>{self.grant_threshold:.1f}, "
            f"report>={self.report_threshold:.1f}, ranker={self.ranker})"
        )
