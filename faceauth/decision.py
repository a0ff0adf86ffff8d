"""Access decision policy applied to the ranked candidate list.

Two boundaries split the best candidate's similarity into three bands:

- above ``GRANT_THRESHOLD`` (exclusive): access granted, identity returned
- from ``REPORT_THRESHOLD`` (inclusive) up to ``GRANT_THRESHOLD``: access
  denied, identity still returned as a near miss
- below ``REPORT_THRESHOLD``: access denied, no identity
"""

from __future__ import annotations

from typing import Sequence

from faceauth.interfaces import Candidate, Decision

# Similarity must be strictly greater than this to grant access.
GRANT_THRESHOLD = 70.0

# Similarity at or above this surfaces the best identity on a denial.
REPORT_THRESHOLD = 50.0


def decide(
    ranked: Sequence[Candidate],
    grant_threshold: float = GRANT_THRESHOLD,
    report_threshold: float = REPORT_THRESHOLD,
) -> Decision:
    """Classify a ranked candidate list into an access decision.

    Only the first candidate is considered; ``ranked`` is expected to be
    sorted by descending similarity.

    Args:
        ranked: Candidates sorted best first, possibly empty
        grant_threshold: Exclusive grant boundary
        report_threshold: Inclusive report boundary

    Returns:
        Decision for the request.

    Example:
        >>> decide([Candidate("erin", 95.0, "erin.jpg", 0.05)])
        Decision(access_granted=True, matched_identity_id='erin')
    """
    if not ranked:
        return Decision(access_granted=False, matched_identity_id=None)

    best = ranked[0]

    if best.similarity > grant_threshold:
        return Decision(access_granted=True, matched_identity_id=best.identity_id)

    if best.similarity >= report_threshold:
        return Decision(access_granted=False, matched_identity_id=best.identity_id)

    return Decision(access_granted=False, matched_identity_id=None)
