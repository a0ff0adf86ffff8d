"""Roster filtering and the in-memory roster store."""

from __future__ import annotations

import threading
from dataclasses import replace
from typing import Iterable, List

from faceauth.errors import IdentityNotFound
from faceauth.interfaces import EnrolledIdentity
from faceauth.logging_config import get_logger

logger = get_logger(__name__)


def eligible(roster: Iterable[EnrolledIdentity]) -> List[EnrolledIdentity]:
    """Select the identities that take part in a comparison.

    Args:
        roster: Enrolled identities in roster order

    Returns:
        Every active identity, original order preserved.
    """
    return [identity for identity in roster if identity.active]


class InMemoryRosterStore:
    """Thread-safe roster kept in process memory.

    Each operation holds a lock, and ``list_all`` hands out copies so a
    comparison pass works on a point-in-time snapshot even if statuses
    change while it runs.

    Example:
        >>> store = InMemoryRosterStore()
        >>> store.enroll("alice", "alice.jpg")
        >>> store.set_active("alice", False)
        >>> [u.active for u in store.list_all()]
        [False]
    """

    def __init__(self) -> None:
        self._identities: List[EnrolledIdentity] = []
        self._lock = threading.Lock()

    def enroll(self, identity_id: str, image_reference: str) -> EnrolledIdentity:
        """Append a new active identity.

        Duplicate ids are accepted and kept as separate entries.

        Args:
            identity_id: Username or other stable handle
            image_reference: Locator of the stored image

        Returns:
            Copy of the stored entry.
        """
        identity = EnrolledIdentity(
            identity_id=identity_id,
            image_reference=image_reference,
            active=True,
        )
        with self._lock:
            self._identities.append(identity)

        logger.info(f"Enrolled '{identity_id}' (image={image_reference})")
        return replace(identity)

    def set_active(self, identity_id: str, active: bool) -> None:
        """Update the status of the first entry with this id.

        Raises:
            IdentityNotFound: If no entry has this id.
        """
        with self._lock:
            for identity in self._identities:
                if identity.identity_id == identity_id:
                    identity.active = active
                    break
            else:
                raise IdentityNotFound(
                    f"User not found: {identity_id}", identity_id=identity_id
                )

        logger.info(f"Set '{identity_id}' active={active}")

    def list_all(self) -> List[EnrolledIdentity]:
        """Return copies of every entry, in enrollment order."""
        with self._lock:
            return [replace(identity) for identity in self._identities]

    def __len__(self) -> int:
        with self._lock:
            return len(self._identities)

    def __repr__(self) -> str:
        """String representation of the store."""
        return f"InMemoryRosterStore(identities={len(self)})"
