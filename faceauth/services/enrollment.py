"""Enrollment service for registering users and managing their status."""

from __future__ import annotations

from typing import List

from faceauth.image_store import DirectoryImageStore
from faceauth.interfaces import EnrolledIdentity, RosterStore
from faceauth.logging_config import get_logger

logger = get_logger(__name__)


class EnrollmentService:
    """Stores reference images and keeps the roster in sync.

    Attributes:
        roster_store: Roster receiving the new identities
        image_store: Directory store for the reference images

    Example:
        >>> service = EnrollmentService(InMemoryRosterStore(), DirectoryImageStore("uploads"))
        >>> service.enroll("alice", "alice.jpg", image_bytes)
        >>> service.set_active("alice", False)
    """

    def __init__(self, roster_store: RosterStore, image_store: DirectoryImageStore):
        self.roster_store = roster_store
        self.image_store = image_store

    def enroll(self, identity_id: str, filename: str, image_bytes: bytes) -> EnrolledIdentity:
        """Save a reference image and register the identity as active.

        Args:
            identity_id: Username for the new identity
            filename: Name under which the image is stored
            image_bytes: Raw image bytes

        Returns:
            The enrolled identity.

        Raises:
            ValueError: If the id, filename or image is missing.
        """
        if not identity_id:
            raise ValueError("Missing identity id")
        if not filename or not image_bytes:
            raise ValueError("Missing file")

        reference = self.image_store.save(filename, image_bytes)
        return self.roster_store.enroll(identity_id, reference)

    def set_active(self, identity_id: str, active: bool) -> None:
        """Activate or deactivate an identity.

        Raises:
            IdentityNotFound: If the identity is not enrolled.
        """
        self.roster_store.set_active(identity_id, active)

    def list_users(self) -> List[EnrolledIdentity]:
        """Return every enrolled identity."""
        return self.roster_store.list_all()
