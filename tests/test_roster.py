"""Unit tests for roster filtering and the in-memory roster store."""

from __future__ import annotations

import pytest

from faceauth.errors import IdentityNotFound
from faceauth.interfaces import EnrolledIdentity
from faceauth.roster import InMemoryRosterStore, eligible


@pytest.fixture
def store():
    """Roster with three enrolled users."""
    store = InMemoryRosterStore()
    store.enroll("alice", "alice.jpg")
    store.enroll("bob", "bob.jpg")
    store.enroll("carol", "carol.jpg")
    return store


def test_eligible_keeps_active_in_order():
    roster = [
        EnrolledIdentity("alice", "a.jpg", True),
        EnrolledIdentity("bob", "b.jpg", False),
        EnrolledIdentity("carol", "c.jpg", True),
        EnrolledIdentity("dave", "d.jpg", True),
    ]

    assert [i.identity_id for i in eligible(roster)] == ["alice", "carol", "dave"]


def test_eligible_empty_roster():
    assert eligible([]) == []


def test_eligible_keeps_duplicates():
    """Duplicate ids are passed through unchanged."""
    roster = [
        EnrolledIdentity("alice", "a1.jpg", True),
        EnrolledIdentity("alice", "a2.jpg", True),
    ]

    assert [i.image_reference for i in eligible(roster)] == ["a1.jpg", "a2.jpg"]


def test_enroll_is_active(store):
    identity = store.enroll("dave", "dave.jpg")

    assert identity == EnrolledIdentity("dave", "dave.jpg", True)
    assert len(store) == 4


def test_set_active(store):
    store.set_active("bob", False)

    statuses = {i.identity_id: i.active for i in store.list_all()}
    assert statuses == {"alice": True, "bob": False, "carol": True}

    store.set_active("bob", True)
    assert all(i.active for i in store.list_all())


def test_set_active_unknown_user(store):
    with pytest.raises(IdentityNotFound, match="User not found"):
        store.set_active("mallory", False)


def test_list_all_returns_snapshot(store):
    """Mutating the store does not change an earlier snapshot."""
    snapshot = store.list_all()
    store.set_active("alice", False)

    assert snapshot[0].active is True
    assert store.list_all()[0].active is False


def test_snapshot_edits_do_not_leak(store):
    """Editing a snapshot entry does not touch the store."""
    snapshot = store.list_all()
    snapshot[0].active = False

    assert store.list_all()[0].active is True
