"""Unit tests for the directory image store."""

from __future__ import annotations

import pytest

from faceauth.errors import ImageUnavailable
from faceauth.image_store import DirectoryImageStore


@pytest.fixture
def store(tmp_path):
    return DirectoryImageStore(tmp_path / "uploads")


def test_creates_root(tmp_path):
    DirectoryImageStore(tmp_path / "new" / "uploads")
    assert (tmp_path / "new" / "uploads").is_dir()


def test_save_and_resolve(store):
    reference = store.save("alice.jpg", b"jpeg-bytes")

    assert reference == "alice.jpg"
    assert store.resolve("alice.jpg") == b"jpeg-bytes"


def test_save_keeps_base_name(store):
    assert store.save("some/dir/bob.png", b"png") == "bob.png"
    assert (store.root / "bob.png").read_bytes() == b"png"


def test_save_overwrites(store):
    store.save("alice.jpg", b"old")
    store.save("alice.jpg", b"new")

    assert store.resolve("alice.jpg") == b"new"


def test_save_invalid_reference(store):
    with pytest.raises(ValueError):
        store.save("", b"data")


def test_resolve_missing(store):
    with pytest.raises(ImageUnavailable, match="not found") as exc_info:
        store.resolve("ghost.jpg")

    assert exc_info.value.reference == "ghost.jpg"


def test_resolve_outside_root(store, tmp_path):
    (tmp_path / "secret.jpg").write_bytes(b"secret")

    with pytest.raises(ImageUnavailable, match="escapes"):
        store.resolve("../secret.jpg")


def test_resolve_directory(store):
    (store.root / "folder").mkdir()

    with pytest.raises(ImageUnavailable):
        store.resolve("folder")
