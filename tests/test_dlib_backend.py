"""Tests for the dlib backend against a stand-in face_recognition module.

The stand-in mirrors the parts of face_recognition the backend calls:
``api.face_detector.run`` (HOG, returns rects, scores and sub-detector
indices), ``api.cnn_face_detector`` (returns MMOD rects with confidences)
and ``face_encodings``.
"""

from __future__ import annotations

import importlib
import sys
import types

import numpy as np
import pytest

from faceauth.errors import ExtractionError, NoFaceDetected
from faceauth.extractor import DescriptorExtractor
from faceauth.interfaces import BBox

BACKEND_MODULES = [
    "faceauth.backends.dlib",
    "faceauth.backends.dlib.detector",
    "faceauth.backends.dlib.embedder",
]


class Rect:
    """Minimal dlib.rectangle."""

    def __init__(self, left, top, right, bottom):
        self._box = (left, top, right, bottom)

    def left(self):
        return self._box[0]

    def top(self):
        return self._box[1]

    def right(self):
        return self._box[2]

    def bottom(self):
        return self._box[3]


class FakeHogDetector:
    def __init__(self):
        self.rects = []
        self.scores = []
        self.calls = []

    def run(self, image, upsample, adjust_threshold):
        self.calls.append((image, upsample, adjust_threshold))
        return self.rects, self.scores, [0] * len(self.rects)


class FakeCnnDetector:
    def __init__(self):
        self.results = []
        self.calls = []

    def __call__(self, image, upsample):
        self.calls.append((image, upsample))
        return self.results


class FakeFaceRecognition(types.ModuleType):
    def __init__(self):
        super().__init__("face_recognition")
        self.api = types.SimpleNamespace(
            face_detector=FakeHogDetector(),
            cnn_face_detector=FakeCnnDetector(),
        )
        self.encodings = [np.full(128, 0.1)]
        self.encoding_calls = []

    def face_encodings(self, image, known_face_locations=None, num_jitters=1, model="small"):
        self.encoding_calls.append(
            {
                "image": image,
                "locations": known_face_locations,
                "num_jitters": num_jitters,
                "model": model,
            }
        )
        return self.encodings


@pytest.fixture
def fake_fr(monkeypatch):
    """Install the stand-in and import fresh backend modules bound to it."""
    fake = FakeFaceRecognition()
    monkeypatch.setitem(sys.modules, "face_recognition", fake)
    for name in BACKEND_MODULES:
        monkeypatch.delitem(sys.modules, name, raising=False)

    yield fake

    for name in BACKEND_MODULES:
        sys.modules.pop(name, None)


@pytest.fixture
def dlib_backend(fake_fr):
    return importlib.import_module("faceauth.backends.dlib")


@pytest.fixture
def frame():
    """100x80 BGR frame, pure blue."""
    image = np.zeros((80, 100, 3), dtype=np.uint8)
    image[..., 0] = 255
    return image


def test_hog_detections_sorted_by_score(dlib_backend, fake_fr, frame):
    fake_fr.api.face_detector.rects = [Rect(0, 0, 20, 20), Rect(30, 30, 60, 60)]
    fake_fr.api.face_detector.scores = [0.2, 1.5]

    detections = dlib_backend.DlibDetector(model="hog", upsample=2).detect(frame)

    assert [(d.bbox, d.score) for d in detections] == [
        (BBox(30, 30, 60, 60), 1.5),
        (BBox(0, 0, 20, 20), 0.2),
    ]
    image, upsample, adjust_threshold = fake_fr.api.face_detector.calls[0]
    assert upsample == 2
    assert adjust_threshold == 0.0
    # BGR blue arrives as RGB blue
    assert image[0, 0].tolist() == [0, 0, 255]


def test_cnn_branch_uses_mmod_confidence(dlib_backend, fake_fr, frame):
    fake_fr.api.cnn_face_detector.results = [
        types.SimpleNamespace(rect=Rect(5, 5, 40, 40), confidence=0.7),
        types.SimpleNamespace(rect=Rect(50, 10, 90, 50), confidence=1.1),
    ]

    detections = dlib_backend.DlibDetector(model="cnn", upsample=0).detect(frame)

    assert [(d.bbox, d.score) for d in detections] == [
        (BBox(50, 10, 90, 50), 1.1),
        (BBox(5, 5, 40, 40), 0.7),
    ]
    assert fake_fr.api.cnn_face_detector.calls[0][1] == 0
    assert fake_fr.api.face_detector.calls == []


def test_detections_clamped_to_frame(dlib_backend, fake_fr, frame):
    fake_fr.api.face_detector.rects = [Rect(-10, -5, 500, 300)]
    fake_fr.api.face_detector.scores = [0.9]

    detections = dlib_backend.DlibDetector().detect(frame)

    assert detections[0].bbox == BBox(0, 0, 99, 79)


def test_no_faces(dlib_backend, frame):
    assert dlib_backend.DlibDetector().detect(frame) == []


def test_empty_frame(dlib_backend, fake_fr):
    assert dlib_backend.DlibDetector().detect(np.zeros((0, 0, 3), dtype=np.uint8)) == []
    assert fake_fr.api.face_detector.calls == []


@pytest.mark.parametrize("kwargs", [{"model": "mtcnn"}, {"upsample": -1}])
def test_detector_rejects_bad_options(dlib_backend, kwargs):
    with pytest.raises(ValueError):
        dlib_backend.DlibDetector(**kwargs)


def test_embedder_passes_top_right_bottom_left(dlib_backend, fake_fr, frame):
    embedder = dlib_backend.DlibEmbedder(model="small", num_jitters=3)

    descriptor = embedder.embed_from_frame(frame, BBox(x1=10, y1=20, x2=50, y2=60))

    call = fake_fr.encoding_calls[0]
    assert call["locations"] == [(20, 50, 60, 10)]
    assert call["num_jitters"] == 3
    assert call["model"] == "small"
    assert call["image"][0, 0].tolist() == [0, 0, 255]
    assert descriptor.shape == (128,)
    assert descriptor.dtype == np.float64


def test_embedder_no_encoding(dlib_backend, fake_fr, frame):
    fake_fr.encodings = []

    with pytest.raises(NoFaceDetected):
        dlib_backend.DlibEmbedder().embed_from_frame(frame, BBox(10, 10, 50, 50))


def test_embedder_wrong_dimension(dlib_backend, fake_fr, frame):
    fake_fr.encodings = [np.zeros(64)]

    with pytest.raises(ExtractionError, match="dimension 64"):
        dlib_backend.DlibEmbedder().embed_from_frame(frame, BBox(10, 10, 50, 50))


@pytest.mark.parametrize("kwargs", [{"model": "huge"}, {"num_jitters": 0}])
def test_embedder_rejects_bad_options(dlib_backend, kwargs):
    with pytest.raises(ValueError):
        dlib_backend.DlibEmbedder(**kwargs)


def test_extractor_encodes_most_confident_face(dlib_backend, fake_fr, frame):
    """Detector scores decide which face region gets encoded."""
    import cv2

    fake_fr.api.face_detector.rects = [Rect(0, 0, 20, 20), Rect(30, 10, 70, 50)]
    fake_fr.api.face_detector.scores = [0.3, 2.4]
    ok, buffer = cv2.imencode(".png", frame)
    assert ok

    extractor = DescriptorExtractor(dlib_backend.DlibDetector(), dlib_backend.DlibEmbedder())
    descriptor = extractor.extract(buffer.tobytes())

    assert fake_fr.encoding_calls[0]["locations"] == [(10, 70, 50, 30)]
    assert descriptor == pytest.approx(np.full(128, 0.1))


def test_factory_builds_dlib_extractor(dlib_backend, monkeypatch):
    from faceauth.backends.factory import create_extractor
    from faceauth.config import Config

    monkeypatch.setenv("DETECTOR_MODEL", "cnn")
    monkeypatch.setenv("UPSAMPLE", "0")
    monkeypatch.setenv("NUM_JITTERS", "2")
    for name in ("GRANT_THRESHOLD", "REPORT_THRESHOLD", "EMBEDDER_MODEL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    extractor = create_extractor(Config.from_env())

    assert isinstance(extractor.detector, dlib_backend.DlibDetector)
    assert extractor.detector.model == "cnn"
    assert extractor.detector.upsample == 0
    assert isinstance(extractor.embedder, dlib_backend.DlibEmbedder)
    assert extractor.embedder.num_jitters == 2
