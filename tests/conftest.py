"""Shared pytest fixtures and mocks for photocurator tests."""

import pytest
from unittest.mock import Mock
from typing import Dict, List, Optional, Sequence

from photocurator.extraction.face_analyzer import FaceQualityAnalyzer
from photocurator.core.planner import PerfectMomentPlanner
from photocurator.shared.config import CurationConfig
from photocurator.shared.models import FaceObservation, FaceQuality, Photo, PhotoCluster

from tests.helpers import (
    CLOSED_EYE_HALF_HEIGHT,
    FINGERPRINT_A,
    OPEN_EYE_HALF_HEIGHT,
    make_eye,
    make_face_quality,
    make_lips,
    make_observation as _make_observation_impl,
    make_photo as _make_photo_impl,
)


# =============================================================================
# FACTORY FIXTURES - Return functions for custom parameters
# =============================================================================


@pytest.fixture
def make_photo():
    return _make_photo_impl


@pytest.fixture
def make_observation():
    return _make_observation_impl


@pytest.fixture
def make_burst():
    """Photos one second apart sharing a fingerprint, each with the given faces."""

    def _make(
        faces_per_photo: Sequence[Sequence[FaceQuality]],
        scores: Optional[Sequence[float]] = None,
        prefix: str = "p",
    ) -> List[Photo]:
        photos = []
        for i, faces in enumerate(faces_per_photo):
            photo_id = f"{prefix}{i + 1}"
            photos.append(
                _make_photo_impl(
                    photo_id=photo_id,
                    seconds=float(i),
                    fingerprint=FINGERPRINT_A,
                    faces=[
                        make_face_quality(
                            photo_id=photo_id,
                            face_index=j,
                            capture_quality=f.capture_quality,
                            eyes_open=f.eye_state.both_open,
                            smile=(f.smile_quality.intensity, f.smile_quality.naturalness),
                            sharpness=f.sharpness,
                            angle=(f.face_angle.pitch, f.face_angle.yaw, f.face_angle.roll),
                        )
                        for j, f in enumerate(faces)
                    ],
                    score=scores[i] if scores is not None else None,
                )
            )
        return photos

    return _make


@pytest.fixture
def make_cluster():
    def _make(photos: Sequence[Photo], cluster_id: str = "cluster-0001") -> PhotoCluster:
        return PhotoCluster(
            cluster_id=cluster_id,
            photo_ids=[p.photo_id for p in photos],
            timestamps=[p.timestamp for p in photos],
            locations=[p.location for p in photos],
            representative_fingerprint=photos[0].fingerprint,
        )

    return _make


@pytest.fixture
def make_detector():
    """Mock FaceDetector returning the given observations per photo id."""

    def _make(faces_by_photo: Dict[str, List[FaceObservation]], failing: Sequence[str] = ()) -> Mock:
        def detect(photo):
            if photo.photo_id in failing:
                raise RuntimeError("model crashed")
            return faces_by_photo.get(photo.photo_id, [])

        detector = Mock()
        detector.detect.side_effect = detect
        return detector

    return _make


# =============================================================================
# DIRECT FIXTURES - Simple values
# =============================================================================


@pytest.fixture
def open_eye() -> list:
    return make_eye(OPEN_EYE_HALF_HEIGHT)


@pytest.fixture
def closed_eye() -> list:
    return make_eye(CLOSED_EYE_HALF_HEIGHT)


@pytest.fixture
def smiling_lips() -> list:
    return make_lips()


@pytest.fixture
def neutral_lips() -> list:
    return make_lips(corner_lift=0.0)


@pytest.fixture
def analyzer() -> FaceQualityAnalyzer:
    return FaceQualityAnalyzer()


@pytest.fixture
def planner() -> PerfectMomentPlanner:
    return PerfectMomentPlanner()


@pytest.fixture
def config() -> CurationConfig:
    return CurationConfig(max_workers=2)


@pytest.fixture
def destination_face() -> FaceQuality:
    """Eyes closed, weak smile, soft focus: rank 0.30."""
    return make_face_quality(
        photo_id="p1",
        capture_quality=0.4,
        eyes_open=False,
        smile=(0.25, 0.25),
        sharpness=0.2,
    )


@pytest.fixture
def source_face() -> FaceQuality:
    """Eyes open, decent smile: rank 0.80."""
    return make_face_quality(
        photo_id="p2",
        capture_quality=0.9,
        eyes_open=True,
        smile=(0.6, 0.6),
        sharpness=0.4,
    )


@pytest.fixture
def burst_photos(make_burst, destination_face, source_face) -> List[Photo]:
    """Two shots of alice and bob; alice blinks in the first, bob is steady."""
    steady = make_face_quality(capture_quality=0.8, smile=(0.6, 0.6), sharpness=0.7)
    return make_burst(
        [
            [destination_face, steady],
            [source_face, steady],
        ],
        scores=[0.7, 0.6],
    )


@pytest.fixture
def burst_identities() -> Dict[str, List[Optional[str]]]:
    return {"p1": ["alice", "bob"], "p2": ["alice", "bob"]}


@pytest.fixture
def burst_cluster(make_cluster, burst_photos) -> PhotoCluster:
    return make_cluster(burst_photos)


@pytest.fixture
def collection_data() -> dict:
    """Collection file contents: a two-shot burst with faces and a lone landscape."""
    eye_open = [list(p) for p in make_eye(OPEN_EYE_HALF_HEIGHT)]
    eye_closed = [list(p) for p in make_eye(CLOSED_EYE_HALF_HEIGHT)]
    lips = [list(p) for p in make_lips()]

    def face(eye, capture_quality, person_id):
        return {
            "bounding_box": [0.3, 0.3, 0.2, 0.2],
            "left_eye": eye,
            "right_eye": eye,
            "outer_lips": lips,
            "capture_quality": capture_quality,
            "sharpness": 0.8,
            "person_id": person_id,
        }

    return {
        "photos": [
            {
                "photo_id": "p1",
                "timestamp": "2024-06-01T12:00:00",
                "location": {"latitude": 37.7749, "longitude": -122.4194},
                "metadata": {"width": 4032, "height": 3024, "camera_model": "Pixel 8", "iso": 100},
                "signals": {"sharpness": 0.8, "exposure": 0.7, "composition": 0.6},
                "fingerprint": FINGERPRINT_A.hex(),
                "faces": [face(eye_closed, 0.5, "alice")],
            },
            {
                "photo_id": "p2",
                "timestamp": "2024-06-01T12:00:01",
                "location": {"latitude": 37.7749, "longitude": -122.4194},
                "metadata": {"width": 4032, "height": 3024, "camera_model": "Pixel 8", "iso": 100},
                "signals": {"sharpness": 0.8, "exposure": 0.7, "composition": 0.6},
                "fingerprint": FINGERPRINT_A.hex(),
                "faces": [face(eye_open, 0.9, "alice")],
            },
            {
                "photo_id": "p3",
                "timestamp": "2024-06-01T14:00:00",
                "location": {"latitude": 37.8651, "longitude": -119.5383},
                "metadata": {"width": 4032, "height": 3024, "camera_model": "Pixel 8", "iso": 50},
                "signals": {"scene_labels": ["mountain", "sky"]},
                "fingerprint": [0.1, 0.9, 0.3],
                "faces": [],
            },
        ]
    }
