"""Shared test constants and helper functions for photocurator tests.

This module contains constants and helper functions that are shared across
multiple test files. Pytest fixtures should be defined in conftest.py.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from photocurator.shared.models import (
    EyeState,
    FaceAngle,
    FaceObservation,
    FaceQuality,
    GeoLocation,
    Photo,
    PhotoMetadata,
    PhotoScore,
    PhotoSignals,
    PhotoType,
    SmileQuality,
)


# =============================================================================
# MODULE-LEVEL CONSTANTS (Test Configuration)
# =============================================================================

BASE_TIME = datetime(2024, 6, 1, 12, 0, 0)
TEST_LOCATION = GeoLocation(latitude=37.7749, longitude=-122.4194)
TEST_CAMERA = "Pixel 8"

# 64-bit perceptual hashes
FINGERPRINT_A = bytes(8)
FINGERPRINT_A_NEAR = bytes([0x01]) + bytes(7)   # 1 of 64 bits differs
FINGERPRINT_B = bytes([0xFF] * 8)                # every bit differs from A

DEFAULT_BOUNDING_BOX = (0.3, 0.3, 0.2, 0.2)

# Eye contours, normalized, y up: corners at x=0 and x=1
OPEN_EYE_HALF_HEIGHT = 0.15      # EAR 0.30
CLOSED_EYE_HALF_HEIGHT = 0.02    # EAR 0.04

SMILE_CORNER_LIFT = 0.03         # intensity 0.6 at the default curvature scale

TEST_COLLECTION_PATH = "/test/collection.json"


# =============================================================================
# LANDMARK HELPERS
# =============================================================================


def make_eye(half_height: float = OPEN_EYE_HALF_HEIGHT) -> List[Tuple[float, float]]:
    """Six-point eye contour with EAR = 2 * half_height."""
    return [
        (0.0, 0.0),
        (0.3, half_height),
        (0.7, half_height),
        (1.0, 0.0),
        (0.7, -half_height),
        (0.3, -half_height),
    ]


def make_lips(
    corner_lift: float = SMILE_CORNER_LIFT,
    left_x: float = -0.5,
    right_x: float = 0.5,
) -> List[Tuple[float, float]]:
    """Twelve-point outer lip contour: left corner at 0, top center at 3, right corner at 6, bottom center at 9."""
    return [
        (left_x, corner_lift),
        (-0.35, 0.015),
        (-0.15, 0.02),
        (0.0, 0.02),
        (0.15, 0.02),
        (0.35, 0.015),
        (right_x, corner_lift),
        (0.35, -0.015),
        (0.15, -0.02),
        (0.0, -0.02),
        (-0.15, -0.02),
        (-0.35, -0.015),
    ]


def make_observation(
    face_index: int = 0,
    eyes_open: bool = True,
    corner_lift: float = SMILE_CORNER_LIFT,
    capture_quality: Optional[float] = 0.8,
    sharpness: Optional[float] = 0.8,
    bounding_box=DEFAULT_BOUNDING_BOX,
    yaw: Optional[float] = 0.0,
) -> FaceObservation:
    half_height = OPEN_EYE_HALF_HEIGHT if eyes_open else CLOSED_EYE_HALF_HEIGHT
    return FaceObservation(
        face_index=face_index,
        bounding_box=bounding_box,
        left_eye=make_eye(half_height),
        right_eye=make_eye(half_height),
        outer_lips=make_lips(corner_lift),
        pitch=0.0,
        yaw=yaw,
        roll=0.0,
        capture_quality=capture_quality,
        sharpness=sharpness,
    )


# =============================================================================
# RECORD HELPERS
# =============================================================================


def make_face_quality(
    photo_id: str = "p1",
    face_index: int = 0,
    capture_quality: float = 0.8,
    eyes_open: bool = True,
    smile: Tuple[float, float] = (0.6, 0.6),
    sharpness: float = 0.8,
    angle: Tuple[float, float, float] = (0.0, 0.0, 0.0),
    bounding_box=DEFAULT_BOUNDING_BOX,
) -> FaceQuality:
    return FaceQuality(
        photo_id=photo_id,
        face_index=face_index,
        bounding_box=bounding_box,
        capture_quality=capture_quality,
        eye_state=EyeState(left_open=eyes_open, right_open=eyes_open, confidence=0.9),
        smile_quality=SmileQuality(intensity=smile[0], naturalness=smile[1], confidence=0.7),
        face_angle=FaceAngle(*angle),
        sharpness=sharpness,
    )


def make_photo(
    photo_id: str = "p1",
    seconds: float = 0.0,
    fingerprint=FINGERPRINT_A,
    faces: Optional[Sequence[FaceQuality]] = None,
    score: Optional[float] = None,
    signals: Optional[PhotoSignals] = None,
    location: Optional[GeoLocation] = TEST_LOCATION,
    camera_model: Optional[str] = TEST_CAMERA,
    asset_id: Optional[str] = None,
    timestamp: Optional[datetime] = None,
) -> Photo:
    """Photo taken ``seconds`` after BASE_TIME with camera metadata attached.

    ``faces`` marks the photo as analyzed; ``score`` attaches a composite
    score with that overall value.
    """
    photo_score = None
    if score is not None:
        photo_score = PhotoScore(
            technical=score,
            face=score,
            context=score,
            overall=score,
            photo_type=PhotoType.PORTRAIT,
            calculated_at=BASE_TIME,
        )
    return Photo(
        photo_id=photo_id,
        timestamp=timestamp or BASE_TIME + timedelta(seconds=seconds),
        asset_id=asset_id,
        location=location,
        metadata=PhotoMetadata(
            width=4032,
            height=3024,
            camera_model=camera_model,
            focal_length=6.9 if camera_model else None,
            f_number=1.7 if camera_model else None,
            exposure_time=0.01 if camera_model else None,
            iso=100 if camera_model else None,
        ),
        signals=signals or PhotoSignals(),
        fingerprint=fingerprint,
        face_qualities=tuple(faces) if faces is not None else None,
        photo_score=photo_score,
    )


def make_screenshot(photo_id: str = "shot") -> Photo:
    """Photo with no location, camera or exposure data at a phone screen resolution."""
    return Photo(
        photo_id=photo_id,
        timestamp=BASE_TIME,
        asset_id="Screenshot 2024-06-01",
        metadata=PhotoMetadata(width=1179, height=2556),
    )
