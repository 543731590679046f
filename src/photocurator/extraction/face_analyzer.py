"""Per-face quality analysis from detected landmarks."""

import logging
from typing import Optional, Sequence, Tuple

from photocurator.extraction.face_metrics import (
    adaptive_ear_threshold,
    calculate_ear,
    calculate_lip_curvature,
    calculate_lip_symmetry,
)
from photocurator.shared.config import AnalysisConfig
from photocurator.shared.constants import EAR, FACE_RANK, SMILE
from photocurator.shared.models import (
    EyeState,
    FaceAngle,
    FaceLandmarks,
    FaceObservation,
    FaceQuality,
    FaceQualityScore,
    SmileQuality,
)

logger = logging.getLogger(__name__)


class FaceQualityAnalyzer:
    """
    Turns a detected face into a FaceQuality record.

    Measures:
    - Eye state (open/closed) from EAR with an adaptive threshold
    - Smile intensity and naturalness from the outer lip contour
    - Head pose and face sharpness
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()
        self.config.validate()

    def analyze(self, photo_id: str, observation: FaceObservation) -> FaceQuality:
        capture_quality = (
            observation.capture_quality
            if observation.capture_quality is not None
            else FACE_RANK.NEUTRAL_CAPTURE_QUALITY
        )

        face = FaceQuality(
            photo_id=photo_id,
            face_index=observation.face_index,
            bounding_box=observation.bounding_box,
            capture_quality=capture_quality,
            eye_state=self.analyze_eyes(observation.left_eye, observation.right_eye),
            smile_quality=self.analyze_smile(observation.outer_lips),
            face_angle=self.face_angle(observation),
            sharpness=self.estimate_sharpness(observation, capture_quality),
            landmarks=FaceLandmarks(
                left_eye=observation.left_eye,
                right_eye=observation.right_eye,
                outer_lips=observation.outer_lips,
            ),
        )

        logger.debug(
            "Face %s/%d: rank=%.3f, eyes_open=%s, smile=%.3f, issues=%s",
            photo_id,
            face.face_index,
            face.rank,
            face.eye_state.both_open,
            face.smile_quality.overall_quality,
            [issue.value for issue in face.issues],
        )
        return face

    def analyze_all(
        self, photo_id: str, observations: Sequence[FaceObservation]
    ) -> Tuple[FaceQuality, ...]:
        return tuple(self.analyze(photo_id, obs) for obs in observations)

    def analyze_eyes(self, left_eye, right_eye) -> EyeState:
        """Classify both eyes as open or closed.

        If either eye cannot be measured the face is assumed to have open
        eyes with neutral confidence.
        """
        left_ear = calculate_ear(left_eye)
        right_ear = calculate_ear(right_eye)
        if left_ear is None or right_ear is None:
            return EyeState(left_open=True, right_open=True, confidence=EAR.NEUTRAL_CONFIDENCE)

        average_ear = (left_ear + right_ear) / 2.0
        threshold = adaptive_ear_threshold(
            average_ear,
            self.config.ear_threshold_bands,
            self.config.ear_threshold_floor,
        )
        logger.debug(
            "EAR left=%.4f right=%.4f avg=%.4f threshold=%.2f",
            left_ear, right_ear, average_ear, threshold,
        )

        return EyeState(
            left_open=left_ear > threshold,
            right_open=right_ear > threshold,
            confidence=min(1.0, average_ear / threshold),
        )

    def analyze_smile(self, outer_lips) -> SmileQuality:
        if outer_lips is None or len(outer_lips) < SMILE.MIN_POINTS:
            return SmileQuality(
                intensity=SMILE.NEUTRAL_INTENSITY,
                naturalness=SMILE.NEUTRAL_NATURALNESS,
                confidence=SMILE.NEUTRAL_CONFIDENCE,
            )

        return SmileQuality(
            intensity=calculate_lip_curvature(outer_lips, self.config.smile_curvature_scale),
            naturalness=calculate_lip_symmetry(outer_lips),
            confidence=SMILE.DETECTION_CONFIDENCE,
        )

    @staticmethod
    def face_angle(observation: FaceObservation) -> FaceAngle:
        return FaceAngle(
            pitch=observation.pitch or 0.0,
            yaw=observation.yaw or 0.0,
            roll=observation.roll or 0.0,
        )

    @staticmethod
    def estimate_sharpness(observation: FaceObservation, capture_quality: float) -> float:
        """External face sharpness if the detector gave one, else a size-based estimate."""
        if observation.sharpness is not None:
            return observation.sharpness
        _, _, width, height = observation.bounding_box
        face_area = max(0.0, width) * max(0.0, height)
        return min(1.0, capture_quality + face_area * FACE_RANK.FACE_AREA_SHARPNESS_FACTOR)

    def summarize(self, faces: Sequence[FaceQuality]) -> FaceQualityScore:
        """Photo-level face summary used by the composite scorer."""
        if not faces:
            return FaceQualityScore(
                face_count=0,
                average_rank=0.0,
                eyes_open=False,
                good_expressions=False,
                optimal_sizes=False,
            )

        return FaceQualityScore(
            face_count=len(faces),
            average_rank=sum(f.rank for f in faces) / len(faces),
            eyes_open=all(f.eye_state.both_open for f in faces),
            good_expressions=all(f.smile_quality.is_good_smile for f in faces),
            optimal_sizes=all(
                self.config.min_face_area <= f.face_area <= self.config.max_face_area
                for f in faces
            ),
        )
