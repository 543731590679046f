"""Application-wide constants for photocurator.

This module contains the fixed numeric tables used by face analysis,
scoring, categorization and perfect-moment planning. Tunable thresholds
live in ``photocurator.shared.config``; the values here are part of the
scoring contract and are not expected to change per run.
"""

from dataclasses import dataclass, field
from typing import Dict, Final, Tuple


@dataclass(frozen=True)
class EARConstants:
    """Eye Aspect Ratio (EAR) constants.

    Formula: EAR = (||p2-p6|| + ||p3-p5||) / (2 * ||p1-p4||)

    Reference:
        Soukupová & Čech (2016). "Real-Time Eye Blink Detection using
        Facial Landmarks." 21st Computer Vision Winter Workshop.
    """

    MIN_POINTS: int = 6
    MIN_HORIZONTAL_DISTANCE: float = 0.001
    NEUTRAL_CONFIDENCE: float = 0.5


@dataclass(frozen=True)
class SmileConstants:
    """Lip-contour smile analysis constants."""

    MIN_POINTS: int = 12
    LEFT_CORNER: int = 0
    TOP_CENTER: int = 3
    RIGHT_CORNER: int = 6
    BOTTOM_CENTER: int = 9

    INTENSITY_WEIGHT: float = 0.4
    NATURALNESS_WEIGHT: float = 0.6
    DETECTION_CONFIDENCE: float = 0.7

    NEUTRAL_INTENSITY: float = 0.5
    NEUTRAL_NATURALNESS: float = 0.5
    NEUTRAL_CONFIDENCE: float = 0.3

    GOOD_SMILE_QUALITY: float = 0.6
    GOOD_SMILE_CONFIDENCE: float = 0.5


@dataclass(frozen=True)
class FaceAngleConstants:
    """Head pose limits in degrees."""

    OPTIMAL_PITCH: float = 15.0
    OPTIMAL_YAW: float = 20.0
    OPTIMAL_ROLL: float = 10.0

    ALIGN_PITCH_DIFF: float = 25.0
    ALIGN_YAW_DIFF: float = 30.0
    ALIGN_ROLL_DIFF: float = 20.0


@dataclass(frozen=True)
class FaceRankConstants:
    """Weights and thresholds for the per-face composite rank and issue list."""

    CAPTURE_WEIGHT: float = 0.3
    EYES_WEIGHT: float = 0.25
    SMILE_WEIGHT: float = 0.2
    SHARPNESS_WEIGHT: float = 0.15
    ANGLE_WEIGHT: float = 0.1
    SUBOPTIMAL_ANGLE_SCORE: float = 0.5

    POOR_EXPRESSION_BELOW: float = 0.5
    BLURRED_BELOW: float = 0.6
    AWKWARD_POSE_BELOW: float = 0.5

    NEUTRAL_CAPTURE_QUALITY: float = 0.5
    FACE_AREA_SHARPNESS_FACTOR: float = 2.0


@dataclass(frozen=True)
class FaceSummaryConstants:
    """Photo-level face summary bonuses."""

    NO_FACES_SCORE: float = 0.5
    FLAG_BONUS: float = 0.1


@dataclass(frozen=True)
class ScoringConstants:
    """Composite score weight triples (technical, face, context) per photo type."""

    NEUTRAL_SIGNAL: float = 0.5
    WEIGHTS: Dict[str, Tuple[float, float, float]] = field(
        default_factory=lambda: {
            "portrait": (0.4, 0.4, 0.2),
            "group_photo": (0.3, 0.5, 0.2),
            "event": (0.25, 0.45, 0.3),
            "landscape": (0.5, 0.1, 0.4),
            "outdoor": (0.5, 0.1, 0.4),
            "golden_hour": (0.4, 0.1, 0.5),
            "close_up": (0.6, 0.1, 0.3),
            "action": (0.3, 0.2, 0.5),
            "low_light": (0.7, 0.1, 0.2),
            "indoor": (0.45, 0.35, 0.2),
        }
    )

    UTILITY_TECHNICAL_WEIGHT: float = 0.8
    UTILITY_CONTEXT_WEIGHT: float = 0.2
    UTILITY_MIN: float = 0.1
    UTILITY_MAX: float = 0.3


@dataclass(frozen=True)
class CategorizationConstants:
    """Keyword tables and thresholds for photo type detection."""

    LANDSCAPE_KEYWORDS: Tuple[str, ...] = (
        "mountain", "tree", "sky", "water", "landscape", "nature", "outdoor",
        "scenery", "field", "forest", "beach", "sunset", "sunrise", "cloud",
        "horizon", "valley", "hill",
    )
    INDOOR_KEYWORDS: Tuple[str, ...] = (
        "room", "indoor", "furniture", "wall", "ceiling", "floor", "kitchen",
        "bedroom", "living room", "office", "restaurant", "building interior",
    )
    ACTION_KEYWORDS: Tuple[str, ...] = (
        "sport", "running", "jumping", "dancing", "playing", "movement",
        "activity", "exercise", "game",
    )
    CLOSE_UP_KEYWORDS: Tuple[str, ...] = (
        "food", "flower", "detail", "macro", "close", "texture", "pattern",
    )

    EVENT_FACE_COUNT: int = 6
    GROUP_EVENT_FACE_COUNT: int = 3

    GOLDEN_HOUR_RANGES: Tuple[Tuple[int, int], ...] = ((6, 8), (17, 19))
    GOLDEN_HOUR_MIN_TECHNICAL: float = 0.4
    LOW_LIGHT_EXPOSURE_BELOW: float = 0.4
    NIGHT_BEFORE_HOUR: int = 6
    NIGHT_AFTER_HOUR: int = 20

    ACTION_SHARPNESS_BELOW: float = 0.6
    ACTION_EXPOSURE_ABOVE: float = 0.6
    EVENT_EXPOSURE_ABOVE: float = 0.7

    PRIORITY: Tuple[str, ...] = (
        "utility", "portrait", "group_photo", "event", "golden_hour",
        "landscape", "close_up", "action", "low_light", "outdoor", "indoor",
    )


@dataclass(frozen=True)
class ScreenshotConstants:
    """Metadata heuristics for utility (screenshot) detection."""

    SCREEN_RATIOS: Tuple[float, ...] = (16.0 / 9.0, 19.5 / 9.0, 20.0 / 9.0, 2.16, 1.78, 1.33)
    RATIO_TOLERANCE: float = 0.1
    KEYWORDS: Tuple[str, ...] = (
        "screenshot", "screen shot", "screen_shot", "screen recording",
        "screen_recording", "screenrecording", "img_", "photo_",
    )
    RESOLUTIONS: Tuple[Tuple[int, int], ...] = (
        (1290, 2796), (1179, 2556), (1170, 2532), (1080, 2340),
        (1242, 2688), (1125, 2436), (828, 1792), (1242, 2208),
        (750, 1334), (640, 1136), (2048, 2732), (1668, 2388),
        (1620, 2360), (1488, 2266),
    )

    NO_LOCATION_POINTS: int = 3
    NO_CAMERA_POINTS: int = 3
    NO_EXPOSURE_METADATA_POINTS: int = 2
    SCREEN_RATIO_POINTS: int = 2
    KEYWORD_POINTS: int = 4
    EXACT_RESOLUTION_POINTS: int = 3
    THRESHOLD: int = 5


@dataclass(frozen=True)
class ClusterTypeConstants:
    """Face-ratio cutoffs for labelling clusters."""

    FACE_HEAVY_RATIO: float = 0.8
    FACE_LIGHT_RATIO: float = 0.3


@dataclass(frozen=True)
class PlannerConstants:
    """Perfect-moment replacement confidence and timing constants."""

    CONFIDENCE_SOURCE_WEIGHT: float = 0.4
    CONFIDENCE_GAIN_FACTOR: float = 2.0
    CONFIDENCE_GAIN_CAP: float = 0.3
    CONFIDENCE_EYES_BONUS: float = 0.2
    CONFIDENCE_ANGLE_BONUS: float = 0.1

    BASE_PROCESSING_SECONDS: float = 5.0
    PER_PERSON_SECONDS: float = 2.0
    PER_CANDIDATE_SECONDS: float = 3.0

    ELIGIBLE_MIN_CONFIDENCE: float = 0.5


# Create singleton instances for easy import
EAR = EARConstants()
SMILE = SmileConstants()
FACE_ANGLE = FaceAngleConstants()
FACE_RANK = FaceRankConstants()
FACE_SUMMARY = FaceSummaryConstants()
SCORING = ScoringConstants()
CATEGORIZATION = CategorizationConstants()
SCREENSHOT = ScreenshotConstants()
CLUSTER_TYPE = ClusterTypeConstants()
PLANNER = PlannerConstants()

MAX_WORKERS_CAP: Final[int] = 8
