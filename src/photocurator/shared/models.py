from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from photocurator.shared.constants import (
    FACE_ANGLE,
    FACE_RANK,
    FACE_SUMMARY,
    SCORING,
    SMILE,
)

Point = Tuple[float, float]
BoundingBox = Tuple[float, float, float, float]  # (x, y, width, height), normalized
Fingerprint = Union[bytes, Tuple[float, ...]]


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, float(value)))


def _points(values: Optional[Sequence[Sequence[float]]]) -> Optional[Tuple[Point, ...]]:
    if values is None:
        return None
    return tuple((float(p[0]), float(p[1])) for p in values)


def _fingerprint(value) -> Optional[Fingerprint]:
    if value is None or isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return tuple(float(v) for v in value)


# ---------------------------------------------------------------------------
# Photo inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PhotoMetadata:
    """Camera and file metadata as read from EXIF."""
    width: int = 0
    height: int = 0
    camera_model: Optional[str] = None
    lens_model: Optional[str] = None
    focal_length: Optional[float] = None
    f_number: Optional[float] = None
    exposure_time: Optional[float] = None
    iso: Optional[int] = None
    altitude: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "width", max(0, int(self.width)))
        object.__setattr__(self, "height", max(0, int(self.height)))

    @property
    def aspect_ratio(self) -> Optional[float]:
        """Long side over short side, or None when dimensions are unknown."""
        if self.width == 0 or self.height == 0:
            return None
        return max(self.width, self.height) / min(self.width, self.height)

    @property
    def has_exposure_metadata(self) -> bool:
        return any(
            v is not None
            for v in (self.focal_length, self.f_number, self.exposure_time, self.iso)
        )


@dataclass(frozen=True)
class PhotoSignals:
    """Externally computed per-photo signals. Absent values resolve to 0.5."""
    sharpness: Optional[float] = None
    exposure: Optional[float] = None
    composition: Optional[float] = None
    context: Optional[float] = None
    scene_labels: Tuple[str, ...] = ()
    photo_type: Optional["PhotoType"] = None
    is_utility: Optional[bool] = None

    def __post_init__(self):
        for name in ("sharpness", "exposure", "composition", "context"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, clamp(value))
        object.__setattr__(self, "scene_labels", tuple(self.scene_labels))


@dataclass(frozen=True)
class FaceObservation:
    """A single detected face as delivered by the detection collaborator.

    Landmark points are normalized to the face bounding box with y growing
    upwards. ``outer_lips`` is the outer lip contour starting at the left
    mouth corner, with the right corner at index 6.
    """
    face_index: int
    bounding_box: BoundingBox = (0.0, 0.0, 0.0, 0.0)
    left_eye: Optional[Tuple[Point, ...]] = None
    right_eye: Optional[Tuple[Point, ...]] = None
    outer_lips: Optional[Tuple[Point, ...]] = None
    pitch: Optional[float] = None
    yaw: Optional[float] = None
    roll: Optional[float] = None
    capture_quality: Optional[float] = None
    sharpness: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "bounding_box", tuple(float(v) for v in self.bounding_box))
        for name in ("left_eye", "right_eye", "outer_lips"):
            object.__setattr__(self, name, _points(getattr(self, name)))


# ---------------------------------------------------------------------------
# Face analysis
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EyeState:
    left_open: bool
    right_open: bool
    confidence: float

    def __post_init__(self):
        object.__setattr__(self, "confidence", clamp(self.confidence))

    @property
    def both_open(self) -> bool:
        return self.left_open and self.right_open

    @property
    def either_open(self) -> bool:
        return self.left_open or self.right_open


@dataclass(frozen=True)
class SmileQuality:
    intensity: float
    naturalness: float
    confidence: float

    def __post_init__(self):
        object.__setattr__(self, "intensity", clamp(self.intensity))
        object.__setattr__(self, "naturalness", clamp(self.naturalness))
        object.__setattr__(self, "confidence", clamp(self.confidence))

    @property
    def overall_quality(self) -> float:
        return self.intensity * SMILE.INTENSITY_WEIGHT + self.naturalness * SMILE.NATURALNESS_WEIGHT

    @property
    def is_good_smile(self) -> bool:
        return (
            self.overall_quality > SMILE.GOOD_SMILE_QUALITY
            and self.confidence > SMILE.GOOD_SMILE_CONFIDENCE
        )


@dataclass(frozen=True)
class FaceAngle:
    """Head pose in degrees."""
    pitch: float = 0.0
    yaw: float = 0.0
    roll: float = 0.0

    @property
    def is_optimal(self) -> bool:
        return (
            abs(self.pitch) < FACE_ANGLE.OPTIMAL_PITCH
            and abs(self.yaw) < FACE_ANGLE.OPTIMAL_YAW
            and abs(self.roll) < FACE_ANGLE.OPTIMAL_ROLL
        )

    def is_compatible_for_alignment(self, other: "FaceAngle") -> bool:
        return (
            abs(self.pitch - other.pitch) < FACE_ANGLE.ALIGN_PITCH_DIFF
            and abs(self.yaw - other.yaw) < FACE_ANGLE.ALIGN_YAW_DIFF
            and abs(self.roll - other.roll) < FACE_ANGLE.ALIGN_ROLL_DIFF
        )


class FaceIssue(Enum):
    EYES_CLOSED = "eyes_closed"
    POOR_EXPRESSION = "poor_expression"
    AWKWARD_POSE = "awkward_pose"
    BLURRED_FACE = "blurred_face"
    UNFLATTERING_ANGLE = "unflattering_angle"
    NONE = "none"

    @property
    def severity(self) -> float:
        return _ISSUE_SEVERITY[self]


_ISSUE_SEVERITY: Dict[FaceIssue, float] = {
    FaceIssue.EYES_CLOSED: 1.0,
    FaceIssue.BLURRED_FACE: 0.9,
    FaceIssue.POOR_EXPRESSION: 0.8,
    FaceIssue.AWKWARD_POSE: 0.7,
    FaceIssue.UNFLATTERING_ANGLE: 0.6,
    FaceIssue.NONE: 0.0,
}

# Primary issue is the first present issue in this order
_PRIMARY_ISSUE_ORDER: Tuple[FaceIssue, ...] = (
    FaceIssue.EYES_CLOSED,
    FaceIssue.BLURRED_FACE,
    FaceIssue.POOR_EXPRESSION,
    FaceIssue.AWKWARD_POSE,
    FaceIssue.UNFLATTERING_ANGLE,
)


@dataclass(frozen=True)
class FaceLandmarks:
    left_eye: Optional[Tuple[Point, ...]] = None
    right_eye: Optional[Tuple[Point, ...]] = None
    outer_lips: Optional[Tuple[Point, ...]] = None

    def __post_init__(self):
        for name in ("left_eye", "right_eye", "outer_lips"):
            object.__setattr__(self, name, _points(getattr(self, name)))


@dataclass(frozen=True)
class FaceQuality:
    """Quality assessment of one face in one photo."""
    photo_id: str
    face_index: int
    bounding_box: BoundingBox
    capture_quality: float
    eye_state: EyeState
    smile_quality: SmileQuality
    face_angle: FaceAngle
    sharpness: float
    landmarks: Optional[FaceLandmarks] = None

    def __post_init__(self):
        object.__setattr__(self, "bounding_box", tuple(float(v) for v in self.bounding_box))
        object.__setattr__(self, "capture_quality", clamp(self.capture_quality))
        object.__setattr__(self, "sharpness", clamp(self.sharpness))

    @property
    def face_area(self) -> float:
        return self.bounding_box[2] * self.bounding_box[3]

    @property
    def rank(self) -> float:
        """Composite face rank in [0, 1]."""
        return (
            self.capture_quality * FACE_RANK.CAPTURE_WEIGHT
            + (1.0 if self.eye_state.both_open else 0.0) * FACE_RANK.EYES_WEIGHT
            + self.smile_quality.overall_quality * FACE_RANK.SMILE_WEIGHT
            + self.sharpness * FACE_RANK.SHARPNESS_WEIGHT
            + (1.0 if self.face_angle.is_optimal else FACE_RANK.SUBOPTIMAL_ANGLE_SCORE) * FACE_RANK.ANGLE_WEIGHT
        )

    @property
    def issues(self) -> Tuple[FaceIssue, ...]:
        found = []
        if not self.eye_state.both_open:
            found.append(FaceIssue.EYES_CLOSED)
        if self.smile_quality.overall_quality < FACE_RANK.POOR_EXPRESSION_BELOW:
            found.append(FaceIssue.POOR_EXPRESSION)
        if not self.face_angle.is_optimal:
            found.append(FaceIssue.UNFLATTERING_ANGLE)
        if self.sharpness < FACE_RANK.BLURRED_BELOW:
            found.append(FaceIssue.BLURRED_FACE)
        if self.capture_quality < FACE_RANK.AWKWARD_POSE_BELOW:
            found.append(FaceIssue.AWKWARD_POSE)
        return tuple(found) if found else (FaceIssue.NONE,)

    @property
    def primary_issue(self) -> FaceIssue:
        present = set(self.issues)
        for issue in _PRIMARY_ISSUE_ORDER:
            if issue in present:
                return issue
        return FaceIssue.NONE


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TechnicalQualityScore:
    sharpness: float
    exposure: float
    composition: float

    def __post_init__(self):
        for name in ("sharpness", "exposure", "composition"):
            object.__setattr__(self, name, clamp(getattr(self, name)))

    @property
    def overall(self) -> float:
        return (self.sharpness + self.exposure + self.composition) / 3.0


@dataclass(frozen=True)
class FaceQualityScore:
    """Photo-level summary of all faces in a photo."""
    face_count: int
    average_rank: float
    eyes_open: bool
    good_expressions: bool
    optimal_sizes: bool

    def __post_init__(self):
        object.__setattr__(self, "average_rank", clamp(self.average_rank))

    @property
    def composite_score(self) -> float:
        if self.face_count == 0:
            return FACE_SUMMARY.NO_FACES_SCORE
        flags = sum(1 for flag in (self.eyes_open, self.good_expressions, self.optimal_sizes) if flag)
        return clamp(self.average_rank + FACE_SUMMARY.FLAG_BONUS * flags)


class PhotoType(Enum):
    PORTRAIT = "portrait"
    GROUP_PHOTO = "group_photo"
    EVENT = "event"
    LANDSCAPE = "landscape"
    OUTDOOR = "outdoor"
    GOLDEN_HOUR = "golden_hour"
    CLOSE_UP = "close_up"
    ACTION = "action"
    LOW_LIGHT = "low_light"
    INDOOR = "indoor"
    UTILITY = "utility"

    @property
    def weights(self) -> Optional[Tuple[float, float, float]]:
        """(technical, face, context) weights; None for utility photos."""
        return SCORING.WEIGHTS.get(self.value)


@dataclass(frozen=True)
class PhotoScore:
    technical: float
    face: float
    context: float
    overall: float
    photo_type: PhotoType
    calculated_at: datetime

    def __post_init__(self):
        for name in ("technical", "face", "context", "overall"):
            object.__setattr__(self, name, clamp(getattr(self, name)))

    @classmethod
    def calculate(
        cls,
        technical: float,
        face: float,
        context: float,
        photo_type: PhotoType,
        calculated_at: Optional[datetime] = None,
    ) -> "PhotoScore":
        """Build a score with the weighted overall for the given photo type."""
        technical, face, context = clamp(technical), clamp(face), clamp(context)

        if photo_type is PhotoType.UTILITY:
            overall = clamp(
                technical * SCORING.UTILITY_TECHNICAL_WEIGHT + context * SCORING.UTILITY_CONTEXT_WEIGHT,
                SCORING.UTILITY_MIN,
                SCORING.UTILITY_MAX,
            )
        else:
            tw, fw, cw = photo_type.weights
            overall = technical * tw + face * fw + context * cw

        return cls(
            technical=technical,
            face=face,
            context=context,
            overall=overall,
            photo_type=photo_type,
            calculated_at=calculated_at or datetime.now(),
        )


# ---------------------------------------------------------------------------
# Photo record
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Photo:
    """A photo in the collection plus any analysis attached to it so far."""
    photo_id: str
    timestamp: datetime
    asset_id: Optional[str] = None
    location: Optional[GeoLocation] = None
    metadata: PhotoMetadata = field(default_factory=PhotoMetadata)
    signals: PhotoSignals = field(default_factory=PhotoSignals)
    fingerprint: Optional[Fingerprint] = None
    cluster_id: Optional[str] = None
    face_qualities: Optional[Tuple[FaceQuality, ...]] = None  # None = not analyzed
    technical_score: Optional[TechnicalQualityScore] = None
    face_score: Optional[FaceQualityScore] = None
    photo_score: Optional[PhotoScore] = None

    def __post_init__(self):
        object.__setattr__(self, "fingerprint", _fingerprint(self.fingerprint))
        if self.face_qualities is not None:
            object.__setattr__(self, "face_qualities", tuple(self.face_qualities))

    @property
    def is_analyzed(self) -> bool:
        return self.face_qualities is not None

    @property
    def face_count(self) -> int:
        return len(self.face_qualities) if self.face_qualities is not None else 0

    @property
    def has_faces(self) -> bool:
        return self.face_count > 0

    @property
    def is_scored(self) -> bool:
        return self.photo_score is not None

    def with_face_analysis(
        self,
        faces: Sequence[FaceQuality],
        face_score: Optional[FaceQualityScore] = None,
    ) -> "Photo":
        return replace(
            self,
            face_qualities=tuple(faces),
            face_score=face_score if face_score is not None else self.face_score,
        )

    def with_scores(
        self,
        technical_score: Optional[TechnicalQualityScore] = None,
        face_score: Optional[FaceQualityScore] = None,
        photo_score: Optional[PhotoScore] = None,
    ) -> "Photo":
        """Attach scores. Passing None keeps whatever is already attached."""
        return replace(
            self,
            technical_score=technical_score or self.technical_score,
            face_score=face_score or self.face_score,
            photo_score=photo_score or self.photo_score,
        )

    def with_cluster(self, cluster_id: str) -> "Photo":
        return replace(self, cluster_id=cluster_id)


# ---------------------------------------------------------------------------
# Clusters and rankings
# ---------------------------------------------------------------------------


@dataclass
class PhotoCluster:
    """A group of near-duplicate photos, referenced by id.

    Member timestamps and locations are kept alongside the ids so the
    derived properties never need the photo records.
    """
    cluster_id: str
    photo_ids: List[str]
    timestamps: List[datetime]
    locations: List[Optional[GeoLocation]] = field(default_factory=list)
    representative_fingerprint: Optional[Fingerprint] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.photo_ids:
            raise ValueError("A cluster needs at least one photo")
        if len(self.timestamps) != len(self.photo_ids):
            raise ValueError("Cluster timestamps must match photo ids")
        if not self.locations:
            self.locations = [None] * len(self.photo_ids)
        if len(self.locations) != len(self.photo_ids):
            raise ValueError("Cluster locations must match photo ids")
        self.representative_fingerprint = _fingerprint(self.representative_fingerprint)
        if self.created_at is None:
            self.created_at = min(self.timestamps)

    @classmethod
    def from_photo(cls, cluster_id: str, photo: Photo) -> "PhotoCluster":
        return cls(
            cluster_id=cluster_id,
            photo_ids=[photo.photo_id],
            timestamps=[photo.timestamp],
            locations=[photo.location],
            representative_fingerprint=photo.fingerprint,
            created_at=photo.timestamp,
        )

    @property
    def size(self) -> int:
        return len(self.photo_ids)

    @property
    def newest_timestamp(self) -> datetime:
        return max(self.timestamps)

    @property
    def time_range(self) -> Tuple[datetime, datetime]:
        return min(self.timestamps), max(self.timestamps)

    @property
    def median_timestamp(self) -> datetime:
        ordered = sorted(self.timestamps)
        mid = len(ordered) // 2
        if len(ordered) % 2:
            return ordered[mid]
        return ordered[mid - 1] + (ordered[mid] - ordered[mid - 1]) / 2

    @property
    def center_location(self) -> Optional[GeoLocation]:
        known = [loc for loc in self.locations if loc is not None]
        if not known:
            return None
        return GeoLocation(
            latitude=sum(loc.latitude for loc in known) / len(known),
            longitude=sum(loc.longitude for loc in known) / len(known),
        )

    def add(self, photo: Photo):
        self.photo_ids.append(photo.photo_id)
        self.timestamps.append(photo.timestamp)
        self.locations.append(photo.location)

    def remove(self, photo_id: str):
        if photo_id not in self.photo_ids:
            raise ValueError(f"Photo {photo_id} is not in cluster {self.cluster_id}")
        if len(self.photo_ids) == 1:
            raise ValueError("Cannot remove the last photo of a cluster")
        index = self.photo_ids.index(photo_id)
        del self.photo_ids[index]
        del self.timestamps[index]
        del self.locations[index]


@dataclass(frozen=True)
class ClusteringStatistics:
    total_photos: int
    total_clusters: int
    average_cluster_size: float
    singleton_clusters: int
    largest_cluster_size: int

    @classmethod
    def from_clusters(cls, clusters: Sequence[PhotoCluster]) -> "ClusteringStatistics":
        sizes = [c.size for c in clusters]
        total = sum(sizes)
        return cls(
            total_photos=total,
            total_clusters=len(sizes),
            average_cluster_size=total / len(sizes) if sizes else 0.0,
            singleton_clusters=sum(1 for s in sizes if s == 1),
            largest_cluster_size=max(sizes) if sizes else 0,
        )


@dataclass(frozen=True)
class RankedPhoto:
    rank: int  # 1 = best
    photo_id: str
    timestamp: datetime
    score: float


class ClusterType(Enum):
    PORTRAIT_SESSION = "portrait_session"
    GROUP_EVENT = "group_event"
    LANDSCAPE_COLLECTION = "landscape_collection"
    MIXED_CONTENT = "mixed_content"


@dataclass(frozen=True)
class ClusterRanking:
    cluster_id: str
    ranked_photos: Tuple[RankedPhoto, ...]
    representative_id: str
    cluster_type: ClusterType
    face_override_applied: bool = False

    def __post_init__(self):
        object.__setattr__(self, "ranked_photos", tuple(self.ranked_photos))

    def top(self, n: int) -> Tuple[RankedPhoto, ...]:
        return self.ranked_photos[:n]


# ---------------------------------------------------------------------------
# Perfect moment planning
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PersonFaceQualityAnalysis:
    person_id: str
    all_faces: Tuple[FaceQuality, ...]
    best_face: FaceQuality
    worst_face: FaceQuality
    improvement_potential: float

    def __post_init__(self):
        object.__setattr__(self, "all_faces", tuple(self.all_faces))
        object.__setattr__(self, "improvement_potential", clamp(self.improvement_potential))
        if self.best_face.rank < self.worst_face.rank:
            raise ValueError(f"Best face ranks below worst face for person {self.person_id}")

    @property
    def quality_gain(self) -> float:
        return self.best_face.rank - self.worst_face.rank

    @property
    def issues_fixed(self) -> Tuple[FaceIssue, ...]:
        """Issues of the worst face that the best face does not have."""
        best = set(self.best_face.issues)
        return tuple(i for i in self.worst_face.issues if i not in best and i is not FaceIssue.NONE)


class ImprovementType(Enum):
    EYES_CLOSED = "eyes_closed"
    POOR_EXPRESSION = "poor_expression"
    UNFLATTERING_ANGLE = "unflattering_angle"
    BLURRED_FACE = "blurred_face"
    AWKWARD_POSE = "awkward_pose"

    @property
    def description(self) -> str:
        return _IMPROVEMENT_DESCRIPTIONS[self]

    @property
    def priority(self) -> int:
        """Lower is more important."""
        return _IMPROVEMENT_PRIORITY[self]

    @classmethod
    def from_issue(cls, issue: FaceIssue) -> "ImprovementType":
        if issue is FaceIssue.NONE:
            return cls.POOR_EXPRESSION
        return cls(issue.value)


_IMPROVEMENT_DESCRIPTIONS: Dict[ImprovementType, str] = {
    ImprovementType.EYES_CLOSED: "Open closed eyes",
    ImprovementType.POOR_EXPRESSION: "Improve facial expression",
    ImprovementType.UNFLATTERING_ANGLE: "Better face angle",
    ImprovementType.BLURRED_FACE: "Sharper face",
    ImprovementType.AWKWARD_POSE: "More natural pose",
}

_IMPROVEMENT_PRIORITY: Dict[ImprovementType, int] = {
    ImprovementType.EYES_CLOSED: 1,
    ImprovementType.POOR_EXPRESSION: 2,
    ImprovementType.UNFLATTERING_ANGLE: 3,
    ImprovementType.BLURRED_FACE: 4,
    ImprovementType.AWKWARD_POSE: 5,
}


@dataclass(frozen=True)
class PersonFaceReplacement:
    person_id: str
    source_face: FaceQuality
    destination_photo_id: str
    destination_face: FaceQuality
    improvement_type: ImprovementType
    confidence: float
    is_feasible: bool = False  # Set by the planner from its config

    def __post_init__(self):
        object.__setattr__(self, "confidence", clamp(self.confidence))

    @property
    def expected_improvement(self) -> float:
        return self.source_face.rank - self.destination_face.rank


class EligibilityStatus(Enum):
    NOT_EVALUATED = "not_evaluated"
    ELIGIBLE = "eligible"
    INELIGIBLE = "ineligible"


class EligibilityReason(Enum):
    ELIGIBLE = "eligible"
    INSUFFICIENT_PHOTOS = "insufficient_photos"
    NO_FACE_VARIATIONS = "no_face_variations"
    INCONSISTENT_PEOPLE = "inconsistent_people"
    LOW_QUALITY_PHOTOS = "low_quality_photos"
    PROCESSING_ERROR = "processing_error"

    @property
    def user_message(self) -> str:
        return _ELIGIBILITY_MESSAGES[self]


_ELIGIBILITY_MESSAGES: Dict[EligibilityReason, str] = {
    EligibilityReason.ELIGIBLE: "This cluster is eligible for Perfect Moment generation.",
    EligibilityReason.INSUFFICIENT_PHOTOS: "Need at least 2 similar photos to create a Perfect Moment.",
    EligibilityReason.NO_FACE_VARIATIONS: "All photos have similar expressions - no improvements possible.",
    EligibilityReason.INCONSISTENT_PEOPLE: "Photos contain different people - cannot create composite.",
    EligibilityReason.LOW_QUALITY_PHOTOS: "Photo quality is too low for reliable face compositing.",
    EligibilityReason.PROCESSING_ERROR: "Unable to analyze photos for Perfect Moment generation.",
}


@dataclass(frozen=True)
class PerfectMomentEligibility:
    status: EligibilityStatus = EligibilityStatus.NOT_EVALUATED
    reason: Optional[EligibilityReason] = None
    confidence: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "confidence", clamp(self.confidence))

    @property
    def is_eligible(self) -> bool:
        return self.status is EligibilityStatus.ELIGIBLE

    @classmethod
    def eligible(cls, confidence: float) -> "PerfectMomentEligibility":
        return cls(EligibilityStatus.ELIGIBLE, EligibilityReason.ELIGIBLE, confidence)

    @classmethod
    def ineligible(cls, reason: EligibilityReason) -> "PerfectMomentEligibility":
        return cls(EligibilityStatus.INELIGIBLE, reason, 0.0)


@dataclass(frozen=True)
class PerfectMomentPlan:
    cluster_id: str
    eligibility: PerfectMomentEligibility
    base_photo_id: Optional[str] = None
    person_analyses: Tuple[PersonFaceQualityAnalysis, ...] = ()
    replacements: Tuple[PersonFaceReplacement, ...] = ()
    overall_improvement_potential: float = 0.0
    estimated_processing_time: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "person_analyses", tuple(self.person_analyses))
        object.__setattr__(self, "replacements", tuple(self.replacements))
        object.__setattr__(self, "overall_improvement_potential", clamp(self.overall_improvement_potential))

    @property
    def feasible_replacements(self) -> Tuple[PersonFaceReplacement, ...]:
        return tuple(r for r in self.replacements if r.is_feasible)


# ---------------------------------------------------------------------------
# Pipeline results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReplacementOutcome:
    replacement: PersonFaceReplacement
    composite: object = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class PhotoAnalysisFailure:
    photo_id: str
    error: str


@dataclass(frozen=True)
class CurationResult:
    photos: Tuple[Photo, ...]
    clusters: Tuple[PhotoCluster, ...]
    rankings: Tuple[ClusterRanking, ...]
    plans: Tuple[PerfectMomentPlan, ...] = ()
    failures: Tuple[PhotoAnalysisFailure, ...] = ()
    statistics: Optional[ClusteringStatistics] = None

    def __post_init__(self):
        for name in ("photos", "clusters", "rankings", "plans", "failures"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @property
    def photos_by_id(self) -> Dict[str, Photo]:
        return {p.photo_id: p for p in self.photos}

    @property
    def representatives(self) -> Dict[str, str]:
        """Cluster id to representative photo id."""
        return {r.cluster_id: r.representative_id for r in self.rankings}
