"""Shared foundational modules.

This package contains core data structures, configuration, constants,
exceptions and collaborator interfaces used throughout photocurator.
"""

from photocurator.shared.config import (
    AnalysisConfig,
    ClusteringConfig,
    CurationConfig,
    PlannerConfig,
)
from photocurator.shared.constants import (
    EAR,
    SMILE,
    FACE_ANGLE,
    FACE_RANK,
    SCORING,
    PLANNER,
)
from photocurator.shared.exceptions import (
    PhotoCuratorError,
    InvalidConfigError,
    AnalysisError,
    DetectionError,
    IdentityMatchError,
    AnalysisCancelledError,
    CompositingError,
    AlignmentFailedError,
    BlendFailedError,
    CollectionLoadError,
)
from photocurator.shared.models import (
    GeoLocation,
    PhotoMetadata,
    PhotoSignals,
    Photo,
    FaceObservation,
    FaceLandmarks,
    EyeState,
    SmileQuality,
    FaceAngle,
    FaceIssue,
    FaceQuality,
    TechnicalQualityScore,
    FaceQualityScore,
    PhotoType,
    PhotoScore,
    PhotoCluster,
    ClusteringStatistics,
    RankedPhoto,
    ClusterType,
    ClusterRanking,
    PersonFaceQualityAnalysis,
    ImprovementType,
    PersonFaceReplacement,
    EligibilityStatus,
    EligibilityReason,
    PerfectMomentEligibility,
    PerfectMomentPlan,
    ReplacementOutcome,
    PhotoAnalysisFailure,
    CurationResult,
)
from photocurator.shared.protocols import (
    FaceDetector,
    AsyncFaceDetector,
    PersonMatcher,
    FaceCompositor,
)

__all__ = [
    # Configuration
    'AnalysisConfig',
    'ClusteringConfig',
    'CurationConfig',
    'PlannerConfig',

    # Constants
    'EAR',
    'SMILE',
    'FACE_ANGLE',
    'FACE_RANK',
    'SCORING',
    'PLANNER',

    # Exceptions
    'PhotoCuratorError',
    'InvalidConfigError',
    'AnalysisError',
    'DetectionError',
    'IdentityMatchError',
    'AnalysisCancelledError',
    'CompositingError',
    'AlignmentFailedError',
    'BlendFailedError',
    'CollectionLoadError',

    # Models
    'GeoLocation',
    'PhotoMetadata',
    'PhotoSignals',
    'Photo',
    'FaceObservation',
    'FaceLandmarks',
    'EyeState',
    'SmileQuality',
    'FaceAngle',
    'FaceIssue',
    'FaceQuality',
    'TechnicalQualityScore',
    'FaceQualityScore',
    'PhotoType',
    'PhotoScore',
    'PhotoCluster',
    'ClusteringStatistics',
    'RankedPhoto',
    'ClusterType',
    'ClusterRanking',
    'PersonFaceQualityAnalysis',
    'ImprovementType',
    'PersonFaceReplacement',
    'EligibilityStatus',
    'EligibilityReason',
    'PerfectMomentEligibility',
    'PerfectMomentPlan',
    'ReplacementOutcome',
    'PhotoAnalysisFailure',
    'CurationResult',

    # Collaborator interfaces
    'FaceDetector',
    'AsyncFaceDetector',
    'PersonMatcher',
    'FaceCompositor',
]
