"""
photocurator - Photo Clustering, Scoring and Perfect Moment Planning

Groups burst and near-duplicate photos, scores them on technical, facial
and contextual quality, picks the best photo of every group and plans
face replacements that combine everyone's best expression into one shot.
"""

# Main public API
from photocurator.api import (
    CurationPipeline,
    curate_photos,
    curate_photos_async,
    curate_collection,
    cluster_photos,
    plan_perfect_moment,
)

# Shared foundational modules (re-exported for convenience)
from photocurator.shared import (
    CurationConfig,
    AnalysisConfig,
    ClusteringConfig,
    PlannerConfig,
    Photo,
    PhotoSignals,
    PhotoMetadata,
    FaceObservation,
    FaceQuality,
    PhotoCluster,
    ClusterRanking,
    PerfectMomentPlan,
    CurationResult,
)

# Core classes
from photocurator.core import (
    PhotoScorer,
    PhotoClusterer,
    ClusterCurator,
    PerfectMomentPlanner,
)
from photocurator.extraction import FaceQualityAnalyzer

__version__ = "0.1.0"

__all__ = [
    # Main API functions
    'CurationPipeline',
    'curate_photos',
    'curate_photos_async',
    'curate_collection',
    'cluster_photos',
    'plan_perfect_moment',

    # Core classes
    'FaceQualityAnalyzer',
    'PhotoScorer',
    'PhotoClusterer',
    'ClusterCurator',
    'PerfectMomentPlanner',

    # Configuration
    'CurationConfig',
    'AnalysisConfig',
    'ClusteringConfig',
    'PlannerConfig',

    # Data models
    'Photo',
    'PhotoSignals',
    'PhotoMetadata',
    'FaceObservation',
    'FaceQuality',
    'PhotoCluster',
    'ClusterRanking',
    'PerfectMomentPlan',
    'CurationResult',

    # Version
    '__version__'
]
