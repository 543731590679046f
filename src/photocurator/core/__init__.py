"""Core curation package: scoring, clustering, ranking and perfect-moment planning."""

from photocurator.core.categorizer import PhotoCategorizer
from photocurator.core.clustering import PhotoClusterer, assign_clusters, fingerprint_distance
from photocurator.core.curation import ClusterCurator
from photocurator.core.planner import PerfectMomentPlanner
from photocurator.core.scorer import PhotoScorer, score_context, score_technical

__all__ = [
    'PhotoCategorizer',
    'PhotoClusterer',
    'assign_clusters',
    'fingerprint_distance',
    'ClusterCurator',
    'PerfectMomentPlanner',
    'PhotoScorer',
    'score_context',
    'score_technical',
]
