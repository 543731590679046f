"""Public API package for photocurator.

This package provides the main public API functions and the pipeline
that runs scoring, clustering, curation and planning end to end.
"""

from photocurator.api.pipeline import CurationPipeline
from photocurator.api.public import (
    curate_photos,
    curate_photos_async,
    curate_collection,
    cluster_photos,
    plan_perfect_moment,
)

__all__ = [
    'CurationPipeline',
    'curate_photos',
    'curate_photos_async',
    'curate_collection',
    'cluster_photos',
    'plan_perfect_moment',
]
