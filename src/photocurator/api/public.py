"""High-level API functions for photocurator.

This module provides the main public API functions for curating a photo
collection: scoring, clustering, picking representatives and planning
perfect moments.
"""

import logging
import threading
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

from photocurator.api.pipeline import CurationPipeline, Observations
from photocurator.core.clustering import PhotoClusterer
from photocurator.core.planner import Identities, PerfectMomentPlanner
from photocurator.shared.config import ClusteringConfig, CurationConfig, PlannerConfig
from photocurator.shared.models import (
    CurationResult,
    PerfectMomentPlan,
    Photo,
    PhotoCluster,
)
from photocurator.shared.protocols import Detector, PersonMatcher
from photocurator.utils.serialization import load_collection

logger = logging.getLogger(__name__)


def curate_photos(
    photos: Sequence[Photo],
    observations: Optional[Observations] = None,
    identities: Optional[Identities] = None,
    config: Optional[CurationConfig] = None,
    detector: Optional[Detector] = None,
    matcher: Optional[PersonMatcher] = None,
    cancel_event: Optional[threading.Event] = None,
) -> CurationResult:
    """Run the full curation pipeline over a collection.

    Args:
        photos: Photos to curate
        observations: Detected faces per photo id (or pass ``detector``)
        identities: Person id per face, per photo id (or pass ``matcher``)
        config: Optional CurationConfig
        detector: Optional FaceDetector used for photos without observations
        matcher: Optional PersonMatcher used when identities are not given
        cancel_event: Optional event that cancels scoring when set

    Returns:
        CurationResult with scored photos, clusters, rankings and plans
    """
    pipeline = CurationPipeline(config, detector=detector, matcher=matcher)
    return pipeline.run(photos, observations, identities, cancel_event)


async def curate_photos_async(
    photos: Sequence[Photo],
    observations: Optional[Observations] = None,
    identities: Optional[Identities] = None,
    config: Optional[CurationConfig] = None,
    detector: Optional[Detector] = None,
    matcher: Optional[PersonMatcher] = None,
    cancel_event: Optional[threading.Event] = None,
) -> CurationResult:
    """Async version of curate_photos. The detector may be sync or async."""
    pipeline = CurationPipeline(config, detector=detector, matcher=matcher)
    return await pipeline.run_async(photos, observations, identities, cancel_event)


def curate_collection(
    path: Union[str, Path],
    config: Optional[CurationConfig] = None,
) -> CurationResult:
    """Load a collection JSON file and curate it.

    Raises:
        CollectionLoadError: If the file cannot be read or parsed
    """
    collection = load_collection(path)
    return curate_photos(
        collection.photos,
        observations=collection.observations,
        identities=collection.identities,
        config=config,
    )


def cluster_photos(
    photos: Sequence[Photo],
    config: Optional[ClusteringConfig] = None,
) -> List[PhotoCluster]:
    """Group photos into near-duplicate clusters without scoring them."""
    return PhotoClusterer(config).cluster(photos)


def plan_perfect_moment(
    cluster: PhotoCluster,
    photos: Union[Sequence[Photo], Mapping[str, Photo]],
    identities: Optional[Identities],
    base_photo_id: Optional[str] = None,
    config: Optional[PlannerConfig] = None,
) -> PerfectMomentPlan:
    """Evaluate a single cluster and plan its face replacements.

    Args:
        cluster: Cluster to plan
        photos: Analyzed photos, as a sequence or a lookup by photo id
        identities: Person id per face, per photo id
        base_photo_id: Photo receiving replacements (default: representative)
        config: Optional PlannerConfig
    """
    photos_by_id = photos if isinstance(photos, Mapping) else {p.photo_id: p for p in photos}
    return PerfectMomentPlanner(config).plan(cluster, photos_by_id, identities, base_photo_id)
