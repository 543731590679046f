"""Multi-stage curation pipeline.

Stages:
    1. Face analysis and scoring, one task per photo in a thread pool
    2. Clustering, once, on the calling thread
    3. Curation and perfect-moment planning, one task per cluster
"""

import asyncio
import inspect
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from photocurator.core.clustering import PhotoClusterer, assign_clusters
from photocurator.core.curation import ClusterCurator
from photocurator.core.planner import Identities, PerfectMomentPlanner
from photocurator.core.scorer import PhotoScorer
from photocurator.shared.config import CurationConfig
from photocurator.shared.exceptions import (
    AnalysisCancelledError,
    CompositingError,
    DetectionError,
    IdentityMatchError,
)
from photocurator.shared.models import (
    ClusteringStatistics,
    ClusterRanking,
    CurationResult,
    FaceObservation,
    PerfectMomentPlan,
    Photo,
    PhotoAnalysisFailure,
    PhotoCluster,
    ReplacementOutcome,
)
from photocurator.shared.protocols import Detector, FaceCompositor, PersonMatcher
from photocurator.utils.concurrency import worker_count

logger = logging.getLogger(__name__)

Observations = Mapping[str, Sequence[FaceObservation]]


def _is_async(method) -> bool:
    return inspect.iscoroutinefunction(method)


class CurationPipeline:
    """
    Runs the full curation flow over an in-memory photo collection.

    Face input comes either from an ``observations`` mapping or from a
    detector collaborator. Person identities come either from an
    ``identities`` mapping or from a matcher collaborator.
    """

    def __init__(
        self,
        config: Optional[CurationConfig] = None,
        detector: Optional[Detector] = None,
        matcher: Optional[PersonMatcher] = None,
    ):
        self.config = config or CurationConfig()
        self.config.validate()

        self.detector = detector
        self.matcher = matcher

        self.scorer = PhotoScorer(self.config.analysis)
        self.clusterer = PhotoClusterer(self.config.clustering)
        self.curator = ClusterCurator(self.config.max_workers)
        self.planner = PerfectMomentPlanner(self.config.planner)

    # ------------------------------------------------------------------
    # Stage 1: scoring
    # ------------------------------------------------------------------

    def detect_faces(self, photo: Photo, observations: Optional[Observations] = None) -> Sequence[FaceObservation]:
        if observations is not None and photo.photo_id in observations:
            return observations[photo.photo_id]
        if self.detector is None:
            return ()
        try:
            return self.detector.detect(photo)
        except Exception as e:
            raise DetectionError(photo.photo_id, str(e)) from e

    def score_photo(self, photo: Photo, observations: Optional[Observations] = None) -> Photo:
        return self.scorer.score_photo(photo, self.detect_faces(photo, observations))

    def score_photos(
        self,
        photos: Sequence[Photo],
        observations: Optional[Observations] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Tuple[List[Photo], List[PhotoAnalysisFailure]]:
        """
        Score every photo in parallel.

        Args:
            photos: Photos to score
            observations: Optional detected faces per photo id
            cancel_event: When set, pending work is cancelled and
                AnalysisCancelledError is raised

        Returns:
            Tuple of (photos in input order, per-photo failures). Photos
            whose detection failed are returned unscored.
        """
        if not photos:
            return [], []
        if cancel_event is not None and cancel_event.is_set():
            raise AnalysisCancelledError(0, len(photos))

        logger.info("Stage 1: Scoring %d photos...", len(photos))

        scored: Dict[str, Photo] = {}
        failures: List[PhotoAnalysisFailure] = []

        with ThreadPoolExecutor(max_workers=worker_count(len(photos), self.config.max_workers)) as executor:
            futures = {
                executor.submit(self.score_photo, photo, observations): photo
                for photo in photos
            }
            completed = 0
            for future in as_completed(futures):
                if cancel_event is not None and cancel_event.is_set():
                    for pending in futures:
                        pending.cancel()
                    logger.warning("Scoring cancelled after %d/%d photos", completed, len(photos))
                    raise AnalysisCancelledError(completed, len(photos))

                photo = futures[future]
                try:
                    scored[photo.photo_id] = future.result()
                except DetectionError as e:
                    logger.warning("Skipping analysis of photo %s: %s", photo.photo_id, e.reason)
                    failures.append(PhotoAnalysisFailure(photo.photo_id, str(e)))
                completed += 1

        results = [scored.get(photo.photo_id, photo) for photo in photos]
        logger.info("Scored %d photos (%d failed)", len(photos) - len(failures), len(failures))
        return results, failures

    async def score_photos_async(
        self,
        photos: Sequence[Photo],
        observations: Optional[Observations] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Tuple[List[Photo], List[PhotoAnalysisFailure]]:
        """Async version of score_photos. The detector may be sync or async."""
        if not photos:
            return [], []

        async def score_one(photo: Photo):
            if cancel_event is not None and cancel_event.is_set():
                return None
            try:
                if observations is not None and photo.photo_id in observations:
                    faces = observations[photo.photo_id]
                elif self.detector is None:
                    faces = ()
                elif _is_async(self.detector.detect):
                    faces = await self.detector.detect(photo)
                else:
                    faces = await asyncio.to_thread(self.detector.detect, photo)
            except Exception as e:
                error = DetectionError(photo.photo_id, str(e))
                logger.warning("Skipping analysis of photo %s: %s", photo.photo_id, error.reason)
                return PhotoAnalysisFailure(photo.photo_id, str(error))
            if cancel_event is not None and cancel_event.is_set():
                return None
            return await asyncio.to_thread(self.scorer.score_photo, photo, faces)

        logger.info("Stage 1: Scoring %d photos (async)...", len(photos))
        outcomes = await asyncio.gather(*(score_one(photo) for photo in photos))

        if cancel_event is not None and cancel_event.is_set():
            completed = sum(1 for o in outcomes if o is not None)
            raise AnalysisCancelledError(completed, len(photos))

        results: List[Photo] = []
        failures: List[PhotoAnalysisFailure] = []
        for photo, outcome in zip(photos, outcomes):
            if isinstance(outcome, PhotoAnalysisFailure):
                failures.append(outcome)
                results.append(photo)
            else:
                results.append(outcome)
        return results, failures

    # ------------------------------------------------------------------
    # Stages 2 and 3
    # ------------------------------------------------------------------

    def cluster(self, photos: Sequence[Photo]) -> Tuple[List[Photo], List[PhotoCluster]]:
        logger.info("Stage 2: Clustering %d photos...", len(photos))
        clusters = self.clusterer.cluster(photos)
        return assign_clusters(photos, clusters), clusters

    def resolve_identities(
        self,
        photos: Sequence[Photo],
        identities: Optional[Identities] = None,
    ) -> Tuple[Optional[Identities], List[PhotoAnalysisFailure]]:
        """
        Use the given identities, or ask the matcher for every analyzed photo.

        Returns:
            Tuple of (identities, per-photo failures). A photo whose matching
            failed is left out of the identities, so its cluster is planned
            as inconsistent_people.
        """
        if identities is not None or self.matcher is None:
            return identities, []

        resolved: Dict[str, List[Optional[str]]] = {}
        failures: List[PhotoAnalysisFailure] = []
        for photo in photos:
            if not photo.is_analyzed:
                continue
            try:
                resolved[photo.photo_id] = list(self.matcher.match(photo, photo.face_qualities))
            except Exception as e:
                error = IdentityMatchError(photo.photo_id, str(e))
                logger.warning("Skipping identity matching of photo %s: %s", photo.photo_id, error.reason)
                failures.append(PhotoAnalysisFailure(photo.photo_id, str(error)))
        return resolved, failures

    def plan_clusters(
        self,
        clusters: Sequence[PhotoCluster],
        rankings: Sequence[ClusterRanking],
        photos_by_id: Mapping[str, Photo],
        identities: Optional[Identities],
    ) -> List[PerfectMomentPlan]:
        if not clusters:
            return []

        representatives = {r.cluster_id: r.representative_id for r in rankings}
        plans: Dict[str, PerfectMomentPlan] = {}
        with ThreadPoolExecutor(max_workers=worker_count(len(clusters), self.config.max_workers)) as executor:
            futures = [
                executor.submit(
                    self.planner.plan,
                    cluster,
                    photos_by_id,
                    identities,
                    representatives.get(cluster.cluster_id),
                )
                for cluster in clusters
            ]
            for future in as_completed(futures):
                plan = future.result()
                plans[plan.cluster_id] = plan

        eligible = sum(1 for p in plans.values() if p.eligibility.is_eligible)
        logger.info("Planned %d clusters (%d eligible for perfect moment)", len(plans), eligible)
        return [plans[c.cluster_id] for c in clusters]

    def _finish(
        self,
        photos: List[Photo],
        failures: List[PhotoAnalysisFailure],
        identities: Optional[Identities],
    ) -> CurationResult:
        photos, clusters = self.cluster(photos)
        photos_by_id = {p.photo_id: p for p in photos}

        logger.info("Stage 3: Curating %d clusters...", len(clusters))
        rankings = self.curator.curate(clusters, photos_by_id)

        plans: List[PerfectMomentPlan] = []
        if self.config.plan_perfect_moments:
            identities, match_failures = self.resolve_identities(photos, identities)
            failures = failures + match_failures
            plans = self.plan_clusters(clusters, rankings, photos_by_id, identities)

        return CurationResult(
            photos=tuple(photos),
            clusters=tuple(clusters),
            rankings=tuple(rankings),
            plans=tuple(plans),
            failures=tuple(failures),
            statistics=ClusteringStatistics.from_clusters(clusters),
        )

    def run(
        self,
        photos: Sequence[Photo],
        observations: Optional[Observations] = None,
        identities: Optional[Identities] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> CurationResult:
        """Score, cluster, curate and plan a collection."""
        scored, failures = self.score_photos(photos, observations, cancel_event)
        return self._finish(scored, failures, identities)

    async def run_async(
        self,
        photos: Sequence[Photo],
        observations: Optional[Observations] = None,
        identities: Optional[Identities] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> CurationResult:
        scored, failures = await self.score_photos_async(photos, observations, cancel_event)
        return await asyncio.to_thread(self._finish, scored, failures, identities)

    # ------------------------------------------------------------------
    # Compositing
    # ------------------------------------------------------------------

    def apply_replacements(
        self,
        plan: PerfectMomentPlan,
        compositor: FaceCompositor,
        feasible_only: bool = True,
    ) -> List[ReplacementOutcome]:
        """
        Hand each planned replacement to the compositor.

        Compositing failures are recorded on the outcome and the remaining
        replacements still run. No retries.
        """
        replacements = plan.feasible_replacements if feasible_only else plan.replacements
        outcomes = []
        for replacement in replacements:
            try:
                composite = compositor.composite(replacement)
            except CompositingError as e:
                logger.warning("Replacement for %s failed: %s", replacement.person_id, e)
                outcomes.append(ReplacementOutcome(replacement=replacement, error=e))
                continue
            outcomes.append(ReplacementOutcome(replacement=replacement, composite=composite))

        logger.info(
            "Applied %d/%d replacements for cluster %s",
            sum(1 for o in outcomes if o.succeeded), len(outcomes), plan.cluster_id,
        )
        return outcomes

    async def apply_replacements_async(
        self,
        plan: PerfectMomentPlan,
        compositor: FaceCompositor,
        feasible_only: bool = True,
    ) -> List[ReplacementOutcome]:
        """Async version of apply_replacements. The compositor may be sync or async."""
        replacements = plan.feasible_replacements if feasible_only else plan.replacements

        async def apply_one(replacement) -> ReplacementOutcome:
            try:
                if _is_async(compositor.composite):
                    composite = await compositor.composite(replacement)
                else:
                    composite = await asyncio.to_thread(compositor.composite, replacement)
            except CompositingError as e:
                logger.warning("Replacement for %s failed: %s", replacement.person_id, e)
                return ReplacementOutcome(replacement=replacement, error=e)
            return ReplacementOutcome(replacement=replacement, composite=composite)

        return list(await asyncio.gather(*(apply_one(r) for r in replacements)))
