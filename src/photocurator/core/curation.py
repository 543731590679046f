"""Cluster curation: rank photos inside each cluster and pick a representative."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Mapping, Optional, Sequence

from photocurator.shared.constants import CLUSTER_TYPE, SCORING
from photocurator.shared.models import (
    ClusterRanking,
    ClusterType,
    Photo,
    PhotoCluster,
    RankedPhoto,
)
from photocurator.utils.concurrency import worker_count

logger = logging.getLogger(__name__)


def classify_cluster(cluster: PhotoCluster, photos_by_id: Mapping[str, Photo]) -> ClusterType:
    """Label a cluster by the share of its photos that contain faces."""
    members = [photos_by_id.get(pid) for pid in cluster.photo_ids]
    with_faces = [p for p in members if p is not None and p.has_faces]
    face_ratio = len(with_faces) / cluster.size

    if face_ratio > CLUSTER_TYPE.FACE_HEAVY_RATIO:
        if all(p.face_count == 1 for p in with_faces):
            return ClusterType.PORTRAIT_SESSION
        return ClusterType.GROUP_EVENT
    if face_ratio < CLUSTER_TYPE.FACE_LIGHT_RATIO:
        return ClusterType.LANDSCAPE_COLLECTION
    return ClusterType.MIXED_CONTENT


class ClusterCurator:
    """
    Ranks the photos of each cluster by composite score.

    The top-ranked photo becomes the representative, except that in a
    cluster where most photos show people a photo without faces is never
    chosen.
    """

    def __init__(self, max_workers: Optional[int] = None):
        self.max_workers = max_workers

    def rank_cluster(self, cluster: PhotoCluster, photos_by_id: Mapping[str, Photo]) -> ClusterRanking:
        entries = []
        for photo_id, timestamp in zip(cluster.photo_ids, cluster.timestamps):
            photo = photos_by_id.get(photo_id)
            if photo is None:
                logger.warning("Photo %s of cluster %s not found, ranking as unscored", photo_id, cluster.cluster_id)
            score = (
                photo.photo_score.overall
                if photo is not None and photo.photo_score is not None
                else SCORING.NEUTRAL_SIGNAL
            )
            has_faces = photo is not None and photo.has_faces
            entries.append((photo_id, timestamp, score, has_faces))

        entries.sort(key=lambda e: (-e[2], e[1], e[0]))

        ranked = tuple(
            RankedPhoto(rank=i + 1, photo_id=photo_id, timestamp=timestamp, score=score)
            for i, (photo_id, timestamp, score, _) in enumerate(entries)
        )

        representative_id = entries[0][0]
        override = False
        face_count = sum(1 for e in entries if e[3])
        if face_count * 2 > len(entries) and not entries[0][3]:
            representative_id = next(e[0] for e in entries if e[3])
            override = True
            logger.debug(
                "Cluster %s: representative %s has no faces, using %s instead",
                cluster.cluster_id, entries[0][0], representative_id,
            )

        return ClusterRanking(
            cluster_id=cluster.cluster_id,
            ranked_photos=ranked,
            representative_id=representative_id,
            cluster_type=classify_cluster(cluster, photos_by_id),
            face_override_applied=override,
        )

    def curate(
        self,
        clusters: Sequence[PhotoCluster],
        photos_by_id: Mapping[str, Photo],
    ) -> List[ClusterRanking]:
        """Rank every cluster in parallel. Results follow the order of ``clusters``."""
        if not clusters:
            return []

        results: Dict[str, ClusterRanking] = {}
        with ThreadPoolExecutor(max_workers=worker_count(len(clusters), self.max_workers)) as executor:
            futures = [executor.submit(self.rank_cluster, c, photos_by_id) for c in clusters]
            for future in as_completed(futures):
                ranking = future.result()
                results[ranking.cluster_id] = ranking

        overrides = sum(1 for r in results.values() if r.face_override_applied)
        logger.info("Curated %d clusters (%d face overrides)", len(results), overrides)
        return [results[c.cluster_id] for c in clusters]
