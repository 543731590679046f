"""Temporal and visual clustering of photos into near-duplicate groups."""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from photocurator.shared.config import ClusteringConfig
from photocurator.shared.models import Fingerprint, Photo, PhotoCluster

logger = logging.getLogger(__name__)


def fingerprint_distance(a: Optional[Fingerprint], b: Optional[Fingerprint]) -> float:
    """
    Normalized distance between two fingerprints, in [0, 1].

    - bytes: fraction of differing bits (Hamming)
    - numeric vectors: ||a - b|| / (||a|| + ||b||)

    Missing fingerprints, mismatched kinds or mismatched lengths are
    maximally distant.
    """
    if a is None or b is None:
        return 1.0

    if isinstance(a, bytes) and isinstance(b, bytes):
        if len(a) != len(b) or not a:
            return 1.0
        bits_a = np.unpackbits(np.frombuffer(a, dtype=np.uint8))
        bits_b = np.unpackbits(np.frombuffer(b, dtype=np.uint8))
        return float(np.count_nonzero(bits_a != bits_b)) / bits_a.size

    if isinstance(a, bytes) or isinstance(b, bytes):
        return 1.0

    vec_a = np.asarray(a, dtype=float)
    vec_b = np.asarray(b, dtype=float)
    if vec_a.shape != vec_b.shape or vec_a.size == 0:
        return 1.0

    norm_sum = float(np.linalg.norm(vec_a) + np.linalg.norm(vec_b))
    if norm_sum == 0.0:
        return 0.0
    return min(1.0, float(np.linalg.norm(vec_a - vec_b)) / norm_sum)


def face_counts_compatible(anchor: Optional[int], candidate: Optional[int]) -> bool:
    """One- and two-face photos only group with photos showing as many faces.

    Zero-face, three-plus-face and unanalyzed photos are compatible with anything.
    """
    if anchor is None or candidate is None:
        return True
    if anchor in (1, 2) and candidate in (1, 2):
        return anchor == candidate
    return True


def _face_count(photo: Photo) -> Optional[int]:
    return photo.face_count if photo.is_analyzed else None


class PhotoClusterer:
    """
    Single-pass clusterer over time-ordered photos.

    A photo joins an open cluster when it falls inside the rolling time
    window of that cluster's newest photo and its fingerprint is close
    enough to the cluster's representative fingerprint. Open clusters are
    tried newest first; otherwise the photo starts a new cluster.
    """

    def __init__(self, config: Optional[ClusteringConfig] = None):
        self.config = config or ClusteringConfig()
        self.config.validate()

    def cluster(self, photos: Sequence[Photo]) -> List[PhotoCluster]:
        ordered = sorted(photos, key=lambda p: (p.timestamp, p.photo_id))

        clusters: List[PhotoCluster] = []
        # Most recently extended cluster last
        open_clusters: List[PhotoCluster] = []
        anchor_faces: Dict[str, Optional[int]] = {}

        for photo in ordered:
            open_clusters = [c for c in open_clusters if self._in_window(c, photo)]

            target = self._find_cluster(photo, open_clusters, anchor_faces)
            if target is None:
                target = PhotoCluster.from_photo(f"cluster-{len(clusters) + 1:04d}", photo)
                clusters.append(target)
                anchor_faces[target.cluster_id] = _face_count(photo)
                if photo.fingerprint is None:
                    logger.debug("Photo %s has no fingerprint, kept as singleton", photo.photo_id)
                    continue
            else:
                target.add(photo)
                open_clusters = [c for c in open_clusters if c is not target]

            if target.size < self.config.max_cluster_size:
                open_clusters.append(target)

        logger.info(
            "Clustered %d photos into %d clusters (%d singletons)",
            len(ordered),
            len(clusters),
            sum(1 for c in clusters if c.size == 1),
        )
        return clusters

    def _in_window(self, cluster: PhotoCluster, photo: Photo) -> bool:
        elapsed = (photo.timestamp - cluster.newest_timestamp).total_seconds()
        return elapsed <= self.config.time_window_seconds

    def _find_cluster(
        self,
        photo: Photo,
        open_clusters: List[PhotoCluster],
        anchor_faces: Dict[str, Optional[int]],
    ) -> Optional[PhotoCluster]:
        if photo.fingerprint is None:
            return None

        for cluster in reversed(open_clusters):
            distance = fingerprint_distance(photo.fingerprint, cluster.representative_fingerprint)
            if distance >= self.config.distance_threshold:
                logger.debug(
                    "Photo %s not joining %s: distance %.3f",
                    photo.photo_id, cluster.cluster_id, distance,
                )
                continue
            if self.config.face_count_compatibility and not face_counts_compatible(
                anchor_faces[cluster.cluster_id], _face_count(photo)
            ):
                logger.debug(
                    "Photo %s not joining %s: face count mismatch",
                    photo.photo_id, cluster.cluster_id,
                )
                continue
            return cluster
        return None


def cluster_photos(photos: Sequence[Photo], config: Optional[ClusteringConfig] = None) -> List[PhotoCluster]:
    return PhotoClusterer(config).cluster(photos)


def assign_clusters(photos: Sequence[Photo], clusters: Sequence[PhotoCluster]) -> List[Photo]:
    """Return the photos, in their original order, with their cluster id attached."""
    membership = {pid: c.cluster_id for c in clusters for pid in c.photo_ids}
    return [
        photo.with_cluster(membership[photo.photo_id]) if photo.photo_id in membership else photo
        for photo in photos
    ]
