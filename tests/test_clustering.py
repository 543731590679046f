"""Tests for fingerprint distance and single-pass clustering."""

import pytest

from photocurator.core.clustering import (
    PhotoClusterer,
    assign_clusters,
    face_counts_compatible,
    fingerprint_distance,
)
from photocurator.shared.config import ClusteringConfig
from photocurator.shared.exceptions import InvalidConfigError

from tests.helpers import (
    FINGERPRINT_A,
    FINGERPRINT_A_NEAR,
    FINGERPRINT_B,
    make_face_quality,
    make_photo,
)


class TestFingerprintDistance:
    def test_identical_hashes(self):
        assert fingerprint_distance(FINGERPRINT_A, FINGERPRINT_A) == 0.0

    def test_hamming_fraction(self):
        assert fingerprint_distance(FINGERPRINT_A, FINGERPRINT_A_NEAR) == pytest.approx(1 / 64)
        assert fingerprint_distance(FINGERPRINT_A, FINGERPRINT_B) == 1.0

    def test_vector_distance(self):
        assert fingerprint_distance((1.0, 0.0), (0.0, 1.0)) == pytest.approx(2 ** 0.5 / 2)
        assert fingerprint_distance((1.0, 0.0), (1.0, 0.0)) == 0.0

    def test_zero_vectors_are_identical(self):
        assert fingerprint_distance((0.0, 0.0), (0.0, 0.0)) == 0.0

    @pytest.mark.parametrize(
        "a,b",
        [
            (None, FINGERPRINT_A),
            (FINGERPRINT_A, None),
            (FINGERPRINT_A, (0.0, 1.0)),
            (FINGERPRINT_A, bytes(4)),
            ((1.0, 2.0), (1.0, 2.0, 3.0)),
            (b"", b""),
        ],
    )
    def test_incomparable_fingerprints_are_maximally_distant(self, a, b):
        assert fingerprint_distance(a, b) == 1.0


class TestFaceCountsCompatible:
    @pytest.mark.parametrize(
        "anchor,candidate,expected",
        [
            (1, 1, True),
            (2, 2, True),
            (1, 2, False),
            (2, 1, False),
            (1, 0, True),
            (0, 2, True),
            (1, 3, True),
            (3, 5, True),
            (None, 1, True),
            (2, None, True),
        ],
    )
    def test_rule(self, anchor, candidate, expected):
        assert face_counts_compatible(anchor, candidate) is expected


class TestPhotoClusterer:
    def test_burst_forms_one_cluster(self):
        photos = [make_photo(f"p{i}", seconds=i * 5) for i in range(4)]
        clusters = PhotoClusterer().cluster(photos)
        assert len(clusters) == 1
        assert clusters[0].photo_ids == ["p0", "p1", "p2", "p3"]
        assert clusters[0].cluster_id == "cluster-0001"

    def test_window_rolls_from_newest_photo(self):
        # 100s total span, but never more than 25s between consecutive shots
        photos = [make_photo(f"p{i}", seconds=i * 25) for i in range(5)]
        assert len(PhotoClusterer().cluster(photos)) == 1

    def test_gap_beyond_window_splits(self):
        photos = [make_photo("a", seconds=0), make_photo("b", seconds=31)]
        clusters = PhotoClusterer().cluster(photos)
        assert [c.photo_ids for c in clusters] == [["a"], ["b"]]

    def test_window_edge_is_inclusive(self):
        photos = [make_photo("a", seconds=0), make_photo("b", seconds=30)]
        assert len(PhotoClusterer().cluster(photos)) == 1

    def test_different_scenes_split(self):
        photos = [make_photo("a", seconds=0), make_photo("b", seconds=1, fingerprint=FINGERPRINT_B)]
        assert len(PhotoClusterer().cluster(photos)) == 2

    def test_input_order_does_not_matter(self):
        photos = [
            make_photo("c", seconds=2),
            make_photo("a", seconds=0),
            make_photo("x", seconds=1, fingerprint=FINGERPRINT_B),
            make_photo("b", seconds=1),
        ]
        clusters = PhotoClusterer().cluster(photos)
        assert [c.photo_ids for c in clusters] == [["a", "b", "c"], ["x"]]

    def test_rerun_gives_identical_partition(self):
        photos = [
            make_photo("a", seconds=0),
            make_photo("b", seconds=1, fingerprint=FINGERPRINT_A_NEAR),
            make_photo("x", seconds=2, fingerprint=FINGERPRINT_B),
            make_photo("c", seconds=60),
        ]
        clusterer = PhotoClusterer()
        first = [(c.cluster_id, c.photo_ids) for c in clusterer.cluster(photos)]
        second = [(c.cluster_id, c.photo_ids) for c in clusterer.cluster(photos)]
        assert first == second
        assert first == [("cluster-0001", ["a", "b"]), ("cluster-0002", ["x"]), ("cluster-0003", ["c"])]

    def test_interleaved_scenes_rejoin_their_cluster(self):
        photos = [
            make_photo("a1", seconds=0),
            make_photo("b1", seconds=1, fingerprint=FINGERPRINT_B),
            make_photo("a2", seconds=2, fingerprint=FINGERPRINT_A_NEAR),
        ]
        clusters = PhotoClusterer().cluster(photos)
        assert [c.photo_ids for c in clusters] == [["a1", "a2"], ["b1"]]

    def test_photo_without_fingerprint_is_singleton(self):
        photos = [
            make_photo("a", seconds=0, fingerprint=None),
            make_photo("b", seconds=1, fingerprint=None),
            make_photo("c", seconds=2),
        ]
        clusters = PhotoClusterer().cluster(photos)
        assert [c.photo_ids for c in clusters] == [["a"], ["b"], ["c"]]

    def test_max_cluster_size(self):
        photos = [make_photo(f"p{i}", seconds=i) for i in range(5)]
        clusters = PhotoClusterer(ClusteringConfig(max_cluster_size=2)).cluster(photos)
        assert [c.size for c in clusters] == [2, 2, 1]

    def test_single_and_pair_shots_stay_apart(self):
        solo = [make_face_quality("a")]
        pair = [make_face_quality("b"), make_face_quality("b", face_index=1)]
        photos = [
            make_photo("a", seconds=0, faces=solo),
            make_photo("b", seconds=1, faces=pair),
        ]
        assert len(PhotoClusterer().cluster(photos)) == 2

    def test_face_count_check_can_be_disabled(self):
        solo = [make_face_quality("a")]
        pair = [make_face_quality("b"), make_face_quality("b", face_index=1)]
        photos = [
            make_photo("a", seconds=0, faces=solo),
            make_photo("b", seconds=1, faces=pair),
        ]
        config = ClusteringConfig(face_count_compatibility=False)
        assert len(PhotoClusterer(config).cluster(photos)) == 1

    def test_empty_input(self):
        assert PhotoClusterer().cluster([]) == []

    def test_every_photo_in_exactly_one_cluster(self):
        photos = [
            make_photo(f"p{i}", seconds=i * 7, fingerprint=FINGERPRINT_A if i % 3 else FINGERPRINT_B)
            for i in range(12)
        ]
        clusters = PhotoClusterer().cluster(photos)
        members = [pid for c in clusters for pid in c.photo_ids]
        assert sorted(members) == sorted(p.photo_id for p in photos)

    def test_invalid_config_rejected(self):
        with pytest.raises(InvalidConfigError, match="distance_threshold"):
            PhotoClusterer(ClusteringConfig(distance_threshold=0.0))


class TestAssignClusters:
    def test_attaches_cluster_ids_in_input_order(self):
        photos = [make_photo("b", seconds=1), make_photo("a", seconds=0)]
        clusters = PhotoClusterer().cluster(photos)
        assigned = assign_clusters(photos, clusters)
        assert [p.photo_id for p in assigned] == ["b", "a"]
        assert {p.cluster_id for p in assigned} == {"cluster-0001"}
