from dataclasses import dataclass, field
from typing import Optional, Tuple

from photocurator.shared.exceptions import InvalidConfigError


@dataclass
class AnalysisConfig:
    """Config for per-face quality analysis."""

    # Adaptive EAR threshold: (avg EAR lower bound, threshold), checked in order
    ear_threshold_bands: Tuple[Tuple[float, float], ...] = (
        (0.30, 0.21),  # Wide eyes
        (0.20, 0.18),  # Normal eyes
        (0.12, 0.15),  # Narrow eyes
    )
    ear_threshold_floor: float = 0.12  # Very low EAR: closed or very narrow

    # Lip corner lift (normalized units) is scaled by this to get smile intensity
    smile_curvature_scale: float = 20.0

    # Face area (fraction of the frame) considered well-sized
    min_face_area: float = 0.01
    max_face_area: float = 0.6

    def validate(self):
        if not self.ear_threshold_bands:
            raise InvalidConfigError("ear_threshold_bands", "at least one band is required")
        bounds = [bound for bound, _ in self.ear_threshold_bands]
        if bounds != sorted(bounds, reverse=True):
            raise InvalidConfigError(
                "ear_threshold_bands", "bands must be ordered by descending lower bound"
            )
        for _, threshold in self.ear_threshold_bands:
            if threshold <= 0:
                raise InvalidConfigError("ear_threshold_bands", f"threshold must be positive, got {threshold}")
        if self.ear_threshold_floor <= 0:
            raise InvalidConfigError("ear_threshold_floor", "must be positive")
        if self.smile_curvature_scale <= 0:
            raise InvalidConfigError("smile_curvature_scale", "must be positive")
        if not 0.0 <= self.min_face_area < self.max_face_area <= 1.0:
            raise InvalidConfigError("min_face_area", "face area bounds must satisfy 0 <= min < max <= 1")


@dataclass
class ClusteringConfig:
    """Config for single-pass temporal/visual clustering."""

    time_window_seconds: float = 30.0   # Rolling window from a cluster's newest photo
    distance_threshold: float = 0.5     # Join only if fingerprint distance is below this
    max_cluster_size: int = 50
    face_count_compatibility: bool = True  # Keep 1-2 face photos apart unless counts match

    def validate(self):
        if self.time_window_seconds < 0:
            raise InvalidConfigError("time_window_seconds", "must be non-negative")
        if not 0.0 < self.distance_threshold <= 1.0:
            raise InvalidConfigError("distance_threshold", "must be in (0, 1]")
        if self.max_cluster_size < 1:
            raise InvalidConfigError("max_cluster_size", "must be at least 1")


@dataclass
class PlannerConfig:
    """Config for perfect-moment eligibility and replacement planning."""

    min_photos: int = 2
    min_face_capture_quality: float = 0.2   # Usability floor for any detected face
    min_rank_spread: float = 0.05           # Best-worst rank gap that counts as variation
    min_improvement_potential: float = 0.4
    min_quality_gain: float = 0.2
    min_feasible_confidence: float = 0.5

    def validate(self):
        if self.min_photos < 2:
            raise InvalidConfigError("min_photos", "a perfect moment needs at least 2 photos")
        for name in (
            "min_face_capture_quality",
            "min_rank_spread",
            "min_improvement_potential",
            "min_quality_gain",
            "min_feasible_confidence",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(name, f"must be in [0, 1], got {value}")


@dataclass
class CurationConfig:
    """Top-level config for the curation pipeline."""

    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)

    max_workers: Optional[int] = None  # None = min(8, cpu_count)
    plan_perfect_moments: bool = True

    def validate(self):
        self.analysis.validate()
        self.clustering.validate()
        self.planner.validate()
        if self.max_workers is not None and self.max_workers < 1:
            raise InvalidConfigError("max_workers", "must be at least 1")
