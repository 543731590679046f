"""Internal helper functions for the photocurator CLI.

This module contains implementation details and should not be imported directly.
"""

import logging
from pathlib import Path
from typing import Optional

from photocurator.shared.config import CurationConfig
from photocurator.shared.models import CurationResult, PerfectMomentPlan

logger = logging.getLogger(__name__)


def print_verbose_header(collection: str, config: CurationConfig) -> None:
    """Print verbose analysis header."""
    print("=" * 60)
    print("PHOTOCURATOR - Photo Clustering and Curation")
    print("=" * 60)
    print(f"\nCollection: {Path(collection).name}")
    print(
        f"\nClustering: window={config.clustering.time_window_seconds:g}s, "
        f"distance<{config.clustering.distance_threshold:g}, "
        f"max size={config.clustering.max_cluster_size}"
    )
    if not config.plan_perfect_moments:
        print("Perfect moment planning: DISABLED")


def print_results(result: CurationResult, top_n: Optional[int], verbose: bool) -> None:
    """Print each cluster's representative, and the top N photos when requested."""
    if verbose:
        stats = result.statistics
        print(f"\n{'=' * 60}")
        print("CLUSTERS")
        print(f"{'=' * 60}")
        if stats is not None:
            print(
                f"{stats.total_photos} photos in {stats.total_clusters} clusters "
                f"({stats.singleton_clusters} singletons, largest {stats.largest_cluster_size}, "
                f"average {stats.average_cluster_size:.2f})"
            )

    for ranking in result.rankings:
        best = ranking.ranked_photos[0]
        marker = " [face override]" if ranking.face_override_applied else ""
        if verbose:
            print(
                f"\n{ranking.cluster_id} ({ranking.cluster_type.value}, "
                f"{len(ranking.ranked_photos)} photos){marker}"
            )
            print(f"  Representative: {ranking.representative_id}")
        else:
            print(f"{ranking.cluster_id}\t{ranking.representative_id}")

        if top_n is not None:
            for ranked in ranking.top(top_n):
                print(f"  {ranked.rank}. {ranked.photo_id}  score={ranked.score:.4f}")
        elif verbose:
            print(f"  Best score: {best.score:.4f}")

    if result.failures:
        print(f"\n{len(result.failures)} photo(s) could not be analyzed:")
        for failure in result.failures:
            print(f"  {failure.photo_id}: {failure.error}")


def print_plan(plan: PerfectMomentPlan, verbose: bool) -> None:
    eligibility = plan.eligibility
    if not eligibility.is_eligible:
        if verbose:
            print(f"\n{plan.cluster_id}: {eligibility.reason.user_message}")
        return

    print(f"\n{plan.cluster_id}: perfect moment on {plan.base_photo_id}")
    print(
        f"  Confidence: {eligibility.confidence:.2f}, "
        f"improvement potential: {plan.overall_improvement_potential:.2f}, "
        f"estimated time: {plan.estimated_processing_time:.0f}s"
    )
    for replacement in plan.replacements:
        status = "feasible" if replacement.is_feasible else "not feasible"
        print(
            f"  - {replacement.person_id}: {replacement.improvement_type.description} "
            f"from {replacement.source_face.photo_id} "
            f"(+{replacement.expected_improvement:.2f}, confidence {replacement.confidence:.2f}, {status})"
        )


def print_plans(result: CurationResult, verbose: bool) -> None:
    eligible = [p for p in result.plans if p.eligibility.is_eligible]
    if not result.plans or (not eligible and not verbose):
        return

    print(f"\n{'=' * 60}")
    print(f"PERFECT MOMENTS ({len(eligible)} eligible)")
    print(f"{'=' * 60}")
    for plan in result.plans:
        print_plan(plan, verbose)
