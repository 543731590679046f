"""
Custom Configuration Example

This example shows how to tune curation:
- Tighter clustering for fast bursts
- A stricter perfect-moment planner
- Limiting the thread pool
"""

import logging
from photocurator import (
    ClusteringConfig,
    CurationConfig,
    PlannerConfig,
    curate_collection,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(levelname)s: %(message)s'
)


def example_tight_clusters():
    """Example 1: Only group near-identical shots taken within 5 seconds"""
    print("\n" + "=" * 60)
    print("Example 1: Tight Clustering")
    print("=" * 60)

    config = CurationConfig(
        clustering=ClusteringConfig(
            time_window_seconds=5.0,    # default: 30s
            distance_threshold=0.2,     # default: 0.5
            max_cluster_size=10,        # default: 50
        ),
    )

    result = curate_collection("photos/collection.json", config=config)
    print(f"\n✓ {result.statistics.total_clusters} clusters, "
          f"{result.statistics.singleton_clusters} singletons")


def example_strict_planner():
    """Example 2: Only plan replacements with a large quality gain"""
    print("\n" + "=" * 60)
    print("Example 2: Strict Perfect Moment Planner")
    print("=" * 60)

    config = CurationConfig(
        planner=PlannerConfig(
            min_face_capture_quality=0.4,   # default: 0.2
            min_rank_spread=0.15,           # default: 0.05
        ),
        max_workers=2,
    )

    result = curate_collection("photos/collection.json", config=config)
    for plan in result.plans:
        if plan.eligibility.is_eligible:
            print(f"\n✓ {plan.cluster_id}: {len(plan.feasible_replacements)} feasible replacements")
        else:
            print(f"\n✗ {plan.cluster_id}: {plan.eligibility.reason.user_message}")


if __name__ == "__main__":
    example_tight_clusters()
    example_strict_planner()
