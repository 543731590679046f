"""
Basic Usage Example - curate_collection()

This example shows how to curate a photo collection file:
- Groups burst shots into clusters
- Picks the best photo of every cluster
- Reports which clusters can become a perfect moment
"""

import logging
from photocurator import curate_collection

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def basic_example():
    collection_path = "photos/collection.json"

    print("\nphotocurator - Basic Example")
    print("=" * 60)
    print(f"Curating: {collection_path}")
    print()

    result = curate_collection(collection_path)

    print()
    print("=" * 60)
    for ranking in result.rankings:
        print(f"✓ {ranking.cluster_id}: best photo {ranking.representative_id} "
              f"of {len(ranking.ranked_photos)} ({ranking.cluster_type.value})")
    eligible = [p for p in result.plans if p.eligibility.is_eligible]
    print(f"✓ {len(eligible)} cluster(s) eligible for a perfect moment")
    print("=" * 60)


if __name__ == "__main__":
    basic_example()
