"""photocurator CLI - Cluster, score and curate a photo collection."""

import logging
import sys
from typing import Annotated, Optional

import cyclopts

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

from photocurator.api.pipeline import CurationPipeline
from photocurator.shared.config import ClusteringConfig, CurationConfig
from photocurator.shared.exceptions import CollectionLoadError, InvalidConfigError
from photocurator.utils.serialization import load_collection, save_result
from photocurator.cli._internal import (
    print_verbose_header,
    print_results,
    print_plans,
)

app = cyclopts.App(
    name="photocurator",
    help="Group burst photos, pick the best of each group and plan perfect moments",
    version="0.1.0",
)


@app.default
def main(
    collection: Annotated[str, cyclopts.Parameter(help="Path to a photo collection JSON file")],
    verbose: Annotated[bool, cyclopts.Parameter(help="Show detailed analysis information")] = False,
    json_output: Annotated[
        Optional[str],
        cyclopts.Parameter(help="Save the full curation result to this JSON file"),
    ] = None,
    top_n: Annotated[
        Optional[int],
        cyclopts.Parameter(help="Show the top N ranked photos of every cluster"),
    ] = None,
    time_window: Annotated[
        float,
        cyclopts.Parameter(help="Clustering time window in seconds (default: 30)"),
    ] = 30.0,
    distance_threshold: Annotated[
        float,
        cyclopts.Parameter(help="Maximum fingerprint distance for photos in one cluster (default: 0.5)"),
    ] = 0.5,
    max_workers: Annotated[
        Optional[int],
        cyclopts.Parameter(help="Thread pool size (default: min(8, CPU count))"),
    ] = None,
    no_plans: Annotated[
        bool,
        cyclopts.Parameter(help="Skip perfect moment planning"),
    ] = False,
) -> None:
    """Curate a photo collection.

    Photos are scored from their signals and detected faces, grouped into
    near-duplicate clusters, and ranked inside each cluster. Clusters where
    the same people appear with different facial quality get a perfect
    moment replacement plan.

    Examples:
        photocurator photos.json
        photocurator photos.json --top-n 3
        photocurator photos.json --verbose
        photocurator photos.json --json-output ./output/result.json
        photocurator photos.json --time-window 10 --distance-threshold 0.3
        photocurator photos.json --no-plans
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = CurationConfig(
            clustering=ClusteringConfig(
                time_window_seconds=time_window,
                distance_threshold=distance_threshold,
            ),
            max_workers=max_workers,
            plan_perfect_moments=not no_plans,
        )
        config.validate()
    except InvalidConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        loaded = load_collection(collection)
    except CollectionLoadError as e:
        logger.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if verbose:
        print_verbose_header(collection, config)

    try:
        pipeline = CurationPipeline(config)
        result = pipeline.run(
            loaded.photos,
            observations=loaded.observations,
            identities=loaded.identities,
        )

        logger.info(
            "Curated %d photos into %d clusters",
            len(result.photos),
            len(result.clusters),
        )

        print_results(result, top_n, verbose)
        print_plans(result, verbose)

        if json_output:
            path = save_result(result, json_output)
            if verbose:
                print(f"\nDetailed result saved to: {path}")

    except KeyboardInterrupt:
        print("\n\nCuration interrupted by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    app()
