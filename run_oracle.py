#!/usr/bin/env python3
"""Entry point for exercising a graph-labeling problem on synthetic data.

Chains the stages a cutting-plane trainer relies on:
data generation -> validation and problem construction -> truth feature
vectors -> batch separation oracle at reference weight vectors.

Usage:
    python run_oracle.py
    python run_oracle.py --config config.json
    python run_oracle.py --config config.json --dry-run
    python run_oracle.py --config config.json --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

import numpy as np

from graph_labeling.config import (
    DEFAULT_CONFIG,
    ExperimentConfig,
    config_from_json,
    config_hash,
)

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def run_pipeline(config: ExperimentConfig) -> dict[str, Any]:
    """Build the problem for ``config`` and query every sample's oracle.

    Reference weight vectors are all-zeros (every prediction flips the
    truth, so the loss equals the node count) and all-ones.

    Returns:
        Summary with dimensions and mean oracle loss per weight vector.
    """
    from graph_labeling.data import generate_labeled_graphs
    from graph_labeling.problem import GraphLabelingProblem

    with stage_timer("Data generation"):
        samples, labels = generate_labeled_graphs(config.data, config.seed)

    with stage_timer("Problem construction"):
        problem = GraphLabelingProblem(samples, labels, config.problem)
        print(f"  samples={problem.num_samples()}, "
              f"dims={problem.total_dimensions()}, "
              f"edge weights={problem.num_edge_weights()}")

    with stage_timer("Truth feature vectors"):
        truth = [
            problem.truth_feature_vector(i) for i in range(problem.num_samples())
        ]
        log.info("Computed %d truth feature vectors", len(truth))

    summary: dict[str, Any] = {
        "num_samples": problem.num_samples(),
        "total_dimensions": problem.total_dimensions(),
        "num_edge_weights": problem.num_edge_weights(),
        "mean_loss": {},
    }
    references = {
        "zeros": np.zeros(problem.total_dimensions()),
        "ones": np.ones(problem.total_dimensions()),
    }
    for name, weights in references.items():
        with stage_timer(f"Separation oracle ({name})"):
            results = problem.separation_oracles(weights)
            mean_loss = float(np.mean([loss for loss, _ in results]))
            summary["mean_loss"][name] = mean_loss
            print(f"  mean loss={mean_loss:.3f}")

    return summary


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Evaluate a graph-labeling structural SVM problem"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to experiment config JSON file (defaults built in)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the plan without running it",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is None:
        config = DEFAULT_CONFIG
    else:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        config = config_from_json(config_path.read_text())

    print(f"Config hash: {config_hash(config)}")
    print(f"Data:    samples={config.data.n_samples}, nodes={config.data.n_nodes}, "
          f"node_dims={config.data.node_dims}, edge_dims={config.data.edge_dims}, "
          f"representation={config.data.representation}")
    print(f"Problem: solver={config.problem.solver}, "
          f"threads={config.problem.num_threads}")
    print(f"Seed:    {config.seed}")

    if args.dry_run:
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config)
    except Exception:
        log.exception("Pipeline failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
