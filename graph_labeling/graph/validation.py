"""Validation of (graph, label vector) datasets for the graph-labeling problem.

A valid problem needs, for every sample: a label per node, no self-loop
edges, non-negative edge vectors and non-empty vectors everywhere. Dense
datasets additionally need every node vector to share one length and every
edge vector to share one (possibly different) length.
"""

import logging
from collections.abc import Sequence
from typing import Any

from graph_labeling.graph.types import (
    FeatureKind,
    FeatureVector,
    LabelingGraph,
    as_labeling,
)

log = logging.getLogger(__name__)


class InvalidDatasetError(Exception):
    """Raised when a dataset does not form a valid graph-labeling problem."""


def is_learning_problem(samples: Sequence[Any], labels: Sequence[Any]) -> bool:
    """True when samples and labels are non-empty and of equal length."""
    return len(samples) == len(labels) and len(samples) > 0


def graph_contains_length_one_cycle(graph: LabelingGraph) -> bool:
    """True if any node of ``graph`` has an edge to itself."""
    return bool(graph.adjacency.diagonal().any())


def _has_negative_entry(vector: FeatureVector, kind: FeatureKind) -> bool:
    if kind is FeatureKind.DENSE:
        return bool(vector.size) and bool(vector.min() < 0)
    return any(val < 0 for _, val in vector)


def _has_negative_index(vector: FeatureVector, kind: FeatureKind) -> bool:
    return kind is FeatureKind.SPARSE and any(idx < 0 for idx, _ in vector)


def validation_errors(
    samples: Sequence[Any], labels: Sequence[Any]
) -> list[str]:
    """Check a dataset against the graph-labeling problem requirements.

    Checks (cheapest first, per sample):
    1. Equal, non-zero numbers of samples and label vectors
    2. Consistent feature kind across the dataset
    3. One label per node
    4. No self-loops
    5. Non-empty node and edge vectors, no negative edge entries
    6. Dense only: one node dimensionality and one edge dimensionality

    Args:
        samples: Sequence of LabelingGraph.
        labels: One label vector per sample.

    Returns:
        List of error strings (empty = valid dataset).
    """
    if not is_learning_problem(samples, labels):
        return [
            f"Need a non-empty dataset with one label vector per sample, "
            f"got {len(samples)} samples and {len(labels)} label vectors"
        ]

    errors: list[str] = []
    kind: FeatureKind | None = None
    node_dims = -1
    edge_dims = -1

    for i, (sample, label) in enumerate(zip(samples, labels)):
        if not isinstance(sample, LabelingGraph):
            errors.append(f"Sample {i} is not a LabelingGraph")
            continue
        if kind is None:
            kind = sample.kind
        elif sample.kind is not kind:
            errors.append(
                f"Sample {i} uses {sample.kind.value} vectors, "
                f"dataset uses {kind.value}"
            )
            continue

        try:
            n_labels = len(as_labeling(label))
        except (TypeError, ValueError):
            errors.append(f"Sample {i}: label vector is not a 1-D sequence")
        else:
            if n_labels != sample.number_of_nodes:
                errors.append(
                    f"Sample {i}: {sample.number_of_nodes} nodes but "
                    f"{n_labels} labels"
                )
        if graph_contains_length_one_cycle(sample):
            errors.append(f"Sample {i} contains a self-loop edge")

        dense = kind is FeatureKind.DENSE
        for j, vec in enumerate(sample.node_features):
            size = len(vec)
            if size == 0:
                errors.append(f"Sample {i}, node {j}: empty feature vector")
            elif _has_negative_index(vec, kind):
                errors.append(f"Sample {i}, node {j}: negative feature index")
            elif dense:
                if node_dims == -1:
                    node_dims = size
                if size != node_dims:
                    errors.append(
                        f"Sample {i}, node {j}: {size} dims, "
                        f"expected {node_dims}"
                    )

        for e, vec in enumerate(sample.edge_features):
            size = len(vec)
            a, b = sample.edges[e]
            if size == 0:
                errors.append(f"Sample {i}, edge ({a},{b}): empty feature vector")
                continue
            if _has_negative_index(vec, kind):
                errors.append(f"Sample {i}, edge ({a},{b}): negative feature index")
            if _has_negative_entry(vec, kind):
                errors.append(f"Sample {i}, edge ({a},{b}): negative feature value")
            if dense:
                if edge_dims == -1:
                    edge_dims = size
                if size != edge_dims:
                    errors.append(
                        f"Sample {i}, edge ({a},{b}): {size} dims, "
                        f"expected {edge_dims}"
                    )

    return errors


def is_graph_labeling_problem(
    samples: Sequence[Any], labels: Sequence[Any]
) -> bool:
    """Return True when (samples, labels) form a valid graph-labeling problem.

    Never raises; see validation_errors for the individual checks.
    """
    errors = validation_errors(samples, labels)
    if errors:
        log.debug(
            "Rejected graph labeling dataset (%d problems): %s",
            len(errors),
            "; ".join(errors[:5]),
        )
    return not errors
