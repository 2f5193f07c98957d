"""Node and edge feature dimensionality of a graph-labeling dataset."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from graph_labeling.graph.types import FeatureKind, FeatureVector, LabelingGraph

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FeatureDimensions:
    """Layout of weight and psi vectors: edge block first, then node block."""

    node_dims: int
    edge_dims: int

    @property
    def total(self) -> int:
        return self.edge_dims + self.node_dims


def max_index_plus_one(vector: FeatureVector, kind: FeatureKind) -> int:
    """Dimensionality implied by one vector (0 for an empty sparse vector)."""
    if kind is FeatureKind.DENSE:
        return len(vector)
    return max((idx for idx, _ in vector), default=-1) + 1


def infer_dimensions(samples: Sequence[LabelingGraph]) -> FeatureDimensions:
    """Scan every node and edge vector once for the largest index used.

    For dense data this is the common vector length; for sparse data it
    is one plus the largest index observed, so sparse vectors need not
    agree on a length.
    """
    node_dims = 0
    edge_dims = 0
    for sample in samples:
        for vec in sample.node_features:
            node_dims = max(node_dims, max_index_plus_one(vec, sample.kind))
        for vec in sample.edge_features:
            edge_dims = max(edge_dims, max_index_plus_one(vec, sample.kind))

    log.debug("Inferred node_dims=%d, edge_dims=%d", node_dims, edge_dims)
    return FeatureDimensions(node_dims=node_dims, edge_dims=edge_dims)
