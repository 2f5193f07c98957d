"""Joint feature vector (psi) construction for dense and sparse features.

psi has the same layout as the weight vector: an edge block of length
edge_dims followed by a node block of length node_dims. For a labeling y,

    psi = sum_{i : y_i} x_i (node block)  -  sum_{(i,j) : y_i != y_j} f_ij (edge block)

so that dot(psi, w) is the score the separation oracle maximizes.
"""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
import scipy.sparse

from graph_labeling.features.dimensions import FeatureDimensions
from graph_labeling.graph.types import (
    FeatureKind,
    FeatureVector,
    LabelingGraph,
    as_labeling,
)

SparsePsi = list[tuple[int, float]]


class DimensionMismatchError(ValueError):
    """Raised when a vector does not fit the dataset-wide feature layout."""


class FeatureAccumulator(ABC):
    """Builds psi vectors and scores feature blocks for one representation."""

    kind: FeatureKind

    def __init__(self, dims: FeatureDimensions) -> None:
        self.dims = dims

    @abstractmethod
    def zeros(self) -> Any:
        """An empty psi."""

    @abstractmethod
    def add_node(self, psi: Any, vector: FeatureVector) -> None:
        """Add a node vector into the node block of psi in place."""

    @abstractmethod
    def subtract_edge(self, psi: Any, vector: FeatureVector) -> None:
        """Subtract an edge vector from the edge block of psi in place."""

    @abstractmethod
    def node_score(self, weights: np.ndarray, vector: FeatureVector) -> float:
        """Dot product of the node block of weights with a node vector."""

    @abstractmethod
    def edge_score(self, weights: np.ndarray, vector: FeatureVector) -> float:
        """Dot product of the edge block of weights with an edge vector."""

    @abstractmethod
    def to_dense(self, psi: Any) -> np.ndarray:
        """psi as a dense float array of length dims.total."""

    def dot(self, psi: Any, weights: np.ndarray) -> float:
        return float(np.dot(self.to_dense(psi), self.check_weights(weights)))

    def check_weights(self, weights: Any) -> np.ndarray:
        """Return weights as a float array, checking its length."""
        w = np.asarray(weights, dtype=np.float64).ravel()
        if w.shape[0] != self.dims.total:
            raise DimensionMismatchError(
                f"Weight vector has {w.shape[0]} entries, expected "
                f"{self.dims.total} (edge_dims={self.dims.edge_dims}, "
                f"node_dims={self.dims.node_dims})"
            )
        return w

    def build(self, sample: LabelingGraph, labeling: Any) -> Any:
        """Joint feature vector of ``sample`` under ``labeling``.

        Each undirected edge is visited once, and contributes only when
        its endpoints are labeled differently.
        """
        y = as_labeling(labeling)
        if y.shape[0] != sample.number_of_nodes:
            raise DimensionMismatchError(
                f"Labeling has {y.shape[0]} entries for a graph with "
                f"{sample.number_of_nodes} nodes"
            )

        psi = self.zeros()
        for i, vec in enumerate(sample.node_features):
            if y[i]:
                self.add_node(psi, vec)
        for (i, j), vec in zip(sample.edges.tolist(), sample.edge_features):
            if y[i] != y[j]:
                self.subtract_edge(psi, vec)
        return psi


class DenseFeatureAccumulator(FeatureAccumulator):
    """psi as a float64 numpy array; blocks updated by vector arithmetic."""

    kind = FeatureKind.DENSE

    def zeros(self) -> np.ndarray:
        return np.zeros(self.dims.total, dtype=np.float64)

    def _check(self, vector: np.ndarray, expected: int, what: str) -> None:
        if vector.shape[0] != expected:
            raise DimensionMismatchError(
                f"{what} vector has {vector.shape[0]} dims, expected {expected}"
            )

    def add_node(self, psi: np.ndarray, vector: np.ndarray) -> None:
        self._check(vector, self.dims.node_dims, "Node")
        psi[self.dims.edge_dims:] += vector

    def subtract_edge(self, psi: np.ndarray, vector: np.ndarray) -> None:
        self._check(vector, self.dims.edge_dims, "Edge")
        psi[: self.dims.edge_dims] -= vector

    def node_score(self, weights: np.ndarray, vector: np.ndarray) -> float:
        self._check(vector, self.dims.node_dims, "Node")
        return float(np.dot(weights[self.dims.edge_dims:], vector))

    def edge_score(self, weights: np.ndarray, vector: np.ndarray) -> float:
        self._check(vector, self.dims.edge_dims, "Edge")
        return float(np.dot(weights[: self.dims.edge_dims], vector))

    def to_dense(self, psi: np.ndarray) -> np.ndarray:
        return np.asarray(psi, dtype=np.float64)


class SparseFeatureAccumulator(FeatureAccumulator):
    """psi as a list of (index, value) pairs.

    Pairs are appended, never coalesced, so an index can repeat; every
    consumer (dot, to_dense) sums repeated indices.
    """

    kind = FeatureKind.SPARSE

    def zeros(self) -> SparsePsi:
        return []

    def _check(self, idx: int, limit: int, what: str) -> None:
        if not 0 <= idx < limit:
            raise DimensionMismatchError(
                f"{what} feature index {idx} outside [0, {limit})"
            )

    def add_node(self, psi: SparsePsi, vector: FeatureVector) -> None:
        offset = self.dims.edge_dims
        for idx, val in vector:
            self._check(idx, self.dims.node_dims, "Node")
            psi.append((idx + offset, val))

    def subtract_edge(self, psi: SparsePsi, vector: FeatureVector) -> None:
        for idx, val in vector:
            self._check(idx, self.dims.edge_dims, "Edge")
            psi.append((idx, -val))

    def node_score(self, weights: np.ndarray, vector: FeatureVector) -> float:
        offset = self.dims.edge_dims
        total = 0.0
        for idx, val in vector:
            self._check(idx, self.dims.node_dims, "Node")
            total += weights[idx + offset] * val
        return float(total)

    def edge_score(self, weights: np.ndarray, vector: FeatureVector) -> float:
        total = 0.0
        for idx, val in vector:
            self._check(idx, self.dims.edge_dims, "Edge")
            total += weights[idx] * val
        return float(total)

    def to_dense(self, psi: SparsePsi) -> np.ndarray:
        # COO -> dense sums duplicate entries
        if not psi:
            return np.zeros(self.dims.total, dtype=np.float64)
        idx, vals = zip(*psi)
        col = scipy.sparse.coo_matrix(
            (np.asarray(vals, dtype=np.float64),
             (np.asarray(idx), np.zeros(len(idx), dtype=np.int64))),
            shape=(self.dims.total, 1),
        )
        return col.toarray().ravel()

    def dot(self, psi: SparsePsi, weights: Any) -> float:
        w = self.check_weights(weights)
        return float(sum(w[idx] * val for idx, val in psi))


def accumulator_for(kind: FeatureKind, dims: FeatureDimensions) -> FeatureAccumulator:
    """Select the accumulator implementation for a feature representation."""
    if kind is FeatureKind.DENSE:
        return DenseFeatureAccumulator(dims)
    return SparseFeatureAccumulator(dims)
