"""Graph container carrying feature vectors on nodes and undirected edges."""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import numpy as np
import scipy.sparse

# A sparse vector is a sequence of (index, value) pairs; repeated indices sum.
SparseVector = tuple[tuple[int, float], ...]
FeatureVector = Union[np.ndarray, SparseVector]


class FeatureKind(Enum):
    """Representation shared by every node and edge vector of a graph."""

    DENSE = "dense"
    SPARSE = "sparse"


def _looks_sparse(vector: Any) -> bool:
    if isinstance(vector, Mapping):
        return True
    if isinstance(vector, np.ndarray):
        return False
    return (
        isinstance(vector, Sequence)
        and len(vector) > 0
        and isinstance(vector[0], (tuple, list))
    )


def as_feature_vector(vector: Any, kind: FeatureKind) -> FeatureVector:
    """Convert a user-supplied vector to the canonical form of ``kind``.

    Dense vectors become read-only 1-D float64 arrays. Sparse vectors
    (a mapping or a sequence of pairs) become a tuple of (int, float)
    pairs in their original order.
    """
    if kind is FeatureKind.DENSE:
        arr = np.array(vector, dtype=np.float64)
        if arr.ndim != 1:
            raise ValueError(
                f"Dense feature vectors must be 1-D, got shape {arr.shape}"
            )
        arr.flags.writeable = False
        return arr

    pairs = vector.items() if isinstance(vector, Mapping) else vector
    return tuple((int(idx), float(val)) for idx, val in pairs)


def as_labeling(labels: Any) -> np.ndarray:
    """Normalize a label vector (bools or small ints) to a bool array."""
    arr = np.asarray(labels)
    if arr.ndim != 1:
        raise ValueError(f"Label vectors must be 1-D, got shape {arr.shape}")
    return arr != 0


@dataclass(frozen=True)
class LabelingGraph:
    """Immutable undirected graph with a feature vector per node and per edge.

    ``adjacency`` is a symmetric CSR matrix whose stored value at (i, j)
    is ``edge_id + 1``; it gives neighbor iteration in O(degree) and the
    edge feature of each neighbor. Self-loops are representable (stored
    once on the diagonal) so that dataset validation can reject them.
    Node and edge vectors are stored in canonical form (read-only arrays
    or tuples of pairs), so a graph is never changed after from_edges.
    """

    kind: FeatureKind
    node_features: tuple[FeatureVector, ...]
    edges: np.ndarray  # int64 array of shape (m, 2)
    edge_features: tuple[FeatureVector, ...]
    adjacency: scipy.sparse.csr_matrix  # (n x n), values are edge_id + 1

    @classmethod
    def from_edges(
        cls,
        node_features: Sequence[Any],
        edges: Sequence[tuple[int, int]],
        edge_features: Sequence[Any],
        kind: FeatureKind | None = None,
    ) -> "LabelingGraph":
        """Build a graph from per-node vectors and an undirected edge list.

        Args:
            node_features: One feature vector per node.
            edges: Pairs (i, j) of node indices; each undirected edge once.
            edge_features: One feature vector per edge, aligned with edges.
            kind: Representation of all vectors. Inferred from the first
                node vector when omitted (dense for an empty graph).

        Raises:
            ValueError: On mismatched lengths, out-of-range endpoints or a
                repeated undirected edge.
        """
        if kind is None:
            kind = (
                FeatureKind.SPARSE
                if len(node_features) > 0 and _looks_sparse(node_features[0])
                else FeatureKind.DENSE
            )
        if len(edges) != len(edge_features):
            raise ValueError(
                f"Got {len(edges)} edges but {len(edge_features)} edge vectors"
            )

        n = len(node_features)
        edge_arr = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
        if edge_arr.size and (edge_arr.min() < 0 or edge_arr.max() >= n):
            raise ValueError(f"Edge endpoints must lie in [0, {n})")

        seen: set[tuple[int, int]] = set()
        for i, j in edge_arr.tolist():
            key = (min(i, j), max(i, j))
            if key in seen:
                raise ValueError(f"Duplicate edge between nodes {i} and {j}")
            seen.add(key)

        m = len(edge_arr)
        ids = np.arange(1, m + 1, dtype=np.int64)
        off_diag = edge_arr[:, 0] != edge_arr[:, 1]
        rows = np.concatenate([edge_arr[:, 0], edge_arr[off_diag, 1]])
        cols = np.concatenate([edge_arr[:, 1], edge_arr[off_diag, 0]])
        data = np.concatenate([ids, ids[off_diag]])
        adjacency = scipy.sparse.csr_matrix((data, (rows, cols)), shape=(n, n))
        adjacency.sort_indices()

        return cls(
            kind=kind,
            node_features=tuple(as_feature_vector(v, kind) for v in node_features),
            edges=edge_arr,
            edge_features=tuple(as_feature_vector(v, kind) for v in edge_features),
            adjacency=adjacency,
        )

    @property
    def number_of_nodes(self) -> int:
        return len(self.node_features)

    @property
    def number_of_edges(self) -> int:
        return len(self.edge_features)

    def node(self, i: int) -> FeatureVector:
        return self.node_features[i]

    def number_of_neighbors(self, i: int) -> int:
        return int(self.adjacency.indptr[i + 1] - self.adjacency.indptr[i])

    def neighbors(self, i: int) -> Iterator[tuple[int, FeatureVector]]:
        """Yield (neighbor index, edge feature vector) for node i."""
        indptr = self.adjacency.indptr
        for ptr in range(indptr[i], indptr[i + 1]):
            j = int(self.adjacency.indices[ptr])
            edge_id = int(self.adjacency.data[ptr]) - 1
            yield j, self.edge_features[edge_id]
