"""Tests for the LabelingGraph container."""

import numpy as np
import pytest

from graph_labeling.graph.types import (
    FeatureKind,
    LabelingGraph,
    as_feature_vector,
    as_labeling,
)


def _triangle() -> LabelingGraph:
    return LabelingGraph.from_edges(
        [[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]],
        [(0, 1), (1, 2), (2, 0)],
        [[1.0], [2.0], [3.0]],
    )


class TestConstruction:

    def test_counts(self) -> None:
        g = _triangle()
        assert g.number_of_nodes == 3
        assert g.number_of_edges == 3
        assert g.kind is FeatureKind.DENSE

    def test_sparse_kind_inferred_from_pairs(self) -> None:
        g = LabelingGraph.from_edges(
            [[(0, 1.0)], [(3, 2.0)]], [(0, 1)], [[(0, 1.0)]]
        )
        assert g.kind is FeatureKind.SPARSE
        assert g.node(1) == ((3, 2.0),)

    def test_sparse_kind_from_mapping(self) -> None:
        g = LabelingGraph.from_edges([{0: 1.0}, {2: 0.5}], [], [])
        assert g.kind is FeatureKind.SPARSE
        assert g.node(0) == ((0, 1.0),)

    def test_dense_vectors_read_only(self) -> None:
        g = _triangle()
        with pytest.raises(ValueError):
            g.node(0)[0] = 5.0

    def test_rejects_out_of_range_endpoint(self) -> None:
        with pytest.raises(ValueError, match="endpoints"):
            LabelingGraph.from_edges([[1.0], [1.0]], [(0, 2)], [[1.0]])

    def test_rejects_duplicate_edge(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            LabelingGraph.from_edges(
                [[1.0], [1.0]], [(0, 1), (1, 0)], [[1.0], [1.0]]
            )

    def test_rejects_misaligned_edge_features(self) -> None:
        with pytest.raises(ValueError, match="edge vectors"):
            LabelingGraph.from_edges([[1.0], [1.0]], [(0, 1)], [])

    def test_self_loop_representable(self) -> None:
        g = LabelingGraph.from_edges([[1.0], [1.0]], [(0, 0)], [[1.0]])
        assert g.adjacency.diagonal()[0] != 0
        assert [j for j, _ in g.neighbors(0)] == [0]


class TestNeighbors:

    def test_neighbor_indices(self) -> None:
        g = _triangle()
        assert sorted(j for j, _ in g.neighbors(0)) == [1, 2]
        assert g.number_of_neighbors(1) == 2

    def test_neighbor_edge_features_shared(self) -> None:
        """Both endpoints see the same edge vector."""
        g = _triangle()
        from_1 = dict((j, f[0]) for j, f in g.neighbors(1))
        from_2 = dict((j, f[0]) for j, f in g.neighbors(2))
        assert from_1[2] == from_2[1] == 2.0
        assert from_1[0] == 1.0

    def test_isolated_node(self) -> None:
        g = LabelingGraph.from_edges([[1.0], [1.0], [1.0]], [(0, 1)], [[1.0]])
        assert g.number_of_neighbors(2) == 0
        assert list(g.neighbors(2)) == []


class TestConversions:

    def test_dense_must_be_1d(self) -> None:
        with pytest.raises(ValueError, match="1-D"):
            as_feature_vector([[1.0, 2.0]], FeatureKind.DENSE)

    def test_sparse_keeps_order_and_repeats(self) -> None:
        vec = as_feature_vector([(2, 1), (0, 3), (2, 4)], FeatureKind.SPARSE)
        assert vec == ((2, 1.0), (0, 3.0), (2, 4.0))

    def test_labeling_from_ints(self) -> None:
        np.testing.assert_array_equal(
            as_labeling([1, 0, 2]), np.array([True, False, True])
        )
