"""Tests for dimension inference and joint feature vector construction."""

import numpy as np
import pytest

from graph_labeling.data.synthetic import generate_labeled_graphs
from graph_labeling.config.experiment import SyntheticConfig
from graph_labeling.features.accumulators import (
    DenseFeatureAccumulator,
    DimensionMismatchError,
    SparseFeatureAccumulator,
    accumulator_for,
)
from graph_labeling.features.dimensions import (
    FeatureDimensions,
    infer_dimensions,
    max_index_plus_one,
)
from graph_labeling.graph.types import FeatureKind, LabelingGraph


def _path_graph() -> LabelingGraph:
    return LabelingGraph.from_edges(
        [[1.0, 0.0]] * 3, [(0, 1), (1, 2)], [[1.0]] * 2
    )


def _as_sparse(graph: LabelingGraph) -> LabelingGraph:
    """Same graph with every dense entry (zeros included) as an index pair."""
    return LabelingGraph.from_edges(
        [list(enumerate(v.tolist())) for v in graph.node_features],
        graph.edges,
        [list(enumerate(f.tolist())) for f in graph.edge_features],
        kind=FeatureKind.SPARSE,
    )


class TestDimensionInference:

    def test_dense_dims(self) -> None:
        dims = infer_dimensions([_path_graph()])
        assert dims == FeatureDimensions(node_dims=2, edge_dims=1)
        assert dims.total == 3

    def test_sparse_dims_are_max_index_plus_one(self) -> None:
        g1 = LabelingGraph.from_edges(
            [[(0, 1.0)], [(4, 1.0), (1, 2.0)]], [(0, 1)], [[(2, 1.0)]]
        )
        g2 = LabelingGraph.from_edges([[(7, 1.0)], [(0, 1.0)]], [(0, 1)], [[(0, 3.0)]])
        dims = infer_dimensions([g1, g2])
        assert dims.node_dims == 8
        assert dims.edge_dims == 3

    def test_no_edges_gives_zero_edge_dims(self) -> None:
        g = LabelingGraph.from_edges([[1.0, 2.0, 3.0]], [], [])
        assert infer_dimensions([g]) == FeatureDimensions(node_dims=3, edge_dims=0)

    def test_max_index_plus_one(self) -> None:
        assert max_index_plus_one(((3, 1.0), (1, 1.0)), FeatureKind.SPARSE) == 4
        assert max_index_plus_one((), FeatureKind.SPARSE) == 0
        assert max_index_plus_one(np.zeros(5), FeatureKind.DENSE) == 5


class TestPathGraphScenario:
    """3-node path, labels [T, T, F]: psi = [-1, 2, 0]."""

    def test_dense_truth_psi(self) -> None:
        acc = DenseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        psi = acc.build(_path_graph(), [True, True, False])
        np.testing.assert_array_equal(psi, [-1.0, 2.0, 0.0])

    def test_dense_score(self) -> None:
        acc = DenseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        psi = acc.build(_path_graph(), [True, True, False])
        assert acc.dot(psi, [0.0, 1.0, 0.0]) == pytest.approx(2.0)

    def test_sparse_truth_psi(self) -> None:
        g = LabelingGraph.from_edges(
            [[(0, 1.0)]] * 3, [(0, 1), (1, 2)], [[(0, 1.0)]] * 2
        )
        acc = SparseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        psi = acc.build(g, [1, 1, 0])
        # appended in node order, then edge order; never coalesced
        assert psi == [(1, 1.0), (1, 1.0), (0, -1.0)]
        np.testing.assert_array_equal(acc.to_dense(psi), [-1.0, 2.0, 0.0])

    def test_all_same_labels_have_no_edge_term(self) -> None:
        acc = DenseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        np.testing.assert_array_equal(
            acc.build(_path_graph(), [True] * 3), [0.0, 3.0, 0.0]
        )
        np.testing.assert_array_equal(
            acc.build(_path_graph(), [False] * 3), [0.0, 0.0, 0.0]
        )


class TestDenseSparseAgreement:
    """Dense and sparse psi give the same score for any weight vector."""

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_scores_match(self, seed: int) -> None:
        samples, _ = generate_labeled_graphs(
            SyntheticConfig(n_samples=3, n_nodes=9, node_dims=3, edge_dims=2), seed
        )
        dims = infer_dimensions(samples)
        dense = accumulator_for(FeatureKind.DENSE, dims)
        sparse = accumulator_for(FeatureKind.SPARSE, dims)
        rng = np.random.default_rng(seed)

        for g in samples:
            gs = _as_sparse(g)
            for _ in range(5):
                y = rng.random(g.number_of_nodes) < 0.5
                w = rng.standard_normal(dims.total)
                psi_d = dense.build(g, y)
                psi_s = sparse.build(gs, y)
                assert sparse.dot(psi_s, w) == pytest.approx(dense.dot(psi_d, w))
                np.testing.assert_allclose(sparse.to_dense(psi_s), psi_d)

    def test_repeated_sparse_indices_sum(self) -> None:
        acc = SparseFeatureAccumulator(FeatureDimensions(node_dims=3, edge_dims=1))
        psi = [(1, 2.0), (1, 3.0), (0, -1.0)]
        np.testing.assert_array_equal(acc.to_dense(psi), [-1.0, 5.0, 0.0, 0.0])
        assert acc.dot(psi, [1.0, 1.0, 0.0, 0.0]) == pytest.approx(4.0)

    def test_selection_by_kind(self) -> None:
        dims = FeatureDimensions(node_dims=1, edge_dims=1)
        assert isinstance(accumulator_for(FeatureKind.DENSE, dims), DenseFeatureAccumulator)
        assert isinstance(accumulator_for(FeatureKind.SPARSE, dims), SparseFeatureAccumulator)


class TestDimensionMismatch:

    def test_dense_node_vector_too_long(self) -> None:
        acc = DenseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        with pytest.raises(DimensionMismatchError, match="Node"):
            acc.add_node(acc.zeros(), np.ones(3))

    def test_dense_edge_vector_too_long(self) -> None:
        acc = DenseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        with pytest.raises(DimensionMismatchError, match="Edge"):
            acc.subtract_edge(acc.zeros(), np.ones(2))

    def test_sparse_index_out_of_block(self) -> None:
        acc = SparseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        with pytest.raises(DimensionMismatchError):
            acc.add_node([], ((2, 1.0),))

    def test_labeling_length(self) -> None:
        acc = DenseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        with pytest.raises(DimensionMismatchError, match="Labeling"):
            acc.build(_path_graph(), [True, False])

    def test_weight_length(self) -> None:
        acc = DenseFeatureAccumulator(FeatureDimensions(node_dims=2, edge_dims=1))
        with pytest.raises(DimensionMismatchError, match="Weight"):
            acc.check_weights(np.zeros(4))

    def test_dimension_mismatch_is_value_error(self) -> None:
        assert issubclass(DimensionMismatchError, ValueError)
