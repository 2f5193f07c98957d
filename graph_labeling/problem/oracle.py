"""Loss-augmented separation oracle for the graph-labeling problem.

Given a weight vector w, the oracle finds the labeling maximizing
score(y) + hamming(y, truth), where score(y) = dot(w, psi(y)). The Hamming
loss decomposes per node, so it folds into the Potts node potentials
(margin rescaling) and a single exact MAP call yields the most violated
constraint.
"""

import logging
from typing import Any

import numpy as np

from graph_labeling.features.accumulators import FeatureAccumulator
from graph_labeling.graph.types import LabelingGraph, as_labeling
from graph_labeling.inference.potts import (
    PottsGraph,
    PottsSolver,
    find_max_factor_graph_potts,
)

log = logging.getLogger(__name__)


def hamming_loss(truth: np.ndarray, labeling: np.ndarray) -> float:
    """Number of nodes whose labels differ, as a float."""
    return float(np.count_nonzero(as_labeling(truth) != as_labeling(labeling)))


class SeparationOracle:
    """Turns a weight vector into the loss-augmented MAP labeling of a sample.

    Holds no per-call state, so one instance can serve concurrent calls
    on different samples.
    """

    def __init__(
        self,
        accumulator: FeatureAccumulator,
        solver: PottsSolver = find_max_factor_graph_potts,
    ) -> None:
        self.accumulator = accumulator
        self.solver = solver

    def potts_graph(
        self,
        sample: LabelingGraph,
        weights: Any,
        truth: Any = None,
    ) -> PottsGraph:
        """Potts graph of ``sample`` scored by ``weights``.

        Node potentials are dot(w_node, x_i); with ``truth`` given, each
        potential is shifted by -1 for a true node and +1 for a false one.
        Edge weights are dot(w_edge, f_ij), non-negative whenever the edge
        block of w is.
        """
        w = self.accumulator.check_weights(weights)
        potentials = np.array(
            [self.accumulator.node_score(w, vec) for vec in sample.node_features],
            dtype=np.float64,
        )
        if truth is not None:
            y = as_labeling(truth)
            if y.shape[0] != sample.number_of_nodes:
                raise ValueError(
                    f"Truth labeling has {y.shape[0]} entries for a graph "
                    f"with {sample.number_of_nodes} nodes"
                )
            potentials += np.where(y, -1.0, 1.0)

        edge_weights = np.array(
            [self.accumulator.edge_score(w, vec) for vec in sample.edge_features],
            dtype=np.float64,
        )
        return PottsGraph(
            potentials=potentials, edges=sample.edges, weights=edge_weights
        )

    def find_labeling(
        self, sample: LabelingGraph, weights: Any, truth: Any = None
    ) -> np.ndarray:
        """MAP labeling under ``weights``, loss-augmented when truth is given."""
        return self.solver(self.potts_graph(sample, weights, truth))

    def solve(
        self, sample: LabelingGraph, truth: Any, weights: Any
    ) -> tuple[float, Any]:
        """Most violated constraint for one sample.

        Returns:
            (loss, psi): the Hamming loss of the loss-augmented MAP
            labeling against ``truth`` and that labeling's joint
            feature vector.
        """
        labeling = self.find_labeling(sample, weights, truth)
        loss = hamming_loss(truth, labeling)
        psi = self.accumulator.build(sample, labeling)
        log.debug(
            "Oracle: n=%d, loss=%.0f, true=%d",
            sample.number_of_nodes,
            loss,
            int(labeling.sum()),
        )
        return loss, psi
