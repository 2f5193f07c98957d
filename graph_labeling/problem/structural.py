"""GraphLabelingProblem: the per-sample contract used by a cutting-plane trainer.

The weight vector (and every psi) is laid out as [edge block | node block].
A trainer using this problem must keep the first num_edge_weights()
entries of its weight vector non-negative so that the Potts edge weights
stay attractive and the MAP step stays exact.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np

from graph_labeling.config.experiment import ProblemConfig
from graph_labeling.features.accumulators import accumulator_for
from graph_labeling.features.dimensions import FeatureDimensions, infer_dimensions
from graph_labeling.graph.types import FeatureKind, LabelingGraph, as_labeling
from graph_labeling.graph.validation import InvalidDatasetError, validation_errors
from graph_labeling.inference.potts import SOLVER_REGISTRY
from graph_labeling.problem.oracle import SeparationOracle

log = logging.getLogger(__name__)


class GraphLabelingProblem:
    """Structural SVM problem over a fixed, validated graph-labeling dataset.

    Samples, labels and dimensions are fixed at construction and only read
    afterwards, so truth_feature_vector and separation_oracle may be called
    concurrently for distinct sample indices without locking.

    Args:
        samples: Sequence of LabelingGraph, all of one FeatureKind.
        labels: One label vector per sample (bools or 0/1 ints).
        config: Runtime options (thread count for batch calls, solver).

    Raises:
        InvalidDatasetError: If is_graph_labeling_problem rejects the data.
    """

    def __init__(
        self,
        samples: Sequence[LabelingGraph],
        labels: Sequence[Any],
        config: ProblemConfig | None = None,
    ) -> None:
        errors = validation_errors(samples, labels)
        if errors:
            log.warning(
                "Invalid graph labeling dataset: %s", "; ".join(errors[:5])
            )
            raise InvalidDatasetError(
                f"Invalid graph labeling dataset ({len(errors)} problems): "
                f"{'; '.join(errors[:5])}"
            )

        self.config = config if config is not None else ProblemConfig()
        self._samples: tuple[LabelingGraph, ...] = tuple(samples)
        truth = []
        for label in labels:
            y = as_labeling(label)
            y.flags.writeable = False
            truth.append(y)
        self._labels: tuple[np.ndarray, ...] = tuple(truth)

        self._dims = infer_dimensions(self._samples)
        self._kind = self._samples[0].kind
        self._accumulator = accumulator_for(self._kind, self._dims)
        self._oracle = SeparationOracle(
            self._accumulator, SOLVER_REGISTRY[self.config.solver]
        )

        log.info(
            "Graph labeling problem: %d samples, %s features, "
            "node_dims=%d, edge_dims=%d, solver=%s",
            len(self._samples),
            self._kind.value,
            self._dims.node_dims,
            self._dims.edge_dims,
            self.config.solver,
        )

    @property
    def dimensions(self) -> FeatureDimensions:
        return self._dims

    @property
    def kind(self) -> FeatureKind:
        return self._kind

    def num_samples(self) -> int:
        return len(self._samples)

    def total_dimensions(self) -> int:
        """Length of the weight and psi vectors: edge_dims + node_dims."""
        return self._dims.total

    def num_edge_weights(self) -> int:
        """Length of the weight prefix that must stay non-negative."""
        return self._dims.edge_dims

    def sample(self, idx: int) -> LabelingGraph:
        self._check_index(idx)
        return self._samples[idx]

    def label(self, idx: int) -> np.ndarray:
        self._check_index(idx)
        return self._labels[idx]

    def _check_index(self, idx: int) -> None:
        if not 0 <= idx < len(self._samples):
            raise IndexError(
                f"Sample index {idx} out of range [0, {len(self._samples)})"
            )

    def joint_feature_vector(self, idx: int, labeling: Any) -> Any:
        """psi of sample idx under an arbitrary labeling."""
        self._check_index(idx)
        return self._accumulator.build(self._samples[idx], labeling)

    def truth_feature_vector(self, idx: int) -> Any:
        """psi of sample idx under its ground-truth labeling."""
        return self.joint_feature_vector(idx, self.label(idx))

    def separation_oracle(self, idx: int, weights: Any) -> tuple[float, Any]:
        """(loss, psi) of the most violated labeling of sample idx."""
        self._check_index(idx)
        return self._oracle.solve(self._samples[idx], self._labels[idx], weights)

    def separation_oracles(self, weights: Any) -> list[tuple[float, Any]]:
        """separation_oracle for every sample, in index order.

        Samples are spread over config.num_threads worker threads.
        """
        w = self._accumulator.check_weights(weights)
        with ThreadPoolExecutor(max_workers=self.config.num_threads) as pool:
            results = list(
                pool.map(
                    lambda idx: self.separation_oracle(idx, w),
                    range(self.num_samples()),
                )
            )
        log.debug(
            "Batch oracle over %d samples: total loss %.0f",
            len(results),
            sum(loss for loss, _ in results),
        )
        return results

    def predict(self, idx: int, weights: Any) -> np.ndarray:
        """Highest scoring labeling of sample idx, without loss augmentation."""
        self._check_index(idx)
        return self._oracle.find_labeling(self._samples[idx], weights)

    def score(self, psi: Any, weights: Any) -> float:
        """dot(psi, weights) for a psi produced by this problem."""
        return self._accumulator.dot(psi, weights)
