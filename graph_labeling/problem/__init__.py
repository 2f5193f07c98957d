"""Graph-labeling structural SVM problem and its separation oracle."""

from graph_labeling.features.accumulators import DimensionMismatchError
from graph_labeling.graph.validation import InvalidDatasetError
from graph_labeling.problem.oracle import SeparationOracle, hamming_loss
from graph_labeling.problem.structural import GraphLabelingProblem

__all__ = [
    "DimensionMismatchError",
    "GraphLabelingProblem",
    "InvalidDatasetError",
    "SeparationOracle",
    "hamming_loss",
]
