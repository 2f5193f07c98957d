"""Structural SVM graph-labeling problem: binary node labels with Potts smoothing."""

from graph_labeling.graph import FeatureKind, LabelingGraph, is_graph_labeling_problem
from graph_labeling.problem import (
    DimensionMismatchError,
    GraphLabelingProblem,
    InvalidDatasetError,
)

__all__ = [
    "DimensionMismatchError",
    "FeatureKind",
    "GraphLabelingProblem",
    "InvalidDatasetError",
    "LabelingGraph",
    "is_graph_labeling_problem",
]
