"""Labeled-graph container and dataset validation."""

from graph_labeling.graph.types import (
    FeatureKind,
    FeatureVector,
    LabelingGraph,
    SparseVector,
    as_feature_vector,
    as_labeling,
)
from graph_labeling.graph.validation import (
    InvalidDatasetError,
    graph_contains_length_one_cycle,
    is_graph_labeling_problem,
    is_learning_problem,
    validation_errors,
)

__all__ = [
    "FeatureKind",
    "FeatureVector",
    "InvalidDatasetError",
    "LabelingGraph",
    "SparseVector",
    "as_feature_vector",
    "as_labeling",
    "graph_contains_length_one_cycle",
    "is_graph_labeling_problem",
    "is_learning_problem",
    "validation_errors",
]
