"""Synthetic labeled-graph datasets."""

from graph_labeling.data.synthetic import (
    generate_labeled_graph,
    generate_labeled_graphs,
    sample_edges,
)

__all__ = [
    "generate_labeled_graph",
    "generate_labeled_graphs",
    "sample_edges",
]
