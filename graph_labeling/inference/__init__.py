"""Exact MAP inference for binary Potts models."""

from graph_labeling.inference.potts import (
    MAX_EXHAUSTIVE_NODES,
    SOLVER_REGISTRY,
    PottsGraph,
    PottsSolver,
    find_max_factor_graph_potts,
    find_max_potts_exhaustive,
    potts_score,
)

__all__ = [
    "MAX_EXHAUSTIVE_NODES",
    "SOLVER_REGISTRY",
    "PottsGraph",
    "PottsSolver",
    "find_max_factor_graph_potts",
    "find_max_potts_exhaustive",
    "potts_score",
]
