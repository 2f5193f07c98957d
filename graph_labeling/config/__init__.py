"""Configuration system with frozen, hashable, serializable dataclasses."""

from graph_labeling.config.experiment import (
    ExperimentConfig,
    ProblemConfig,
    SyntheticConfig,
    REPRESENTATIONS,
    SOLVERS,
)
from graph_labeling.config.defaults import DEFAULT_CONFIG
from graph_labeling.config.hashing import config_hash
from graph_labeling.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_json,
)

__all__ = [
    "ExperimentConfig",
    "ProblemConfig",
    "SyntheticConfig",
    "REPRESENTATIONS",
    "SOLVERS",
    "DEFAULT_CONFIG",
    "config_hash",
    "config_from_dict",
    "config_from_json",
    "config_to_json",
]
