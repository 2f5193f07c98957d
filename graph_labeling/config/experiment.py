"""Problem and experiment configuration dataclasses — frozen and slotted."""

from dataclasses import dataclass, field

SOLVERS = ("mincut", "exhaustive")
REPRESENTATIONS = ("dense", "sparse")


@dataclass(frozen=True, slots=True)
class ProblemConfig:
    """Runtime options of a GraphLabelingProblem."""

    num_threads: int = 2  # workers used by batch oracle evaluation
    solver: str = "mincut"  # Potts MAP solver, one of SOLVERS

    def __post_init__(self) -> None:
        if self.num_threads < 1:
            raise ValueError(
                f"num_threads must be >= 1, got {self.num_threads}"
            )
        if self.solver not in SOLVERS:
            raise ValueError(
                f"solver must be one of {SOLVERS}, got {self.solver!r}"
            )


@dataclass(frozen=True, slots=True)
class SyntheticConfig:
    """Parameters of the synthetic labeled-graph generator."""

    n_samples: int = 20
    n_nodes: int = 12
    node_dims: int = 4
    edge_dims: int = 2
    p_same: float = 0.4  # edge probability between equally labeled nodes
    p_diff: float = 0.05  # edge probability across labels
    noise: float = 0.5  # std of the node feature noise
    representation: str = "dense"

    def __post_init__(self) -> None:
        if self.n_samples < 1 or self.n_nodes < 1:
            raise ValueError(
                f"n_samples ({self.n_samples}) and n_nodes ({self.n_nodes}) "
                f"must both be >= 1"
            )
        if self.node_dims < 2 or self.edge_dims < 1:
            raise ValueError(
                f"node_dims ({self.node_dims}) must be >= 2 and "
                f"edge_dims ({self.edge_dims}) must be >= 1"
            )
        for name, p in (("p_same", self.p_same), ("p_diff", self.p_diff)):
            if not 0.0 <= p <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {p}")
        if self.noise < 0:
            raise ValueError(f"noise must be >= 0, got {self.noise}")
        if self.representation not in REPRESENTATIONS:
            raise ValueError(
                f"representation must be one of {REPRESENTATIONS}, "
                f"got {self.representation!r}"
            )


@dataclass(frozen=True, slots=True)
class ExperimentConfig:
    """Top-level configuration for a driver run: data, problem and seed."""

    problem: ProblemConfig = field(default_factory=ProblemConfig)
    data: SyntheticConfig = field(default_factory=SyntheticConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()
