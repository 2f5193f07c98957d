"""Default configuration used when no config file is given."""

from graph_labeling.config.experiment import ExperimentConfig

DEFAULT_CONFIG = ExperimentConfig()
