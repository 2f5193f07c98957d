"""JSON serialization and deserialization for experiment configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import from_dict, Config as DaciteConfig

from graph_labeling.config.experiment import ExperimentConfig

_DACITE_CONFIG = DaciteConfig(cast=[tuple], check_types=True, strict=True)


def config_to_json(config: ExperimentConfig) -> str:
    """Serialize an ExperimentConfig to a sorted, 2-space indented JSON string."""
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> ExperimentConfig:
    """Deserialize a JSON string to an ExperimentConfig.

    dacite runs with strict=True so unknown keys are rejected, and
    cast=[tuple] turns JSON arrays back into the tuple-typed fields.
    Field validation in __post_init__ still applies.
    """
    return config_from_dict(json.loads(json_str))


def config_from_dict(d: dict[str, Any]) -> ExperimentConfig:
    """Reconstruct an ExperimentConfig from a plain dictionary."""
    return from_dict(data_class=ExperimentConfig, data=d, config=_DACITE_CONFIG)
