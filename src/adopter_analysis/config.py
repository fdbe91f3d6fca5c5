import os
from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

from .exceptions import ConfigError


@dataclass
class Config:
    """Configuration object loaded from YAML."""
    data: Dict[str, Any]
    balancing: Dict[str, Any]
    features: Dict[str, Any]
    model: Dict[str, Any]
    search: Dict[str, Any]
    validation: Dict[str, Any]
    output: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        if not os.path.exists(path):
            raise ConfigError(f"Config file not found: {path}")
        with open(path, "r") as f:
            try:
                cfg = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"Could not parse config {path}: {exc}") from exc

        required = ["data", "balancing", "features", "model", "search", "validation"]
        missing = [section for section in required if section not in cfg]
        if missing:
            raise ConfigError(f"Config {path} is missing sections: {missing}")
        unknown = set(cfg) - set(required) - {"output"}
        if unknown:
            raise ConfigError(f"Config {path} has unknown sections: {sorted(unknown)}")
        return cls(**cfg)
