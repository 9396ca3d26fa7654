"""
Simulation configuration.

Combines the building layout with the run parameters (mail volume, seed,
robot fleet, strategies). Supports serialization to/from YAML.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, validator

from automail.core.building import BuildingConfig
from automail.core.errors import ConfigurationError
from automail.core.mail import MAX_WEIGHT

BEHAVIOURS = ("standard", "priority")
ROUTINGS = ("top", "lightest")


class SimulationConfig(BaseModel):
    """Parameters for one simulation run."""

    building: BuildingConfig = Field(default_factory=BuildingConfig)

    # Mail
    mail_to_create: int = Field(default=80, ge=3)
    seed: Optional[int] = None

    # Fleet
    num_robots: int = Field(default=2, gt=0)
    carry_weight: int = Field(default=MAX_WEIGHT, gt=0)
    storage_capacity: int = Field(default=4, gt=0)

    # Strategies
    behaviour: str = "standard"
    routing: str = "top"

    # Run limits
    max_ticks: int = Field(default=10000, gt=0)

    @validator("behaviour")
    def check_behaviour(cls, value):
        if value not in BEHAVIOURS:
            raise ValueError(f"unknown behaviour '{value}', expected one of {BEHAVIOURS}")
        return value

    @validator("routing")
    def check_routing(cls, value):
        if value not in ROUTINGS:
            raise ValueError(f"unknown routing '{value}', expected one of {ROUTINGS}")
        return value

    @validator("num_robots")
    def check_robots_fit_building(cls, value, values):
        building = values.get("building")
        if building is not None and value > building.floors:
            raise ValueError("more robots than floors to split into sectors")
        return value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SimulationConfig:
        """Build a config, turning validation failures into ConfigurationError."""
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> SimulationConfig:
        """Load simulation configuration from a YAML file."""
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"{yaml_path}: expected a mapping at top level")

        config = cls.from_dict(data)
        logger.debug(f"Loaded simulation config from {yaml_path}")
        return config

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save simulation configuration to a YAML file."""
        data = self.dict()

        with open(yaml_path, 'w') as f:
            yaml.dump(data, f, default_flow_style=False)

    def with_overrides(self, **overrides: Any) -> SimulationConfig:
        """Copy of this config with some top-level fields replaced (validated)."""
        data = self.dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(data)
