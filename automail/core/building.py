"""
Building configuration and sectors.

This module defines:
- BuildingConfig: read-only floor layout and arrival window
- BuildingSector: a contiguous floor range served by one robot

Supports serialization to/from YAML alongside the simulation config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from pydantic import BaseModel, Field, validator

from automail.core.clock import Clock


@dataclass(frozen=True)
class BuildingSector:
    """Floors a robot is responsible for, inclusive on both ends."""

    name: str
    lowest_floor: int
    highest_floor: int

    def contains(self, floor: int) -> bool:
        return self.lowest_floor <= floor <= self.highest_floor

    def __str__(self) -> str:
        return f"{self.name}[{self.lowest_floor}-{self.highest_floor}]"


class BuildingConfig(BaseModel):
    """Floor layout of the building being served."""

    lowest_floor: int = 1
    floors: int = Field(default=14, gt=0)
    mailroom_location: int = 1
    last_delivery_time: int = Field(default=Clock.LAST_DELIVERY_TIME, gt=0)

    class Config:
        """Pydantic configuration."""
        frozen = True

    @validator("mailroom_location")
    def check_mailroom_inside(cls, value, values):
        lowest = values.get("lowest_floor", 1)
        floors = values.get("floors", 1)
        if not lowest <= value < lowest + floors:
            raise ValueError(f"mailroom floor {value} outside building floors")
        return value

    @property
    def highest_floor(self) -> int:
        return self.lowest_floor + self.floors - 1

    def contains(self, floor: int) -> bool:
        return self.lowest_floor <= floor <= self.highest_floor

    def whole_building(self) -> BuildingSector:
        return BuildingSector("ALL", self.lowest_floor, self.highest_floor)

    def split_sectors(self, count: int) -> List[BuildingSector]:
        """
        Split the floors into ``count`` contiguous sectors.

        Lower sectors absorb the remainder when floors do not divide evenly.

        Args:
            count: Number of sectors (one per robot)

        Returns:
            Sectors ordered from the lowest floor upwards
        """
        if count <= 0:
            raise ValueError("Sector count must be positive")
        if count > self.floors:
            raise ValueError(f"Cannot split {self.floors} floors into {count} sectors")

        base, extra = divmod(self.floors, count)
        sectors = []
        floor = self.lowest_floor
        for index in range(count):
            size = base + (1 if index < extra else 0)
            sectors.append(BuildingSector(f"S{index}", floor, floor + size - 1))
            floor += size
        return sectors
