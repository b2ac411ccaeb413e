"""Technology definitions -- the nodes of the research tree."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class TechCategory(str, Enum):
    """The six research fields.  Each has one technology per level 1-5."""

    CONSTRUCTION = "CONSTRUCTION"
    FORCE_FIELDS = "FORCE_FIELDS"
    PLANETOLOGY = "PLANETOLOGY"
    PROPULSION = "PROPULSION"
    COMPUTERS = "COMPUTERS"
    WEAPONS = "WEAPONS"


class TechEffect(BaseModel):
    """A passive modifier granted by a technology (informational)."""

    type: str
    value: float


class Technology(BaseModel):
    """Complete definition of a single technology."""

    id: str
    name: str
    category: TechCategory
    level: int
    """1-5; lower levels are foundational."""

    research_cost: int
    description: str = ""
    effects: list[TechEffect] = Field(default_factory=list)
    prerequisite_ids: list[str] = Field(default_factory=list)
    unlocks: list[str] = Field(default_factory=list)
    """Building and component ids this technology makes available."""

    @field_validator("level")
    @classmethod
    def _level_in_range(cls, v: int) -> int:
        if not 1 <= v <= 5:
            raise ValueError(f"technology level must be 1-5, got {v}")
        return v

    @field_validator("research_cost")
    @classmethod
    def _cost_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("research_cost must be positive")
        return v
