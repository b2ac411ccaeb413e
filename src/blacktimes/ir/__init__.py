"""Content definitions for the simulation.

Technologies, ship components, buildings and races are pydantic models
that load cleanly from the JSON files in ``blacktimes/data``.  Hull
sizes and buildings are small fixed tables defined in code.
"""

from .buildings import (
    BUILDINGS,
    BuildingDefinition,
    BuildingEffect,
    BuildingKind,
    EffectMode,
    EffectTarget,
    get_building,
)
from .components import (
    HULL_SIZES,
    ComponentType,
    HullSize,
    HullSpec,
    ShipComponent,
)
from .personalities import (
    DEFAULT_PERSONALITY,
    PERSONALITIES,
    RACE_PERSONALITIES,
    Personality,
    most_hostile_personality,
    personality_for_race,
)
from .races import RaceDefinition
from .technologies import TechCategory, TechEffect, Technology

__all__ = [
    # buildings
    "BUILDINGS",
    "BuildingDefinition",
    "BuildingEffect",
    "BuildingKind",
    "EffectMode",
    "EffectTarget",
    "get_building",
    # components
    "HULL_SIZES",
    "ComponentType",
    "HullSize",
    "HullSpec",
    "ShipComponent",
    # personalities
    "DEFAULT_PERSONALITY",
    "PERSONALITIES",
    "RACE_PERSONALITIES",
    "Personality",
    "most_hostile_personality",
    "personality_for_race",
    # races
    "RaceDefinition",
    # technologies
    "TechCategory",
    "TechEffect",
    "Technology",
]
