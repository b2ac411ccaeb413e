"""World entities -- stars, planets, colonies, players, fleets and ships.

Every cross-entity link is an id string, never an object reference, so
the whole world serialises to a plain tree without cycles.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field, model_validator

from blacktimes.ir.components import HullSize
from blacktimes.sim.core.enums import (
    BuildItemKind,
    PlanetType,
    SpecialResource,
    StarType,
)


class Vec3(BaseModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def distance_to(self, other: Vec3) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)


# ---------------------------------------------------------------------------
# Stars and planets
# ---------------------------------------------------------------------------

class Star(BaseModel):
    """A node of the warp-lane graph."""

    id: str
    name: str
    position: Vec3
    type: StarType
    planet_ids: list[str] = Field(default_factory=list)
    owner_id: str | None = None
    warp_lanes: list[str] = Field(default_factory=list)
    """Neighbouring star ids.  Symmetric: if A lists B, B lists A."""

    explored: dict[str, bool] = Field(default_factory=dict)
    """player id -> has that player revealed this star."""

    def is_explored_by(self, player_id: str) -> bool:
        return self.explored.get(player_id, False)


class Planet(BaseModel):
    id: str
    star_id: str
    name: str
    type: PlanetType
    size: int
    minerals: int
    habitability: int
    special_resource: SpecialResource = SpecialResource.NONE
    colony_id: str | None = None
    """Set once on colonisation, never cleared."""

    orbit_index: int = 0
    moon_count: int = 0


# ---------------------------------------------------------------------------
# Colonies
# ---------------------------------------------------------------------------

class BuildQueueItem(BaseModel):
    """A building or ship waiting in a colony's build queue."""

    id: str
    name: str
    kind: BuildItemKind
    reference_id: str
    """Building kind or ship design id."""

    cost: float
    progress: float = 0.0


class Colony(BaseModel):
    id: str
    planet_id: str
    player_id: str
    name: str
    population: float
    max_population: int
    farmers: int = 0
    workers: int = 0
    scientists: int = 0
    buildings: list[str] = Field(default_factory=list)
    build_queue: list[BuildQueueItem] = Field(default_factory=list)
    morale: int = 50

    food_output: float = 0.0
    production_output: float = 0.0
    research_output: float = 0.0
    credits_output: float = 0.0

    @property
    def workforce(self) -> int:
        """Number of population units available for assignment."""
        return math.floor(self.population)

    @property
    def assigned(self) -> int:
        return self.farmers + self.workers + self.scientists


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

class Player(BaseModel):
    id: str
    name: str
    race_id: str
    is_computer: bool = False
    color: int = 0xFFFFFF
    credits: float = 0.0
    research_pool: float = 0.0
    current_research_id: str | None = None
    known_tech_ids: list[str] = Field(default_factory=list)
    colony_ids: list[str] = Field(default_factory=list)
    fleet_ids: list[str] = Field(default_factory=list)
    home_star_id: str | None = None
    score: int = 0
    alive: bool = True
    """Once ``False`` it never becomes ``True`` again."""

    def knows(self, tech_id: str) -> bool:
        return tech_id in self.known_tech_ids


# ---------------------------------------------------------------------------
# Ships and fleets
# ---------------------------------------------------------------------------

class ShipDesign(BaseModel):
    """An immutable ship blueprint with its derived combat stats."""

    id: str
    player_id: str
    name: str
    hull_size: HullSize
    weapon_ids: list[str] = Field(default_factory=list)
    shield_id: str | None = None
    armor_id: str | None = None
    engine_id: str | None = None
    computer_id: str | None = None
    special_ids: list[str] = Field(default_factory=list)
    total_space: int
    used_space: int
    cost: int
    attack: float = 0.0
    defense: float = 0.0
    hp: float = 0.0
    speed: float = 1.0
    initiative: float = 0.0

    @model_validator(mode="after")
    def _fits_hull(self) -> ShipDesign:
        if self.used_space > self.total_space:
            raise ValueError(
                f"design {self.name!r} uses {self.used_space} space "
                f"but the hull holds {self.total_space}"
            )
        return self


class Ship(BaseModel):
    id: str
    design_id: str
    player_id: str
    current_hp: float
    experience: int = 0
    fleet_id: str | None = None


class Fleet(BaseModel):
    """A group of ships that moves together along the warp lanes."""

    id: str
    player_id: str
    name: str
    ship_ids: list[str] = Field(default_factory=list)
    star_id: str
    destination_id: str | None = None
    """The next hop, not the final target."""

    movement_progress: float = 0.0
    speed: float = 1.0
    path: list[str] = Field(default_factory=list)
    """Remaining hops, excluding the current star."""

    @property
    def is_moving(self) -> bool:
        return self.destination_id is not None
