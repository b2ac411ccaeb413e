"""Ship hulls and components used by the ship designer."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class HullSize(str, Enum):
    """Hull size class of a design; fixes capacity, base cost and hit points."""

    FIGHTER = "FIGHTER"
    DESTROYER = "DESTROYER"
    CRUISER = "CRUISER"
    BATTLESHIP = "BATTLESHIP"


class ComponentType(str, Enum):
    WEAPON = "weapon"
    SHIELD = "shield"
    ARMOR = "armor"
    ENGINE = "engine"
    COMPUTER = "computer"
    SPECIAL = "special"


class HullSpec(BaseModel):
    space: int
    cost: int
    hp: int


HULL_SIZES: dict[HullSize, HullSpec] = {
    HullSize.FIGHTER: HullSpec(space=10, cost=20, hp=5),
    HullSize.DESTROYER: HullSpec(space=25, cost=60, hp=15),
    HullSize.CRUISER: HullSpec(space=60, cost=150, hp=40),
    HullSize.BATTLESHIP: HullSpec(space=120, cost=350, hp=100),
}


class ShipComponent(BaseModel):
    """A single installable ship component.

    ``stats`` keys depend on the type: ``damage`` for weapons,
    ``shield_hp`` / ``armor_hp`` for defenses, ``speed`` and
    ``initiative`` for engines, ``accuracy_bonus`` for computers.
    """

    id: str
    name: str
    type: ComponentType
    space: int
    cost: int
    tech_level: int
    """0 means always available; otherwise a known technology must unlock it."""

    stats: dict[str, float] = Field(default_factory=dict)

    def stat(self, key: str, default: float = 0) -> float:
        return self.stats.get(key, default)
