"""Core simulation primitives: RNG, ids, enums and the world-state models."""

from blacktimes.sim.core.entities import (
    BuildQueueItem,
    Colony,
    Fleet,
    Planet,
    Player,
    Ship,
    ShipDesign,
    Star,
    Vec3,
)
from blacktimes.sim.core.game_state import (
    GameConfig,
    Galaxy,
    VictoryRecord,
    WorldState,
)
from blacktimes.sim.core.ids import IdGenerator
from blacktimes.sim.core.relations import (
    DiplomacyMessage,
    DiplomacyRelation,
    Proposal,
    Treaty,
)
from blacktimes.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # ids
    "IdGenerator",
    # entities
    "Vec3",
    "Star",
    "Planet",
    "BuildQueueItem",
    "Colony",
    "Player",
    "ShipDesign",
    "Ship",
    "Fleet",
    # relations
    "Treaty",
    "Proposal",
    "DiplomacyMessage",
    "DiplomacyRelation",
    # game_state
    "GameConfig",
    "Galaxy",
    "VictoryRecord",
    "WorldState",
]
