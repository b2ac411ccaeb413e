"""Game configuration and the world-state aggregate.

``WorldState`` is an arena of id-keyed tables (stars, planets, colonies,
...) plus the turn counter, the id generator and the diplomacy relation
list.  Every service reads and mutates it directly; nothing keeps a
private copy.  The live RNG rides along as an excluded field and its
integer state is captured in :attr:`WorldState.rng_state` on snapshot.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from blacktimes.ir.components import ShipComponent
from blacktimes.ir.technologies import Technology
from blacktimes.sim.core.constants import MAX_PLAYERS, MIN_PLAYERS
from blacktimes.sim.core.entities import (
    Colony,
    Fleet,
    Planet,
    Player,
    Ship,
    ShipDesign,
    Star,
)
from blacktimes.sim.core.enums import (
    Difficulty,
    GalaxyShape,
    GalaxySize,
    VictoryType,
)
from blacktimes.sim.core.ids import IdGenerator
from blacktimes.sim.core.relations import DiplomacyRelation
from blacktimes.sim.core.rng import GameRNG


# ---------------------------------------------------------------------------
# GameConfig
# ---------------------------------------------------------------------------

class GameConfig(BaseModel):
    """Settings chosen on the new-game screen."""

    galaxy_size: GalaxySize = GalaxySize.MEDIUM
    galaxy_shape: GalaxyShape = GalaxyShape.SPIRAL
    player_count: int = 4
    difficulty: Difficulty = Difficulty.NORMAL
    seed: int = 42
    race_id: str = "humans"
    player_name: str = "Player"

    @field_validator("player_count")
    @classmethod
    def _player_count_in_range(cls, v: int) -> int:
        if not MIN_PLAYERS <= v <= MAX_PLAYERS:
            raise ValueError(
                f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}, got {v}"
            )
        return v

    @field_validator("seed")
    @classmethod
    def _seed_fits_32_bits(cls, v: int) -> int:
        if not 0 <= v <= 0xFFFFFFFF:
            raise ValueError(f"seed must be an unsigned 32-bit integer, got {v}")
        return v


# ---------------------------------------------------------------------------
# Galaxy and victory records
# ---------------------------------------------------------------------------

class Galaxy(BaseModel):
    id: str
    star_ids: list[str] = Field(default_factory=list)
    width: float
    height: float


class VictoryRecord(BaseModel):
    winner_id: str
    victory_type: VictoryType
    turn: int


# ---------------------------------------------------------------------------
# WorldState
# ---------------------------------------------------------------------------

class WorldState(BaseModel):
    """The single in-memory aggregate of every game entity."""

    model_config = {"arbitrary_types_allowed": True}

    config: GameConfig = Field(default_factory=GameConfig)
    turn: int = 1
    current_player_id: str | None = None
    galaxy: Galaxy | None = None

    stars: dict[str, Star] = Field(default_factory=dict)
    planets: dict[str, Planet] = Field(default_factory=dict)
    colonies: dict[str, Colony] = Field(default_factory=dict)
    players: dict[str, Player] = Field(default_factory=dict)
    fleets: dict[str, Fleet] = Field(default_factory=dict)
    ships: dict[str, Ship] = Field(default_factory=dict)
    ship_designs: dict[str, ShipDesign] = Field(default_factory=dict)
    technologies: dict[str, Technology] = Field(default_factory=dict)
    components: dict[str, ShipComponent] = Field(default_factory=dict)
    diplomacy: list[DiplomacyRelation] = Field(default_factory=list)

    ids: IdGenerator = Field(default_factory=IdGenerator)
    rng_state: int = 0
    victory: VictoryRecord | None = None

    rng: Any = Field(default=None, exclude=True)
    """The session's GameRNG; rebuilt from ``rng_state`` on restore."""

    # -- ids -----------------------------------------------------------------

    def new_id(self, prefix: str) -> str:
        return self.ids.next_id(prefix)

    # -- queries -------------------------------------------------------------

    def get_relation(self, a: str, b: str) -> DiplomacyRelation | None:
        """Return the relation for the unordered pair ``(a, b)``."""
        for rel in self.diplomacy:
            if rel.involves(a, b):
                return rel
        return None

    def living_players(self) -> list[Player]:
        return [p for p in self.players.values() if p.alive]

    def fleets_at(self, star_id: str) -> list[Fleet]:
        return [f for f in self.fleets.values() if f.star_id == star_id]

    def player_colonies(self, player_id: str) -> list[Colony]:
        player = self.players.get(player_id)
        if player is None:
            return []
        return [self.colonies[cid] for cid in player.colony_ids if cid in self.colonies]

    def player_fleets(self, player_id: str) -> list[Fleet]:
        player = self.players.get(player_id)
        if player is None:
            return []
        return [self.fleets[fid] for fid in player.fleet_ids if fid in self.fleets]

    def player_designs(self, player_id: str) -> list[ShipDesign]:
        return [d for d in self.ship_designs.values() if d.player_id == player_id]

    def design_of(self, ship: Ship) -> ShipDesign | None:
        return self.ship_designs.get(ship.design_id)

    @property
    def game_over(self) -> bool:
        return self.victory is not None

    # -- snapshot ------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Return a JSON-ready tree of the whole world, including RNG state."""
        if self.rng is not None:
            self.rng_state = self.rng.get_state()
        return self.model_dump(mode="json")

    @classmethod
    def restore(cls, data: dict[str, Any]) -> WorldState:
        """Rebuild a world (and its RNG) from :meth:`snapshot` output."""
        state = cls.model_validate(data)
        rng = GameRNG(state.config.seed)
        rng.set_state(state.rng_state)
        state.rng = rng
        return state
