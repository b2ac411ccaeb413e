"""Game session: new-game setup, player commands and turn stepping.

A :class:`GameSession` owns one :class:`WorldState`, its RNG, the event
log and the turn pipeline.  Commands are the only way an outside caller
should change the world between turns; each one returns ``None`` or
``False`` when it has no effect and never raises for bad input.

Usage::

    session = GameSession.new_game(GameConfig(seed=7, player_count=3))
    fleet = session.state.player_fleets(session.human_player_id)[0]
    session.set_destination(fleet.id, some_star_id)
    events = session.end_turn()
"""

from __future__ import annotations

import logging
from typing import Any

from blacktimes.ir.components import HullSize
from blacktimes.sim.content.registry import ContentRegistry
from blacktimes.sim.core.constants import (
    AI_STARTING_CREDITS,
    PLAYER_COLORS,
    STARTING_CREDITS,
)
from blacktimes.sim.core.entities import (
    BuildQueueItem,
    Colony,
    Fleet,
    Planet,
    Player,
    ShipDesign,
    Star,
)
from blacktimes.sim.core.enums import MessageType, PlanetType, ProposalType
from blacktimes.sim.core.game_state import GameConfig, WorldState
from blacktimes.sim.core.relations import DiplomacyMessage, Proposal
from blacktimes.sim.core.rng import GameRNG
from blacktimes.sim.events import ColonyFounded, EventLog, GameEvent
from blacktimes.sim.galaxy.fog_of_war import initialize_for_player
from blacktimes.sim.galaxy.galaxy_gen import GalaxyGenerator
from blacktimes.sim.galaxy.planet_gen import PlanetGenerator
from blacktimes.sim.mechanics import colony as colony_service
from blacktimes.sim.mechanics import diplomacy, movement, research
from blacktimes.sim.mechanics.ship_design import (
    create_default_designs,
    create_design,
    find_design,
    spawn_ship,
)
from blacktimes.sim.play_agents.base import EmpireAgent
from blacktimes.sim.play_agents.computer_player import ComputerPlayer
from blacktimes.sim.turn import TurnPipeline

logger = logging.getLogger(__name__)

HOME_FALLBACK_HABITABILITY = 80
HOME_FALLBACK_SIZE = 3
MIN_HOME_HABITABILITY = 40

# design name -> ships in each player's starting fleet
STARTING_FLEET: list[tuple[str, int]] = [("Scout", 1), ("Fighter", 2)]


class GameSession:
    """One running game.

    Parameters
    ----------
    state:
        The world.  Its ``rng`` must already be attached.
    agents:
        player id -> agent for the planning phase.  Defaults to a
        :class:`ComputerPlayer` for every computer-controlled player.
    """

    def __init__(self, state: WorldState, agents: dict[str, EmpireAgent] | None = None) -> None:
        if agents is None:
            agents = {
                pid: ComputerPlayer()
                for pid, player in state.players.items()
                if player.is_computer
            }
        self.state = state
        self.events = EventLog()
        self.pipeline = TurnPipeline(agents)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    @classmethod
    def new_game(
        cls,
        config: GameConfig | None = None,
        registry: ContentRegistry | None = None,
    ) -> GameSession:
        """Generate a fresh galaxy and seat every player in it."""
        config = config if config is not None else GameConfig()
        if registry is None:
            registry = ContentRegistry()
            registry.load_all()

        state = WorldState(config=config)
        state.rng = GameRNG(config.seed)
        research.load_tech_tree(state, registry.technologies)
        for comp_id, comp in registry.components.items():
            state.components[comp_id] = comp.model_copy(deep=True)

        GalaxyGenerator(state.rng).generate(
            state, config.galaxy_size, config.galaxy_shape, min_stars=config.player_count,
        )
        PlanetGenerator(state.rng).generate_all(state)

        _create_players(state, registry)

        for player in state.players.values():
            create_default_designs(state, player.id)
            _spawn_starting_fleet(state, player)
            initialize_for_player(state, player.id, player.home_star_id)
        diplomacy.init_all_relations(state)

        state.rng_state = state.rng.get_state()
        logger.info(
            "New game: seed=%d, %d stars, %d players",
            config.seed, len(state.stars), len(state.players),
        )
        return cls(state)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def human_player_id(self) -> str | None:
        for player in self.state.players.values():
            if not player.is_computer:
                return player.id
        return None

    @property
    def turn(self) -> int:
        return self.state.turn

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def found_colony(self, planet_id: str, player_id: str, name: str | None = None) -> Colony | None:
        """Settle an uncolonized planet."""
        planet = self.state.planets.get(planet_id)
        if planet is None or planet.colony_id is not None:
            return None
        player = self.state.players.get(player_id)
        if player is None or not player.alive:
            return None
        colony = colony_service.found_colony(self.state, planet_id, player_id, name or planet.name)
        if colony is not None:
            self.events.emit(ColonyFounded(
                turn=self.state.turn, colony_id=colony.id,
                player_id=player_id, planet_id=planet_id,
            ))
        return colony

    def set_destination(self, fleet_id: str, star_id: str) -> bool:
        return movement.set_destination(self.state, fleet_id, star_id)

    def cancel_movement(self, fleet_id: str) -> bool:
        return movement.cancel_movement(self.state, fleet_id)

    def merge_fleets(self, target_id: str, source_id: str) -> bool:
        return movement.merge_fleets(self.state, target_id, source_id)

    def split_fleet(self, fleet_id: str, ship_ids: list[str]) -> Fleet | None:
        return movement.split_fleet(self.state, fleet_id, ship_ids)

    def select_research(self, player_id: str, tech_id: str) -> bool:
        return research.select_research(self.state, player_id, tech_id)

    def create_design(
        self,
        player_id: str,
        name: str,
        hull_size: HullSize,
        weapon_ids: list[str],
        shield_id: str | None = None,
        armor_id: str | None = None,
        engine_id: str | None = None,
        computer_id: str | None = None,
        special_ids: list[str] | None = None,
    ) -> ShipDesign | None:
        """Register a design; every component must be unlocked for the player."""
        if player_id not in self.state.players:
            return None
        return create_design(
            self.state, player_id, name, hull_size, weapon_ids,
            shield_id=shield_id,
            armor_id=armor_id,
            engine_id=engine_id,
            computer_id=computer_id,
            special_ids=special_ids,
            require_unlocked=True,
        )

    def enqueue_building(self, colony_id: str, building_id: str) -> BuildQueueItem | None:
        return colony_service.enqueue_building(self.state, colony_id, building_id)

    def enqueue_ship(self, colony_id: str, design_id: str) -> BuildQueueItem | None:
        return colony_service.enqueue_ship(self.state, colony_id, design_id)

    def remove_from_build_queue(self, colony_id: str, index: int) -> bool:
        colony = self.state.colonies.get(colony_id)
        if colony is None:
            return False
        return colony_service.remove_from_build_queue(colony, index)

    def rush_build(self, colony_id: str, index: int = 0) -> bool:
        return colony_service.rush_build(self.state, colony_id, index)

    def set_workers(self, colony_id: str, farmers: int, workers: int, scientists: int) -> bool:
        colony = self.state.colonies.get(colony_id)
        if colony is None:
            return False
        return colony_service.set_workers(colony, farmers, workers, scientists)

    def send_message(self, from_id: str, to_id: str, message_type: MessageType) -> DiplomacyMessage | None:
        return diplomacy.send_message(self.state, from_id, to_id, message_type)

    def propose_treaty(self, from_id: str, to_id: str, treaty_type: ProposalType) -> Proposal | None:
        return diplomacy.propose_treaty(self.state, from_id, to_id, treaty_type)

    def propose_peace(self, from_id: str, to_id: str) -> Proposal | None:
        return diplomacy.propose_peace(self.state, from_id, to_id)

    def declare_war(self, aggressor_id: str, target_id: str) -> bool:
        return diplomacy.declare_war(self.state, aggressor_id, target_id)

    def accept_proposal(self, proposal: Proposal) -> bool:
        return diplomacy.accept_proposal(self.state, proposal)

    def reject_proposal(self, proposal: Proposal) -> bool:
        return diplomacy.reject_proposal(self.state, proposal)

    def end_turn(self) -> list[GameEvent]:
        """Run the turn pipeline once and return the events it produced."""
        events = self.pipeline.run_turn(self.state, self.events)
        if self.state.rng is not None:
            self.state.rng_state = self.state.rng.get_state()
        return events

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        return self.state.snapshot()

    @classmethod
    def from_snapshot(
        cls,
        data: dict[str, Any],
        agents: dict[str, EmpireAgent] | None = None,
    ) -> GameSession:
        """Resume a game saved with :meth:`snapshot`.  The event log starts empty."""
        return cls(WorldState.restore(data), agents)


# ---------------------------------------------------------------------------
# New-game helpers
# ---------------------------------------------------------------------------

def _new_player(
    state: WorldState,
    name: str,
    race_id: str,
    is_computer: bool,
    index: int,
    credits: float,
    home_star_id: str,
) -> Player:
    player = Player(
        id=state.new_id("player"),
        name=name,
        race_id=race_id,
        is_computer=is_computer,
        color=PLAYER_COLORS[index % len(PLAYER_COLORS)],
        credits=credits,
        home_star_id=home_star_id,
    )
    state.players[player.id] = player
    return player


def _create_players(state: WorldState, registry: ContentRegistry) -> None:
    """Seat the human first, then the computer players on shuffled stars."""
    config = state.config
    star_ids = list(state.galaxy.star_ids)
    state.rng.shuffle(star_ids)

    human = _new_player(
        state, config.player_name, config.race_id, False, 0,
        STARTING_CREDITS, star_ids.pop(0),
    )
    state.current_player_id = human.id
    found_home_colony(state, human)

    race_ids = [r for r in registry.list_race_ids() if r != config.race_id]
    state.rng.shuffle(race_ids)
    ai_credits = AI_STARTING_CREDITS[config.difficulty]

    for i in range(1, config.player_count):
        if not star_ids:
            break
        race_id = race_ids[(i - 1) % len(race_ids)] if race_ids else config.race_id
        race = registry.get_race(race_id)
        name = race.name if race is not None else f"Computer {i}"
        player = _new_player(state, name, race_id, True, i, ai_credits, star_ids.pop(0))
        found_home_colony(state, player)


def _pick_home_planet(state: WorldState, star: Star) -> Planet | None:
    planets = [state.planets[pid] for pid in star.planet_ids if pid in state.planets]
    if not planets:
        return None
    for planet in planets:
        if planet.type == PlanetType.TERRAN:
            return planet
    habitable = [p for p in planets if p.habitability > MIN_HOME_HABITABILITY]
    if habitable:
        return max(habitable, key=lambda p: p.habitability)
    planet = planets[0]
    planet.type = PlanetType.TERRAN
    planet.habitability = HOME_FALLBACK_HABITABILITY
    planet.size = HOME_FALLBACK_SIZE
    return planet


def found_home_colony(state: WorldState, player: Player) -> Colony | None:
    """Claim the player's home star and settle its best planet."""
    star = state.stars.get(player.home_star_id or "")
    if star is None:
        return None
    star.owner_id = player.id
    star.explored[player.id] = True
    planet = _pick_home_planet(state, star)
    if planet is None:
        return None
    return colony_service.found_colony(state, planet.id, player.id, f"{star.name} Prime")


def _spawn_starting_fleet(state: WorldState, player: Player) -> None:
    if player.home_star_id is None:
        return
    for design_name, count in STARTING_FLEET:
        design = find_design(state, player.id, design_name)
        if design is None:
            continue
        for _ in range(count):
            spawn_ship(state, design.id, player.id, player.home_star_id)
