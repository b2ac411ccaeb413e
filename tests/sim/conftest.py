"""Shared fixtures for simulation tests."""

from __future__ import annotations

import pytest

from blacktimes.sim.content.registry import ContentRegistry
from blacktimes.sim.core.entities import Planet, Player, Star, Vec3
from blacktimes.sim.core.enums import PlanetType, StarType
from blacktimes.sim.core.game_state import GameConfig, WorldState
from blacktimes.sim.core.rng import GameRNG
from blacktimes.sim.mechanics.diplomacy import init_all_relations
from blacktimes.sim.mechanics.research import load_tech_tree


@pytest.fixture(scope="session")
def registry() -> ContentRegistry:
    """Session-scoped registry with the bundled content loaded once."""
    reg = ContentRegistry()
    reg.load_all()
    return reg


@pytest.fixture
def world(registry: ContentRegistry) -> WorldState:
    """A small hand-built world.

    Stars ``s1 - s2 - s3 - s4`` form a chain and ``s5`` is isolated.  Each
    star has one Terran planet ``<star>_p``.  Player ``p1`` (human,
    humans) and ``p2`` (computer, solari) start with no colonies or
    fleets and an ``UNKNOWN`` relation.
    """
    state = WorldState(config=GameConfig(seed=42, player_count=2))
    state.rng = GameRNG(42)
    load_tech_tree(state, registry.technologies)
    for comp_id, comp in registry.components.items():
        state.components[comp_id] = comp.model_copy(deep=True)

    lanes = {"s1": ["s2"], "s2": ["s1", "s3"], "s3": ["s2", "s4"], "s4": ["s3"], "s5": []}
    for i, (sid, neighbours) in enumerate(lanes.items()):
        planet_id = f"{sid}_p"
        state.stars[sid] = Star(
            id=sid,
            name=f"Star {sid}",
            position=Vec3(x=i * 50.0),
            type=StarType.YELLOW,
            planet_ids=[planet_id],
            warp_lanes=list(neighbours),
        )
        state.planets[planet_id] = Planet(
            id=planet_id,
            star_id=sid,
            name=f"Star {sid} I",
            type=PlanetType.TERRAN,
            size=3,
            minerals=3,
            habitability=80,
        )

    state.players["p1"] = Player(id="p1", name="Terran Union", race_id="humans", credits=50)
    state.players["p2"] = Player(
        id="p2", name="Solari", race_id="solari", is_computer=True, credits=50,
    )
    init_all_relations(state)
    return state
