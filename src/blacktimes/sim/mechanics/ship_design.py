"""Ship design and ship construction.

A design's stats are derived from its components: attack is the sum of
weapon damage, defense is shield plus armor, hit points come from the
hull, and speed and initiative come from the engine.
"""

from __future__ import annotations

import logging

from blacktimes.ir.components import HULL_SIZES, ComponentType, HullSize, ShipComponent
from blacktimes.sim.core.entities import Ship, ShipDesign
from blacktimes.sim.core.game_state import WorldState
from blacktimes.sim.mechanics.movement import create_fleet, recompute_fleet_speed

logger = logging.getLogger(__name__)

DEFAULT_ENGINE_SPEED = 1.0


def is_component_unlocked(state: WorldState, player_id: str, component: ShipComponent) -> bool:
    """Tech-level 0 parts are always available; others need an unlocking tech."""
    if component.tech_level == 0:
        return True
    player = state.players.get(player_id)
    if player is None:
        return False
    for tech_id in player.known_tech_ids:
        tech = state.technologies.get(tech_id)
        if tech is not None and component.id in tech.unlocks:
            return True
    return False


def available_components(
    state: WorldState,
    player_id: str,
    comp_type: ComponentType | None = None,
) -> list[ShipComponent]:
    if player_id not in state.players:
        return []
    return [
        c for c in state.components.values()
        if (comp_type is None or c.type == comp_type)
        and is_component_unlocked(state, player_id, c)
    ]


def create_design(
    state: WorldState,
    player_id: str,
    name: str,
    hull_size: HullSize,
    weapon_ids: list[str],
    shield_id: str | None = None,
    armor_id: str | None = None,
    engine_id: str | None = None,
    computer_id: str | None = None,
    special_ids: list[str] | None = None,
    require_unlocked: bool = False,
) -> ShipDesign | None:
    """Build and register a design, or return ``None`` if it is invalid.

    A design is invalid when it references an unknown component, a
    component of the wrong type in a slot, or uses more space than the
    hull holds.  With ``require_unlocked`` every component must also be
    available to the player.
    """
    try:
        hull = HULL_SIZES.get(HullSize(hull_size))
    except ValueError:
        return None
    if hull is None:
        return None
    special_ids = list(special_ids or [])

    slots: list[tuple[str, ComponentType]] = [(w, ComponentType.WEAPON) for w in weapon_ids]
    for comp_id, comp_type in (
        (shield_id, ComponentType.SHIELD),
        (armor_id, ComponentType.ARMOR),
        (engine_id, ComponentType.ENGINE),
        (computer_id, ComponentType.COMPUTER),
    ):
        if comp_id is not None:
            slots.append((comp_id, comp_type))
    slots.extend((s, ComponentType.SPECIAL) for s in special_ids)

    used_space = 0
    cost = hull.cost
    attack = 0.0
    defense = 0.0
    speed = DEFAULT_ENGINE_SPEED
    initiative = 0.0

    for comp_id, expected in slots:
        comp = state.components.get(comp_id)
        if comp is None or comp.type != expected:
            return None
        if require_unlocked and not is_component_unlocked(state, player_id, comp):
            return None
        used_space += comp.space
        cost += comp.cost
        if comp.type == ComponentType.WEAPON:
            attack += comp.stat("damage")
        elif comp.type == ComponentType.SHIELD:
            defense += comp.stat("shield_hp")
        elif comp.type == ComponentType.ARMOR:
            defense += comp.stat("armor_hp")
        elif comp.type == ComponentType.ENGINE:
            speed = comp.stat("speed") or DEFAULT_ENGINE_SPEED
            initiative = comp.stat("initiative")

    if used_space > hull.space:
        return None

    design = ShipDesign(
        id=state.new_id("design"),
        player_id=player_id,
        name=name,
        hull_size=hull_size,
        weapon_ids=list(weapon_ids),
        shield_id=shield_id,
        armor_id=armor_id,
        engine_id=engine_id,
        computer_id=computer_id,
        special_ids=special_ids,
        total_space=hull.space,
        used_space=used_space,
        cost=cost,
        attack=attack,
        defense=defense,
        hp=hull.hp,
        speed=speed,
        initiative=initiative,
    )
    state.ship_designs[design.id] = design
    return design


def create_default_designs(state: WorldState, player_id: str) -> list[ShipDesign]:
    """Give a player the starting Scout, Fighter and Colony Ship designs."""
    designs = [
        create_design(
            state, player_id, "Scout", HullSize.FIGHTER,
            ["comp_weapon_laser"], engine_id="comp_engine_1",
        ),
        create_design(
            state, player_id, "Fighter", HullSize.FIGHTER,
            ["comp_weapon_laser", "comp_weapon_laser"],
            armor_id="comp_armor_titanium", engine_id="comp_engine_1",
        ),
        create_design(
            state, player_id, "Colony Ship", HullSize.DESTROYER,
            [], engine_id="comp_engine_1",
        ),
    ]
    return [d for d in designs if d is not None]


def find_design(state: WorldState, player_id: str, name: str) -> ShipDesign | None:
    for design in state.ship_designs.values():
        if design.player_id == player_id and design.name == name:
            return design
    return None


def spawn_ship(state: WorldState, design_id: str, player_id: str, star_id: str) -> Ship | None:
    """Create a ship and add it to a stationary fleet of its owner at *star_id*.

    A new fleet is created when the player has none idle there.
    """
    design = state.ship_designs.get(design_id)
    if design is None or star_id not in state.stars:
        return None

    ship = Ship(
        id=state.new_id("ship"),
        design_id=design_id,
        player_id=player_id,
        current_hp=design.hp,
    )
    state.ships[ship.id] = ship

    fleet = next(
        (
            f for f in state.fleets.values()
            if f.player_id == player_id and f.star_id == star_id and not f.is_moving
        ),
        None,
    )
    if fleet is None:
        fleet = create_fleet(state, player_id, star_id)

    fleet.ship_ids.append(ship.id)
    ship.fleet_id = fleet.id
    recompute_fleet_speed(state, fleet)
    return ship


def build_ship(state: WorldState, design_id: str, colony_id: str) -> Ship | None:
    """Deliver a finished ship at the colony's star."""
    colony = state.colonies.get(colony_id)
    if colony is None:
        return None
    planet = state.planets.get(colony.planet_id)
    if planet is None:
        return None
    ship = spawn_ship(state, design_id, colony.player_id, planet.star_id)
    if ship is not None:
        logger.debug("Colony %s launched ship %s", colony.name, ship.id)
    return ship
