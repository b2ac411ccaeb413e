"""Colony founding, per-turn output, growth and the build queue.

Outputs are recomputed from scratch by :func:`calculate_outputs`:

    food       = farmers    * 2 * (0.5 + habitability / 100)
    production = workers    * 1 * minerals / 3
    research   = scientists * 1
    credits    = 5 + population * 0.5

Food, production and research are then scaled by ``morale / 50``,
building effects are applied in build order, and special resources
apply last.
"""

from __future__ import annotations

import logging
import math

from blacktimes.ir.buildings import EffectMode, EffectTarget, get_building
from blacktimes.sim.core.constants import (
    BASE_COLONY_INCOME,
    BASE_FOOD_PER_FARMER,
    BASE_POPULATION_GROWTH,
    BASE_PRODUCTION_PER_WORKER,
    BASE_RESEARCH_PER_SCIENTIST,
    CREDITS_PER_POP,
    MAX_POPULATION_BASE,
    MIN_MAX_POPULATION,
    MORALE_MAX,
    MORALE_MIN,
    MORALE_NEUTRAL,
    RUSH_COST_PER_PRODUCTION,
    STARTING_POPULATION,
    STARVATION_MORALE_PENALTY,
)
from blacktimes.sim.core.entities import BuildQueueItem, Colony, Planet
from blacktimes.sim.core.enums import BuildItemKind, SpecialResource
from blacktimes.sim.core.game_state import WorldState
from blacktimes.sim.mechanics.ship_design import build_ship

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Founding
# ---------------------------------------------------------------------------

def max_population_for(planet: Planet) -> int:
    raw = math.floor(MAX_POPULATION_BASE * (planet.size / 3) * (planet.habitability / 100 + 0.2))
    return max(raw, MIN_MAX_POPULATION)


def found_colony(state: WorldState, planet_id: str, player_id: str, name: str) -> Colony | None:
    """Create a colony on *planet_id* for *player_id*.

    Returns ``None`` only when the planet does not exist.  The star is
    claimed for the player if nobody owned it yet.
    """
    planet = state.planets.get(planet_id)
    if planet is None:
        return None

    colony = Colony(
        id=state.new_id("colony"),
        planet_id=planet_id,
        player_id=player_id,
        name=name,
        population=STARTING_POPULATION,
        max_population=max_population_for(planet),
        farmers=1,
        workers=1,
        scientists=0,
        morale=MORALE_NEUTRAL,
    )
    state.colonies[colony.id] = colony
    planet.colony_id = colony.id

    player = state.players.get(player_id)
    if player is not None:
        player.colony_ids.append(colony.id)

    star = state.stars.get(planet.star_id)
    if star is not None and star.owner_id is None:
        star.owner_id = player_id

    calculate_outputs(state, colony)
    logger.debug("Founded colony %s on %s for %s", name, planet.name, player_id)
    return colony


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

def apply_building_effects(
    values: dict[EffectTarget, float],
    buildings: list[str],
) -> dict[EffectTarget, float]:
    """Apply every building's effect descriptors to *values* in place.

    Buildings are applied in the order they were completed; unknown ids
    are ignored.
    """
    for building_id in buildings:
        definition = get_building(building_id)
        if definition is None:
            continue
        for effect in definition.effects:
            if effect.target not in values:
                continue
            if effect.mode == EffectMode.ADD:
                values[effect.target] += effect.value
            else:
                values[effect.target] *= effect.value
    return values


def calculate_outputs(state: WorldState, colony: Colony) -> None:
    """Recompute the four output fields of *colony*.  Idempotent."""
    planet = state.planets.get(colony.planet_id)
    if planet is None:
        return

    morale_mod = colony.morale / MORALE_NEUTRAL
    values = {
        EffectTarget.FOOD: colony.farmers * BASE_FOOD_PER_FARMER
        * (0.5 + planet.habitability / 100) * morale_mod,
        EffectTarget.PRODUCTION: colony.workers * BASE_PRODUCTION_PER_WORKER
        * (planet.minerals / 3) * morale_mod,
        EffectTarget.RESEARCH: colony.scientists * BASE_RESEARCH_PER_SCIENTIST * morale_mod,
        EffectTarget.CREDITS: BASE_COLONY_INCOME + colony.population * CREDITS_PER_POP,
    }
    apply_building_effects(values, colony.buildings)

    if planet.special_resource == SpecialResource.GOLD_DEPOSITS:
        values[EffectTarget.CREDITS] *= 1.5
    elif planet.special_resource == SpecialResource.GEM_DEPOSITS:
        values[EffectTarget.CREDITS] *= 2
    elif planet.special_resource == SpecialResource.ANCIENT_ARTIFACTS:
        values[EffectTarget.RESEARCH] += 3

    colony.food_output = values[EffectTarget.FOOD]
    colony.production_output = values[EffectTarget.PRODUCTION]
    colony.research_output = values[EffectTarget.RESEARCH]
    colony.credits_output = values[EffectTarget.CREDITS]


def growth_multiplier(colony: Colony) -> float:
    values = {EffectTarget.GROWTH: 1.0}
    apply_building_effects(values, colony.buildings)
    return values[EffectTarget.GROWTH]


# ---------------------------------------------------------------------------
# Workers
# ---------------------------------------------------------------------------

def rebalance_workers(colony: Colony) -> None:
    """Make the job counts add up to ``floor(population)`` again.

    Extra hands become workers.  Lost hands are taken from workers
    first, then scientists, then farmers.
    """
    diff = colony.workforce - colony.assigned
    if diff > 0:
        colony.workers += diff
        return
    deficit = -diff
    for attr in ("workers", "scientists", "farmers"):
        if deficit <= 0:
            break
        take = min(getattr(colony, attr), deficit)
        setattr(colony, attr, getattr(colony, attr) - take)
        deficit -= take


def set_workers(colony: Colony, farmers: int, workers: int, scientists: int) -> bool:
    """Reassign jobs.  Unassigned population becomes workers.

    Rejects negative counts or a split larger than ``floor(population)``.
    """
    if min(farmers, workers, scientists) < 0:
        return False
    total = colony.workforce
    if farmers + workers + scientists > total:
        return False
    colony.farmers = farmers
    colony.scientists = scientists
    colony.workers = total - farmers - scientists
    return True


# ---------------------------------------------------------------------------
# Build queue
# ---------------------------------------------------------------------------

def can_build(state: WorldState, colony: Colony, building_id: str) -> bool:
    """Whether *building_id* may be queued at *colony* right now."""
    definition = get_building(building_id)
    if definition is None:
        return False
    if definition.unique:
        if building_id in colony.buildings:
            return False
        if any(item.reference_id == building_id for item in colony.build_queue):
            return False
    if definition.required_tech is not None:
        player = state.players.get(colony.player_id)
        if player is None or not player.knows(definition.required_tech):
            return False
    return True


def enqueue_building(state: WorldState, colony_id: str, building_id: str) -> BuildQueueItem | None:
    colony = state.colonies.get(colony_id)
    if colony is None or not can_build(state, colony, building_id):
        return None
    definition = get_building(building_id)
    item = BuildQueueItem(
        id=state.new_id("build"),
        name=definition.name,
        kind=BuildItemKind.BUILDING,
        reference_id=definition.kind.value,
        cost=definition.cost,
    )
    colony.build_queue.append(item)
    return item


def enqueue_ship(state: WorldState, colony_id: str, design_id: str) -> BuildQueueItem | None:
    colony = state.colonies.get(colony_id)
    design = state.ship_designs.get(design_id)
    if colony is None or design is None or design.player_id != colony.player_id:
        return None
    item = BuildQueueItem(
        id=state.new_id("build"),
        name=design.name,
        kind=BuildItemKind.SHIP,
        reference_id=design.id,
        cost=design.cost,
    )
    colony.build_queue.append(item)
    return item


def remove_from_build_queue(colony: Colony, index: int) -> bool:
    if not 0 <= index < len(colony.build_queue):
        return False
    colony.build_queue.pop(index)
    return True


def rush_build(state: WorldState, colony_id: str, index: int = 0) -> bool:
    """Pay credits to finish a queued item's remaining production.

    Costs two credits per missing production point, rounded up.  The item
    completes on the next colony update.
    """
    colony = state.colonies.get(colony_id)
    if colony is None or not 0 <= index < len(colony.build_queue):
        return False
    player = state.players.get(colony.player_id)
    if player is None:
        return False
    item = colony.build_queue[index]
    cost = math.ceil(max(0.0, item.cost - item.progress) * RUSH_COST_PER_PRODUCTION)
    if player.credits < cost:
        return False
    player.credits -= cost
    item.progress = item.cost
    return True


def _complete_item(state: WorldState, colony: Colony, item: BuildQueueItem) -> None:
    if item.kind == BuildItemKind.BUILDING:
        if item.reference_id not in colony.buildings:
            colony.buildings.append(item.reference_id)
    else:
        build_ship(state, item.reference_id, colony.id)


# ---------------------------------------------------------------------------
# Per-turn processing
# ---------------------------------------------------------------------------

def process_colony(state: WorldState, colony: Colony) -> str | None:
    """Run one turn of growth, morale and construction for *colony*.

    Returns the name of the build item completed this turn, if any.
    """
    calculate_outputs(state, colony)

    surplus = colony.food_output - colony.population
    if surplus > 0 and colony.population < colony.max_population:
        rate = BASE_POPULATION_GROWTH * (1 + surplus / 10) * growth_multiplier(colony)
        colony.population = min(colony.population + rate, colony.max_population)
    elif surplus < -1:
        colony.morale = max(MORALE_MIN, colony.morale - STARVATION_MORALE_PENALTY)
        if surplus < -3:
            colony.population = max(1.0, colony.population - 0.1)

    if colony.morale < MORALE_NEUTRAL:
        colony.morale = min(colony.morale + 1, MORALE_NEUTRAL)
    elif colony.morale > MORALE_NEUTRAL:
        colony.morale = max(colony.morale - 1, MORALE_NEUTRAL)
    colony.morale = min(colony.morale, MORALE_MAX)

    rebalance_workers(colony)

    if not colony.build_queue:
        return None
    # Only the head of the queue accrues production.
    item = colony.build_queue[0]
    item.progress += colony.production_output
    if item.progress < item.cost:
        return None
    _complete_item(state, colony, item)
    colony.build_queue.pop(0)
    logger.debug("Colony %s completed %s", colony.name, item.name)
    return item.name
