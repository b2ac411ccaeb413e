"""Fleet movement and pathfinding over the warp-lane graph.

Paths are shortest by hop count (breadth-first search), not by distance.
Among equally short routes the one found first wins, which depends on
the order lanes were added to each star.
"""

from __future__ import annotations

import logging
from collections import deque

from blacktimes.sim.core.constants import BASE_FLEET_SPEED
from blacktimes.sim.core.entities import Fleet
from blacktimes.sim.core.game_state import WorldState
from blacktimes.sim.galaxy.fog_of_war import reveal_star

logger = logging.getLogger(__name__)


def find_path(state: WorldState, from_id: str, to_id: str) -> list[str] | None:
    """Shortest-hop path from *from_id* to *to_id*.

    The returned list excludes the start and ends with the target.  It is
    empty when both ids are the same star, and ``None`` when the target
    is unreachable or either star is unknown.
    """
    if from_id not in state.stars or to_id not in state.stars:
        return None
    if from_id == to_id:
        return []

    previous: dict[str, str | None] = {from_id: None}
    queue: deque[str] = deque([from_id])
    while queue:
        current = queue.popleft()
        if current == to_id:
            break
        for neighbor in state.stars[current].warp_lanes:
            if neighbor not in previous:
                previous[neighbor] = current
                queue.append(neighbor)

    if to_id not in previous:
        return None

    path: list[str] = []
    node: str | None = to_id
    while node is not None and node != from_id:
        path.append(node)
        node = previous[node]
    path.reverse()
    return path


def reachable_stars(state: WorldState, star_id: str) -> list[str]:
    """Stars one warp jump away from *star_id*."""
    star = state.stars.get(star_id)
    return list(star.warp_lanes) if star is not None else []


def fleet_speed(state: WorldState, fleet: Fleet) -> float:
    """Speed of the slowest ship in the fleet (base speed when empty)."""
    speeds: list[float] = []
    for sid in fleet.ship_ids:
        ship = state.ships.get(sid)
        design = state.design_of(ship) if ship is not None else None
        speeds.append(design.speed if design is not None and design.speed else BASE_FLEET_SPEED)
    return min(speeds) if speeds else BASE_FLEET_SPEED


def recompute_fleet_speed(state: WorldState, fleet: Fleet) -> None:
    fleet.speed = fleet_speed(state, fleet)


def set_destination(state: WorldState, fleet_id: str, target_star_id: str) -> bool:
    """Order a fleet towards *target_star_id*.

    Fails on an unknown fleet, a target equal to the current star, or an
    unreachable target.  On success the full path is stored, the next
    hop becomes the destination and progress restarts at zero.
    """
    fleet = state.fleets.get(fleet_id)
    if fleet is None:
        return False
    path = find_path(state, fleet.star_id, target_star_id)
    if not path:
        return False
    fleet.path = path
    fleet.destination_id = path[0]
    fleet.movement_progress = 0.0
    return True


def cancel_movement(state: WorldState, fleet_id: str) -> bool:
    fleet = state.fleets.get(fleet_id)
    if fleet is None or not fleet.is_moving:
        return False
    fleet.destination_id = None
    fleet.path = []
    fleet.movement_progress = 0.0
    return True


def process_fleet(state: WorldState, fleet: Fleet) -> bool:
    """Advance one fleet by one turn.  Returns ``True`` if it arrived at a star."""
    if fleet.destination_id is None:
        return False

    fleet.movement_progress += fleet.speed
    if fleet.movement_progress < 1.0:
        return False

    fleet.star_id = fleet.destination_id
    fleet.movement_progress = 0.0
    reveal_star(state, fleet.player_id, fleet.star_id)

    if fleet.path and fleet.path[0] == fleet.star_id:
        fleet.path.pop(0)
    if fleet.path:
        fleet.destination_id = fleet.path[0]
    else:
        fleet.destination_id = None
    return True


def process_fleets(state: WorldState) -> list[Fleet]:
    """Advance every moving fleet; return the fleets that reached a star."""
    arrived: list[Fleet] = []
    for fleet in list(state.fleets.values()):
        if process_fleet(state, fleet):
            arrived.append(fleet)
    return arrived


# ---------------------------------------------------------------------------
# Fleet membership
# ---------------------------------------------------------------------------

def merge_fleets(state: WorldState, target_id: str, source_id: str) -> bool:
    """Move every ship of *source_id* into *target_id* and delete the source.

    Both fleets must belong to the same player and sit at the same star.
    """
    target = state.fleets.get(target_id)
    source = state.fleets.get(source_id)
    if target is None or source is None or target_id == source_id:
        return False
    if target.player_id != source.player_id or target.star_id != source.star_id:
        return False

    for sid in source.ship_ids:
        target.ship_ids.append(sid)
        ship = state.ships.get(sid)
        if ship is not None:
            ship.fleet_id = target.id
    source.ship_ids = []
    remove_fleet(state, source.id)
    recompute_fleet_speed(state, target)
    return True


def split_fleet(state: WorldState, fleet_id: str, ship_ids: list[str]) -> Fleet | None:
    """Detach *ship_ids* into a new stationary fleet at the same star.

    The ids must be a non-empty proper subset of the fleet's ships.
    """
    fleet = state.fleets.get(fleet_id)
    if fleet is None or not ship_ids:
        return None
    moving = set(ship_ids)
    if not moving.issubset(fleet.ship_ids) or len(moving) >= len(fleet.ship_ids):
        return None

    new_fleet = create_fleet(state, fleet.player_id, fleet.star_id)
    fleet.ship_ids = [sid for sid in fleet.ship_ids if sid not in moving]
    for sid in ship_ids:
        if sid in new_fleet.ship_ids:
            continue
        new_fleet.ship_ids.append(sid)
        state.ships[sid].fleet_id = new_fleet.id
    recompute_fleet_speed(state, fleet)
    recompute_fleet_speed(state, new_fleet)
    return new_fleet


def create_fleet(state: WorldState, player_id: str, star_id: str) -> Fleet:
    """Create an empty fleet named ``Fleet N`` for the player."""
    existing = sum(1 for f in state.fleets.values() if f.player_id == player_id)
    fleet = Fleet(
        id=state.new_id("fleet"),
        player_id=player_id,
        name=f"Fleet {existing + 1}",
        star_id=star_id,
    )
    state.fleets[fleet.id] = fleet
    player = state.players.get(player_id)
    if player is not None:
        player.fleet_ids.append(fleet.id)
    return fleet


def remove_fleet(state: WorldState, fleet_id: str) -> None:
    """Delete a fleet and drop it from its owner's fleet list."""
    fleet = state.fleets.pop(fleet_id, None)
    if fleet is None:
        return
    player = state.players.get(fleet.player_id)
    if player is not None and fleet_id in player.fleet_ids:
        player.fleet_ids.remove(fleet_id)
    logger.debug("Removed fleet %s of %s", fleet_id, fleet.player_id)
