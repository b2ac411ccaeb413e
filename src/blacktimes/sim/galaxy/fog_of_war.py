"""Per-player exploration state on stars."""

from __future__ import annotations

from blacktimes.sim.core.constants import FOG_OF_WAR_REVEAL_HOPS
from blacktimes.sim.core.game_state import WorldState


def initialize_for_player(
    state: WorldState,
    player_id: str,
    home_star_id: str,
    hops: int = FOG_OF_WAR_REVEAL_HOPS,
) -> None:
    """Reveal the home star and everything within *hops* warp lanes."""
    home = state.stars.get(home_star_id)
    if home is None:
        return
    frontier = [home_star_id]
    seen = {home_star_id}
    home.explored[player_id] = True
    for _ in range(hops):
        next_frontier: list[str] = []
        for star_id in frontier:
            for neighbor_id in state.stars[star_id].warp_lanes:
                if neighbor_id in seen or neighbor_id not in state.stars:
                    continue
                seen.add(neighbor_id)
                state.stars[neighbor_id].explored[player_id] = True
                next_frontier.append(neighbor_id)
        frontier = next_frontier


def reveal_star(state: WorldState, player_id: str, star_id: str) -> list[str]:
    """Reveal a star and its direct neighbours.

    Returns the ids that were newly revealed.
    """
    star = state.stars.get(star_id)
    if star is None:
        return []
    revealed: list[str] = []
    for sid in [star_id, *star.warp_lanes]:
        target = state.stars.get(sid)
        if target is not None and not target.is_explored_by(player_id):
            target.explored[player_id] = True
            revealed.append(sid)
    return revealed


def explored_star_ids(state: WorldState, player_id: str) -> set[str]:
    return {s.id for s in state.stars.values() if s.is_explored_by(player_id)}


def is_lane_visible(state: WorldState, player_id: str, star_a: str, star_b: str) -> bool:
    """A lane is drawn for a player once both of its ends are explored."""
    a = state.stars.get(star_a)
    b = state.stars.get(star_b)
    if a is None or b is None:
        return False
    return a.is_explored_by(player_id) and b.is_explored_by(player_id)
