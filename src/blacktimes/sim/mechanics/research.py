"""Research: technology eligibility, target selection and accrual.

A player's research pool accumulates colony research output while a
target is selected.  Completing a technology subtracts its cost and any
surplus carries over to the next target.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blacktimes.ir.technologies import Technology
from blacktimes.sim.core.entities import Player
from blacktimes.sim.core.game_state import WorldState

logger = logging.getLogger(__name__)


@dataclass
class ResearchProgress:
    current: float
    required: float
    tech_id: str | None


def load_tech_tree(state: WorldState, technologies: dict[str, Technology]) -> None:
    for tech_id, tech in technologies.items():
        state.technologies[tech_id] = tech.model_copy(deep=True)


def can_research(state: WorldState, player_id: str, tech_id: str) -> bool:
    """A tech is researchable once all prerequisites are known and it is not."""
    player = state.players.get(player_id)
    tech = state.technologies.get(tech_id)
    if player is None or tech is None:
        return False
    if player.knows(tech_id):
        return False
    return all(player.knows(p) for p in tech.prerequisite_ids)


def available_techs(state: WorldState, player_id: str) -> list[Technology]:
    if player_id not in state.players:
        return []
    return [t for t in state.technologies.values() if can_research(state, player_id, t.id)]


def select_research(state: WorldState, player_id: str, tech_id: str) -> bool:
    """Set the active research target.  The accumulated pool is kept."""
    if not can_research(state, player_id, tech_id):
        return False
    state.players[player_id].current_research_id = tech_id
    return True


def grant_technology(state: WorldState, player: Player, tech_id: str) -> bool:
    """Add a technology to the known set (used by trades and gifts)."""
    if tech_id not in state.technologies or player.knows(tech_id):
        return False
    player.known_tech_ids.append(tech_id)
    if player.current_research_id == tech_id:
        player.current_research_id = None
    return True


def process_research(state: WorldState, player: Player) -> str | None:
    """Accrue this turn's research; return the tech id completed, if any."""
    if player.current_research_id is None:
        return None
    tech = state.technologies.get(player.current_research_id)
    if tech is None:
        return None

    player.research_pool += sum(c.research_output for c in state.player_colonies(player.id))
    if player.research_pool < tech.research_cost:
        return None

    player.research_pool -= tech.research_cost
    player.known_tech_ids.append(tech.id)
    player.current_research_id = None
    logger.debug("Player %s completed %s", player.id, tech.id)
    return tech.id


def research_progress(state: WorldState, player_id: str) -> ResearchProgress:
    player = state.players.get(player_id)
    if player is None or player.current_research_id is None:
        return ResearchProgress(current=0.0, required=0.0, tech_id=None)
    tech = state.technologies.get(player.current_research_id)
    return ResearchProgress(
        current=player.research_pool,
        required=float(tech.research_cost) if tech is not None else 0.0,
        tech_id=player.current_research_id,
    )
