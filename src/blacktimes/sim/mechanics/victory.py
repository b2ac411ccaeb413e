"""Victory conditions, checked once per turn in priority order.

1. Conquest: exactly one living player remains.
2. Technological: a living player knows the top-level technology of
   every category in the catalog.
3. Diplomatic: every ``COUNCIL_VOTE_INTERVAL`` turns a galactic council
   votes; a candidate wins with at least ``COUNCIL_VOTE_THRESHOLD`` of
   the living players' votes (its own plus every player whose reputation
   toward it is at least ``COUNCIL_VOTE_REPUTATION``).
4. Score: from ``SCORE_VICTORY_TURN`` on, the highest score wins.
"""

from __future__ import annotations

import logging
import math

from blacktimes.sim.core.constants import (
    COUNCIL_VOTE_INTERVAL,
    COUNCIL_VOTE_REPUTATION,
    COUNCIL_VOTE_THRESHOLD,
    SCORE_VICTORY_TURN,
)
from blacktimes.sim.core.entities import Player
from blacktimes.sim.core.enums import VictoryType
from blacktimes.sim.core.game_state import VictoryRecord, WorldState

logger = logging.getLogger(__name__)


def calculate_score(state: WorldState, player: Player) -> int:
    colonies = state.player_colonies(player.id)
    score = len(colonies) * 100
    score += len(player.known_tech_ids) * 30
    score += len(player.fleet_ids) * 20
    score += math.floor(player.credits / 10)
    score += sum(math.floor(c.population * 10) for c in colonies)
    return score


def update_scores(state: WorldState) -> None:
    for player in state.players.values():
        player.score = calculate_score(state, player)


def top_tier_techs(state: WorldState) -> dict[str, set[str]]:
    """category -> ids of the highest-level techs in that category."""
    best_level: dict[str, int] = {}
    tops: dict[str, set[str]] = {}
    for tech in state.technologies.values():
        cat = tech.category.value
        level = best_level.get(cat, 0)
        if tech.level > level:
            best_level[cat] = tech.level
            tops[cat] = {tech.id}
        elif tech.level == level:
            tops[cat].add(tech.id)
    return tops


def _check_conquest(state: WorldState) -> str | None:
    alive = state.living_players()
    if len(alive) == 1:
        return alive[0].id
    return None


def _check_technological(state: WorldState) -> str | None:
    tops = top_tier_techs(state)
    if not tops:
        return None
    for player in state.living_players():
        known = set(player.known_tech_ids)
        if all(known & ids for ids in tops.values()):
            return player.id
    return None


def council_votes(state: WorldState, candidate_id: str) -> int:
    votes = 1
    for player in state.living_players():
        if player.id == candidate_id:
            continue
        rel = state.get_relation(player.id, candidate_id)
        if rel is not None and rel.reputation >= COUNCIL_VOTE_REPUTATION:
            votes += 1
    return votes


def _check_diplomatic(state: WorldState) -> str | None:
    if state.turn % COUNCIL_VOTE_INTERVAL != 0:
        return None
    alive = state.living_players()
    if not alive:
        return None
    for candidate in alive:
        if council_votes(state, candidate.id) / len(alive) >= COUNCIL_VOTE_THRESHOLD:
            return candidate.id
    return None


def _check_score(state: WorldState) -> str | None:
    if state.turn < SCORE_VICTORY_TURN:
        return None
    update_scores(state)
    alive = state.living_players()
    if not alive:
        return None
    return max(alive, key=lambda p: p.score).id


_CHECKS = (
    (VictoryType.CONQUEST, _check_conquest),
    (VictoryType.TECHNOLOGICAL, _check_technological),
    (VictoryType.DIPLOMATIC, _check_diplomatic),
    (VictoryType.SCORE, _check_score),
)


def check_victory(state: WorldState) -> VictoryRecord | None:
    """Record and return the first victory that applies, if any.

    An already recorded victory is returned unchanged.
    """
    if state.victory is not None:
        return state.victory
    for victory_type, check in _CHECKS:
        winner = check(state)
        if winner is not None:
            state.victory = VictoryRecord(
                winner_id=winner, victory_type=victory_type, turn=state.turn,
            )
            logger.info(
                "Player %s wins a %s victory on turn %d",
                winner, victory_type.value, state.turn,
            )
            return state.victory
    return None
