"""The turn pipeline.

A turn runs eight phases in a fixed order:

    AI_PLANNING -> FLEET_MOVEMENT -> COMBAT -> COLONIES -> ECONOMY
    -> RESEARCH -> DIPLOMACY -> VICTORY_CHECK

Each phase emits a :class:`PhaseStarted` event before doing its work;
domain events are emitted as the state changes happen.  After the last
phase the turn counter advances and :class:`TurnCompleted` is emitted.
Players are always visited in their insertion order so the shared RNG
is consumed in the same sequence on every replay.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from blacktimes.sim.core.enums import TurnPhase
from blacktimes.sim.events import (
    BuildCompleted,
    CombatEnded,
    EventLog,
    FirstContact,
    FleetArrived,
    GameEvent,
    PhaseStarted,
    ResearchCompleted,
    TurnCompleted,
    VictoryAchieved,
)
from blacktimes.sim.mechanics import diplomacy
from blacktimes.sim.mechanics.colony import process_colony
from blacktimes.sim.mechanics.combat import auto_resolve, detect_combats
from blacktimes.sim.mechanics.economy import process_player_economy
from blacktimes.sim.mechanics.movement import process_fleets
from blacktimes.sim.mechanics.research import process_research
from blacktimes.sim.mechanics.victory import check_victory

if TYPE_CHECKING:
    from blacktimes.sim.core.game_state import WorldState
    from blacktimes.sim.play_agents.base import EmpireAgent

logger = logging.getLogger(__name__)


class TurnPipeline:
    """Runs whole turns against a world.

    Parameters
    ----------
    agents:
        player id -> agent that plans that player's turn.  Players with no
        agent (the human seat in an interactive session) plan through
        session commands instead.
    """

    def __init__(self, agents: dict[str, EmpireAgent] | None = None) -> None:
        self.agents: dict[str, EmpireAgent] = dict(agents or {})
        self._phases: list[tuple[TurnPhase, Callable[[WorldState, EventLog], None]]] = [
            (TurnPhase.AI_PLANNING, self._ai_planning),
            (TurnPhase.FLEET_MOVEMENT, self._fleet_movement),
            (TurnPhase.COMBAT, self._combat),
            (TurnPhase.COLONIES, self._colonies),
            (TurnPhase.ECONOMY, self._economy),
            (TurnPhase.RESEARCH, self._research),
            (TurnPhase.DIPLOMACY, self._diplomacy),
            (TurnPhase.VICTORY_CHECK, self._victory_check),
        ]

    def run_turn(self, state: WorldState, log: EventLog) -> list[GameEvent]:
        """Run one turn and return the events it produced.

        Returns an empty list without touching the state once a victory
        has been recorded.
        """
        if state.game_over:
            return []
        start = len(log)
        for phase, handler in self._phases:
            log.emit(PhaseStarted(turn=state.turn, phase=phase))
            handler(state, log)
        state.turn += 1
        log.emit(TurnCompleted(turn=state.turn))
        logger.debug("Turn %d complete, %d events", state.turn - 1, len(log) - start)
        return log.since(start)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _ai_planning(self, state: WorldState, log: EventLog) -> None:
        for player in list(state.players.values()):
            agent = self.agents.get(player.id)
            if agent is None or not player.alive:
                continue
            state.current_player_id = player.id
            agent.take_turn(state, player)
        state.current_player_id = None

    def _fleet_movement(self, state: WorldState, log: EventLog) -> None:
        for fleet in process_fleets(state):
            log.emit(FleetArrived(
                turn=state.turn, fleet_id=fleet.id,
                player_id=fleet.player_id, star_id=fleet.star_id,
            ))

    def _combat(self, state: WorldState, log: EventLog) -> None:
        for pending in detect_combats(state):
            result = auto_resolve(state, pending.fleet1_id, pending.fleet2_id)
            if result is None:
                continue
            log.emit(CombatEnded(
                turn=state.turn, star_id=result.star_id,
                winner_id=result.winner_id, loser_id=result.loser_id,
            ))

    def _colonies(self, state: WorldState, log: EventLog) -> None:
        for colony in list(state.colonies.values()):
            completed = process_colony(state, colony)
            if completed is not None:
                log.emit(BuildCompleted(
                    turn=state.turn, colony_id=colony.id,
                    player_id=colony.player_id, item_name=completed,
                ))

    def _economy(self, state: WorldState, log: EventLog) -> None:
        for player in state.living_players():
            process_player_economy(state, player)

    def _research(self, state: WorldState, log: EventLog) -> None:
        for player in state.living_players():
            tech_id = process_research(state, player)
            if tech_id is not None:
                log.emit(ResearchCompleted(turn=state.turn, player_id=player.id, tech_id=tech_id))

    def _diplomacy(self, state: WorldState, log: EventLog) -> None:
        for a, b in diplomacy.process_turn(state):
            log.emit(FirstContact(turn=state.turn, player1_id=a, player2_id=b))

    def _victory_check(self, state: WorldState, log: EventLog) -> None:
        record = check_victory(state)
        if record is not None:
            log.emit(VictoryAchieved(
                turn=state.turn, winner_id=record.winner_id,
                victory_type=record.victory_type,
            ))
