"""Base class for agents that run an empire's turn.

Subclasses implement the decision methods; :meth:`EmpireAgent.take_turn`
calls them in a fixed order during the planning phase so that every
agent consumes the shared RNG in the same sequence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from blacktimes.sim.mechanics.diplomacy import (
    accept_proposal,
    pending_proposals_for,
    reject_proposal,
)
from blacktimes.sim.mechanics.research import select_research

if TYPE_CHECKING:
    from blacktimes.sim.core.entities import Colony, Fleet, Player
    from blacktimes.sim.core.game_state import WorldState
    from blacktimes.sim.core.relations import Proposal


class EmpireAgent(ABC):
    """Base class for agents that play an empire."""

    def take_turn(self, state: WorldState, player: Player) -> None:
        """Make every decision for *player* for the coming turn."""
        if player.current_research_id is None:
            tech_id = self.choose_research(state, player)
            if tech_id is not None:
                select_research(state, player.id, tech_id)

        for colony in state.player_colonies(player.id):
            self.manage_colony(state, player, colony)

        for fleet in list(state.player_fleets(player.id)):
            if fleet.id in state.fleets:
                self.command_fleet(state, player, fleet)

        self.conduct_diplomacy(state, player)

    @abstractmethod
    def choose_research(self, state: WorldState, player: Player) -> str | None:
        """Pick the next research target.

        Returns
        -------
        str | None
            A technology id the player can research, or ``None`` to leave
            research idle.
        """

    @abstractmethod
    def manage_colony(self, state: WorldState, player: Player, colony: Colony) -> None:
        """Assign workers and fill the build queue of one colony."""

    @abstractmethod
    def command_fleet(self, state: WorldState, player: Player, fleet: Fleet) -> None:
        """Issue movement orders to one fleet."""

    @abstractmethod
    def respond_to_proposal(self, state: WorldState, player: Player, proposal: Proposal) -> bool | None:
        """Answer an incoming proposal.

        Returns
        -------
        bool | None
            ``True`` to accept, ``False`` to reject, ``None`` to leave it
            pending until it expires.
        """

    def conduct_diplomacy(self, state: WorldState, player: Player) -> None:
        """Answer incoming proposals.  Subclasses may add initiatives."""
        for proposal in pending_proposals_for(state, player.id):
            answer = self.respond_to_proposal(state, player, proposal)
            if answer is True:
                accept_proposal(state, proposal)
            elif answer is False:
                reject_proposal(state, proposal)
