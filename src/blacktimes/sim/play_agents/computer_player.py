"""Personality-driven computer player.

The ``ComputerPlayer`` reads its behaviour from the race's
:class:`~blacktimes.ir.personalities.Personality`:

- **Research**: ranks available techs with :func:`score_tech` and picks
  uniformly among the top three.
- **Colonies**: fixed worker split (30% farmers, technophilia-scaled
  scientists) and a building priority list for empty queues; aggressive
  empires fall back to warships.
- **Fleets**: idle fleets of three or more ships raid foreign stars when
  the empire is aggressive.
- **Diplomacy**: accepts proposals by chance, weighted by openness and
  reputation; hawks may start wars and open empires sue for peace.

All random decisions go through the session RNG so runs replay exactly.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from blacktimes.ir.personalities import Personality, personality_for_race
from blacktimes.sim.core.enums import DiplomacyStatus
from blacktimes.sim.mechanics.colony import can_build, enqueue_building, enqueue_ship, set_workers
from blacktimes.sim.mechanics.diplomacy import declare_war, propose_peace
from blacktimes.sim.mechanics.movement import set_destination
from blacktimes.sim.mechanics.research import available_techs
from blacktimes.sim.mechanics.ship_design import find_design
from blacktimes.sim.play_agents.base import EmpireAgent
from blacktimes.sim.play_agents.evaluator import rank_techs

if TYPE_CHECKING:
    from blacktimes.sim.core.entities import Colony, Fleet, Player
    from blacktimes.sim.core.game_state import WorldState
    from blacktimes.sim.core.relations import Proposal

logger = logging.getLogger(__name__)

RESEARCH_SHORTLIST = 3
FARMER_SHARE = 0.3
SCIENTIST_SHARE = 0.3
RAID_FLEET_MIN_SHIPS = 3
RAID_AGGRESSIVENESS = 0.5
WARSHIP_AGGRESSIVENESS = 0.5
WARMONGER_THRESHOLD = 0.8
WAR_CHANCE_SCALE = 0.05
PEACE_OPENNESS = 0.5
PEACE_CHANCE_SCALE = 0.1
MIN_ACCEPT_CHANCE = 0.1
WARSHIP_DESIGN = "Fighter"


class ComputerPlayer(EmpireAgent):
    """Rule-based empire controller parameterised by a personality.

    Parameters
    ----------
    personality:
        Fixed profile.  When ``None`` the profile is looked up from the
        player's race on every call.
    """

    def __init__(self, personality: Personality | None = None) -> None:
        self._personality = personality

    def personality(self, player: Player) -> Personality:
        if self._personality is not None:
            return self._personality
        return personality_for_race(player.race_id)

    # ------------------------------------------------------------------
    # Research
    # ------------------------------------------------------------------

    def choose_research(self, state: WorldState, player: Player) -> str | None:
        ranked = rank_techs(available_techs(state, player.id), self.personality(player))
        if not ranked:
            return None
        top = min(RESEARCH_SHORTLIST - 1, len(ranked) - 1)
        return ranked[state.rng.random_int(0, top)].id

    # ------------------------------------------------------------------
    # Colonies
    # ------------------------------------------------------------------

    def manage_colony(self, state: WorldState, player: Player, colony: Colony) -> None:
        personality = self.personality(player)
        self._assign_workers(colony, personality)
        if not colony.build_queue:
            self._fill_queue(state, player, colony, personality)

    @staticmethod
    def _assign_workers(colony: Colony, personality: Personality) -> None:
        pop = colony.workforce
        farmers = min(max(1, math.ceil(pop * FARMER_SHARE)), pop)
        scientists = min(math.floor(pop * personality.technophilia * SCIENTIST_SHARE), pop - farmers)
        set_workers(colony, farmers, pop - farmers - scientists, scientists)

    @staticmethod
    def build_priorities(colony: Colony, personality: Personality) -> list[str]:
        """Buildings worth queuing at *colony*, most wanted first."""
        wanted = ["factory"]
        if colony.population > 3:
            wanted.append("farm")
        if personality.technophilia > 0.5:
            wanted.append("lab")
        wanted.append("market")
        if "factory" in colony.buildings:
            wanted.append("automated_factory")
        return wanted

    def _fill_queue(
        self,
        state: WorldState,
        player: Player,
        colony: Colony,
        personality: Personality,
    ) -> None:
        for building_id in self.build_priorities(colony, personality):
            if can_build(state, colony, building_id):
                enqueue_building(state, colony.id, building_id)
                return
        if personality.aggressiveness > WARSHIP_AGGRESSIVENESS:
            design = find_design(state, player.id, WARSHIP_DESIGN)
            if design is not None:
                enqueue_ship(state, colony.id, design.id)

    # ------------------------------------------------------------------
    # Fleets
    # ------------------------------------------------------------------

    def command_fleet(self, state: WorldState, player: Player, fleet: Fleet) -> None:
        personality = self.personality(player)
        if fleet.is_moving or len(fleet.ship_ids) < RAID_FLEET_MIN_SHIPS:
            return
        if personality.aggressiveness <= RAID_AGGRESSIVENESS:
            return

        targets = [
            s.id for s in state.stars.values()
            if s.owner_id is not None and s.owner_id != player.id
        ]
        if not targets:
            return
        pick = state.rng.random_choice(targets)

        here = state.stars.get(fleet.star_id)
        adjacent = [
            sid for sid in (here.warp_lanes if here is not None else [])
            if sid in state.stars
            and state.stars[sid].owner_id is not None
            and state.stars[sid].owner_id != player.id
        ]
        target = adjacent[0] if adjacent else pick
        if set_destination(state, fleet.id, target):
            logger.debug("%s sends %s toward %s", player.name, fleet.name, target)

    # ------------------------------------------------------------------
    # Diplomacy
    # ------------------------------------------------------------------

    def respond_to_proposal(self, state: WorldState, player: Player, proposal: Proposal) -> bool | None:
        rel = state.get_relation(proposal.from_player_id, proposal.to_player_id)
        reputation = rel.reputation if rel is not None else 0
        openness = self.personality(player).diplomacy_openness
        chance = max(MIN_ACCEPT_CHANCE, (openness + reputation / 100) / 2)
        if state.rng.chance(chance):
            return True
        return None

    def conduct_diplomacy(self, state: WorldState, player: Player) -> None:
        super().conduct_diplomacy(state, player)
        personality = self.personality(player)

        if personality.aggressiveness >= WARMONGER_THRESHOLD:
            for rel in state.diplomacy:
                if player.id not in (rel.player1_id, rel.player2_id):
                    continue
                if not rel.contacted or rel.status != DiplomacyStatus.NEUTRAL or rel.reputation >= 0:
                    continue
                other = state.players.get(rel.other(player.id))
                if other is None or not other.alive:
                    continue
                if state.rng.chance(personality.aggressiveness * WAR_CHANCE_SCALE):
                    declare_war(state, player.id, other.id)
                    break

        if personality.diplomacy_openness > PEACE_OPENNESS:
            for rel in state.diplomacy:
                if player.id not in (rel.player1_id, rel.player2_id) or not rel.at_war:
                    continue
                if state.rng.chance(personality.diplomacy_openness * PEACE_CHANCE_SCALE):
                    propose_peace(state, player.id, rel.other(player.id))
