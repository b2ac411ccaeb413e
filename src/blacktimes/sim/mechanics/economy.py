"""Player treasury: colony income against fleet and building upkeep."""

from __future__ import annotations

from dataclasses import dataclass

from blacktimes.sim.core.constants import (
    BANKRUPTCY_MORALE_PENALTY,
    BUILDING_MAINTENANCE,
    MORALE_MIN,
    SHIP_MAINTENANCE_MULTIPLIER,
)
from blacktimes.sim.core.entities import Player
from blacktimes.sim.core.game_state import WorldState


@dataclass
class IncomeReport:
    income: float
    maintenance: float

    @property
    def net(self) -> float:
        return self.income - self.maintenance


def ship_maintenance(state: WorldState, player: Player) -> float:
    """Half a percent of each ship's design cost per turn."""
    total = 0.0
    for fleet in state.player_fleets(player.id):
        for sid in fleet.ship_ids:
            ship = state.ships.get(sid)
            design = state.design_of(ship) if ship is not None else None
            if design is not None:
                total += design.cost * SHIP_MAINTENANCE_MULTIPLIER * 0.01
    return total


def building_maintenance(state: WorldState, player: Player) -> float:
    return float(sum(
        len(colony.buildings) * BUILDING_MAINTENANCE
        for colony in state.player_colonies(player.id)
    ))


def player_income(state: WorldState, player_id: str) -> IncomeReport:
    player = state.players.get(player_id)
    if player is None:
        return IncomeReport(income=0.0, maintenance=0.0)
    income = sum(c.credits_output for c in state.player_colonies(player_id))
    maintenance = ship_maintenance(state, player) + building_maintenance(state, player)
    return IncomeReport(income=income, maintenance=maintenance)


def process_player_economy(state: WorldState, player: Player) -> IncomeReport:
    """Apply one turn of income and upkeep.

    A treasury below zero afterwards costs every colony of the player
    some morale.
    """
    report = player_income(state, player.id)
    player.credits += report.net
    if player.credits < 0:
        for colony in state.player_colonies(player.id):
            colony.morale = max(MORALE_MIN, colony.morale - BANKRUPTCY_MORALE_PENALTY)
    return report
