"""Fleet combat: detection and the auto-battler.

Each round every surviving ship acts once, in descending initiative
order (ties keep fleet order).  An attacker picks a random living enemy
and rolls ``attack * uniform(0.5, 1.0)`` damage, which drains the
target's shields (the design's defense value, never regenerated during
a battle) before its hit points.  A ship at or below zero hit points is
removed at once and neither acts nor can be targeted for the rest of
the round.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from blacktimes.sim.core.constants import (
    COMBAT_DAMAGE_MAX_ROLL,
    COMBAT_DAMAGE_MIN_ROLL,
    COMBAT_MAX_ROUNDS,
)
from blacktimes.sim.core.entities import Fleet, Ship, ShipDesign
from blacktimes.sim.core.enums import DiplomacyStatus
from blacktimes.sim.core.game_state import WorldState
from blacktimes.sim.core.rng import GameRNG
from blacktimes.sim.mechanics.movement import recompute_fleet_speed, remove_fleet

logger = logging.getLogger(__name__)


@dataclass
class PendingCombat:
    fleet1_id: str
    fleet2_id: str
    star_id: str


@dataclass
class CombatResult:
    """Outcome of one battle.

    Attributes
    ----------
    winner_id:
        Player whose side still had ships, or ``None`` for a draw (both
        sides survived the round cap).
    loser_id:
        The other side's player, ``None`` on a draw.
    losses:
        player id -> ids of that player's ships destroyed.
    rounds:
        Rounds fought, never more than the cap.
    """

    star_id: str
    fleet1_id: str
    fleet2_id: str
    player1_id: str
    player2_id: str
    winner_id: str | None
    loser_id: str | None
    losses: dict[str, list[str]] = field(default_factory=dict)
    rounds: int = 0

    @property
    def destroyed_ship_ids(self) -> list[str]:
        return [sid for ids in self.losses.values() for sid in ids]


@dataclass
class _Combatant:
    ship: Ship
    design: ShipDesign
    side: int
    hp: float
    shields: float
    alive: bool = True


def are_at_war(state: WorldState, a: str, b: str) -> bool:
    rel = state.get_relation(a, b)
    return rel is not None and rel.status == DiplomacyStatus.WAR


def detect_combats(state: WorldState) -> list[PendingCombat]:
    """One battle per pair of hostile, stationary, non-empty fleets per star."""
    by_star: dict[str, list[Fleet]] = {}
    for fleet in state.fleets.values():
        if fleet.is_moving or not fleet.ship_ids:
            continue
        by_star.setdefault(fleet.star_id, []).append(fleet)

    combats: list[PendingCombat] = []
    for star_id, fleets in by_star.items():
        for i in range(len(fleets)):
            for j in range(i + 1, len(fleets)):
                a, b = fleets[i], fleets[j]
                if a.player_id != b.player_id and are_at_war(state, a.player_id, b.player_id):
                    combats.append(PendingCombat(a.id, b.id, star_id))
    return combats


def _combatants(state: WorldState, fleet: Fleet, side: int) -> list[_Combatant]:
    out: list[_Combatant] = []
    for sid in fleet.ship_ids:
        ship = state.ships.get(sid)
        design = state.design_of(ship) if ship is not None else None
        if ship is None or design is None:
            continue
        out.append(_Combatant(ship, design, side, ship.current_hp, design.defense))
    return out


def auto_resolve(
    state: WorldState,
    fleet1_id: str,
    fleet2_id: str,
    rng: GameRNG | None = None,
    max_rounds: int = COMBAT_MAX_ROUNDS,
) -> CombatResult | None:
    """Fight a battle between two fleets and apply the results.

    Returns ``None`` if either fleet is missing or has no ships.
    """
    rng = rng if rng is not None else state.rng
    fleet1 = state.fleets.get(fleet1_id)
    fleet2 = state.fleets.get(fleet2_id)
    if fleet1 is None or fleet2 is None:
        return None

    sides = {1: _combatants(state, fleet1, 1), 2: _combatants(state, fleet2, 2)}
    if not sides[1] or not sides[2]:
        return None

    destroyed: dict[int, list[str]] = {1: [], 2: []}
    rounds = 0
    while sides[1] and sides[2] and rounds < max_rounds:
        rounds += 1
        order = sorted(sides[1] + sides[2], key=lambda c: -c.design.initiative)
        for attacker in order:
            if not attacker.alive:
                continue
            targets = sides[2 if attacker.side == 1 else 1]
            if not targets:
                break
            idx = rng.random_int(0, len(targets) - 1)
            target = targets[idx]
            damage = attacker.design.attack * rng.random_range(
                COMBAT_DAMAGE_MIN_ROLL, COMBAT_DAMAGE_MAX_ROLL
            )
            absorbed = min(damage, target.shields)
            target.shields -= absorbed
            target.hp -= damage - absorbed
            if target.hp <= 0:
                target.alive = False
                targets.pop(idx)
                destroyed[target.side].append(target.ship.id)

    if sides[1] and not sides[2]:
        winner_side: int | None = 1
    elif sides[2] and not sides[1]:
        winner_side = 2
    else:
        winner_side = None

    players = {1: fleet1.player_id, 2: fleet2.player_id}
    result = CombatResult(
        star_id=fleet1.star_id,
        fleet1_id=fleet1.id,
        fleet2_id=fleet2.id,
        player1_id=fleet1.player_id,
        player2_id=fleet2.player_id,
        winner_id=players[winner_side] if winner_side else None,
        loser_id=players[3 - winner_side] if winner_side else None,
        losses={players[1]: destroyed[1], players[2]: destroyed[2]},
        rounds=rounds,
    )

    survivors = sides[1] + sides[2]
    _apply_results(state, [fleet1, fleet2], destroyed[1] + destroyed[2], survivors)
    logger.debug(
        "Combat at %s: %s vs %s, winner=%s after %d rounds",
        result.star_id, players[1], players[2], result.winner_id, rounds,
    )
    return result


def _apply_results(
    state: WorldState,
    fleets: list[Fleet],
    destroyed_ids: list[str],
    survivors: list[_Combatant],
) -> None:
    for sid in destroyed_ids:
        ship = state.ships.pop(sid, None)
        if ship is None:
            continue
        fleet = state.fleets.get(ship.fleet_id or "")
        if fleet is not None and sid in fleet.ship_ids:
            fleet.ship_ids.remove(sid)

    for combatant in survivors:
        combatant.ship.current_hp = combatant.hp
        combatant.ship.experience += 1

    for fleet in fleets:
        if fleet.id not in state.fleets:
            continue
        if not fleet.ship_ids:
            remove_fleet(state, fleet.id)
        else:
            recompute_fleet_speed(state, fleet)

    eliminate_defeated_players(state)


def eliminate_defeated_players(state: WorldState) -> list[str]:
    """Mark players with neither colonies nor fleets as dead."""
    eliminated: list[str] = []
    for player in state.players.values():
        if player.alive and not player.colony_ids and not player.fleet_ids:
            player.alive = False
            eliminated.append(player.id)
            logger.info("Player %s has been eliminated", player.id)
    return eliminated


def fleet_power(state: WorldState, fleet_id: str) -> float:
    """Rough strength estimate: attack + defense + hit points over all ships."""
    fleet = state.fleets.get(fleet_id)
    if fleet is None:
        return 0.0
    total = 0.0
    for sid in fleet.ship_ids:
        ship = state.ships.get(sid)
        design = state.design_of(ship) if ship is not None else None
        if design is not None:
            total += design.attack + design.defense + ship.current_hp
    return total
