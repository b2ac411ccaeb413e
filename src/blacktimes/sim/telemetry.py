"""Telemetry data models for per-player and per-game statistics.

These lightweight dataclasses capture what is needed to compare games
without keeping every world snapshot:

- **PlayerTelemetry**: final standing of one empire.
- **GameTelemetry**: seed, length, winner and event counts of one game.

Both classes are plain ``dataclass`` instances (not Pydantic models) to
keep collection cheap during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PlayerTelemetry:
    """End-of-game figures for one player.

    Attributes
    ----------
    player_id:
        The player's id.
    race_id:
        The player's race.
    alive:
        Whether the player survived to the end.
    score:
        Score at the end of the game (see ``victory.calculate_score``).
    colonies:
        Number of colonies owned.
    fleets:
        Number of fleets owned.
    techs:
        Number of technologies known.
    credits:
        Treasury at the end.
    """

    player_id: str
    race_id: str
    alive: bool
    score: int
    colonies: int
    fleets: int
    techs: int
    credits: float


@dataclass
class GameTelemetry:
    """Stats from one full game.

    Attributes
    ----------
    seed:
        The seed the game was generated from.
    turns:
        Turns played.
    winner_id:
        Winning player, or ``None`` if the turn limit was reached first.
    victory_type:
        ``VictoryType`` value of the win, or ``None``.
    players:
        Final standing of every player.
    events_by_type:
        Event class name -> number emitted over the game.
    """

    seed: int
    turns: int = 0
    winner_id: str | None = None
    victory_type: str | None = None
    players: list[PlayerTelemetry] = field(default_factory=list)
    events_by_type: dict[str, int] = field(default_factory=dict)

    @property
    def final_scores(self) -> dict[str, int]:
        return {p.player_id: p.score for p in self.players}
