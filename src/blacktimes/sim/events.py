"""Notification records produced while a turn runs.

The turn pipeline appends these to an :class:`EventLog` in the order the
underlying state changes happen; callers read them after the turn.
They are plain dataclasses, like the telemetry records.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from blacktimes.sim.core.enums import TurnPhase, VictoryType


@dataclass
class GameEvent:
    turn: int


@dataclass
class PhaseStarted(GameEvent):
    phase: TurnPhase


@dataclass
class TurnCompleted(GameEvent):
    """Fired last; ``turn`` is the new turn number."""


@dataclass
class ColonyFounded(GameEvent):
    colony_id: str
    player_id: str
    planet_id: str


@dataclass
class BuildCompleted(GameEvent):
    colony_id: str
    player_id: str
    item_name: str


@dataclass
class ResearchCompleted(GameEvent):
    player_id: str
    tech_id: str


@dataclass
class FleetArrived(GameEvent):
    fleet_id: str
    player_id: str
    star_id: str


@dataclass
class CombatEnded(GameEvent):
    star_id: str
    winner_id: str | None
    """``None`` when both sides still had ships at the round cap."""

    loser_id: str | None = None


@dataclass
class FirstContact(GameEvent):
    player1_id: str
    player2_id: str


@dataclass
class VictoryAchieved(GameEvent):
    winner_id: str
    victory_type: VictoryType


@dataclass
class EventLog:
    """Append-only event buffer for one session."""

    events: list[GameEvent] = field(default_factory=list)

    def emit(self, event: GameEvent) -> None:
        self.events.append(event)

    def since(self, index: int) -> list[GameEvent]:
        return self.events[index:]

    def drain(self) -> list[GameEvent]:
        """Return every buffered event and empty the log."""
        drained, self.events = self.events, []
        return drained

    def of_type(self, event_type: type[GameEvent]) -> list[GameEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

    def __len__(self) -> int:
        return len(self.events)
