"""Headless game runner -- plays all-computer games and collects telemetry.

- :func:`run_game` plays one game with every seat (the human one
  included) driven by a :class:`ComputerPlayer`.
- :class:`BatchRunner` runs many games on consecutive seeds, optionally
  in parallel.
"""

from __future__ import annotations

import logging
import multiprocessing
from collections import Counter

from blacktimes.sim.content.registry import ContentRegistry
from blacktimes.sim.core.game_state import GameConfig
from blacktimes.sim.mechanics.victory import update_scores
from blacktimes.sim.play_agents.computer_player import ComputerPlayer
from blacktimes.sim.session import GameSession
from blacktimes.sim.telemetry import GameTelemetry, PlayerTelemetry

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 200


def collect_telemetry(
    session: GameSession,
    turns: int,
    counts: Counter | None = None,
) -> GameTelemetry:
    """Summarise a finished game.  *counts* replaces the event log tally when given."""
    state = session.state
    update_scores(state)
    if counts is None:
        counts = Counter(type(e).__name__ for e in session.events.events)
    victory = state.victory
    return GameTelemetry(
        seed=state.config.seed,
        turns=turns,
        winner_id=victory.winner_id if victory is not None else None,
        victory_type=victory.victory_type.value if victory is not None else None,
        players=[
            PlayerTelemetry(
                player_id=p.id,
                race_id=p.race_id,
                alive=p.alive,
                score=p.score,
                colonies=len(p.colony_ids),
                fleets=len(p.fleet_ids),
                techs=len(p.known_tech_ids),
                credits=p.credits,
            )
            for p in state.players.values()
        ],
        events_by_type=dict(counts),
    )


def run_game(
    config: GameConfig,
    max_turns: int = DEFAULT_MAX_TURNS,
    registry: ContentRegistry | None = None,
) -> GameTelemetry:
    """Play one computer-only game until victory or *max_turns* turns."""
    session = GameSession.new_game(config, registry)
    for pid in session.state.players:
        session.pipeline.agents.setdefault(pid, ComputerPlayer())

    # Drained per turn; telemetry keeps only the per-type counts.
    counts: Counter = Counter()
    turns = 0
    while turns < max_turns and not session.state.game_over:
        session.end_turn()
        counts.update(type(e).__name__ for e in session.events.drain())
        turns += 1

    telemetry = collect_telemetry(session, turns, counts)
    logger.info(
        "Game seed=%d finished after %d turns, winner=%s (%s)",
        config.seed, turns, telemetry.winner_id, telemetry.victory_type,
    )
    return telemetry


def _worker_run_single(args: tuple) -> GameTelemetry:
    """Top-level worker function for multiprocessing (must be picklable)."""
    config_data, max_turns = args
    return run_game(GameConfig.model_validate(config_data), max_turns)


class BatchRunner:
    """Runs many games on consecutive seeds, optionally in parallel."""

    def __init__(self, registry: ContentRegistry | None = None) -> None:
        if registry is None:
            registry = ContentRegistry()
            registry.load_all()
        self.registry = registry

    def run_batch(
        self,
        n_games: int,
        config: GameConfig | None = None,
        base_seed: int = 42,
        max_turns: int = DEFAULT_MAX_TURNS,
        parallel: bool = False,
    ) -> list[GameTelemetry]:
        """Run *n_games* games seeded ``base_seed``, ``base_seed + 1``, ..."""
        config = config if config is not None else GameConfig()
        configs = [
            GameConfig.model_validate({**config.model_dump(), "seed": base_seed + i})
            for i in range(n_games)
        ]
        if parallel and n_games > 1:
            return self._run_parallel(configs, max_turns)
        return [run_game(c, max_turns, self.registry) for c in configs]

    @staticmethod
    def _run_parallel(configs: list[GameConfig], max_turns: int) -> list[GameTelemetry]:
        """Each worker loads the bundled content itself instead of pickling the registry."""
        work_items = [(c.model_dump(mode="json"), max_turns) for c in configs]
        n_workers = min(len(configs), multiprocessing.cpu_count() or 1)
        with multiprocessing.Pool(processes=n_workers) as pool:
            return pool.map(_worker_run_single, work_items)
