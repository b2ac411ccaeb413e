"""Tests for the headless game runner."""

import pytest
from pydantic import ValidationError

from blacktimes.sim.core.enums import GalaxyShape, GalaxySize
from blacktimes.sim.core.game_state import GameConfig
from blacktimes.sim.runner import BatchRunner, run_game


def _small_config(seed: int = 42) -> GameConfig:
    return GameConfig(
        seed=seed,
        player_count=2,
        galaxy_size=GalaxySize.SMALL,
        galaxy_shape=GalaxyShape.RING,
    )


class TestRunGame:
    def test_stops_at_turn_limit(self, registry):
        telemetry = run_game(_small_config(), max_turns=5, registry=registry)
        assert telemetry.seed == 42
        assert telemetry.turns <= 5
        assert len(telemetry.players) == 2
        assert telemetry.events_by_type["TurnCompleted"] == telemetry.turns

    def test_winner_matches_victory_type(self, registry):
        telemetry = run_game(_small_config(), max_turns=5, registry=registry)
        assert (telemetry.winner_id is None) == (telemetry.victory_type is None)

    def test_final_scores(self, registry):
        telemetry = run_game(_small_config(), max_turns=3, registry=registry)
        scores = telemetry.final_scores
        assert set(scores) == {p.player_id for p in telemetry.players}
        assert all(score > 0 for score in scores.values())

    def test_deterministic(self, registry):
        a = run_game(_small_config(seed=9), max_turns=8, registry=registry)
        b = run_game(_small_config(seed=9), max_turns=8, registry=registry)
        assert a == b


class TestBatchRunner:
    def test_consecutive_seeds(self, registry):
        results = BatchRunner(registry).run_batch(
            3, config=_small_config(), base_seed=10, max_turns=2,
        )
        assert [t.seed for t in results] == [10, 11, 12]
        assert all(t.turns == 2 for t in results)

    def test_seeds_are_validated(self, registry):
        with pytest.raises(ValidationError):
            BatchRunner(registry).run_batch(
                2, config=_small_config(), base_seed=2**32 - 1, max_turns=1,
            )
