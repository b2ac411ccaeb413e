"""Tests for WorldState, GameConfig and the id generator."""

import json

import pytest
from pydantic import ValidationError

from blacktimes.sim.core.enums import DiplomacyStatus, GalaxySize
from blacktimes.sim.core.game_state import GameConfig, WorldState
from blacktimes.sim.core.ids import IdGenerator


# ---------------------------------------------------------------------------
# IdGenerator
# ---------------------------------------------------------------------------

class TestIdGenerator:
    def test_ids_are_prefixed_and_unique(self):
        gen = IdGenerator()
        ids = [gen.next_id("star") for _ in range(100)]
        assert len(set(ids)) == 100
        assert all(i.startswith("star_") for i in ids)

    def test_base36_counter(self):
        gen = IdGenerator()
        ids = [gen.next_id("x") for _ in range(36)]
        assert ids[0] == "x_1"
        assert ids[9] == "x_a"
        assert ids[35] == "x_10"

    def test_reset(self):
        gen = IdGenerator()
        gen.next_id("a")
        gen.reset()
        assert gen.next_id("a") == "a_1"

    def test_two_worlds_do_not_share_counters(self):
        a = WorldState()
        b = WorldState()
        a.new_id("fleet")
        a.new_id("fleet")
        assert b.new_id("fleet") == "fleet_1"


# ---------------------------------------------------------------------------
# GameConfig
# ---------------------------------------------------------------------------

class TestGameConfig:
    def test_defaults(self):
        config = GameConfig()
        assert config.galaxy_size == GalaxySize.MEDIUM
        assert config.player_count == 4

    @pytest.mark.parametrize("count", [1, 9])
    def test_player_count_out_of_range(self, count):
        with pytest.raises(ValidationError):
            GameConfig(player_count=count)

    def test_seed_must_fit_32_bits(self):
        with pytest.raises(ValidationError):
            GameConfig(seed=2**32)
        with pytest.raises(ValidationError):
            GameConfig(seed=-1)

    def test_string_enums_accepted(self):
        config = GameConfig(galaxy_size="small", galaxy_shape="ring")
        assert config.galaxy_size == GalaxySize.SMALL


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

class TestQueries:
    def test_get_relation_is_unordered(self, world):
        assert world.get_relation("p1", "p2") is world.get_relation("p2", "p1")
        assert world.get_relation("p1", "p2").status == DiplomacyStatus.UNKNOWN

    def test_get_relation_unknown_pair(self, world):
        assert world.get_relation("p1", "nobody") is None

    def test_living_players(self, world):
        world.players["p2"].alive = False
        assert [p.id for p in world.living_players()] == ["p1"]

    def test_game_over_follows_victory(self, world):
        assert not world.game_over


# ---------------------------------------------------------------------------
# Snapshot / restore
# ---------------------------------------------------------------------------

class TestSnapshot:
    def test_snapshot_is_json_serialisable(self, world):
        data = world.snapshot()
        json.dumps(data)
        assert "rng" not in data

    def test_snapshot_records_rng_state(self, world):
        world.rng.random_float()
        data = world.snapshot()
        assert data["rng_state"] == world.rng.get_state()

    def test_restore_roundtrip(self, world):
        for _ in range(5):
            world.rng.random_float()
        world.new_id("ship")
        data = world.snapshot()

        restored = WorldState.restore(data)
        assert restored.snapshot() == data
        assert restored.rng.random_float() == world.rng.random_float()

    def test_restored_ids_continue(self, world):
        world.new_id("ship")
        restored = WorldState.restore(world.snapshot())
        assert restored.new_id("ship") == world.new_id("ship")
