"""Tests for per-player exploration."""

from blacktimes.sim.galaxy.fog_of_war import (
    explored_star_ids,
    initialize_for_player,
    is_lane_visible,
    reveal_star,
)


class TestInitialize:
    def test_home_plus_two_hops(self, world):
        initialize_for_player(world, "p1", "s1")
        assert explored_star_ids(world, "p1") == {"s1", "s2", "s3"}

    def test_custom_hops(self, world):
        initialize_for_player(world, "p1", "s1", hops=0)
        assert explored_star_ids(world, "p1") == {"s1"}

    def test_other_players_unaffected(self, world):
        initialize_for_player(world, "p1", "s1")
        assert explored_star_ids(world, "p2") == set()

    def test_unknown_home_is_noop(self, world):
        initialize_for_player(world, "p1", "nowhere")
        assert explored_star_ids(world, "p1") == set()


class TestRevealStar:
    def test_reveals_star_and_neighbours(self, world):
        revealed = reveal_star(world, "p2", "s3")
        assert revealed == ["s3", "s2", "s4"]

    def test_already_explored_not_reported(self, world):
        reveal_star(world, "p2", "s3")
        assert reveal_star(world, "p2", "s2") == ["s1"]

    def test_lane_visibility(self, world):
        reveal_star(world, "p1", "s1")
        assert is_lane_visible(world, "p1", "s1", "s2")
        assert not is_lane_visible(world, "p1", "s2", "s3")
