"""Tests for universe generation -- placement, lanes and connectivity."""

import itertools

import pytest

from blacktimes.sim.core.constants import GALAXY_SIZES, STAR_MIN_DISTANCE
from blacktimes.sim.core.enums import GalaxyShape, GalaxySize
from blacktimes.sim.core.game_state import WorldState
from blacktimes.sim.core.rng import GameRNG
from blacktimes.sim.galaxy.galaxy_gen import GalaxyGenerationError, GalaxyGenerator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _generate(seed: int = 42, size=GalaxySize.SMALL, shape=GalaxyShape.SPIRAL) -> WorldState:
    state = WorldState()
    GalaxyGenerator(GameRNG(seed)).generate(state, size, shape)
    return state


def _reachable(state: WorldState, start: str) -> set[str]:
    seen = {start}
    frontier = [start]
    while frontier:
        sid = frontier.pop()
        for nid in state.stars[sid].warp_lanes:
            if nid not in seen:
                seen.add(nid)
                frontier.append(nid)
    return seen


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------

class TestPlacement:
    @pytest.mark.parametrize("shape", list(GalaxyShape))
    def test_min_spacing(self, shape):
        state = _generate(seed=3, shape=shape)
        stars = list(state.stars.values())
        for a, b in itertools.combinations(stars, 2):
            assert a.position.distance_to(b.position) >= STAR_MIN_DISTANCE

    def test_star_count_never_exceeds_target(self):
        state = _generate(size=GalaxySize.SMALL)
        target, _ = GALAXY_SIZES[GalaxySize.SMALL]
        assert 2 <= len(state.stars) <= target

    def test_galaxy_record(self):
        state = _generate()
        assert state.galaxy is not None
        assert state.galaxy.star_ids == list(state.stars)
        _, radius = GALAXY_SIZES[GalaxySize.SMALL]
        assert state.galaxy.width == radius * 2

    def test_star_names_unique(self):
        state = _generate(size=GalaxySize.MEDIUM)
        names = [s.name for s in state.stars.values()]
        assert len(names) == len(set(names))

    def test_too_few_stars_is_fatal(self):
        state = WorldState()
        with pytest.raises(GalaxyGenerationError):
            GalaxyGenerator(GameRNG(1)).generate(
                state, GalaxySize.SMALL, GalaxyShape.SPIRAL, min_stars=1000,
            )


# ---------------------------------------------------------------------------
# Warp lanes
# ---------------------------------------------------------------------------

class TestWarpLanes:
    @pytest.mark.parametrize("shape", list(GalaxyShape))
    @pytest.mark.parametrize("seed", [1, 42, 777])
    def test_graph_is_connected(self, shape, seed):
        state = _generate(seed=seed, shape=shape)
        first = next(iter(state.stars))
        assert _reachable(state, first) == set(state.stars)

    def test_lanes_are_symmetric(self):
        state = _generate(seed=9)
        for star in state.stars.values():
            for nid in star.warp_lanes:
                assert star.id in state.stars[nid].warp_lanes

    def test_no_self_or_duplicate_lanes(self):
        state = _generate(seed=9, size=GalaxySize.MEDIUM)
        for star in state.stars.values():
            assert star.id not in star.warp_lanes
            assert len(star.warp_lanes) == len(set(star.warp_lanes))


# ---------------------------------------------------------------------------
# Determinism
# ---------------------------------------------------------------------------

class TestDeterminism:
    def test_same_seed_same_galaxy(self):
        a = _generate(seed=42)
        b = _generate(seed=42)
        assert a.model_dump(mode="json") == b.model_dump(mode="json")

    def test_different_seed_different_galaxy(self):
        a = _generate(seed=42)
        b = _generate(seed=43)
        positions_a = [s.position for s in a.stars.values()]
        positions_b = [s.position for s in b.stars.values()]
        assert positions_a != positions_b
