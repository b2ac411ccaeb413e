"""Tests for planet generation."""

from blacktimes.sim.core.enums import GalaxyShape, GalaxySize, PlanetType
from blacktimes.sim.core.game_state import WorldState
from blacktimes.sim.core.rng import GameRNG
from blacktimes.sim.galaxy.galaxy_gen import GalaxyGenerator
from blacktimes.sim.galaxy.planet_gen import PlanetGenerator, roman_numeral


def _make_populated_world(seed: int = 42) -> WorldState:
    state = WorldState()
    rng = GameRNG(seed)
    GalaxyGenerator(rng).generate(state, GalaxySize.SMALL, GalaxyShape.ELLIPTICAL)
    PlanetGenerator(rng).generate_all(state)
    return state


class TestPlanetGenerator:
    def test_every_star_has_one_to_five_planets(self):
        state = _make_populated_world()
        for star in state.stars.values():
            assert 1 <= len(star.planet_ids) <= 5

    def test_planet_fields_in_range(self):
        state = _make_populated_world(seed=5)
        for planet in state.planets.values():
            assert 1 <= planet.size <= 5
            assert 1 <= planet.minerals <= 5
            assert 0 <= planet.habitability <= 100
            assert planet.colony_id is None

    def test_planets_link_back_to_star(self):
        state = _make_populated_world()
        for star in state.stars.values():
            for index, pid in enumerate(star.planet_ids):
                planet = state.planets[pid]
                assert planet.star_id == star.id
                assert planet.orbit_index == index

    def test_planet_names_use_roman_numerals(self):
        state = _make_populated_world()
        star = next(iter(state.stars.values()))
        first = state.planets[star.planet_ids[0]]
        assert first.name == f"{star.name} I"

    def test_gas_giants_have_moons(self):
        for seed in range(10):
            state = _make_populated_world(seed=seed)
            for planet in state.planets.values():
                if planet.type == PlanetType.GAS_GIANT:
                    assert 1 <= planet.moon_count <= 6

    def test_deterministic(self):
        a = _make_populated_world(seed=11)
        b = _make_populated_world(seed=11)
        assert a.model_dump(mode="json")["planets"] == b.model_dump(mode="json")["planets"]


class TestRomanNumeral:
    def test_small_numbers(self):
        assert [roman_numeral(i) for i in range(1, 6)] == ["I", "II", "III", "IV", "V"]

    def test_out_of_table_falls_back_to_digits(self):
        assert roman_numeral(12) == "12"
