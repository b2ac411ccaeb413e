"""Body generator: populates each star with planets.

Planet types are drawn from a per-star-type weight table, so blue
giants favour gas giants and barren rocks while yellow stars favour
terran worlds.  The generator keeps no memory between stars.
"""

from __future__ import annotations

from blacktimes.sim.core.constants import (
    MAX_PLANETS_PER_STAR,
    MIN_PLANETS_PER_STAR,
    SPECIAL_RESOURCE_CHANCE,
)
from blacktimes.sim.core.entities import Planet, Star
from blacktimes.sim.core.enums import PlanetType, SpecialResource, StarType
from blacktimes.sim.core.game_state import WorldState
from blacktimes.sim.core.rng import GameRNG

P = PlanetType

_PLANET_TYPE_WEIGHTS: dict[StarType, list[tuple[PlanetType, int]]] = {
    StarType.YELLOW: [
        (P.TERRAN, 25), (P.OCEAN, 15), (P.ARID, 10), (P.TUNDRA, 10), (P.DESERT, 10),
        (P.JUNGLE, 10), (P.GAS_GIANT, 10), (P.BARREN, 5), (P.VOLCANIC, 3), (P.TOXIC, 2),
    ],
    StarType.ORANGE: [
        (P.TERRAN, 15), (P.OCEAN, 10), (P.ARID, 15), (P.TUNDRA, 15), (P.DESERT, 10),
        (P.GAS_GIANT, 15), (P.BARREN, 10), (P.JUNGLE, 5), (P.VOLCANIC, 3), (P.TOXIC, 2),
    ],
    StarType.RED_DWARF: [
        (P.TUNDRA, 20), (P.BARREN, 20), (P.ARID, 15), (P.TERRAN, 5), (P.DESERT, 10),
        (P.TOXIC, 10), (P.VOLCANIC, 5), (P.GAS_GIANT, 10), (P.OCEAN, 3), (P.JUNGLE, 2),
    ],
    StarType.WHITE: [
        (P.TERRAN, 15), (P.OCEAN, 15), (P.DESERT, 15), (P.BARREN, 10), (P.GAS_GIANT, 15),
        (P.ARID, 10), (P.JUNGLE, 8), (P.TUNDRA, 5), (P.VOLCANIC, 5), (P.TOXIC, 2),
    ],
    StarType.BLUE_GIANT: [
        (P.GAS_GIANT, 30), (P.BARREN, 20), (P.VOLCANIC, 15), (P.TOXIC, 15), (P.DESERT, 10),
        (P.TERRAN, 2), (P.OCEAN, 2), (P.ARID, 2), (P.TUNDRA, 2), (P.JUNGLE, 2),
    ],
    StarType.RED_GIANT: [
        (P.GAS_GIANT, 25), (P.BARREN, 20), (P.VOLCANIC, 15), (P.DESERT, 15), (P.TOXIC, 10),
        (P.ARID, 5), (P.TUNDRA, 5), (P.TERRAN, 2), (P.OCEAN, 2), (P.JUNGLE, 1),
    ],
    StarType.NEUTRON: [
        (P.BARREN, 35), (P.TOXIC, 25), (P.VOLCANIC, 20), (P.DESERT, 10), (P.TUNDRA, 5),
        (P.GAS_GIANT, 3), (P.TERRAN, 1), (P.OCEAN, 0), (P.ARID, 1), (P.JUNGLE, 0),
    ],
}

HABITABILITY_BASE: dict[PlanetType, int] = {
    P.TERRAN: 80,
    P.OCEAN: 60,
    P.JUNGLE: 55,
    P.ARID: 40,
    P.TUNDRA: 35,
    P.DESERT: 30,
    P.VOLCANIC: 15,
    P.BARREN: 10,
    P.TOXIC: 5,
    P.GAS_GIANT: 0,
}

HABITABILITY_JITTER = 15

_SPECIALS: list[SpecialResource] = [
    SpecialResource.GOLD_DEPOSITS,
    SpecialResource.GEM_DEPOSITS,
    SpecialResource.ANCIENT_ARTIFACTS,
    SpecialResource.NATIVE_LIFE,
]

_NUMERALS = ["I", "II", "III", "IV", "V", "VI", "VII", "VIII"]


def roman_numeral(n: int) -> str:
    if 1 <= n <= len(_NUMERALS):
        return _NUMERALS[n - 1]
    return str(n)


class PlanetGenerator:
    """Generates the planets orbiting one star at a time."""

    def __init__(self, rng: GameRNG) -> None:
        self.rng = rng

    def generate(self, state: WorldState, star: Star) -> list[Planet]:
        """Create planets for *star*, register them in *state* and return them."""
        table = _PLANET_TYPE_WEIGHTS[star.type]
        types = [t for t, _ in table]
        weights = [w for _, w in table]

        count = self.rng.random_int(MIN_PLANETS_PER_STAR, MAX_PLANETS_PER_STAR)
        planets: list[Planet] = []
        for i in range(count):
            ptype = types[self.rng.weighted_index(weights)]
            size = self.rng.random_int(1, 5)
            minerals = self.rng.random_int(1, 5)

            habitability = HABITABILITY_BASE[ptype] + self.rng.random_int(
                -HABITABILITY_JITTER, HABITABILITY_JITTER
            )
            habitability = max(0, min(100, habitability))

            special = SpecialResource.NONE
            if self.rng.chance(SPECIAL_RESOURCE_CHANCE):
                special = self.rng.random_choice(_SPECIALS)

            planet = Planet(
                id=state.new_id("planet"),
                star_id=star.id,
                name=f"{star.name} {roman_numeral(i + 1)}",
                type=ptype,
                size=size,
                minerals=minerals,
                habitability=habitability,
                special_resource=special,
                orbit_index=i,
                moon_count=self._roll_moons(ptype, size),
            )
            state.planets[planet.id] = planet
            star.planet_ids.append(planet.id)
            planets.append(planet)
        return planets

    def generate_all(self, state: WorldState) -> None:
        """Populate every star of the galaxy, in galaxy order."""
        if state.galaxy is None:
            return
        for star_id in state.galaxy.star_ids:
            self.generate(state, state.stars[star_id])

    def _roll_moons(self, ptype: PlanetType, size: int) -> int:
        if ptype == PlanetType.GAS_GIANT:
            return self.rng.random_int(1, 6)
        if size >= 4:
            return self.rng.random_int(0, 3)
        if size == 3:
            return self.rng.random_int(0, 2)
        return self.rng.random_int(0, 1)
