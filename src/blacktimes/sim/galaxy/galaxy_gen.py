"""Universe generator: star placement, star typing and warp-lane synthesis.

Stars are rejection-sampled from a shape-specific distribution under a
minimum-spacing rule.  Warp lanes are built in two passes over all
pairs within the maximum lane length, sorted by distance:

1. A union-find spanning pass that connects the graph with the shortest
   available edges.  Components that no in-range edge can join are then
   bridged to their nearest star, so every star is always reachable.
2. An extra pass that adds more short lanes at random for variety,
   bounded by a per-star lane cap.
"""

from __future__ import annotations

import logging
import math

from blacktimes.sim.core.constants import (
    GALAXY_SIZES,
    MAX_WARP_LANES_PER_STAR,
    MIN_VIABLE_STARS,
    PLACEMENT_ATTEMPTS_PER_STAR,
    STAR_MIN_DISTANCE,
    STAR_TYPE_WEIGHTS,
    WARP_LANE_MAX_DISTANCE,
)
from blacktimes.sim.core.entities import Star, Vec3
from blacktimes.sim.core.enums import GalaxyShape, GalaxySize
from blacktimes.sim.core.game_state import Galaxy, WorldState
from blacktimes.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

STAR_NAMES: list[str] = [
    "Sol", "Alpha Centauri", "Sirius", "Vega", "Altair", "Rigel", "Betelgeuse",
    "Polaris", "Antares", "Arcturus", "Capella", "Deneb", "Procyon", "Achernar",
    "Canopus", "Aldebaran", "Spica", "Fomalhaut", "Regulus", "Pollux",
    "Castor", "Bellatrix", "Mira", "Rasalhague", "Algol", "Thuban", "Elnath",
    "Alnilam", "Alnitak", "Mintaka", "Saiph", "Dubhe", "Merak", "Phecda",
    "Megrez", "Alioth", "Mizar", "Alkaid", "Kochab", "Pherkad", "Etamin",
    "Rastaban", "Grumium", "Albireo", "Sheliak", "Sulafat", "Sadr", "Gienah",
    "Acrux", "Gacrux", "Mimosa", "Hadar", "Atria", "Shaula", "Sargas",
    "Kaus Australis", "Nunki", "Ascella", "Alhena", "Tejat", "Propus",
    "Mebsuta", "Wasat", "Alzirr", "Zubenelgenubi", "Zubeneschamali",
    "Dschubba", "Acrab", "Wei", "Lesath", "Sabik", "Yed Prior", "Yed Posterior",
    "Cebalrai", "Marfik", "Unukalhai", "Alya", "Sualocin", "Rotanev",
    "Enif", "Scheat", "Markab", "Algenib", "Ankaa", "Diphda", "Hamal",
    "Sheratan", "Mesarthim", "Menkar", "Mira Ceti", "Alcyone", "Atlas",
    "Electra", "Maia", "Merope", "Taygeta", "Celaeno", "Pleione",
    "Vindemiatrix", "Porrima", "Auva", "Zaniah", "Zavijava", "Syrma",
    "Khambalia", "Algorab", "Kraz", "Minkar", "Alchiba",
]


class GalaxyGenerationError(RuntimeError):
    """Raised when too few stars could be placed to start a game."""


class _DisjointSet:
    def __init__(self, n: int) -> None:
        self.parent = list(range(n))

    def find(self, x: int) -> int:
        while self.parent[x] != x:
            self.parent[x] = self.parent[self.parent[x]]
            x = self.parent[x]
        return x

    def union(self, a: int, b: int) -> bool:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        self.parent[ra] = rb
        return True


class GalaxyGenerator:
    """Builds the star graph for a new game.

    Parameters
    ----------
    rng:
        The session RNG.  Every draw comes from it, in a fixed order.
    """

    def __init__(self, rng: GameRNG) -> None:
        self.rng = rng

    def generate(
        self,
        state: WorldState,
        size: GalaxySize,
        shape: GalaxyShape,
        min_stars: int = MIN_VIABLE_STARS,
    ) -> Galaxy:
        """Populate ``state.stars`` and ``state.galaxy``.

        Parameters
        ----------
        state:
            World to write the stars into.
        size:
            Size tier; fixes the target star count and the radius.
        shape:
            Spatial distribution of the stars.
        min_stars:
            Fewest stars the caller can live with.  Placing fewer
            raises :class:`GalaxyGenerationError`; anything between this
            and the target count is accepted.
        """
        target, radius = GALAXY_SIZES[GalaxySize(size)]
        positions = self._generate_positions(target, radius, GalaxyShape(shape))
        if len(positions) < min_stars:
            raise GalaxyGenerationError(
                f"placed only {len(positions)} of {target} stars, need {min_stars}"
            )
        if len(positions) < target:
            logger.info("Placed %d of %d requested stars", len(positions), target)

        type_names = list(STAR_TYPE_WEIGHTS)
        type_weights = [STAR_TYPE_WEIGHTS[t] for t in type_names]

        names = list(STAR_NAMES)
        self.rng.shuffle(names)

        stars: list[Star] = []
        for i, pos in enumerate(positions):
            type_idx = self.rng.weighted_index(type_weights)
            name = names[i % len(names)]
            if i >= len(names):
                name = f"{name} {i // len(names) + 1}"
            star = Star(
                id=state.new_id("star"),
                name=name,
                position=pos,
                type=type_names[type_idx],
            )
            stars.append(star)
            state.stars[star.id] = star

        self._generate_warp_lanes(stars)

        galaxy = Galaxy(
            id=state.new_id("galaxy"),
            star_ids=[s.id for s in stars],
            width=radius * 2,
            height=radius * 2,
        )
        state.galaxy = galaxy
        logger.debug(
            "Generated %s %s galaxy with %d stars and %d lanes",
            size, shape, len(stars), sum(len(s.warp_lanes) for s in stars) // 2,
        )
        return galaxy

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def _generate_positions(self, count: int, radius: float, shape: GalaxyShape) -> list[Vec3]:
        positions: list[Vec3] = []
        max_attempts = count * PLACEMENT_ATTEMPTS_PER_STAR
        attempts = 0

        while len(positions) < count and attempts < max_attempts:
            attempts += 1
            if shape == GalaxyShape.ELLIPTICAL:
                pos = self._elliptical_position(radius)
            elif shape == GalaxyShape.RING:
                pos = self._ring_position(radius)
            else:
                pos = self._spiral_position(radius)

            if all(pos.distance_to(p) >= STAR_MIN_DISTANCE for p in positions):
                positions.append(pos)

        return positions

    def _spiral_position(self, radius: float) -> Vec3:
        # Two logarithmic arms, half a turn apart.
        arm = self.rng.random_int(0, 1)
        arm_angle = arm * math.pi
        t = self.rng.random_float()
        r = t * radius * 0.9
        angle = arm_angle + t * math.pi * 2.5
        scatter = self.rng.gaussian(0, radius * 0.08)
        scatter_angle = self.rng.gaussian(0, 0.3)
        return Vec3(
            x=math.cos(angle + scatter_angle) * r + scatter,
            y=self.rng.gaussian(0, radius * 0.02),
            z=math.sin(angle + scatter_angle) * r + scatter,
        )

    def _elliptical_position(self, radius: float) -> Vec3:
        r = self.rng.random_float() * radius * 0.8
        theta = self.rng.random_float() * math.pi * 2
        phi = self.rng.gaussian(math.pi / 2, 0.3)
        return Vec3(
            x=r * math.sin(phi) * math.cos(theta),
            y=r * math.cos(phi) * 0.3,
            z=r * math.sin(phi) * math.sin(theta),
        )

    def _ring_position(self, radius: float) -> Vec3:
        angle = self.rng.random_float() * math.pi * 2
        ring_radius = radius * 0.5 + self.rng.gaussian(0, radius * 0.15)
        return Vec3(
            x=math.cos(angle) * ring_radius,
            y=self.rng.gaussian(0, radius * 0.02),
            z=math.sin(angle) * ring_radius,
        )

    # ------------------------------------------------------------------
    # Warp lanes
    # ------------------------------------------------------------------

    def _generate_warp_lanes(self, stars: list[Star]) -> None:
        n = len(stars)
        edges: list[tuple[float, int, int]] = []
        for i in range(n):
            for j in range(i + 1, n):
                dist = stars[i].position.distance_to(stars[j].position)
                if dist <= WARP_LANE_MAX_DISTANCE:
                    edges.append((dist, i, j))
        edges.sort(key=lambda e: e[0])

        dsu = _DisjointSet(n)
        lane_count = [0] * n
        added: set[tuple[int, int]] = set()

        def link(i: int, j: int) -> None:
            stars[i].warp_lanes.append(stars[j].id)
            stars[j].warp_lanes.append(stars[i].id)
            lane_count[i] += 1
            lane_count[j] += 1
            added.add((i, j) if i < j else (j, i))

        # Spanning pass
        for _, i, j in edges:
            if dsu.union(i, j):
                link(i, j)

        self._bridge_components(stars, dsu, link)

        # Variety pass
        for dist, i, j in edges:
            if (i, j) in added:
                continue
            if lane_count[i] >= MAX_WARP_LANES_PER_STAR or lane_count[j] >= MAX_WARP_LANES_PER_STAR:
                continue
            prob = 1 - dist / WARP_LANE_MAX_DISTANCE
            if self.rng.chance(prob * 0.5):
                link(i, j)

    @staticmethod
    def _bridge_components(stars: list[Star], dsu: _DisjointSet, link) -> None:
        """Join every component out of lane range to its nearest star."""
        n = len(stars)
        while n > 1:
            main = dsu.find(0)
            best: tuple[float, int, int] | None = None
            for i in range(n):
                if dsu.find(i) != main:
                    continue
                for j in range(n):
                    if dsu.find(j) == main:
                        continue
                    dist = stars[i].position.distance_to(stars[j].position)
                    if best is None or dist < best[0]:
                        best = (dist, i, j)
            if best is None:
                return
            _, i, j = best
            logger.debug(
                "Bridging isolated star %s to %s (%.1f)",
                stars[j].name, stars[i].name, best[0],
            )
            dsu.union(i, j)
            link(i, j)
