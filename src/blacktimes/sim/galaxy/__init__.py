"""Procedural generation of the star graph and its planets."""

from .fog_of_war import (
    explored_star_ids,
    initialize_for_player,
    is_lane_visible,
    reveal_star,
)
from .galaxy_gen import STAR_NAMES, GalaxyGenerationError, GalaxyGenerator
from .planet_gen import HABITABILITY_BASE, PlanetGenerator, roman_numeral

__all__ = [
    # galaxy_gen
    "GalaxyGenerator",
    "GalaxyGenerationError",
    "STAR_NAMES",
    # planet_gen
    "PlanetGenerator",
    "HABITABILITY_BASE",
    "roman_numeral",
    # fog_of_war
    "initialize_for_player",
    "reveal_star",
    "explored_star_ids",
    "is_lane_visible",
]
