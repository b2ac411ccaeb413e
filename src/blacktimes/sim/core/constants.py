"""Tunable game constants."""

from __future__ import annotations

from blacktimes.sim.core.enums import Difficulty, GalaxySize, StarType

# -- galaxy generation --------------------------------------------------------

# size tier -> (target star count, radius)
GALAXY_SIZES: dict[GalaxySize, tuple[int, float]] = {
    GalaxySize.SMALL: (24, 200.0),
    GalaxySize.MEDIUM: (48, 300.0),
    GalaxySize.LARGE: (72, 400.0),
    GalaxySize.HUGE: (108, 500.0),
}

STAR_MIN_DISTANCE = 30.0
WARP_LANE_MAX_DISTANCE = 120.0
MAX_WARP_LANES_PER_STAR = 5
PLACEMENT_ATTEMPTS_PER_STAR = 50
MIN_VIABLE_STARS = 2

STAR_TYPE_WEIGHTS: dict[StarType, float] = {
    StarType.RED_DWARF: 0.30,
    StarType.ORANGE: 0.25,
    StarType.YELLOW: 0.20,
    StarType.WHITE: 0.10,
    StarType.BLUE_GIANT: 0.05,
    StarType.RED_GIANT: 0.08,
    StarType.NEUTRON: 0.02,
}

# Cosmetic, consumed by renderers only.
STAR_COLORS: dict[StarType, int] = {
    StarType.RED_DWARF: 0xFF4422,
    StarType.ORANGE: 0xFF8833,
    StarType.YELLOW: 0xFFEE44,
    StarType.WHITE: 0xEEEEFF,
    StarType.BLUE_GIANT: 0x4488FF,
    StarType.RED_GIANT: 0xFF3311,
    StarType.NEUTRON: 0xAADDFF,
}

STAR_SCALES: dict[StarType, float] = {
    StarType.RED_DWARF: 0.6,
    StarType.ORANGE: 0.8,
    StarType.YELLOW: 1.0,
    StarType.WHITE: 1.1,
    StarType.BLUE_GIANT: 1.8,
    StarType.RED_GIANT: 1.6,
    StarType.NEUTRON: 0.4,
}

MIN_PLANETS_PER_STAR = 1
MAX_PLANETS_PER_STAR = 5
SPECIAL_RESOURCE_CHANCE = 0.1

# -- colonies & economy -------------------------------------------------------

STARTING_POPULATION = 2.0
BASE_POPULATION_GROWTH = 0.02
BASE_FOOD_PER_FARMER = 2.0
BASE_PRODUCTION_PER_WORKER = 1.0
BASE_RESEARCH_PER_SCIENTIST = 1.0
MAX_POPULATION_BASE = 10
MIN_MAX_POPULATION = 3
MORALE_NEUTRAL = 50
MORALE_MIN = 0
MORALE_MAX = 100
STARVATION_MORALE_PENALTY = 5
BANKRUPTCY_MORALE_PENALTY = 3
BASE_COLONY_INCOME = 5.0
CREDITS_PER_POP = 0.5
SHIP_MAINTENANCE_MULTIPLIER = 0.5
BUILDING_MAINTENANCE = 1
RUSH_COST_PER_PRODUCTION = 2

STARTING_CREDITS = 50

# Computer-player starting credits by difficulty.
AI_STARTING_CREDITS: dict[Difficulty, int] = {
    Difficulty.EASY: 25,
    Difficulty.NORMAL: 50,
    Difficulty.HARD: 100,
    Difficulty.IMPOSSIBLE: 200,
}

# -- movement & combat --------------------------------------------------------

BASE_FLEET_SPEED = 1.0
COMBAT_MAX_ROUNDS = 50
COMBAT_DAMAGE_MIN_ROLL = 0.5
COMBAT_DAMAGE_MAX_ROLL = 1.0
FOG_OF_WAR_REVEAL_HOPS = 2

# -- diplomacy ----------------------------------------------------------------

REPUTATION_MIN = -100
REPUTATION_MAX = 100
REPUTATION_DECAY_PER_TURN = 1
PROPOSAL_EXPIRY_TURNS = 5
TRADE_TREATY_INCOME = 3
TRIBUTE_REPUTATION_THRESHOLD = 20
TRIBUTE_OFFER_AMOUNT = 25

# -- victory ------------------------------------------------------------------

SCORE_VICTORY_TURN = 500
COUNCIL_VOTE_INTERVAL = 25
COUNCIL_VOTE_THRESHOLD = 0.667
COUNCIL_VOTE_REPUTATION = 50

# -- players ------------------------------------------------------------------

MIN_PLAYERS = 2
MAX_PLAYERS = 8

PLAYER_COLORS: list[int] = [
    0x4488FF,
    0xFF4444,
    0x44FF44,
    0xFFAA00,
    0xFF44FF,
    0x44FFFF,
    0xFFFF44,
    0xAA44FF,
]
