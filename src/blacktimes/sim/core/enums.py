"""Enumerations shared by the world-state models and the services."""

from __future__ import annotations

from enum import Enum


class GalaxyShape(str, Enum):
    """Spatial distribution used when placing stars."""

    SPIRAL = "spiral"
    ELLIPTICAL = "elliptical"
    RING = "ring"


class GalaxySize(str, Enum):
    """Named size tier; maps to a target star count and radius."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"


class Difficulty(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    IMPOSSIBLE = "impossible"


class StarType(str, Enum):
    """The seven spectral classes a star can be generated as."""

    RED_DWARF = "RED_DWARF"
    ORANGE = "ORANGE"
    YELLOW = "YELLOW"
    WHITE = "WHITE"
    BLUE_GIANT = "BLUE_GIANT"
    RED_GIANT = "RED_GIANT"
    NEUTRON = "NEUTRON"


class PlanetType(str, Enum):
    TERRAN = "TERRAN"
    OCEAN = "OCEAN"
    ARID = "ARID"
    TUNDRA = "TUNDRA"
    DESERT = "DESERT"
    JUNGLE = "JUNGLE"
    VOLCANIC = "VOLCANIC"
    BARREN = "BARREN"
    TOXIC = "TOXIC"
    GAS_GIANT = "GAS_GIANT"


class SpecialResource(str, Enum):
    """Rare planetary feature; at most one per planet."""

    NONE = "NONE"
    GOLD_DEPOSITS = "GOLD_DEPOSITS"
    GEM_DEPOSITS = "GEM_DEPOSITS"
    ANCIENT_ARTIFACTS = "ANCIENT_ARTIFACTS"
    NATIVE_LIFE = "NATIVE_LIFE"


class BuildItemKind(str, Enum):
    BUILDING = "building"
    SHIP = "ship"


class DiplomacyStatus(str, Enum):
    """State of a relation between two players.

    ``UNKNOWN`` until first contact, then ``NEUTRAL``.  Treaties move a
    pair to one of the three treaty states; ``WAR`` is reachable from any
    contacted state and left only through an accepted peace proposal.
    """

    UNKNOWN = "UNKNOWN"
    NEUTRAL = "NEUTRAL"
    NON_AGGRESSION = "NON_AGGRESSION"
    TRADE = "TRADE"
    ALLIANCE = "ALLIANCE"
    WAR = "WAR"


class ProposalType(str, Enum):
    NON_AGGRESSION = "non_aggression"
    TRADE = "trade"
    ALLIANCE = "alliance"
    PEACE = "peace"


class MessageType(str, Enum):
    """Kinds of diplomatic message a player can send."""

    GREETING = "greeting"
    THREAT = "threat"
    PRAISE = "praise"
    DEMAND_TRIBUTE = "demand_tribute"
    OFFER_TRIBUTE = "offer_tribute"
    TRADE_TECH = "trade_tech"
    INSULT = "insult"
    FAREWELL = "farewell"


class VictoryType(str, Enum):
    CONQUEST = "conquest"
    TECHNOLOGICAL = "technological"
    DIPLOMATIC = "diplomatic"
    SCORE = "score"


class TurnPhase(str, Enum):
    """The eight pipeline phases, in execution order."""

    AI_PLANNING = "ai_planning"
    FLEET_MOVEMENT = "fleet_movement"
    COMBAT = "combat"
    COLONIES = "colonies"
    ECONOMY = "economy"
    RESEARCH = "research"
    DIPLOMACY = "diplomacy"
    VICTORY_CHECK = "victory_check"
