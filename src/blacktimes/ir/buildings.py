"""Colony building definitions and their output effects.

Each building kind maps to a :class:`BuildingDefinition` whose effects
are plain descriptors (target output + additive or multiplicative
bonus).  The colony service evaluates them with one generic function;
nothing here is executable.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class BuildingKind(str, Enum):
    FACTORY = "factory"
    FARM = "farm"
    LAB = "lab"
    MARKET = "market"
    AUTOMATED_FACTORY = "automated_factory"
    HYDROPONIC_FARM = "hydroponic_farm"
    RESEARCH_LAB = "research_lab"
    TRADE_HUB = "trade_hub"
    PLANETARY_SHIELD = "planetary_shield"
    STARBASE = "starbase"
    TERRAFORMER = "terraformer"
    CLONING_CENTER = "cloning_center"


class EffectTarget(str, Enum):
    """Colony quantity a building effect modifies."""

    FOOD = "food"
    PRODUCTION = "production"
    RESEARCH = "research"
    CREDITS = "credits"
    GROWTH = "growth"


class EffectMode(str, Enum):
    ADD = "add"
    MULTIPLY = "multiply"


class BuildingEffect(BaseModel):
    target: EffectTarget
    mode: EffectMode
    value: float


class BuildingDefinition(BaseModel):
    """Static description of one building kind."""

    kind: BuildingKind
    name: str
    cost: int
    """Production needed to complete it from the build queue."""

    maintenance: int = 1
    effects: list[BuildingEffect] = Field(default_factory=list)
    required_tech: str | None = None
    """Technology id that must be known before it can be queued."""

    unique: bool = True
    """At most one per colony (counting queued items)."""


def _add(target: EffectTarget, value: float) -> BuildingEffect:
    return BuildingEffect(target=target, mode=EffectMode.ADD, value=value)


def _mul(target: EffectTarget, value: float) -> BuildingEffect:
    return BuildingEffect(target=target, mode=EffectMode.MULTIPLY, value=value)


BUILDINGS: dict[BuildingKind, BuildingDefinition] = {
    BuildingKind.FACTORY: BuildingDefinition(
        kind=BuildingKind.FACTORY, name="Factory", cost=60,
        effects=[_add(EffectTarget.PRODUCTION, 5)],
    ),
    BuildingKind.FARM: BuildingDefinition(
        kind=BuildingKind.FARM, name="Farm", cost=40,
        effects=[_add(EffectTarget.FOOD, 3)],
    ),
    BuildingKind.LAB: BuildingDefinition(
        kind=BuildingKind.LAB, name="Research Lab", cost=80,
        effects=[_add(EffectTarget.RESEARCH, 3)],
    ),
    BuildingKind.MARKET: BuildingDefinition(
        kind=BuildingKind.MARKET, name="Marketplace", cost=50,
        effects=[_add(EffectTarget.CREDITS, 5)],
    ),
    BuildingKind.AUTOMATED_FACTORY: BuildingDefinition(
        kind=BuildingKind.AUTOMATED_FACTORY, name="Automated Factory", cost=150,
        effects=[_mul(EffectTarget.PRODUCTION, 1.3)],
        required_tech="tech_automated_factory",
    ),
    BuildingKind.HYDROPONIC_FARM: BuildingDefinition(
        kind=BuildingKind.HYDROPONIC_FARM, name="Hydroponic Farm", cost=120,
        effects=[_mul(EffectTarget.FOOD, 1.25)],
        required_tech="tech_soil_enrichment",
    ),
    BuildingKind.RESEARCH_LAB: BuildingDefinition(
        kind=BuildingKind.RESEARCH_LAB, name="Advanced Lab", cost=200,
        effects=[_mul(EffectTarget.RESEARCH, 1.3)],
    ),
    BuildingKind.TRADE_HUB: BuildingDefinition(
        kind=BuildingKind.TRADE_HUB, name="Trade Hub", cost=180,
        effects=[_mul(EffectTarget.CREDITS, 1.5)],
    ),
    BuildingKind.PLANETARY_SHIELD: BuildingDefinition(
        kind=BuildingKind.PLANETARY_SHIELD, name="Planetary Shield", cost=300,
        required_tech="tech_planetary_shield",
    ),
    BuildingKind.STARBASE: BuildingDefinition(
        kind=BuildingKind.STARBASE, name="Starbase", cost=250,
    ),
    BuildingKind.TERRAFORMER: BuildingDefinition(
        kind=BuildingKind.TERRAFORMER, name="Terraformer", cost=400,
        required_tech="tech_eco_restoration",
    ),
    BuildingKind.CLONING_CENTER: BuildingDefinition(
        kind=BuildingKind.CLONING_CENTER, name="Cloning Center", cost=250,
        effects=[_mul(EffectTarget.GROWTH, 1.5)],
        required_tech="tech_advanced_cloning",
    ),
}


def get_building(kind: str | BuildingKind) -> BuildingDefinition | None:
    """Look up a building definition by kind or raw id; ``None`` if unknown."""
    try:
        return BUILDINGS[BuildingKind(kind)]
    except ValueError:
        return None
