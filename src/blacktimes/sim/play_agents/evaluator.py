"""Scoring helpers used by the computer player."""

from __future__ import annotations

from blacktimes.ir.personalities import Personality
from blacktimes.ir.technologies import TechCategory, Technology

# Techs that unlock something concrete score this much higher.
UNLOCK_BONUS = 1.3
COST_SCALE = 500


def category_weight(category: TechCategory, personality: Personality) -> float:
    if category == TechCategory.WEAPONS:
        return personality.aggressiveness
    if category == TechCategory.FORCE_FIELDS:
        return personality.aggressiveness * 0.8
    if category == TechCategory.PROPULSION:
        return personality.expansionism * 0.8
    if category == TechCategory.PLANETOLOGY:
        return personality.expansionism * 0.6 + personality.economy_focus * 0.4
    if category == TechCategory.CONSTRUCTION:
        return personality.economy_focus
    if category == TechCategory.COMPUTERS:
        return personality.technophilia
    return 0.5


def score_tech(tech: Technology, personality: Personality) -> float:
    """Desirability of *tech*: favoured categories, cheap and low-level first."""
    score = 10.0 * (1 + category_weight(tech.category, personality))
    score *= 1 / (1 + tech.research_cost / COST_SCALE)
    if tech.unlocks:
        score *= UNLOCK_BONUS
    score *= 1 / tech.level
    return score


def rank_techs(techs: list[Technology], personality: Personality) -> list[Technology]:
    """Sort best first.  Equal scores keep catalog order."""
    return sorted(techs, key=lambda t: score_tech(t, personality), reverse=True)
