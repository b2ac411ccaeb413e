"""Behavioural profiles for computer-controlled empires.

A profile is five traits in [0, 1] plus the pool of greeting lines the
empire uses on first contact.  Races map to profiles through a fixed
lookup; unmapped races get the balanced profile.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class Personality(BaseModel):
    id: str
    aggressiveness: float
    expansionism: float
    technophilia: float
    diplomacy_openness: float
    economy_focus: float
    greetings: list[str] = Field(default_factory=list)
    """Templates; ``{sender}`` and ``{target}`` are replaced by empire names."""

    @field_validator(
        "aggressiveness", "expansionism", "technophilia",
        "diplomacy_openness", "economy_focus",
    )
    @classmethod
    def _trait_in_unit_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"personality traits must be within [0, 1], got {v}")
        return v


PERSONALITIES: dict[str, Personality] = {
    "warmonger": Personality(
        id="warmonger",
        aggressiveness=0.9, expansionism=0.7, technophilia=0.3,
        diplomacy_openness=0.1, economy_focus=0.4,
        greetings=[
            "{sender} acknowledges {target}. Keep your ships away from our borders.",
            "So, {target} crawls out of the dark. {sender} is watching.",
            "The fleets of {sender} have seen your kind, {target}. Choose your next move carefully.",
        ],
    ),
    "diplomat": Personality(
        id="diplomat",
        aggressiveness=0.2, expansionism=0.5, technophilia=0.5,
        diplomacy_openness=0.9, economy_focus=0.6,
        greetings=[
            "Greetings, {target}. {sender} welcomes you to the community of the stars.",
            "{sender} extends its hand in friendship to {target}.",
            "Well met, {target}. May our peoples prosper together.",
        ],
    ),
    "scientist": Personality(
        id="scientist",
        aggressiveness=0.2, expansionism=0.4, technophilia=0.9,
        diplomacy_openness=0.6, economy_focus=0.5,
        greetings=[
            "Fascinating. {sender} records first contact with {target}.",
            "{target}, {sender} is eager to compare our understanding of the cosmos.",
        ],
    ),
    "balanced": Personality(
        id="balanced",
        aggressiveness=0.5, expansionism=0.5, technophilia=0.5,
        diplomacy_openness=0.5, economy_focus=0.5,
        greetings=[
            "Greetings from {sender}, {target}.",
            "{sender} notes your arrival, {target}. We hope for good relations.",
        ],
    ),
    "expansionist": Personality(
        id="expansionist",
        aggressiveness=0.5, expansionism=0.9, technophilia=0.4,
        diplomacy_openness=0.3, economy_focus=0.7,
        greetings=[
            "{sender} has claimed many worlds, {target}. There is room for both of us, for now.",
            "Our borders meet, {target}. {sender} suggests we respect them.",
        ],
    ),
}

DEFAULT_PERSONALITY = "balanced"

RACE_PERSONALITIES: dict[str, str] = {
    "humans": "balanced",
    "vekthari": "warmonger",
    "solari": "scientist",
    "draath": "diplomat",
    "krellax": "expansionist",
    "nethari": "balanced",
    "ashenn": "scientist",
    "gorathi": "expansionist",
}


def personality_for_race(race_id: str) -> Personality:
    return PERSONALITIES[RACE_PERSONALITIES.get(race_id, DEFAULT_PERSONALITY)]


def most_hostile_personality() -> Personality:
    """The profile with the highest aggressiveness."""
    return max(PERSONALITIES.values(), key=lambda p: p.aggressiveness)
