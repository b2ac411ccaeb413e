"""Playable race definitions."""

from __future__ import annotations

from pydantic import BaseModel

from blacktimes.sim.core.enums import PlanetType


class RaceDefinition(BaseModel):
    """A playable race: its display name and preferred homeworld type."""

    id: str
    name: str
    homeworld_type: PlanetType
    description: str = ""
