"""Content registry -- loads and serves technologies, ship components and
races for the simulation.

Content ships as JSON files in ``blacktimes/data/``.  Validation errors
in a content file propagate as :class:`pydantic.ValidationError`; a
content file is never half-loaded.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from blacktimes.ir.components import ComponentType, ShipComponent
from blacktimes.ir.races import RaceDefinition
from blacktimes.ir.technologies import TechCategory, Technology

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parents[2] / "data"  # src/blacktimes/sim/content -> src/blacktimes
_DEFAULT_TECHNOLOGIES_PATH = _DATA_DIR / "technologies.json"
_DEFAULT_COMPONENTS_PATH = _DATA_DIR / "components.json"
_DEFAULT_RACES_PATH = _DATA_DIR / "races.json"


def _read_json_list(path: Path) -> list[dict[str, Any]]:
    with open(path) as f:
        raw: list[dict[str, Any]] = json.load(f)
    return raw


class ContentRegistry:
    """Loads and serves the fixed game catalogs.

    Usage::

        registry = ContentRegistry()
        registry.load_all()

        tech = registry.get_technology("tech_laser")
        engine = registry.get_component("comp_engine_1")
    """

    def __init__(self) -> None:
        self.technologies: dict[str, Technology] = {}
        self.components: dict[str, ShipComponent] = {}
        self.races: dict[str, RaceDefinition] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(self) -> None:
        """Load every bundled catalog from the default locations."""
        self.load_technologies()
        self.load_components()
        self.load_races()

    def load_technologies(self, path: str | Path | None = None) -> None:
        """Load the technology tree from a JSON file.

        Parameters
        ----------
        path:
            Path to the JSON file.  Defaults to the bundled
            ``technologies.json``.
        """
        path = Path(path) if path is not None else _DEFAULT_TECHNOLOGIES_PATH
        techs = [Technology.model_validate(raw) for raw in _read_json_list(path)]

        known = {t.id for t in techs}
        for tech in techs:
            missing = [p for p in tech.prerequisite_ids if p not in known]
            if missing:
                logger.warning(
                    "Technology %s references unknown prerequisites %s",
                    tech.id, missing,
                )
            self.technologies[tech.id] = tech
        logger.debug("Loaded %d technologies from %s", len(techs), path)

    def load_components(self, path: str | Path | None = None) -> None:
        """Load ship components from a JSON file."""
        path = Path(path) if path is not None else _DEFAULT_COMPONENTS_PATH
        comps = [ShipComponent.model_validate(raw) for raw in _read_json_list(path)]
        for comp in comps:
            self.components[comp.id] = comp

    def load_races(self, path: str | Path | None = None) -> None:
        """Load playable races from a JSON file."""
        path = Path(path) if path is not None else _DEFAULT_RACES_PATH
        races = [RaceDefinition.model_validate(raw) for raw in _read_json_list(path)]
        for race in races:
            self.races[race.id] = race

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_technology(self, tech_id: str) -> Technology | None:
        return self.technologies.get(tech_id)

    def get_component(self, component_id: str) -> ShipComponent | None:
        return self.components.get(component_id)

    def get_race(self, race_id: str) -> RaceDefinition | None:
        return self.races.get(race_id)

    def list_race_ids(self) -> list[str]:
        return list(self.races)

    def components_of_type(self, comp_type: ComponentType) -> list[ShipComponent]:
        return [c for c in self.components.values() if c.type == comp_type]

    def techs_in_category(self, category: TechCategory) -> list[Technology]:
        """Technologies of one category, ordered by level."""
        return sorted(
            (t for t in self.technologies.values() if t.category == category),
            key=lambda t: t.level,
        )
