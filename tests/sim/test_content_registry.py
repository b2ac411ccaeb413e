"""Tests for loading the bundled content catalogs."""

import json

import pytest
from pydantic import ValidationError

from blacktimes.ir.components import ComponentType
from blacktimes.ir.technologies import TechCategory
from blacktimes.sim.content.registry import ContentRegistry


class TestBundledContent:
    def test_catalog_sizes(self, registry):
        assert len(registry.technologies) == 30
        assert len(registry.components) == 22
        assert len(registry.races) == 8

    def test_prerequisites_resolve(self, registry):
        for tech in registry.technologies.values():
            for prereq in tech.prerequisite_ids:
                assert prereq in registry.technologies

    def test_five_levels_per_category(self, registry):
        for category in TechCategory:
            levels = [t.level for t in registry.techs_in_category(category)]
            assert levels == [1, 2, 3, 4, 5]

    def test_lookups(self, registry):
        assert registry.get_technology("tech_laser").research_cost == 80
        assert registry.get_component("comp_engine_1").type == ComponentType.ENGINE
        assert registry.get_race("humans") is not None
        assert registry.get_technology("tech_nope") is None
        assert registry.get_race("nope") is None

    def test_components_of_type(self, registry):
        engines = registry.components_of_type(ComponentType.ENGINE)
        assert len(engines) == 5


class TestLoadingErrors:
    def test_invalid_file_is_not_half_loaded(self, tmp_path):
        good = {
            "id": "comp_armor_test", "name": "Test Plate", "type": "armor",
            "space": 1, "cost": 1, "tech_level": 0, "stats": {"armor_hp": 1},
        }
        bad = dict(good, id="comp_armor_bad", type="teleporter")
        path = tmp_path / "components.json"
        path.write_text(json.dumps([good, bad]))

        registry = ContentRegistry()
        with pytest.raises(ValidationError):
            registry.load_components(path)
        assert registry.components == {}

    def test_custom_path(self, tmp_path):
        path = tmp_path / "races.json"
        path.write_text(json.dumps([
            {"id": "testers", "name": "The Testers", "homeworld_type": "TERRAN"},
        ]))
        registry = ContentRegistry()
        registry.load_races(path)
        assert registry.list_race_ids() == ["testers"]
