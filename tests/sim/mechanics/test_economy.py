"""Tests for income, upkeep and bankruptcy."""

import pytest

from blacktimes.sim.mechanics.colony import found_colony
from blacktimes.sim.mechanics.economy import (
    building_maintenance,
    player_income,
    process_player_economy,
    ship_maintenance,
)
from blacktimes.sim.mechanics.ship_design import create_default_designs, find_design, spawn_ship


class TestIncome:
    def test_colony_income(self, world):
        found_colony(world, "s1_p", "p1", "Home")
        report = player_income(world, "p1")
        # 5 base + 2 pop * 0.5
        assert report.income == pytest.approx(6.0)
        assert report.maintenance == 0.0

    def test_unknown_player(self, world):
        report = player_income(world, "ghost")
        assert report.net == 0.0

    def test_building_upkeep(self, world):
        colony = found_colony(world, "s1_p", "p1", "Home")
        colony.buildings.extend(["factory", "farm"])
        assert building_maintenance(world, world.players["p1"]) == 2.0

    def test_ship_upkeep(self, world):
        create_default_designs(world, "p1")
        fighter = find_design(world, "p1", "Fighter")
        spawn_ship(world, fighter.id, "p1", "s1")
        spawn_ship(world, fighter.id, "p1", "s1")
        expected = 2 * fighter.cost * 0.5 * 0.01
        assert ship_maintenance(world, world.players["p1"]) == pytest.approx(expected)


class TestProcessEconomy:
    def test_net_added_to_treasury(self, world):
        found_colony(world, "s1_p", "p1", "Home")
        process_player_economy(world, world.players["p1"])
        assert world.players["p1"].credits == pytest.approx(56.0)

    def test_bankruptcy_hurts_morale(self, world):
        colony = found_colony(world, "s1_p", "p1", "Home")
        colony.buildings.extend(["factory", "farm", "lab", "market"])
        colony.credits_output = 0.0
        world.players["p1"].credits = -10
        process_player_economy(world, world.players["p1"])
        assert world.players["p1"].credits < 0
        assert colony.morale == 47

    def test_solvent_keeps_morale(self, world):
        colony = found_colony(world, "s1_p", "p1", "Home")
        process_player_economy(world, world.players["p1"])
        assert colony.morale == 50
