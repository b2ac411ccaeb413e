"""Tests for new-game setup, session commands, determinism and snapshots."""

import json

import pytest

from blacktimes.ir.components import HullSize
from blacktimes.sim.core.enums import DiplomacyStatus, GalaxyShape, GalaxySize
from blacktimes.sim.core.game_state import GameConfig
from blacktimes.sim.events import ColonyFounded, TurnCompleted
from blacktimes.sim.session import GameSession


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_session(registry, seed: int = 7, players: int = 3) -> GameSession:
    config = GameConfig(
        seed=seed,
        player_count=players,
        galaxy_size=GalaxySize.SMALL,
        galaxy_shape=GalaxyShape.ELLIPTICAL,
    )
    return GameSession.new_game(config, registry)


def _canonical(session: GameSession) -> str:
    return json.dumps(session.snapshot(), sort_keys=True)


def _free_planet_id(session: GameSession) -> str:
    return next(p.id for p in session.state.planets.values() if p.colony_id is None)


# ---------------------------------------------------------------------------
# New game
# ---------------------------------------------------------------------------

class TestNewGame:
    def test_players_seated(self, registry):
        session = _make_session(registry)
        players = list(session.state.players.values())
        assert len(players) == 3
        assert not players[0].is_computer
        assert all(p.is_computer for p in players[1:])
        assert session.human_player_id == players[0].id

    def test_every_player_has_a_home(self, registry):
        state = _make_session(registry).state
        homes = set()
        for player in state.players.values():
            assert len(player.colony_ids) == 1
            star = state.stars[player.home_star_id]
            assert star.owner_id == player.id
            assert star.is_explored_by(player.id)
            homes.add(player.home_star_id)
        assert len(homes) == 3

    def test_home_colony_name(self, registry):
        state = _make_session(registry).state
        human = next(iter(state.players.values()))
        colony = state.colonies[human.colony_ids[0]]
        assert colony.name == f"{state.stars[human.home_star_id].name} Prime"
        assert colony.population == 2.0

    def test_starting_fleet_and_designs(self, registry):
        state = _make_session(registry).state
        for player in state.players.values():
            assert sorted(d.name for d in state.player_designs(player.id)) == [
                "Colony Ship", "Fighter", "Scout",
            ]
            fleets = state.player_fleets(player.id)
            assert len(fleets) == 1
            assert len(fleets[0].ship_ids) == 3
            assert fleets[0].star_id == player.home_star_id

    def test_computer_races_and_names(self, registry):
        state = _make_session(registry).state
        human, *computers = state.players.values()
        assert human.race_id == "humans"
        races = [p.race_id for p in computers]
        assert "humans" not in races
        assert len(set(races)) == len(races)
        for player in computers:
            assert player.name == registry.get_race(player.race_id).name

    def test_starting_credits_by_difficulty(self, registry):
        state = _make_session(registry).state
        human, *computers = state.players.values()
        assert human.credits == 50
        assert all(p.credits == 50 for p in computers)

    def test_relations_start_unknown(self, registry):
        state = _make_session(registry).state
        assert len(state.diplomacy) == 3
        assert all(rel.status == DiplomacyStatus.UNKNOWN for rel in state.diplomacy)

    def test_computer_seats_get_agents(self, registry):
        session = _make_session(registry)
        computer_ids = [p.id for p in session.state.players.values() if p.is_computer]
        assert sorted(session.pipeline.agents) == sorted(computer_ids)

    def test_same_seed_same_galaxy(self, registry):
        assert _canonical(_make_session(registry)) == _canonical(_make_session(registry))

    def test_different_seed_different_galaxy(self, registry):
        assert _canonical(_make_session(registry, seed=1)) != _canonical(_make_session(registry, seed=2))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class TestCommands:
    def test_found_colony_emits_event(self, registry):
        session = _make_session(registry)
        planet_id = _free_planet_id(session)
        colony = session.found_colony(planet_id, session.human_player_id)
        assert colony is not None
        assert colony.name == session.state.planets[planet_id].name
        events = session.events.of_type(ColonyFounded)
        assert [e.colony_id for e in events] == [colony.id]

    def test_found_colony_rejects_colonized_planet(self, registry):
        session = _make_session(registry)
        human = session.state.players[session.human_player_id]
        home = session.state.colonies[human.colony_ids[0]]
        assert session.found_colony(home.planet_id, human.id) is None

    def test_found_colony_unknown_player(self, registry):
        session = _make_session(registry)
        assert session.found_colony(_free_planet_id(session), "player_99") is None

    def test_create_design_requires_unlocked_parts(self, registry):
        session = _make_session(registry)
        pid = session.human_player_id
        assert session.create_design(pid, "Lancer", HullSize.FIGHTER, ["comp_weapon_gatling"]) is None
        session.state.players[pid].known_tech_ids.append("tech_gatling_laser")
        design = session.create_design(
            pid, "Lancer", HullSize.FIGHTER, ["comp_weapon_gatling"],
            armor_id="comp_armor_titanium",
        )
        assert design is not None
        assert design.armor_id == "comp_armor_titanium"

    def test_found_colony_eliminated_player(self, registry):
        session = _make_session(registry)
        pid = session.human_player_id
        session.state.players[pid].alive = False
        assert session.found_colony(_free_planet_id(session), pid) is None

    def test_create_design_unknown_hull(self, registry):
        session = _make_session(registry)
        assert session.create_design(session.human_player_id, "X", "BOGUS", []) is None

    def test_unknown_diplomacy_kinds(self, registry):
        session = _make_session(registry)
        human, computer = list(session.state.players)[:2]
        assert session.send_message(human, computer, "bogus") is None
        assert session.propose_treaty(human, computer, "bogus") is None
        assert session.state.get_relation(human, computer).pending_proposals == []

    def test_commands_on_unknown_ids(self, registry):
        session = _make_session(registry)
        assert not session.set_destination("fleet_missing", "star_1")
        assert not session.set_workers("colony_missing", 1, 1, 0)
        assert not session.remove_from_build_queue("colony_missing", 0)
        assert session.enqueue_building("colony_missing", "factory") is None
        assert not session.select_research("player_99", "tech_laser")

    def test_end_turn(self, registry):
        session = _make_session(registry)
        events = session.end_turn()
        assert session.turn == 2
        assert isinstance(events[-1], TurnCompleted)
        assert session.state.rng_state == session.state.rng.get_state()


# ---------------------------------------------------------------------------
# Determinism and snapshots
# ---------------------------------------------------------------------------

class TestReplay:
    @pytest.mark.parametrize("seed", [3, 11])
    def test_identical_runs(self, registry, seed):
        a = _make_session(registry, seed=seed)
        b = _make_session(registry, seed=seed)
        for _ in range(15):
            a.end_turn()
            b.end_turn()
        assert _canonical(a) == _canonical(b)

    def test_snapshot_restore_continues_identically(self, registry):
        live = _make_session(registry, seed=5)
        for _ in range(5):
            live.end_turn()

        restored = GameSession.from_snapshot(json.loads(json.dumps(live.snapshot())))
        assert restored.turn == live.turn
        assert len(restored.events) == 0

        for _ in range(5):
            live.end_turn()
            restored.end_turn()
        assert _canonical(restored) == _canonical(live)

    def test_snapshot_is_json_ready(self, registry):
        session = _make_session(registry)
        data = session.snapshot()
        assert json.loads(json.dumps(data)) == data
        assert "rng" not in data
        assert data["rng_state"] == session.state.rng.get_state()
