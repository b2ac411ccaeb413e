"""Tests for contact, treaties, war, messages and reputation upkeep."""

import pytest

from blacktimes.sim.core.enums import DiplomacyStatus, MessageType, ProposalType
from blacktimes.sim.mechanics.diplomacy import (
    accept_proposal,
    adjust_reputation,
    declare_war,
    detect_contacts,
    make_contact,
    pending_proposals_for,
    process_turn,
    propose_peace,
    propose_treaty,
    reject_proposal,
    send_message,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _relation(world):
    return world.get_relation("p1", "p2")


def _make_contacted(world, reputation: int = 0):
    make_contact(world, "p1", "p2")
    rel = _relation(world)
    rel.reputation = reputation
    return rel


# ---------------------------------------------------------------------------
# Contact
# ---------------------------------------------------------------------------

class TestContact:
    def test_first_contact_sets_neutral(self, world):
        assert make_contact(world, "p1", "p2")
        rel = _relation(world)
        assert rel.contacted
        assert rel.status == DiplomacyStatus.NEUTRAL
        assert rel.contact_turn == world.turn

    def test_only_once(self, world):
        make_contact(world, "p1", "p2")
        assert not make_contact(world, "p2", "p1")

    def test_computer_player_greets(self, world):
        make_contact(world, "p1", "p2")
        greeting = _relation(world).messages[0]
        assert greeting.from_player_id == "p2"
        assert greeting.type == MessageType.GREETING
        # solari speak with the scientist pool; turn 1 picks its second line
        assert greeting.text == (
            "Terran Union, Solari is eager to compare our understanding of the cosmos."
        )

    def test_detect_contact_through_explored_star(self, world):
        world.stars["s2"].owner_id = "p2"
        assert detect_contacts(world) == []
        world.stars["s2"].explored["p1"] = True
        assert detect_contacts(world) == [("p1", "p2")]
        assert detect_contacts(world) == []

    def test_dead_players_make_no_contact(self, world):
        world.stars["s2"].owner_id = "p2"
        world.stars["s2"].explored["p1"] = True
        world.players["p2"].alive = False
        assert detect_contacts(world) == []


# ---------------------------------------------------------------------------
# War and peace
# ---------------------------------------------------------------------------

class TestWarAndPeace:
    def test_war_needs_contact(self, world):
        assert not declare_war(world, "p1", "p2")
        assert _relation(world).status == DiplomacyStatus.UNKNOWN

    def test_declare_war(self, world):
        rel = _make_contacted(world)
        propose_treaty(world, "p1", "p2", ProposalType.TRADE)
        assert declare_war(world, "p1", "p2")
        assert rel.status == DiplomacyStatus.WAR
        assert rel.reputation == -40
        assert rel.pending_proposals == []
        assert not declare_war(world, "p2", "p1")

    def test_war_from_treaty_clears_treaties(self, world):
        rel = _make_contacted(world)
        accept_proposal(world, propose_treaty(world, "p1", "p2", ProposalType.ALLIANCE))
        assert rel.treaties
        declare_war(world, "p2", "p1")
        assert rel.treaties == []

    def test_peace_restores_neutral(self, world):
        rel = _make_contacted(world)
        declare_war(world, "p1", "p2")
        proposal = propose_peace(world, "p2", "p1")
        assert proposal is not None
        assert propose_peace(world, "p2", "p1") is None
        assert pending_proposals_for(world, "p1") == [proposal]

        assert accept_proposal(world, proposal)
        assert rel.status == DiplomacyStatus.NEUTRAL
        assert rel.reputation == -30

    def test_peace_only_at_war(self, world):
        _make_contacted(world)
        assert propose_peace(world, "p1", "p2") is None
        assert propose_treaty(world, "p1", "p2", ProposalType.PEACE) is None


# ---------------------------------------------------------------------------
# Treaties
# ---------------------------------------------------------------------------

class TestTreaties:
    @pytest.mark.parametrize(
        "ptype, status, bonus",
        [
            (ProposalType.NON_AGGRESSION, DiplomacyStatus.NON_AGGRESSION, 5),
            (ProposalType.TRADE, DiplomacyStatus.TRADE, 10),
            (ProposalType.ALLIANCE, DiplomacyStatus.ALLIANCE, 20),
        ],
    )
    def test_accept_sets_status(self, world, ptype, status, bonus):
        rel = _make_contacted(world)
        assert accept_proposal(world, propose_treaty(world, "p1", "p2", ptype))
        assert rel.status == status
        assert rel.has_treaty(ptype)
        assert rel.reputation == bonus

    def test_no_treaty_before_contact_or_at_war(self, world):
        assert propose_treaty(world, "p1", "p2", ProposalType.TRADE) is None
        _make_contacted(world)
        declare_war(world, "p1", "p2")
        assert propose_treaty(world, "p1", "p2", ProposalType.TRADE) is None

    def test_no_duplicate_or_redundant_proposal(self, world):
        _make_contacted(world)
        proposal = propose_treaty(world, "p1", "p2", ProposalType.TRADE)
        assert propose_treaty(world, "p1", "p2", ProposalType.TRADE) is None
        accept_proposal(world, proposal)
        assert propose_treaty(world, "p1", "p2", ProposalType.TRADE) is None

    def test_reject_costs_reputation(self, world):
        rel = _make_contacted(world)
        proposal = propose_treaty(world, "p1", "p2", ProposalType.TRADE)
        assert reject_proposal(world, proposal)
        assert rel.reputation == -5
        assert not reject_proposal(world, proposal)
        assert rel.status == DiplomacyStatus.NEUTRAL


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

class TestMessages:
    @pytest.mark.parametrize(
        "mtype, delta",
        [
            (MessageType.GREETING, 2),
            (MessageType.PRAISE, 5),
            (MessageType.THREAT, -10),
            (MessageType.INSULT, -15),
            (MessageType.FAREWELL, 0),
        ],
    )
    def test_reputation_messages(self, world, mtype, delta):
        rel = _make_contacted(world)
        message = send_message(world, "p1", "p2", mtype)
        assert message.type == mtype
        assert rel.reputation == delta
        assert rel.messages[-1] is message

    def test_message_makes_contact(self, world):
        send_message(world, "p1", "p2", MessageType.PRAISE)
        assert _relation(world).contacted

    def test_unknown_recipient(self, world):
        assert send_message(world, "p1", "ghost", MessageType.PRAISE) is None

    def test_demand_tribute_refused_below_threshold(self, world):
        rel = _make_contacted(world, reputation=10)
        message = send_message(world, "p1", "p2", MessageType.DEMAND_TRIBUTE)
        assert message.accepted is False
        assert rel.reputation == 0
        assert world.players["p1"].credits == 50
        assert world.players["p2"].credits == 50

    def test_demand_tribute_paid(self, world):
        rel = _make_contacted(world, reputation=60)
        world.players["p2"].credits = 100
        message = send_message(world, "p1", "p2", MessageType.DEMAND_TRIBUTE)
        assert message.accepted is True
        # floor(100 * 60 / 200)
        assert world.players["p2"].credits == 70
        assert world.players["p1"].credits == 80
        assert rel.reputation == 55

    def test_hostile_empires_never_pay(self, world):
        world.players["p2"].race_id = "vekthari"
        rel = _make_contacted(world, reputation=60)
        message = send_message(world, "p1", "p2", MessageType.DEMAND_TRIBUTE)
        assert message.accepted is False
        assert rel.reputation == 50

    def test_offer_tribute(self, world):
        rel = _make_contacted(world)
        message = send_message(world, "p1", "p2", MessageType.OFFER_TRIBUTE)
        assert message.accepted is True
        assert world.players["p1"].credits == 25
        assert world.players["p2"].credits == 75
        assert rel.reputation == 10

    def test_offer_tribute_without_funds(self, world):
        _make_contacted(world)
        world.players["p1"].credits = 10
        message = send_message(world, "p1", "p2", MessageType.OFFER_TRIBUTE)
        assert message.accepted is False
        assert world.players["p1"].credits == 10

    def test_trade_tech(self, world):
        rel = _make_contacted(world)
        world.players["p1"].known_tech_ids.append("tech_laser")
        message = send_message(world, "p1", "p2", MessageType.TRADE_TECH)
        assert message.accepted is True
        assert world.players["p2"].knows("tech_laser")
        assert rel.reputation == 8

    def test_trade_tech_nothing_to_share(self, world):
        _make_contacted(world)
        message = send_message(world, "p1", "p2", MessageType.TRADE_TECH)
        assert message.accepted is False


# ---------------------------------------------------------------------------
# Reputation bounds and per-turn processing
# ---------------------------------------------------------------------------

class TestReputation:
    def test_clamped_low(self, world):
        rel = _make_contacted(world, reputation=-95)
        send_message(world, "p1", "p2", MessageType.INSULT)
        assert rel.reputation == -100

    def test_clamped_high(self, world):
        rel = _make_contacted(world, reputation=95)
        adjust_reputation(rel, 20)
        assert rel.reputation == 100

    @pytest.mark.parametrize("start, expected", [(10, 9), (-10, -9), (0, 0)])
    def test_decay_toward_zero(self, world, start, expected):
        rel = _make_contacted(world, reputation=start)
        process_turn(world)
        assert rel.reputation == expected

    def test_trade_income(self, world):
        _make_contacted(world)
        accept_proposal(world, propose_treaty(world, "p1", "p2", ProposalType.TRADE))
        process_turn(world)
        assert world.players["p1"].credits == 53
        assert world.players["p2"].credits == 53

    def test_proposals_expire_after_five_turns(self, world):
        rel = _make_contacted(world)
        propose_treaty(world, "p1", "p2", ProposalType.TRADE)
        world.turn = 5
        process_turn(world)
        assert len(rel.pending_proposals) == 1
        world.turn = 6
        process_turn(world)
        assert rel.pending_proposals == []

    def test_process_turn_reports_contacts(self, world):
        world.stars["s1"].owner_id = "p1"
        world.stars["s1"].explored["p2"] = True
        assert process_turn(world) == [("p1", "p2")]
