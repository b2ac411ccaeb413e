"""Diplomacy: contact, treaties, war and peace, messages and reputation.

Each unordered pair of players has one relation.  Its status starts at
``UNKNOWN``, becomes ``NEUTRAL`` on first contact and moves between the
treaty states through accepted proposals.  War may be declared from any
contacted state and ends only through an accepted peace proposal.

Reputation is clamped to [-100, 100] after every change and decays one
point toward zero each turn.
"""

from __future__ import annotations

import logging
import math

from blacktimes.ir.personalities import most_hostile_personality, personality_for_race
from blacktimes.sim.core.constants import (
    PROPOSAL_EXPIRY_TURNS,
    REPUTATION_DECAY_PER_TURN,
    REPUTATION_MAX,
    REPUTATION_MIN,
    TRADE_TREATY_INCOME,
    TRIBUTE_OFFER_AMOUNT,
    TRIBUTE_REPUTATION_THRESHOLD,
)
from blacktimes.sim.core.enums import DiplomacyStatus, MessageType, ProposalType
from blacktimes.sim.core.game_state import WorldState
from blacktimes.sim.core.relations import (
    DiplomacyMessage,
    DiplomacyRelation,
    Proposal,
    Treaty,
)
from blacktimes.sim.mechanics.research import can_research, grant_technology

logger = logging.getLogger(__name__)

WAR_DECLARATION_PENALTY = -40
REJECT_PENALTY = -5
TRIBUTE_DEMAND_COST = -5
TRIBUTE_REFUSAL_PENALTY = -10

_ACCEPT_BONUS: dict[ProposalType, int] = {
    ProposalType.PEACE: 10,
    ProposalType.NON_AGGRESSION: 5,
    ProposalType.TRADE: 10,
    ProposalType.ALLIANCE: 20,
}

_TREATY_STATUS: dict[ProposalType, DiplomacyStatus] = {
    ProposalType.NON_AGGRESSION: DiplomacyStatus.NON_AGGRESSION,
    ProposalType.TRADE: DiplomacyStatus.TRADE,
    ProposalType.ALLIANCE: DiplomacyStatus.ALLIANCE,
}

# Messages whose effect is a plain reputation change.
_MESSAGE_DELTA: dict[MessageType, int] = {
    MessageType.GREETING: 2,
    MessageType.PRAISE: 5,
    MessageType.THREAT: -10,
    MessageType.INSULT: -15,
    MessageType.FAREWELL: 0,
}

OFFER_TRIBUTE_BONUS = 10
TRADE_TECH_BONUS = 8

_MESSAGE_TEXT: dict[MessageType, str] = {
    MessageType.GREETING: "{sender} sends greetings to {target}.",
    MessageType.PRAISE: "{sender} admires the achievements of {target}.",
    MessageType.THREAT: "{sender} warns {target}: stay out of our space or face our fleets.",
    MessageType.INSULT: "{sender} has nothing but contempt for {target}.",
    MessageType.FAREWELL: "{sender} bids {target} farewell.",
    MessageType.DEMAND_TRIBUTE: "{sender} demands tribute from {target}.",
    MessageType.OFFER_TRIBUTE: "{sender} offers a gift of credits to {target}.",
    MessageType.TRADE_TECH: "{sender} offers to share its research with {target}.",
}


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

def init_relation(state: WorldState, a: str, b: str) -> DiplomacyRelation:
    """Return the relation for ``(a, b)``, creating an ``UNKNOWN`` one if needed."""
    existing = state.get_relation(a, b)
    if existing is not None:
        return existing
    rel = DiplomacyRelation(player1_id=a, player2_id=b)
    state.diplomacy.append(rel)
    return rel


def init_all_relations(state: WorldState) -> None:
    ids = list(state.players)
    for i in range(len(ids)):
        for j in range(i + 1, len(ids)):
            init_relation(state, ids[i], ids[j])


def adjust_reputation(rel: DiplomacyRelation, delta: int) -> None:
    rel.reputation = max(REPUTATION_MIN, min(REPUTATION_MAX, rel.reputation + delta))


def _empire_name(state: WorldState, player_id: str) -> str:
    player = state.players.get(player_id)
    return player.name if player is not None else player_id


def _format(state: WorldState, template: str, sender_id: str, target_id: str) -> str:
    return template.format(
        sender=_empire_name(state, sender_id),
        target=_empire_name(state, target_id),
    )


# ---------------------------------------------------------------------------
# Contact
# ---------------------------------------------------------------------------

def greeting_text(state: WorldState, sender_id: str, target_id: str) -> str:
    """First-contact greeting from the sender's profile pool.

    The line is chosen by ``turn mod pool size``, so the same turn
    always yields the same greeting.
    """
    sender = state.players.get(sender_id)
    race_id = sender.race_id if sender is not None else ""
    pool = personality_for_race(race_id).greetings
    if not pool:
        return _format(state, _MESSAGE_TEXT[MessageType.GREETING], sender_id, target_id)
    return _format(state, pool[state.turn % len(pool)], sender_id, target_id)


def make_contact(state: WorldState, a: str, b: str) -> bool:
    """Establish first contact between two players.

    Returns ``False`` when they were already in contact or either player
    is unknown.
    """
    if a not in state.players or b not in state.players or a == b:
        return False
    rel = init_relation(state, a, b)
    if rel.contacted:
        return False

    rel.contacted = True
    rel.contact_turn = state.turn
    rel.last_contact_turn = state.turn
    if rel.status == DiplomacyStatus.UNKNOWN:
        rel.status = DiplomacyStatus.NEUTRAL

    first, second = rel.player1_id, rel.player2_id
    if state.players[first].is_computer:
        sender, target = first, second
    elif state.players[second].is_computer:
        sender, target = second, first
    else:
        sender, target = first, second
    rel.messages.append(DiplomacyMessage(
        from_player_id=sender,
        to_player_id=target,
        type=MessageType.GREETING,
        text=greeting_text(state, sender, target),
        turn=state.turn,
    ))
    logger.debug("First contact between %s and %s on turn %d", a, b, state.turn)
    return True


def _has_presence(state: WorldState, observer_id: str, other_id: str) -> bool:
    """Whether *observer_id* has explored a star owned or visited by *other_id*."""
    for star in state.stars.values():
        if not star.is_explored_by(observer_id):
            continue
        if star.owner_id == other_id:
            return True
    for fleet in state.fleets.values():
        if fleet.player_id != other_id:
            continue
        star = state.stars.get(fleet.star_id)
        if star is not None and star.is_explored_by(observer_id):
            return True
    return False


def detect_contacts(state: WorldState) -> list[tuple[str, str]]:
    """Make contact for every living pair that can now see each other."""
    contacts: list[tuple[str, str]] = []
    for rel in state.diplomacy:
        if rel.contacted:
            continue
        p1 = state.players.get(rel.player1_id)
        p2 = state.players.get(rel.player2_id)
        if p1 is None or p2 is None or not (p1.alive and p2.alive):
            continue
        if _has_presence(state, p1.id, p2.id) or _has_presence(state, p2.id, p1.id):
            make_contact(state, p1.id, p2.id)
            contacts.append((p1.id, p2.id))
    return contacts


# ---------------------------------------------------------------------------
# War, peace and treaties
# ---------------------------------------------------------------------------

def declare_war(state: WorldState, aggressor_id: str, target_id: str) -> bool:
    """Go to war.  Needs prior contact; clears all treaties and proposals."""
    rel = state.get_relation(aggressor_id, target_id)
    if rel is None or rel.status in (DiplomacyStatus.UNKNOWN, DiplomacyStatus.WAR):
        return False
    rel.status = DiplomacyStatus.WAR
    rel.treaties = []
    rel.pending_proposals = []
    rel.last_contact_turn = state.turn
    adjust_reputation(rel, WAR_DECLARATION_PENALTY)
    logger.info("%s declared war on %s", aggressor_id, target_id)
    return True


def _has_pending(rel: DiplomacyRelation, from_id: str, ptype: ProposalType) -> bool:
    return any(p.from_player_id == from_id and p.type == ptype for p in rel.pending_proposals)


def propose_peace(state: WorldState, from_id: str, to_id: str) -> Proposal | None:
    rel = state.get_relation(from_id, to_id)
    if rel is None or rel.status != DiplomacyStatus.WAR:
        return None
    if _has_pending(rel, from_id, ProposalType.PEACE):
        return None
    proposal = Proposal(
        from_player_id=from_id, to_player_id=to_id,
        type=ProposalType.PEACE, turn=state.turn,
    )
    rel.pending_proposals.append(proposal)
    return proposal


def propose_treaty(
    state: WorldState,
    from_id: str,
    to_id: str,
    treaty_type: ProposalType,
) -> Proposal | None:
    """Offer a treaty.  Not possible at war, before contact, or twice."""
    try:
        treaty_type = ProposalType(treaty_type)
    except ValueError:
        return None
    if treaty_type == ProposalType.PEACE:
        return propose_peace(state, from_id, to_id)
    rel = state.get_relation(from_id, to_id)
    if rel is None or rel.status in (DiplomacyStatus.WAR, DiplomacyStatus.UNKNOWN):
        return None
    if rel.status == _TREATY_STATUS[treaty_type] or _has_pending(rel, from_id, treaty_type):
        return None
    proposal = Proposal(
        from_player_id=from_id, to_player_id=to_id,
        type=treaty_type, turn=state.turn,
    )
    rel.pending_proposals.append(proposal)
    return proposal


def pending_proposals_for(state: WorldState, player_id: str) -> list[Proposal]:
    """Proposals waiting for *player_id* to answer."""
    return [
        p for rel in state.diplomacy for p in rel.pending_proposals
        if p.to_player_id == player_id
    ]


def _take_proposal(state: WorldState, proposal: Proposal) -> DiplomacyRelation | None:
    rel = state.get_relation(proposal.from_player_id, proposal.to_player_id)
    if rel is None:
        return None
    for i, pending in enumerate(rel.pending_proposals):
        if (
            pending.from_player_id == proposal.from_player_id
            and pending.to_player_id == proposal.to_player_id
            and pending.type == proposal.type
        ):
            rel.pending_proposals.pop(i)
            return rel
    return None


def accept_proposal(state: WorldState, proposal: Proposal) -> bool:
    rel = _take_proposal(state, proposal)
    if rel is None:
        return False
    if proposal.type == ProposalType.PEACE:
        if rel.status != DiplomacyStatus.WAR:
            return False
        rel.status = DiplomacyStatus.NEUTRAL
    else:
        if rel.status == DiplomacyStatus.WAR:
            return False
        rel.status = _TREATY_STATUS[proposal.type]
        rel.treaties.append(Treaty(type=proposal.type, start_turn=state.turn))
    rel.last_contact_turn = state.turn
    adjust_reputation(rel, _ACCEPT_BONUS[proposal.type])
    logger.debug(
        "%s accepted %s from %s",
        proposal.to_player_id, proposal.type.value, proposal.from_player_id,
    )
    return True


def reject_proposal(state: WorldState, proposal: Proposal) -> bool:
    rel = _take_proposal(state, proposal)
    if rel is None:
        return False
    adjust_reputation(rel, REJECT_PENALTY)
    return True


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

def send_message(
    state: WorldState,
    from_id: str,
    to_id: str,
    message_type: MessageType,
) -> DiplomacyMessage | None:
    """Send a diplomatic message and apply its effect.

    Messaging an uncontacted player makes first contact.  Returns the
    recorded message, or ``None`` if either player is unknown.
    """
    try:
        message_type = MessageType(message_type)
    except ValueError:
        return None
    sender = state.players.get(from_id)
    target = state.players.get(to_id)
    if sender is None or target is None or from_id == to_id:
        return None

    rel = init_relation(state, from_id, to_id)
    if not rel.contacted:
        make_contact(state, from_id, to_id)

    message = DiplomacyMessage(
        from_player_id=from_id,
        to_player_id=to_id,
        type=message_type,
        text=_format(state, _MESSAGE_TEXT[message_type], from_id, to_id),
        turn=state.turn,
    )

    if message_type in _MESSAGE_DELTA:
        adjust_reputation(rel, _MESSAGE_DELTA[message_type])
    elif message_type == MessageType.DEMAND_TRIBUTE:
        _demand_tribute(state, rel, message)
    elif message_type == MessageType.OFFER_TRIBUTE:
        if sender.credits >= TRIBUTE_OFFER_AMOUNT:
            sender.credits -= TRIBUTE_OFFER_AMOUNT
            target.credits += TRIBUTE_OFFER_AMOUNT
            adjust_reputation(rel, OFFER_TRIBUTE_BONUS)
            message.accepted = True
            message.response_text = f"{target.name} gratefully accepts the gift."
        else:
            message.accepted = False
    elif message_type == MessageType.TRADE_TECH:
        gift = next(
            (
                tid for tid in sender.known_tech_ids
                if can_research(state, to_id, tid)
            ),
            None,
        )
        if gift is not None:
            grant_technology(state, target, gift)
            adjust_reputation(rel, TRADE_TECH_BONUS)
            message.accepted = True
            message.response_text = f"{target.name} receives the knowledge of {gift}."
        else:
            message.accepted = False

    rel.last_contact_turn = state.turn
    rel.messages.append(message)
    return message


def _demand_tribute(state: WorldState, rel: DiplomacyRelation, message: DiplomacyMessage) -> None:
    """Succeeds only above the reputation threshold against a non-hostile target."""
    sender = state.players[message.from_player_id]
    target = state.players[message.to_player_id]
    hostile = personality_for_race(target.race_id).id == most_hostile_personality().id

    if rel.reputation > TRIBUTE_REPUTATION_THRESHOLD and not hostile:
        amount = math.floor(max(0.0, target.credits) * rel.reputation / 200)
        target.credits -= amount
        sender.credits += amount
        adjust_reputation(rel, TRIBUTE_DEMAND_COST)
        message.accepted = True
        message.response_text = f"{target.name} pays {amount} credits."
    else:
        adjust_reputation(rel, TRIBUTE_REFUSAL_PENALTY)
        message.accepted = False
        message.response_text = f"{target.name} refuses."


# ---------------------------------------------------------------------------
# Per-turn processing
# ---------------------------------------------------------------------------

def process_turn(state: WorldState) -> list[tuple[str, str]]:
    """Detect contacts, decay reputation, pay trade income, expire proposals.

    Returns the player pairs that made first contact this turn.
    """
    contacts = detect_contacts(state)
    for rel in state.diplomacy:
        if rel.reputation > 0:
            rel.reputation = max(0, rel.reputation - REPUTATION_DECAY_PER_TURN)
        elif rel.reputation < 0:
            rel.reputation = min(0, rel.reputation + REPUTATION_DECAY_PER_TURN)

        if rel.has_treaty(ProposalType.TRADE):
            for pid in (rel.player1_id, rel.player2_id):
                player = state.players.get(pid)
                if player is not None:
                    player.credits += TRADE_TREATY_INCOME

        rel.pending_proposals = [
            p for p in rel.pending_proposals
            if state.turn - p.turn < PROPOSAL_EXPIRY_TURNS
        ]
    return contacts
