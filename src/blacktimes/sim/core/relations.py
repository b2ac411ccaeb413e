"""Diplomatic relation records between pairs of players."""

from __future__ import annotations

from pydantic import BaseModel, Field

from blacktimes.sim.core.enums import DiplomacyStatus, MessageType, ProposalType


class Treaty(BaseModel):
    type: ProposalType
    start_turn: int


class Proposal(BaseModel):
    from_player_id: str
    to_player_id: str
    type: ProposalType
    turn: int


class DiplomacyMessage(BaseModel):
    from_player_id: str
    to_player_id: str
    type: MessageType
    text: str
    response_text: str | None = None
    accepted: bool | None = None
    """Outcome for messages that can fail (tribute, tech trade)."""

    turn: int


class DiplomacyRelation(BaseModel):
    """State of one unordered pair of players.

    ``player1_id``/``player2_id`` order carries no meaning; use
    :meth:`involves` to match a pair.
    """

    player1_id: str
    player2_id: str
    status: DiplomacyStatus = DiplomacyStatus.UNKNOWN
    reputation: int = 0
    """Bounded to [-100, 100]."""

    treaties: list[Treaty] = Field(default_factory=list)
    pending_proposals: list[Proposal] = Field(default_factory=list)
    contacted: bool = False
    contact_turn: int | None = None
    last_contact_turn: int = 0
    messages: list[DiplomacyMessage] = Field(default_factory=list)

    def involves(self, a: str, b: str) -> bool:
        return {a, b} == {self.player1_id, self.player2_id}

    def other(self, player_id: str) -> str:
        return self.player2_id if player_id == self.player1_id else self.player1_id

    def has_treaty(self, treaty_type: ProposalType) -> bool:
        return any(t.type == treaty_type for t in self.treaties)

    @property
    def at_war(self) -> bool:
        return self.status == DiplomacyStatus.WAR
