"""Agents that run empires during the planning phase.

Re-exports the base class and the computer player so consumers can do::

    from blacktimes.sim.play_agents import EmpireAgent, ComputerPlayer
"""

from .base import EmpireAgent
from .computer_player import ComputerPlayer
from .evaluator import rank_techs, score_tech

__all__ = ["EmpireAgent", "ComputerPlayer", "rank_techs", "score_tech"]
