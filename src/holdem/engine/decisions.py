"""
decisions.py - The decision provider contract

A DecisionProvider answers "what does this participant do now?" for the
betting round. The engine does not know whether the answer comes from a
keyboard, a window, a bot or a test script; it only needs a Decision back.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, Iterable, Optional

import numpy as np

from holdem.engine.game_state import Decision, Participant, Street, TableView
from holdem.engine.rules import ValidationResult


class DecisionProvider(ABC):
    """Abstract source of participant decisions."""

    def begin_round(self, rng: np.random.Generator) -> None:
        """Called once per round with that round's random generator."""

    @abstractmethod
    def decide(self, participant: Participant, bet_level: int, street: Street,
               table: TableView) -> Decision:
        """
        Choose an action for the participant.

        Args:
            participant: The participant to act
            bet_level: The street's current bet level
            street: The current street
            table: Snapshot of the table

        Returns:
            Decision (call, raise with an increment, fold or info)
        """

    def on_rejected(self, participant: Participant, result: ValidationResult) -> None:
        """Called when a raise was rejected; the participant is asked again."""


class ScriptedDecisionProvider(DecisionProvider):
    """
    Plays back queued decisions per participant name.

    Once a participant's queue is empty the fallback decision (call by
    default) is returned, so a script only needs to list the interesting
    actions.
    """

    def __init__(self, scripts: Optional[Dict[str, Iterable[Decision]]] = None,
                 fallback: Optional[Decision] = None):
        self.scripts: Dict[str, Deque[Decision]] = {
            name: deque(decisions) for name, decisions in (scripts or {}).items()
        }
        self.fallback = fallback if fallback is not None else Decision.call()
        self.rejections = []
        self.requests = []

    def queue(self, name: str, *decisions: Decision) -> None:
        self.scripts.setdefault(name, deque()).extend(decisions)

    def decide(self, participant, bet_level, street, table):
        self.requests.append((participant.name, bet_level, street))
        pending = self.scripts.get(participant.name)
        if pending:
            return pending.popleft()
        return self.fallback

    def on_rejected(self, participant, result):
        self.rejections.append((participant.name, result.status))
