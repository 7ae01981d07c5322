"""
game_state.py - Participant and street state for a hold 'em round

This module defines the Street and Action enumerations, the Decision value
returned by decision providers, the mutable Participant record owned by the
round orchestrator, and the immutable view snapshots handed to collaborators.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import List, Optional, Tuple

from holdem.engine.cards import Card

# Sentinel for an effective hand strength not yet computed this street
UNCOMPUTED = -1.0


class Street(IntEnum):
    """The four betting streets. The value is the street number."""
    PREFLOP = 1
    FLOP = 2
    TURN = 3
    RIVER = 4

    @property
    def community_count(self) -> int:
        """Number of community cards visible while this street is bet."""
        return {Street.PREFLOP: 0, Street.FLOP: 3, Street.TURN: 4, Street.RIVER: 5}[self]

    @property
    def cards_to_reveal(self) -> int:
        """Number of community cards revealed before this street's betting."""
        return {Street.PREFLOP: 0, Street.FLOP: 3, Street.TURN: 1, Street.RIVER: 1}[self]


class Action(Enum):
    """Enum representing the possible answers of a decision provider."""
    CALL = auto()
    RAISE = auto()
    FOLD = auto()
    INFO = auto()


@dataclass(frozen=True)
class Decision:
    """
    A participant's answer to a decision request.

    For RAISE, amount is the increment added to the street's bet level. The
    amount is ignored for every other action.
    """
    action: Action
    amount: int = 0

    @classmethod
    def call(cls) -> 'Decision':
        return cls(Action.CALL)

    @classmethod
    def raise_by(cls, amount: int) -> 'Decision':
        return cls(Action.RAISE, int(amount))

    @classmethod
    def fold(cls) -> 'Decision':
        return cls(Action.FOLD)

    @classmethod
    def info(cls) -> 'Decision':
        return cls(Action.INFO)


@dataclass(frozen=True)
class ParticipantView:
    """Immutable snapshot of a participant, safe to hand to observers."""
    name: str
    stack: int
    posted: int
    folded: bool
    is_human: bool
    hole_cards: Tuple[Card, ...] = ()

    @property
    def all_in(self) -> bool:
        return self.stack == 0 and not self.folded


@dataclass(frozen=True)
class PotView:
    """Immutable snapshot of a pot."""
    value: int
    eligible: Tuple[str, ...]


@dataclass(frozen=True)
class TableView:
    """Immutable snapshot of the table, published on an info request."""
    street: Street
    bet_level: int
    community_cards: Tuple[Card, ...]
    participants: Tuple[ParticipantView, ...]
    pots: Tuple[PotView, ...]

    @property
    def amount_in_street(self) -> int:
        """Chips posted this street and not yet collected into a pot."""
        return sum(participant.posted for participant in self.participants)

    @property
    def total_pot(self) -> int:
        return sum(pot.value for pot in self.pots) + self.amount_in_street


@dataclass(eq=False)
class Participant:
    """
    A seated participant and their per-round betting state.

    Participants compare and hash by identity so that they can be used as
    pot eligibility members and tie resolution keys.
    """
    name: str
    stack: int
    is_human: bool = False
    posted: int = 0
    folded: bool = False
    checked: bool = False
    raised: bool = False
    hole_cards: List[Card] = field(default_factory=list)
    ehs: float = UNCOMPUTED
    # Chips moved from the stack this round, for the conservation check
    contributed: int = 0

    def reset_for_round(self) -> None:
        """Clear everything that only lives for one round."""
        self.hole_cards = []
        self.posted = 0
        self.folded = False
        self.checked = False
        self.raised = False
        self.ehs = UNCOMPUTED
        self.contributed = 0

    def reset_for_street(self) -> None:
        """Clear the flags and cache that only live for one street."""
        self.checked = False
        self.raised = False
        self.ehs = UNCOMPUTED

    def post(self, amount: int) -> int:
        """
        Move chips from the stack to the posted amount.

        Args:
            amount: Requested amount; capped at the remaining stack

        Returns:
            The amount actually posted
        """
        paid = max(0, min(int(amount), self.stack))
        self.stack -= paid
        self.posted += paid
        self.contributed += paid
        return paid

    @property
    def all_in(self) -> bool:
        return self.stack == 0

    @property
    def in_hand(self) -> bool:
        """Not folded and still holding chips."""
        return not self.folded and self.stack > 0

    def owed(self, bet_level: int) -> int:
        """Amount needed to call, capped at the stack."""
        return max(0, min(self.stack, bet_level - self.posted))

    def view(self, reveal_cards: bool = False) -> ParticipantView:
        return ParticipantView(
            name=self.name,
            stack=self.stack,
            posted=self.posted,
            folded=self.folded,
            is_human=self.is_human,
            hole_cards=tuple(self.hole_cards) if reveal_cards else (),
        )

    def __repr__(self) -> str:
        return f"Participant({self.name!r}, stack={self.stack}, posted={self.posted})"


def table_view(street: Street, bet_level: int, community_cards: List[Card],
               participants: List[Participant], pots, viewer: Optional[Participant] = None) -> TableView:
    """
    Build an immutable table snapshot.

    Args:
        street: Current street
        bet_level: Current bet level of the street
        community_cards: Community cards revealed so far
        participants: Seated participants in seat order
        pots: Current pots (objects exposing view())
        viewer: Participant whose own hole cards may be included

    Returns:
        TableView snapshot
    """
    return TableView(
        street=street,
        bet_level=bet_level,
        community_cards=tuple(community_cards),
        participants=tuple(p.view(reveal_cards=p is viewer) for p in participants),
        pots=tuple(pot.view() for pot in pots),
    )
