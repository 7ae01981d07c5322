"""
events.py - Notification events published by the engine

The engine talks to presentation collaborators only through an ordered stream
of immutable events. Events carry snapshot views, never live Participant or
Pot objects, so an observer cannot change engine state.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Type, TypeVar

from holdem.engine.cards import Card
from holdem.engine.game_state import Action, ParticipantView, PotView, TableView


@dataclass(frozen=True)
class Event:
    """Base class for all notification events."""


@dataclass(frozen=True)
class HumanIdentified(Event):
    participant: ParticipantView


@dataclass(frozen=True)
class RoundStarted(Event):
    round_number: int


@dataclass(frozen=True)
class BlindsPosted(Event):
    big_blind: ParticipantView
    small_blind: ParticipantView
    big_blind_amount: int
    small_blind_amount: int


@dataclass(frozen=True)
class ChipsAdded(Event):
    """A participant moved chips from their stack into the current street."""
    participant: ParticipantView
    amount: int


@dataclass(frozen=True)
class CardDealt(Event):
    participant: ParticipantView
    card: Card


@dataclass(frozen=True)
class CommunityCardRevealed(Event):
    card: Card


@dataclass(frozen=True)
class ActiveParticipantChanged(Event):
    """The participant now being asked to act, or None between turns."""
    participant: Optional[ParticipantView]


@dataclass(frozen=True)
class BetLevelChanged(Event):
    amount: int


@dataclass(frozen=True)
class HandCategoryUpdated(Event):
    """The human participant's current category display name."""
    name: str


@dataclass(frozen=True)
class ActionTaken(Event):
    participant: ParticipantView
    action: Action
    amount: int
    bet_level: int


@dataclass(frozen=True)
class InfoRequested(Event):
    participant: ParticipantView
    table: TableView


@dataclass(frozen=True)
class Folded(Event):
    hand: Tuple[Card, ...]
    was_human: bool
    name: str


@dataclass(frozen=True)
class ShowdownHandsRevealed(Event):
    participants: Tuple[ParticipantView, ...]


@dataclass(frozen=True)
class PotsRecomputed(Event):
    pots: Tuple[PotView, ...]


@dataclass(frozen=True)
class PotAwarded(Event):
    """
    A pot was paid out.

    category_name is empty when the pot was won uncontested. amounts holds
    the chips each winner received, aligned with winners.
    """
    pot: PotView
    winners: Tuple[str, ...]
    category_name: str
    amounts: Tuple[int, ...]


@dataclass(frozen=True)
class RoundReset(Event):
    pass


@dataclass(frozen=True)
class GameOver(Event):
    winner: Optional[ParticipantView]
    rounds_played: int


class RoundObserver:
    """
    Receives engine events. The default implementation ignores them all.

    Subclasses override notify() and dispatch on the event type.
    """

    def notify(self, event: Event) -> None:
        pass


class CompositeObserver(RoundObserver):
    """Forwards every event to each child observer in order."""

    def __init__(self, observers: Iterable[RoundObserver] = ()):
        self.observers: List[RoundObserver] = list(observers)

    def add(self, observer: RoundObserver) -> None:
        self.observers.append(observer)

    def notify(self, event: Event) -> None:
        for observer in self.observers:
            observer.notify(event)


E = TypeVar('E', bound=Event)


class RecordingObserver(RoundObserver):
    """Keeps every event it receives, for tests and reports."""

    def __init__(self):
        self.events: List[Event] = []

    def notify(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, event_type: Type[E]) -> List[E]:
        return [event for event in self.events if isinstance(event, event_type)]

    def types(self) -> List[str]:
        return [type(event).__name__ for event in self.events]

    def clear(self) -> None:
        self.events.clear()
