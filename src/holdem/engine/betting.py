"""
betting.py - The betting state machine for a single street

A BettingRound asks participants for decisions in turn order until every
participant still in the hand has checked since the last raise, or until one
unfolded participant remains. It then collects the posted money into pots.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from holdem.engine.cards import Card
from holdem.engine.decisions import DecisionProvider
from holdem.engine.events import (
    ActionTaken, ActiveParticipantChanged, BetLevelChanged, ChipsAdded, Folded,
    InfoRequested, PotAwarded, PotsRecomputed, RoundObserver,
)
from holdem.engine.game_state import Action, Decision, Participant, Street, TableView, table_view
from holdem.engine.pot import PotAward, PotManager
from holdem.engine.rules import PokerRules


@dataclass(frozen=True)
class AwaitingAction:
    """The round is suspended until this participant decides."""
    participant: Participant


@dataclass(frozen=True)
class StreetComplete:
    street: Street


BettingState = Union[AwaitingAction, StreetComplete, None]


class BettingRound:
    """
    Runs the call/raise/fold/info protocol for one street.

    Turn order starts at the second to last seat and moves towards seat 0,
    wrapping around. Participants without chips are checked automatically.
    Decision providers are called synchronously; an info request or a
    rejected raise asks the same participant again without advancing.
    """

    def __init__(self, street: Street, participants: List[Participant], pot_manager: PotManager,
                 rules: PokerRules, human_provider: Optional[DecisionProvider],
                 automated_provider: DecisionProvider, observer: RoundObserver,
                 community_cards: Sequence[Card] = ()):
        """
        Initialize the betting round.

        Args:
            street: The street being bet
            participants: Seated participants in seat order
            pot_manager: The round's pot manager
            rules: Table rules (blinds and raise validation)
            human_provider: Provider for the human participant, if any
            automated_provider: Provider for every other participant
            observer: Event sink
            community_cards: Community cards revealed so far
        """
        self.logger = logging.getLogger(__name__)

        self.street = street
        self.participants = participants
        self.pot_manager = pot_manager
        self.rules = rules
        self.human_provider = human_provider
        self.automated_provider = automated_provider
        self.observer = observer
        self.community_cards = list(community_cards)

        self.bet_level = rules.big_blind if street == Street.PREFLOP else 0
        self.state: BettingState = None
        self.awards: List[PotAward] = []

    def provider_for(self, participant: Participant) -> DecisionProvider:
        if participant.is_human and self.human_provider is not None:
            return self.human_provider
        return self.automated_provider

    def unfolded_count(self) -> int:
        return self.rules.count_unfolded(self.participants)

    def table(self, viewer: Optional[Participant] = None) -> TableView:
        return table_view(self.street, self.bet_level, self.community_cards,
                          self.participants, self.pot_manager.pots, viewer)

    def run(self) -> StreetComplete:
        """
        Play the street to completion.

        Returns:
            The terminal StreetComplete state
        """
        self.observer.notify(BetLevelChanged(self.bet_level))
        if self.unfolded_count() <= 1:
            self.state = StreetComplete(self.street)
            return self.state

        self.logger.debug(f"Betting on {self.street.name.lower()} opens at ${self.bet_level}")

        index = (len(self.participants) - 2) % len(self.participants)
        active = self.participants[index]
        resolved_early = False

        while not active.checked and self.unfolded_count() > 1:
            if active.stack == 0:
                active.checked = True

            if not active.folded and active.stack > 0:
                self.state = AwaitingAction(active)
                self.observer.notify(ActiveParticipantChanged(active.view()))
                decision = self.request_decision(active)
                resolved_early = self.apply(active, decision)
                if resolved_early:
                    break

            index = (index - 1) % len(self.participants)
            active = self.participants[index]

        if not resolved_early:
            self.collect()

        self.state = StreetComplete(self.street)
        return self.state

    def request_decision(self, participant: Participant) -> Decision:
        """
        Ask the participant's provider until a usable decision comes back.

        Args:
            participant: The participant to act

        Returns:
            A call, a validated raise, or a fold
        """
        provider = self.provider_for(participant)
        while True:
            if self.pot_manager.auto_advance:
                return Decision.call()

            decision = provider.decide(participant, self.bet_level, self.street,
                                       self.table(participant))

            if decision.action is Action.INFO:
                self.observer.notify(InfoRequested(participant.view(reveal_cards=True),
                                                   self.table(participant)))
                continue

            if decision.action is Action.RAISE:
                result = self.rules.validate_raise(decision.amount, self.bet_level, participant)
                if not result.legal:
                    provider.on_rejected(participant, result)
                    continue

            return decision

    def apply(self, participant: Participant, decision: Decision) -> bool:
        """
        Apply a decision to the street.

        Args:
            participant: The acting participant
            decision: A call, validated raise or fold

        Returns:
            True if a fold resolved a side pot and ended the street early
        """
        if decision.action is Action.CALL:
            paid = participant.post(participant.owed(self.bet_level))
            if paid:
                self.observer.notify(ChipsAdded(participant.view(), paid))
                self.logger.debug(f"{participant.name} called and added ${paid}")
            else:
                self.logger.debug(f"{participant.name} checked")
            participant.checked = True
            self._narrate(participant, Action.CALL, paid)

        elif decision.action is Action.RAISE:
            self.bet_level += decision.amount
            self.observer.notify(BetLevelChanged(self.bet_level))
            paid = participant.post(self.bet_level - participant.posted)

            for other in self.participants:
                if not other.folded:
                    other.checked = False
            participant.checked = True
            participant.raised = True

            self.observer.notify(ChipsAdded(participant.view(), paid))
            self.logger.debug(f"{participant.name} raised the bet ${decision.amount} to ${self.bet_level}")
            self._narrate(participant, Action.RAISE, decision.amount)

        elif decision.action is Action.FOLD:
            participant.folded = True
            self.observer.notify(Folded(tuple(participant.hole_cards), participant.is_human,
                                        participant.name))
            self.logger.debug(f"{participant.name} folded")
            self._narrate(participant, Action.FOLD, 0)

            if self.pot_manager.fold_resolves_side_pot():
                self.logger.debug("Fold left a side pot with a single claimant")
                self.collect()
                return True

        return False

    def _narrate(self, participant: Participant, action: Action, amount: int) -> None:
        self.observer.notify(ActionTaken(participant.view(), action, amount, self.bet_level))

    def collect(self) -> List[PotAward]:
        """Collect posted money into pots and publish the result."""
        awards = self.pot_manager.collect(self.participants)
        self.observer.notify(PotsRecomputed(self.pot_manager.views()))
        for award in awards:
            self.observer.notify(PotAwarded(award.pot, award.winners, award.category_name,
                                            award.amounts))
        self.awards.extend(awards)
        return awards
