"""
game.py - Round orchestration for a Texas hold 'em table

HoldemGame owns the participants, the deck, the pots and the single random
generator of each round. A round posts blinds, deals hole cards, runs the
four betting streets with the flop, turn and river reveals in between, and
settles the remaining pots at showdown. play() repeats rounds until one
participant holds every chip.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from holdem.engine.betting import BettingRound
from holdem.engine.cards import Card, Deck
from holdem.engine.decisions import DecisionProvider
from holdem.engine.errors import ConfigurationError, DegenerateShowdownError, EngineInvariantError
from holdem.engine.evaluator import HandEvaluator, category_name
from holdem.engine.events import (
    ActiveParticipantChanged, BlindsPosted, CardDealt, ChipsAdded, CommunityCardRevealed,
    GameOver, HandCategoryUpdated, HumanIdentified, PotAwarded, RoundObserver, RoundReset,
    RoundStarted, ShowdownHandsRevealed,
)
from holdem.engine.game_state import Participant, Street
from holdem.engine.pot import Pot, PotAward, PotManager
from holdem.engine.rules import PokerRules
from holdem.engine.tie_resolver import TieResolver


@dataclass
class RoundResult:
    """Summary of one played round."""
    round_number: int
    awards: List[PotAward] = field(default_factory=list)
    community_cards: Tuple[Card, ...] = ()
    stacks: Dict[str, int] = field(default_factory=dict)
    # Category name per participant whose hand was shown down
    showdown_categories: Dict[str, str] = field(default_factory=dict)

    @property
    def went_to_showdown(self) -> bool:
        return bool(self.showdown_categories)


class HoldemGame:
    """
    Plays rounds of no-limit Texas hold 'em.

    Seat 0 posts the small blind and the last seat posts the big blind. At
    the start of each round the last seat moves to the front, so the blinds
    travel around the table.
    """

    def __init__(self, num_participants: int = 4, starting_stack: int = 1000, big_blind: int = 10,
                 human_seat: Optional[int] = 0, human_provider: Optional[DecisionProvider] = None,
                 automated_provider: Optional[DecisionProvider] = None,
                 observer: Optional[RoundObserver] = None, seed: Optional[int] = None,
                 evaluator: Optional[HandEvaluator] = None, tie_resolver: Optional[TieResolver] = None,
                 equity=None, names: Optional[Sequence[str]] = None):
        """
        Initialize a game.

        Args:
            num_participants: Number of seats (default: 4)
            starting_stack: Chips each participant starts with (default: 1000)
            big_blind: Big blind amount (default: 10)
            human_seat: Seat of the human participant, or None for none
            human_provider: Decision provider for the human participant
            automated_provider: Decision provider for the other participants
                (default: AutomatedStrategy)
            observer: Receiver of notification events (default: no-op)
            seed: Seed for the per-round random generators
            evaluator: Hand evaluator (default: new HandEvaluator)
            tie_resolver: Tie resolver (default: new TieResolver)
            equity: Equity estimator for the default automated strategy
            names: Participant names (default: "Player 1", "Player 2", ...)
        """
        self.logger = logging.getLogger(__name__)

        self.rules = PokerRules(big_blind=big_blind, starting_stack=starting_stack,
                                num_participants=num_participants)
        if human_seat is not None and not 0 <= human_seat < num_participants:
            raise ConfigurationError(f"Human seat {human_seat} is outside 0..{num_participants - 1}")
        if names is not None and len(names) != num_participants:
            raise ConfigurationError(f"Expected {num_participants} names, got {len(names)}")

        self.evaluator = evaluator or HandEvaluator()
        self.tie_resolver = tie_resolver or TieResolver()
        if automated_provider is None:
            from holdem.algorithms.strategy import AutomatedStrategy
            automated_provider = AutomatedStrategy(equity=equity, evaluator=self.evaluator)
        self.automated_provider = automated_provider
        self.human_provider = human_provider
        self.observer = observer or RoundObserver()

        names = list(names) if names is not None else [f"Player {k}" for k in range(1, num_participants + 1)]
        self.roster: List[Participant] = [
            Participant(name, self.rules.starting_stack, is_human=(seat == human_seat))
            for seat, name in enumerate(names)
        ]
        self.participants: List[Participant] = list(self.roster)
        self.human: Optional[Participant] = self.roster[human_seat] if human_seat is not None else None
        self.total_chips = self.rules.starting_stack * num_participants

        self.pot_manager = PotManager()
        self.community_cards: List[Card] = []
        self.deck: Optional[Deck] = None
        self.rng: Optional[np.random.Generator] = None
        self.rounds_played = 0
        self._seed_sequence = np.random.SeedSequence(seed)

    def participants_with_chips(self) -> List[Participant]:
        return [p for p in self.roster if p.stack > 0]

    def play(self, max_rounds: Optional[int] = None) -> Optional[Participant]:
        """
        Play rounds until one participant holds all the chips.

        Args:
            max_rounds: Stop after this many rounds (default: no limit)

        Returns:
            The winning participant, or None if max_rounds ended the game first
        """
        if self.human is not None:
            self.observer.notify(HumanIdentified(self.human.view()))

        played = 0
        while self.rules.count_with_chips(self.roster) > 1:
            if max_rounds is not None and played >= max_rounds:
                break
            self.observer.notify(ActiveParticipantChanged(None))
            self.play_round()
            played += 1
            self.observer.notify(RoundReset())

        survivors = self.participants_with_chips()
        winner = survivors[0] if len(survivors) == 1 else None
        if winner is not None:
            self.logger.info(f"{winner.name} wins the game after {self.rounds_played} rounds")
        self.observer.notify(GameOver(winner.view() if winner else None, self.rounds_played))
        return winner

    def play_round(self) -> RoundResult:
        """
        Set up and play one full round, including the showdown.

        Returns:
            RoundResult with every award made during the round
        """
        self.rounds_played += 1
        result = RoundResult(self.rounds_played)
        self.observer.notify(RoundStarted(self.rounds_played))
        self.logger.info(f"========== Round {self.rounds_played} ==========")

        self.setup_round()

        for street in self.rules.get_betting_rounds():
            if self.rules.count_unfolded(self.participants) <= 1:
                break
            self.reveal(street)
            betting = BettingRound(street, self.participants, self.pot_manager, self.rules,
                                   self.human_provider, self.automated_provider, self.observer,
                                   self.community_cards)
            betting.run()
            result.awards.extend(betting.awards)
            for participant in self.participants:
                participant.reset_for_street()

        result.awards.extend(self.showdown(result))
        result.community_cards = tuple(self.community_cards)
        result.stacks = {p.name: p.stack for p in self.roster}

        self.check_conservation()
        return result

    def setup_round(self) -> None:
        """Rotate seats, post blinds, shuffle and deal hole cards."""
        self.rng = np.random.default_rng(self._seed_sequence.spawn(1)[0])
        self.community_cards = []

        self.participants.insert(0, self.participants.pop())
        for participant in self.participants:
            participant.reset_for_round()
        self.participants = [p for p in self.participants if p.stack > 0]
        if len(self.participants) < 2:
            raise ConfigurationError("At least 2 participants with chips are needed to play a round")

        big_blind, small_blind = self.participants[-1], self.participants[0]
        big_amount = big_blind.post(self.rules.big_blind)
        small_amount = small_blind.post(self.rules.small_blind)
        self.observer.notify(BlindsPosted(big_blind.view(), small_blind.view(), big_amount, small_amount))
        self.observer.notify(ChipsAdded(big_blind.view(), big_amount))
        self.observer.notify(ChipsAdded(small_blind.view(), small_amount))
        self.logger.debug(f"{big_blind.name} posted a big blind of ${big_amount}, "
                          f"{small_blind.name} posted a small blind of ${small_amount}")

        self.deck = Deck(self.rng)
        seats = len(self.participants)
        for k in range(seats * 2):
            participant = self.participants[(k + 2) % seats]
            card = self.deck.deal_one()
            participant.hole_cards.append(card)
            self.observer.notify(CardDealt(participant.view(), card))

        self.pot_manager.reset()
        self.automated_provider.begin_round(self.rng)
        if self.human_provider is not None:
            self.human_provider.begin_round(self.rng)

    def reveal(self, street: Street) -> None:
        """Reveal the street's community cards and publish the human's category."""
        cards = self.deck.deal(street.cards_to_reveal)
        for card in cards:
            self.community_cards.append(card)
            self.observer.notify(CommunityCardRevealed(card))
        if cards:
            self.logger.info(f"{street.name.title()}: {' '.join(card.short() for card in cards)}")

        if self.human is not None and self.human in self.participants:
            self.observer.notify(HandCategoryUpdated(
                self.evaluator.get_hand_name(self.human.hole_cards, self.community_cards)))

    def showdown(self, result: RoundResult) -> List[PotAward]:
        """
        Settle the remaining pots, last (smallest eligible set) first.

        Args:
            result: Round result that records the shown categories

        Returns:
            The awards made
        """
        self.observer.notify(ActiveParticipantChanged(None))
        awards = []
        for pot in reversed(list(self.pot_manager.pots)):
            claimants = pot.claimants()
            if len(claimants) == 1:
                award = self.pot_manager.distribute(pot, claimants, rng=self.rng)
            else:
                award = self._contest(pot, claimants, result)
            self.observer.notify(PotAwarded(award.pot, award.winners, award.category_name, award.amounts))
            awards.append(award)
        return awards

    def _contest(self, pot: Pot, claimants: List[Participant], result: RoundResult) -> PotAward:
        if not claimants:
            self.logger.error(f"No participant can claim {pot}")
            raise DegenerateShowdownError(f"No participant can claim {pot}")

        self.observer.notify(ShowdownHandsRevealed(tuple(p.view(reveal_cards=True) for p in claimants)))
        categories = {p: self.evaluator.evaluate_hand(p.hole_cards, self.community_cards)
                      for p in claimants}
        for participant, category in categories.items():
            result.showdown_categories[participant.name] = category_name(category)
            self.logger.debug(f"{participant.name} shows "
                              f"{self.evaluator.get_hand_description(participant.hole_cards, self.community_cards)}")

        best = max(categories.values())
        leaders = [p for p in claimants if categories[p] == best]
        winners = self.tie_resolver.resolve_participants(leaders, self.community_cards, best)
        if not winners:
            self.logger.error(f"No maximum score found among {len(claimants)} claimants of {pot}")
            raise DegenerateShowdownError(f"No winner found for {pot}")

        return self.pot_manager.distribute(pot, winners, category_name(best), self.rng)

    def check_conservation(self) -> None:
        """Verify that no chips were created or lost."""
        on_table = (sum(p.stack + p.posted for p in self.roster) + self.pot_manager.total)
        if on_table != self.total_chips:
            self.logger.error(f"Chip total {on_table} does not match {self.total_chips}")
            raise EngineInvariantError(f"Chip total {on_table} does not match {self.total_chips}")
