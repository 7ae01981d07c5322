"""
strategy.py - Decision making for automated participants

AutomatedStrategy is the DecisionProvider used for every non-human seat.
Before the flop it scores the hole cards with a Chen-style heuristic; after
the flop it blends the equity estimator's effective hand strength and
positive potential into fold and raise thresholds. A uniform draw against
those thresholds picks the action, so the play is deliberately loose and
unpredictable rather than optimal.
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from holdem.algorithms.equity import EquityEstimator
from holdem.engine.cards import Card, Rank
from holdem.engine.decisions import DecisionProvider
from holdem.engine.evaluator import HandEvaluator
from holdem.engine.game_state import Action, Decision, Participant, Street, TableView

# Post-flop fold line cap, as a share of the cost-to-stack ratio
FOLD_LIMIT = .66


def hole_card_score(hole_cards: Sequence[Card]) -> int:
    """
    Score two hole cards with the Chen formula.

    Args:
        hole_cards: The two hole cards

    Returns:
        Integer score; roughly -1 for the worst hands up to 20 for aces
    """
    low, high = sorted(hole_cards, key=lambda card: card.rank)
    low_rank, high_rank = int(low.rank), int(high.rank)

    base = {Rank.ACE: 10, Rank.KING: 8, Rank.QUEEN: 7, Rank.JACK: 6}
    score = base.get(high.rank, high_rank / 2.)

    if low_rank == high_rank:
        score = max(score * 2, 5)

    if low.suit == high.suit:
        score += 2

    gap = high_rank - low_rank
    if gap == 2:
        score -= 1
    elif gap == 3:
        score -= 2
    elif gap == 4:
        score -= 4
    elif gap >= 5:
        score -= 5

    # Connectors and one-gappers below a queen straighten more often
    if gap in (1, 2) and high_rank <= Rank.JACK:
        score += 1

    # Round half scores up
    return int(math.floor(score + .6))


class AutomatedStrategy(DecisionProvider):
    """
    Threshold based decisions for automated participants.

    The provider never mutates engine state other than the participant's
    equity cache, and always returns a call, a raise or a fold.
    """

    def __init__(self, equity: Optional[EquityEstimator] = None,
                 evaluator: Optional[HandEvaluator] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the strategy.

        Args:
            equity: Equity estimator (default: new EquityEstimator)
            evaluator: Hand evaluator shared with the default estimator
            rng: Random generator; replaced by the round's generator in begin_round
        """
        self.logger = logging.getLogger(__name__)

        self.equity = equity or EquityEstimator(evaluator=evaluator)
        self.rng = rng if rng is not None else np.random.default_rng()

    def begin_round(self, rng: np.random.Generator) -> None:
        self.rng = rng

    def decide(self, participant: Participant, bet_level: int, street: Street,
               table: TableView) -> Decision:
        cost = max(0, bet_level - participant.posted)

        if street == Street.PREFLOP:
            action = self.preflop_action(participant, cost)
        else:
            action = self.postflop_action(participant, cost, table.community_cards)

        if action is Action.RAISE:
            if cost >= participant.stack:
                return Decision.call()
            return Decision.raise_by(self.raise_amount(participant, bet_level))
        if action is Action.FOLD:
            return Decision.fold()
        return Decision.call()

    def preflop_action(self, participant: Participant, cost: int) -> Action:
        """
        Choose a pre-flop action from the Chen score and the price to call.

        Args:
            participant: The acting participant
            cost: Chips needed to call

        Returns:
            Action.CALL, Action.RAISE or Action.FOLD
        """
        score = hole_card_score(participant.hole_cards)
        fold_line, raise_line = 0.0, .92
        if score >= 10:
            raise_line -= (score - 5) * .05
        elif score <= 8:
            fold_line = -.1 * score + .9

        ratio = cost / participant.stack if participant.stack else 1.0
        if ratio < 1e-6:
            fold_line = 0.0
        elif ratio > .5:
            fold_line += .5
        elif ratio > .3:
            fold_line += .4
        elif ratio > .2:
            fold_line += .3
        elif ratio > .1:
            fold_line += .2
        elif ratio > .05:
            fold_line += .1

        self.logger.debug(f"{participant.name}'s hole card score: {score}")
        return self._draw(fold_line, raise_line)

    def postflop_action(self, participant: Participant, cost: int,
                        community_cards: Sequence[Card]) -> Action:
        """
        Choose an action from effective hand strength and positive potential.

        Args:
            participant: The acting participant
            cost: Chips needed to call
            community_cards: Community cards revealed so far

        Returns:
            Action.CALL, Action.RAISE or Action.FOLD
        """
        ehs = self.equity.effective_hand_strength(participant, community_cards)
        potential = self.equity.hand_potential(participant.hole_cards, community_cards)
        ppot = potential.positive if potential is not None else 0.0

        if cost == 0:
            fold_line = 0.0
        else:
            ratio = cost / participant.stack if participant.stack else 1.0
            fold_line = min(ratio * FOLD_LIMIT, FOLD_LIMIT)
            fold_line += max(0.0, .6 - ehs - ppot)

        raise_line = .95 - .75 * min(ppot, .5)
        if ehs > .6:
            raise_line -= ehs - .6
        if participant.raised:
            raise_line += (1 - raise_line) * 2 / 3

        self.logger.debug(f"{participant.name}'s effective hand strength: {ehs:.6f}, ppot: {ppot:.6f}")
        return self._draw(fold_line, raise_line)

    def _draw(self, fold_line: float, raise_line: float) -> Action:
        draw = self.rng.random()
        if draw < fold_line:
            return Action.FOLD
        if draw > raise_line:
            return Action.RAISE
        return Action.CALL

    def raise_amount(self, participant: Participant, bet_level: int) -> int:
        """
        Draw a raise increment the participant can afford.

        Mostly small raises, sometimes medium, occasionally up to all-in.

        Args:
            participant: The raising participant (must be able to more than call)
            bet_level: The street's current bet level

        Returns:
            Increment in [1, stack - cost to call]
        """
        headroom = participant.stack - (bet_level - participant.posted)
        band = self.rng.integers(100)
        if band < 65:
            return 1 + int(self.rng.integers(max(headroom // 5, 1)))
        if band < 90:
            return 1 + int(self.rng.integers(max(int(headroom / 1.5), 1)))
        return 1 + int(self.rng.integers(headroom))
