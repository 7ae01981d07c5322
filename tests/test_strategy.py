import unittest
from unittest.mock import patch
import sys
import os
import numpy as np

# Add source directory to path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(project_root, 'src'))

from holdem.algorithms.strategy import AutomatedStrategy, hole_card_score
from holdem.engine.cards import parse_cards
from holdem.engine.game_state import Action, Participant, Street, table_view


class FixedEquity:
    """Equity stand-in returning fixed values without enumeration."""

    def __init__(self, ehs, potential=None):
        self.ehs = ehs
        self.potential = potential

    def effective_hand_strength(self, participant, community_cards):
        return self.ehs

    def hand_potential(self, hole_cards, community_cards):
        return self.potential


class TestHoleCardScore(unittest.TestCase):
    def test_known_scores(self):
        """Test the Chen score of well known starting hands."""
        cases = {
            "As Ad": 20,
            "Ks Kd": 16,
            "As Ks": 12,
            "Jh Th": 9,
            "5c 4c": 6,
            "2s 2d": 5,
            "7c 2d": -1,
        }
        for text, expected in cases.items():
            self.assertEqual(hole_card_score(parse_cards(text)), expected, text)

    def test_order_does_not_matter(self):
        """Test that the score ignores the order of the hole cards."""
        self.assertEqual(hole_card_score(parse_cards("9s Kd")), hole_card_score(parse_cards("Kd 9s")))


class TestAutomatedStrategy(unittest.TestCase):
    def setUp(self):
        """Setup test environment for the automated strategy."""
        self.participant = Participant("Bot", 1000, hole_cards=parse_cards("As Kd"))
        self.board = parse_cards("7h 6c 2h")

    def table(self, street=Street.PREFLOP, bet_level=10, community=()):
        return table_view(street, bet_level, list(community), [self.participant], [])

    def test_decisions_are_total(self):
        """Test that every decision is a call, a legal raise or a fold."""
        strategy = AutomatedStrategy(equity=FixedEquity(.5), rng=np.random.default_rng(0))
        for street, community in ((Street.PREFLOP, ()), (Street.FLOP, self.board)):
            for _ in range(200):
                decision = strategy.decide(self.participant, 40, street, self.table(street, 40, community))
                self.assertIn(decision.action, (Action.CALL, Action.RAISE, Action.FOLD))
                if decision.action is Action.RAISE:
                    self.assertGreaterEqual(decision.amount, 1)
                    self.assertLessEqual(decision.amount, self.participant.stack - 40)

    def test_free_check_never_folds(self):
        """Test that nothing to call never leads to a fold."""
        weak = Participant("Weak", 1000, hole_cards=parse_cards("7c 2d"))
        strategy = AutomatedStrategy(equity=FixedEquity(0.0), rng=np.random.default_rng(1))
        for _ in range(300):
            self.assertNotEqual(strategy.preflop_action(weak, 0), Action.FOLD)
            self.assertNotEqual(strategy.postflop_action(weak, 0, self.board), Action.FOLD)

    def test_weak_hand_folds_to_large_bet(self):
        """Test that a weak hand facing a big bet folds more often than it calls."""
        weak = Participant("Weak", 1000, hole_cards=parse_cards("7c 2d"))
        strategy = AutomatedStrategy(equity=FixedEquity(.1), rng=np.random.default_rng(2))
        folds = sum(strategy.postflop_action(weak, 800, self.board) is Action.FOLD for _ in range(300))
        self.assertGreater(folds, 150)

    def test_strong_hand_raises_more(self):
        """Test that aces raise more often than seven-deuce before the flop."""
        strategy = AutomatedStrategy(equity=FixedEquity(.5), rng=np.random.default_rng(3))
        aces = Participant("Aces", 1000, hole_cards=parse_cards("As Ad"))
        junk = Participant("Junk", 1000, hole_cards=parse_cards("7c 2d"))

        aces_raises = sum(strategy.preflop_action(aces, 10) is Action.RAISE for _ in range(500))
        junk_raises = sum(strategy.preflop_action(junk, 10) is Action.RAISE for _ in range(500))
        self.assertGreater(aces_raises, junk_raises)

    def test_raise_without_headroom_becomes_call(self):
        """Test that a participant who cannot cover more than the call calls."""
        short = Participant("Short", 20, hole_cards=parse_cards("As Ad"))
        strategy = AutomatedStrategy(equity=FixedEquity(.9), rng=np.random.default_rng(4))
        with patch.object(strategy, 'preflop_action', return_value=Action.RAISE):
            decision = strategy.decide(short, 100, Street.PREFLOP, self.table())
        self.assertIs(decision.action, Action.CALL)

    def test_raise_amount_bounds(self):
        """Test that raise increments stay within the affordable range."""
        strategy = AutomatedStrategy(equity=FixedEquity(.5), rng=np.random.default_rng(5))
        for stack in (2, 11, 1000):
            participant = Participant("Bot", stack)
            amounts = [strategy.raise_amount(participant, 1) for _ in range(300)]
            self.assertGreaterEqual(min(amounts), 1)
            self.assertLessEqual(max(amounts), stack - 1)

    def test_begin_round_replaces_generator(self):
        """Test that the round generator drives the decisions."""
        strategy = AutomatedStrategy(equity=FixedEquity(.5))
        rng = np.random.default_rng(6)
        strategy.begin_round(rng)
        self.assertIs(strategy.rng, rng)

        first = [strategy.decide(self.participant, 10, Street.PREFLOP, self.table()) for _ in range(20)]
        strategy.begin_round(np.random.default_rng(6))
        second = [strategy.decide(self.participant, 10, Street.PREFLOP, self.table()) for _ in range(20)]
        self.assertEqual(first, second)


if __name__ == '__main__':
    unittest.main()
