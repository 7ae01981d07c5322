import unittest
import sys
import os
import numpy as np

# Add source directory to path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(project_root, 'src'))

from holdem.engine.cards import FULL_DECK, parse_cards
from holdem.engine.errors import EngineInvariantError
from holdem.engine.evaluator import HandCategory, HandEvaluator
from holdem.engine.game_state import Participant
from holdem.engine.tie_resolver import DISCRIMINATORS, TieResolver, straight_top


class TestTieResolver(unittest.TestCase):
    def setUp(self):
        """Setup test environment for tie resolution."""
        self.resolver = TieResolver()

    def resolve(self, category, **hands):
        return self.resolver.resolve({name: parse_cards(text) for name, text in hands.items()}, category)

    def test_pair_kicker(self):
        """Test that the best kicker wins a pair tie."""
        winners = self.resolve(HandCategory.PAIR,
                               a="Qs Qh Ad 9c 4d 2s 7h",
                               b="Qc Qd Kd 9h 4c 2h 7s")
        self.assertEqual(winners, ["a"])

    def test_two_pair(self):
        """Test high pair, low pair and kicker ordering."""
        self.assertEqual(self.resolve(HandCategory.TWO_PAIR,
                                      a="As Ad 3c 3d 9h 8h 2s",
                                      b="Ks Kd Qc Qd 9c 8c 2h"), ["a"])
        self.assertEqual(self.resolve(HandCategory.TWO_PAIR,
                                      a="As Ad 5c 5d 9h 8h 2s",
                                      b="Ah Ac 4c 4d Kh 8c 2h"), ["a"])

        board = parse_cards("Ks Kd 7h 7c 2s")
        strong = Participant("Strong", 100, hole_cards=parse_cards("Ah 3d"))
        weak = Participant("Weak", 100, hole_cards=parse_cards("Qh 3c"))
        winners = self.resolver.resolve_participants([weak, strong], board, HandCategory.TWO_PAIR)
        self.assertEqual(winners, [strong])

    def test_three_of_a_kind_and_quads(self):
        """Test group ranks before kickers."""
        self.assertEqual(self.resolve(HandCategory.THREE_OF_A_KIND,
                                      a="9s 9h 9d Ac 4d 2s 7h",
                                      b="9c 9h 9d Kc 4d 2s 7h"), ["a"])
        self.assertEqual(self.resolve(HandCategory.FOUR_OF_A_KIND,
                                      a="7s 7h 7c 7d Ks 2d 3c",
                                      b="7s 7h 7c 7d Qs 2d 3c"), ["a"])
        self.assertEqual(self.resolve(HandCategory.FOUR_OF_A_KIND,
                                      a="7s 7h 7c 7d Ks 2d 3c",
                                      b="8s 8h 8c 8d 2s 3d 4c"), ["b"])

    def test_full_house(self):
        """Test that trips decide before the pair, including double trips."""
        self.assertEqual(self.resolve(HandCategory.FULL_HOUSE,
                                      a="Ks Kh Kd 2c 2d 9s 4h",
                                      b="Ks Kh Kd 3c 3d 9s 4h"), ["b"])
        self.assertEqual(self.resolve(HandCategory.FULL_HOUSE,
                                      a="Ks Kh Kd 9c 9d 9s 2h",
                                      b="Ks Kh Kd 8c 8d Qs 2h"), ["a"])

    def test_straights(self):
        """Test that the wheel is the lowest straight."""
        self.assertEqual(self.resolve(HandCategory.STRAIGHT,
                                      a="Ac 2d 3h 4s 5c Kd Kh",
                                      b="2c 3d 4h 5s 6c Kd Kh"), ["b"])
        self.assertEqual(self.resolve(HandCategory.STRAIGHT_FLUSH,
                                      a="Ad 2d 3d 4d 5d Kc Qh",
                                      b="2h 3h 4h 5h 6h Kc Qh"), ["b"])
        self.assertEqual(straight_top([14, 2, 3, 4, 5]), 5)
        self.assertEqual(straight_top([14, 13, 12, 11, 10]), 14)
        self.assertEqual(straight_top([14, 13, 12, 11, 9]), 0)

    def test_flush(self):
        """Test that flushes compare the five flush cards."""
        self.assertEqual(self.resolve(HandCategory.FLUSH,
                                      a="As 2s 5s 7s 9s Kd Qd",
                                      b="Kh Qh Jh 8h 3h Ad Ac"), ["a"])
        self.assertEqual(self.resolve(HandCategory.FLUSH,
                                      a="As Ks 5s 7s 3s Qd Jd",
                                      b="Ah Kh 5h 7h 2h Qd Jd"), ["a"])

    def test_exact_tie(self):
        """Test that a board that plays returns every hand."""
        board = "As Ks Qd Jc 9h"
        winners = self.resolve(HandCategory.HIGH_CARD,
                               a=board + " 2c 3d",
                               b=board + " 2h 3h")
        self.assertEqual(winners, ["a", "b"])

    def test_single_candidate(self):
        """Test that a single hand is returned as is."""
        self.assertEqual(self.resolve(HandCategory.PAIR, a="As Ad"), ["a"])

    def test_unknown_category(self):
        """Test that an out-of-range category is an invariant violation."""
        with self.assertRaises(EngineInvariantError):
            self.resolve(12, a="As Ad")

    def test_ties_only_when_all_discriminators_match(self):
        """Test random same-category hands: several winners only on full equality."""
        evaluator = HandEvaluator()
        rng = np.random.default_rng(5)
        compared = 0
        for _ in range(2000):
            order = rng.permutation(52)
            first = [FULL_DECK[i] for i in order[:7]]
            second = [FULL_DECK[i] for i in order[7:14]]
            category = evaluator.categorize(first)
            if category != evaluator.categorize(second):
                continue

            compared += 1
            winners = self.resolver.resolve({"first": first, "second": second}, category)
            self.assertGreaterEqual(len(winners), 1)
            if len(winners) == 2:
                for discriminator in DISCRIMINATORS[HandCategory(category)]:
                    self.assertEqual(discriminator(first), discriminator(second))

        self.assertGreater(compared, 0)


if __name__ == '__main__':
    unittest.main()
