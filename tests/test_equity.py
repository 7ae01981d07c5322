import unittest
from unittest.mock import patch
import sys
import os
import numpy as np

# Add source directory to path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(project_root, 'src'))

from holdem.algorithms.equity import AHEAD, BEHIND, TIED, EquityEstimator, HandPotential
from holdem.engine.cards import FULL_DECK, parse_cards
from holdem.engine.game_state import Participant, UNCOMPUTED
from holdem.utils.parallel import get_parallel_info, resolve_worker_count


class TestHandStrength(unittest.TestCase):
    def setUp(self):
        """Setup test environment for equity estimation."""
        self.equity = EquityEstimator(max_workers=1)

    def test_royal_flush_is_unbeatable(self):
        """Test that a royal flush beats every opponent holding."""
        strength = self.equity.hand_strength(parse_cards("As Ks"), parse_cards("Qs Js Ts 2d 3c"))
        self.assertEqual(strength, 1.0)

    def test_preflop_pairs(self):
        """Test pre-flop strengths of a pair and of unpaired cards."""
        aces = self.equity.hand_strength(parse_cards("As Ad"), [])
        junk = self.equity.hand_strength(parse_cards("7c 2d"), [])

        # Aces: 1152 unpaired holdings beaten, 73 paired holdings tied
        self.assertAlmostEqual(aces, (1152 + .5 * 73) / 1225)
        # Seven-deuce: 1153 unpaired holdings tied, 72 paired holdings ahead
        self.assertAlmostEqual(junk, .5 * 1153 / 1225)
        self.assertGreater(aces, junk)

    def test_strength_bounds(self):
        """Test that hand strength stays within [0, 1] on random boards."""
        rng = np.random.default_rng(4)
        for board_size in (0, 3, 4, 5):
            order = rng.permutation(52)
            hole = [FULL_DECK[i] for i in order[:2]]
            board = [FULL_DECK[i] for i in order[2:2 + board_size]]
            strength = self.equity.hand_strength(hole, board)
            self.assertGreaterEqual(strength, 0.0)
            self.assertLessEqual(strength, 1.0)

    def test_opponent_holdings(self):
        """Test the enumeration of opponent holdings."""
        unseen = EquityEstimator.unseen_cards([0, 1, 2])
        self.assertEqual(len(unseen), 49)
        self.assertNotIn(0, unseen)

        holdings = EquityEstimator.opponent_holdings(unseen)
        self.assertEqual(holdings.shape, (49 * 48 // 2, 2))
        self.assertTrue(np.all(holdings[:, 0] < holdings[:, 1]))


class TestHandPotential(unittest.TestCase):
    def setUp(self):
        """Setup test environment for hand potential."""
        self.equity = EquityEstimator(max_workers=1)
        self.hole = parse_cards("9h 8h")
        self.turn = parse_cards("7h 6c 2h Kd")

    def test_preflop_has_no_potential(self):
        """Test that potential is undefined before the flop."""
        self.assertIsNone(self.equity.hand_potential(self.hole, []))

    def test_river_has_zero_potential(self):
        """Test that no cards to come means no potential."""
        potential = self.equity.hand_potential(self.hole, self.turn + parse_cards("3s"))
        self.assertEqual(int(potential.counts.sum()), 0)
        self.assertEqual(potential.as_tuple(), (0.0, 0.0))

    def test_turn_counts(self):
        """Test that every disjoint (holding, river) pair is counted once."""
        potential = self.equity.hand_potential(self.hole, self.turn)

        # 46 unseen cards: 1035 holdings, each with 44 possible rivers
        self.assertEqual(int(potential.counts.sum()), 1035 * 44)
        self.assertEqual(int(potential.totals.sum()), 1035 * 44)
        self.assertGreater(potential.positive, 0.0)
        self.assertLessEqual(potential.positive, 1.0)
        self.assertGreaterEqual(potential.negative, 0.0)
        self.assertLessEqual(potential.negative, 1.0)

    def test_flop_counts(self):
        """Test the two-card completion enumeration on the flop."""
        potential = self.equity.hand_potential(self.hole, self.turn[:3])
        self.assertEqual(int(potential.counts.sum()), 1081 * 990)

    def test_worker_count_does_not_change_result(self):
        """Test that threaded enumeration equals the sequential result."""
        threaded = EquityEstimator(max_workers=3, chunk_size=50)
        sequential = self.equity.hand_potential(self.hole, self.turn)
        parallel = threaded.hand_potential(self.hole, self.turn)
        np.testing.assert_array_equal(sequential.counts, parallel.counts)

    def test_invalid_worker_count(self):
        """Test that fewer than one worker is rejected."""
        with self.assertRaises(ValueError):
            EquityEstimator(max_workers=0)

    def test_automatic_worker_count(self):
        """Test the worker count picked from the usable CPUs."""
        info = get_parallel_info()
        self.assertEqual(set(info), {"cpu_count", "usable_cpus"})
        self.assertGreaterEqual(info["usable_cpus"], 1)

        workers = resolve_worker_count(None, upper_bound=2)
        self.assertEqual(workers, min(info["usable_cpus"], 2))
        self.assertEqual(resolve_worker_count(3), 3)

    def test_results_are_cached(self):
        """Test that repeated requests reuse the memoised result."""
        first = self.equity.hand_potential(self.hole, self.turn)
        with patch.object(self.equity, '_enumerate_potential') as enumerate_potential:
            second = self.equity.hand_potential(list(reversed(self.hole)), self.turn)
            enumerate_potential.assert_not_called()
        self.assertIs(first, second)

        self.equity.clear_cache()
        self.assertIsNot(self.equity.hand_potential(self.hole, self.turn), first)

    def test_zero_denominators(self):
        """Test the potential formulas when a standing never occurs."""
        counts = np.zeros((3, 3), dtype=np.int64)
        counts[AHEAD][AHEAD] = 10
        potential = HandPotential(counts)
        self.assertEqual(potential.positive, 0.0)
        self.assertEqual(potential.negative, 0.0)

        counts = np.zeros((3, 3), dtype=np.int64)
        counts[BEHIND][AHEAD] = 3
        counts[BEHIND][BEHIND] = 1
        counts[TIED][TIED] = 2
        potential = HandPotential(counts)
        self.assertAlmostEqual(potential.positive, 3 / (4 + 1))
        self.assertAlmostEqual(potential.negative, 0.0)


class TestEffectiveHandStrength(unittest.TestCase):
    def setUp(self):
        """Setup a participant holding a flush draw."""
        self.equity = EquityEstimator(max_workers=1)
        self.participant = Participant("P1", 1000, hole_cards=parse_cards("9h 8h"))
        self.turn = parse_cards("7h 6c 2h Kd")

    def test_preflop_equals_strength(self):
        """Test that before the flop EHS is the plain hand strength."""
        ehs = self.equity.effective_hand_strength(self.participant, [])
        self.assertAlmostEqual(ehs, self.equity.hand_strength(self.participant.hole_cards, []))

    def test_ehs_formula_and_cache(self):
        """Test hs + (1 - hs) * ppot and the per-participant cache."""
        strength = self.equity.hand_strength(self.participant.hole_cards, self.turn)
        potential = self.equity.hand_potential(self.participant.hole_cards, self.turn)

        ehs = self.equity.effective_hand_strength(self.participant, self.turn)
        self.assertAlmostEqual(ehs, strength + (1 - strength) * potential.positive)
        self.assertEqual(self.participant.ehs, ehs)

        with patch.object(self.equity, 'hand_strength') as hand_strength:
            self.assertEqual(self.equity.effective_hand_strength(self.participant, self.turn), ehs)
            hand_strength.assert_not_called()

        self.participant.reset_for_street()
        self.assertEqual(self.participant.ehs, UNCOMPUTED)


if __name__ == '__main__':
    unittest.main()
