import unittest
import sys
import os
import numpy as np

# Add source directory to path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, os.path.join(project_root, 'src'))

from holdem.engine.cards import Card, Deck, Rank, Suit, FULL_DECK, parse_cards


class TestCard(unittest.TestCase):
    def test_parse_short_form(self):
        """Test parsing cards from their two-character form."""
        card = Card.from_string("As")
        self.assertEqual(card.rank, Rank.ACE)
        self.assertEqual(card.suit, Suit.SPADES)

        self.assertEqual(Card.from_string("Td"), Card(Rank.TEN, Suit.DIAMONDS))
        self.assertEqual(Card.from_string("10h"), Card(Rank.TEN, Suit.HEARTS))
        self.assertEqual(Card.from_string("2c"), Card(Rank.TWO, Suit.CLUBS))

    def test_parse_invalid(self):
        """Test that malformed card strings are rejected."""
        for text in ["", "A", "Zs", "Ax", "Asd"]:
            with self.assertRaises(ValueError):
                Card.from_string(text)

    def test_formatting(self):
        """Test the short and readable card forms."""
        card = Card(Rank.ACE, Suit.SPADES)
        self.assertEqual(card.short(), "As")
        self.assertEqual(str(card), "As")
        self.assertEqual(card.pretty(), "Ace of Spades")
        self.assertEqual(Card(Rank.TEN, Suit.DIAMONDS).pretty(), "Ten of Diamonds")

    def test_index_round_trip(self):
        """Test that the dense index is suit-major and invertible."""
        for index, card in enumerate(FULL_DECK):
            self.assertEqual(card.index, index)
            self.assertEqual(Card.from_index(index), card)
        self.assertEqual(Card(Rank.TWO, Suit.SPADES).index, 0)
        self.assertEqual(Card(Rank.ACE, Suit.DIAMONDS).index, 51)

        with self.assertRaises(ValueError):
            Card.from_index(52)

    def test_ordering_by_rank_only(self):
        """Test that ordering ignores suits while equality does not."""
        ace_spades, ace_hearts = Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.HEARTS)
        king = Card(Rank.KING, Suit.CLUBS)

        self.assertNotEqual(ace_spades, ace_hearts)
        self.assertFalse(ace_spades < ace_hearts)
        self.assertFalse(ace_hearts < ace_spades)
        self.assertTrue(ace_spades >= ace_hearts)
        self.assertTrue(king < ace_hearts)
        self.assertEqual(max([king, ace_spades]).rank, Rank.ACE)
        self.assertEqual(len({ace_spades, ace_hearts, Card(Rank.ACE, Suit.SPADES)}), 2)

    def test_parse_cards(self):
        """Test parsing a whitespace separated card list."""
        cards = parse_cards("As Kd 7c")
        self.assertEqual([card.short() for card in cards], ["As", "Kd", "7c"])


class TestDeck(unittest.TestCase):
    def test_new_deck_is_complete(self):
        """Test that a deck holds the 52 distinct cards."""
        deck = Deck()
        self.assertEqual(len(deck), 52)
        self.assertEqual(len(set(deck)), 52)
        self.assertEqual(tuple(deck), FULL_DECK)

    def test_deal_from_front(self):
        """Test that cards are removed from the front of the deck."""
        deck = Deck(np.random.default_rng(3))
        front = deck.cards[:5]
        dealt = deck.deal(5)

        self.assertEqual(tuple(dealt), front)
        self.assertEqual(len(deck), 47)
        self.assertTrue(all(card not in deck.cards for card in dealt))

    def test_deal_too_many(self):
        """Test that dealing more cards than remain fails."""
        deck = Deck()
        deck.deal(50)
        with self.assertRaises(ValueError):
            deck.deal(3)

    def test_shuffle_is_permutation(self):
        """Test that shuffling keeps every card exactly once."""
        deck = Deck(np.random.default_rng(11))
        self.assertEqual(sorted(card.index for card in deck), list(range(52)))
        self.assertNotEqual(tuple(deck), FULL_DECK)

    def test_shuffle_uniformity(self):
        """Test that the first dealt card is uniform (chi-square, 51 dof)."""
        rng = np.random.default_rng(2024)
        trials = 5200
        counts = np.zeros(52)
        for _ in range(trials):
            counts[Deck(rng).deal_one().index] += 1

        expected = trials / 52
        chi_square = float(((counts - expected) ** 2 / expected).sum())

        # Critical value of the chi-square distribution, 51 dof, p = 0.001
        self.assertLess(chi_square, 87.97)


if __name__ == '__main__':
    unittest.main()
