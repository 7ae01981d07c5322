"""
evaluator.py - Hand classification for Texas Hold'em

This module provides the HandEvaluator class, which classifies the best
five-card category reachable from up to seven cards. Classification works on
a 13-slot rank histogram and a 4-slot suit histogram instead of enumerating
five-card subsets, and is vectorised with NumPy so the equity estimator can
classify thousands of holdings per call.
"""

import logging
from enum import IntEnum
from typing import List, Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from holdem.engine.cards import Card, NUM_RANKS, NUM_SUITS
from holdem.engine.errors import EngineInvariantError


class HandCategory(IntEnum):
    """Hand categories in ascending order of strength."""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def display_name(self) -> str:
        return CATEGORY_NAMES[self]


CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "junk",
    HandCategory.PAIR: "one pair",
    HandCategory.TWO_PAIR: "two pairs",
    HandCategory.THREE_OF_A_KIND: "three of a kind",
    HandCategory.STRAIGHT: "a straight",
    HandCategory.FLUSH: "a flush",
    HandCategory.FULL_HOUSE: "a full house",
    HandCategory.FOUR_OF_A_KIND: "four of a kind",
    HandCategory.STRAIGHT_FLUSH: "a straight flush",
    HandCategory.ROYAL_FLUSH: "a royal flush!",
}


def category_name(category_id: int) -> str:
    """
    Get the display name of a hand category.

    Args:
        category_id: Category id (0-9)

    Returns:
        Display name, e.g. "a full house"
    """
    try:
        return CATEGORY_NAMES[HandCategory(category_id)]
    except ValueError:
        logging.getLogger(__name__).error(f"Unrecognized hand category id: {category_id}")
        raise EngineInvariantError(f"Unrecognized hand category id: {category_id}") from None


class HandEvaluator:
    """
    Class for classifying poker hands into categories.

    Categories are tested in strictly descending order and the first match
    wins. Flush and straight are tested before four of a kind and full
    house; with at most seven cards a flush or straight cannot coexist with
    quads or a full house, so the order never changes a result.
    """

    # Test order for np.select; the first true condition wins
    PRIORITY = [
        HandCategory.ROYAL_FLUSH,
        HandCategory.STRAIGHT_FLUSH,
        HandCategory.FLUSH,
        HandCategory.STRAIGHT,
        HandCategory.FOUR_OF_A_KIND,
        HandCategory.FULL_HOUSE,
        HandCategory.THREE_OF_A_KIND,
        HandCategory.TWO_PAIR,
        HandCategory.PAIR,
    ]

    def __init__(self):
        """Initialize the hand evaluator with its lookup tables."""
        self.logger = logging.getLogger(__name__)

        self._initialize_lookups()

    def _initialize_lookups(self):
        """Initialize lookup tables shared by every evaluation."""
        # Map from card index (0-51) to rank slot (0-12) and suit slot (0-3)
        self.card_to_rank = np.arange(52) % NUM_RANKS
        self.card_to_suit = np.arange(52) // NUM_RANKS

        # One-hot rows, summed along the card axis to build histograms
        self.rank_onehot = np.eye(NUM_RANKS, dtype=np.int8)
        self.suit_onehot = np.eye(NUM_SUITS, dtype=np.int8)

    def rank_histogram(self, cards: Sequence[Card]) -> np.ndarray:
        """13-slot count of cards per rank, deuce first."""
        counts = np.zeros(NUM_RANKS, dtype=np.int64)
        for card in cards:
            counts[card.index % NUM_RANKS] += 1
        return counts

    def suit_histogram(self, cards: Sequence[Card]) -> np.ndarray:
        """4-slot count of cards per suit."""
        counts = np.zeros(NUM_SUITS, dtype=np.int64)
        for card in cards:
            counts[card.suit] += 1
        return counts

    @staticmethod
    def _straight_mask(rank_counts: np.ndarray) -> np.ndarray:
        """
        Detect five consecutive occupied rank slots for each row.

        The ace slot is copied in front of the deuce so the wheel (A-2-3-4-5)
        is found by the same sliding window as every other straight.

        Args:
            rank_counts: Array of shape (N, 13)

        Returns:
            Boolean array of shape (N,)
        """
        occupied = rank_counts > 0
        extended = np.concatenate([occupied[:, -1:], occupied], axis=1)
        windows = sliding_window_view(extended, 5, axis=1)
        return windows.all(axis=2).any(axis=1)

    def categorize_indices(self, card_indices) -> np.ndarray:
        """
        Classify a batch of hands given as card indices.

        Args:
            card_indices: Integer array of shape (N, m) or (m,), with m <= 7

        Returns:
            Integer array of shape (N,) holding HandCategory values
        """
        cards = np.asarray(card_indices, dtype=np.intp)
        if cards.ndim == 1:
            cards = cards[np.newaxis, :]
        if cards.shape[1] == 0:
            return np.zeros(cards.shape[0], dtype=np.int64)

        ranks = self.card_to_rank[cards]
        suits = self.card_to_suit[cards]
        rank_rows = self.rank_onehot[ranks]
        rank_counts = rank_rows.sum(axis=1)
        suit_counts = self.suit_onehot[suits].sum(axis=1)

        # At most one suit can reach five cards out of seven
        flush = suit_counts.max(axis=1) >= 5
        flush_suit = suit_counts.argmax(axis=1)
        in_flush_suit = suits == flush_suit[:, np.newaxis]
        flush_counts = (rank_rows * in_flush_suit[:, :, np.newaxis]).sum(axis=1)

        straight = self._straight_mask(rank_counts)
        straight_flush = flush & self._straight_mask(flush_counts)
        royal_flush = flush & (flush_counts[:, 8:] > 0).all(axis=1)

        ordered = np.sort(rank_counts, axis=1)
        top = ordered[:, -1]
        second = ordered[:, -2]

        conditions = [
            royal_flush,
            straight_flush,
            flush,
            straight,
            top == 4,
            (top >= 3) & (second >= 2),
            top >= 3,
            (top == 2) & (second == 2),
            top == 2,
        ]
        return np.select(conditions, [int(c) for c in self.PRIORITY],
                         default=int(HandCategory.HIGH_CARD))

    def categorize(self, cards: Sequence[Card]) -> HandCategory:
        """
        Classify a single hand.

        Args:
            cards: Up to seven cards (hole cards plus community cards)

        Returns:
            The best HandCategory reachable from the cards
        """
        if len(cards) > 7:
            raise ValueError(f"Cannot evaluate {len(cards)} cards; at most 7 are allowed")
        indices = [card.index for card in cards]
        return HandCategory(int(self.categorize_indices([indices])[0]))

    def evaluate_hand(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> HandCategory:
        """
        Evaluate a poker hand and return its category.

        Args:
            hole_cards: Participant's hole cards
            community_cards: Community cards revealed so far

        Returns:
            HandCategory of the best hand (higher is better)
        """
        return self.categorize(list(hole_cards) + list(community_cards))

    def get_hand_name(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> str:
        """Display name of the current category, e.g. "two pairs"."""
        return category_name(self.evaluate_hand(hole_cards, community_cards))

    def get_hand_description(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> str:
        """
        Get a human-readable description of a poker hand.

        Args:
            hole_cards: Participant's hole cards
            community_cards: Community cards

        Returns:
            String describing the hand (e.g., "a flush (As, Ks | Qs, 7s, 2s)")
        """
        hand_name = self.get_hand_name(hole_cards, community_cards)
        hole_strs: List[str] = [card.short() for card in hole_cards]
        community_strs: List[str] = [card.short() for card in community_cards]

        return f"{hand_name} ({', '.join(hole_strs)} | {', '.join(community_strs)})"
