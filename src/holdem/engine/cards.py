"""
cards.py - Playing cards and the dealing deck

This module defines the Rank and Suit enumerations, the immutable Card type
and the Deck used for a single round. Cards carry a dense index (0-51) so the
hand evaluator can build rank and suit histograms with NumPy lookups.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional, Sequence

import numpy as np


class Rank(IntEnum):
    """Card rank with an ace-high numeric value."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def symbol(self) -> str:
        return RANK_SYMBOLS[self - Rank.TWO]


class Suit(IntEnum):
    """Card suit. The value is the suit's slot in a 4-slot histogram."""
    SPADES = 0
    HEARTS = 1
    CLUBS = 2
    DIAMONDS = 3

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


RANK_SYMBOLS = '23456789TJQKA'
SUIT_SYMBOLS = 'SHCD'
NUM_RANKS = 13
NUM_SUITS = 4


@dataclass(frozen=True)
class Card:
    """
    An immutable playing card.

    Equality and hashing use both rank and suit so that distinct cards can be
    held in sets and removed from decks. The ordering operators compare rank
    only, with ace high.
    """
    rank: Rank
    suit: Suit

    def __lt__(self, other: 'Card') -> bool:
        return self.rank < other.rank

    def __le__(self, other: 'Card') -> bool:
        return self.rank <= other.rank

    def __gt__(self, other: 'Card') -> bool:
        return self.rank > other.rank

    def __ge__(self, other: 'Card') -> bool:
        return self.rank >= other.rank

    @property
    def index(self) -> int:
        """Dense card index: suit * 13 + (rank - 2)."""
        return self.suit * NUM_RANKS + (self.rank - Rank.TWO)

    @classmethod
    def from_index(cls, card_idx: int) -> 'Card':
        if not 0 <= card_idx < 52:
            raise ValueError(f"Invalid card index: {card_idx}")
        return cls(Rank(card_idx % NUM_RANKS + Rank.TWO), Suit(card_idx // NUM_RANKS))

    @classmethod
    def from_string(cls, card_str: str) -> 'Card':
        """
        Parse a card from its short form.

        Args:
            card_str: Rank symbol followed by suit symbol, e.g. "As", "Td" or "10h"

        Returns:
            The parsed Card
        """
        text = card_str.strip().upper()
        if len(text) == 3 and text.startswith('10'):
            text = 'T' + text[2]
        if len(text) != 2:
            raise ValueError(f"Invalid card string: {card_str}")

        rank_pos = RANK_SYMBOLS.find(text[0])
        if rank_pos < 0:
            raise ValueError(f"Invalid card rank: {card_str[0]}")
        suit_pos = SUIT_SYMBOLS.find(text[1])
        if suit_pos < 0:
            raise ValueError(f"Invalid card suit: {card_str[-1]}")

        return cls(Rank(rank_pos + Rank.TWO), Suit(suit_pos))

    def short(self) -> str:
        return self.rank.symbol + self.suit.symbol.lower()

    def pretty(self) -> str:
        return f"{self.rank.name.title()} of {self.suit.name.title()}"

    def __str__(self) -> str:
        return self.short()

    def __repr__(self) -> str:
        return f"Card({self.short()})"


FULL_DECK = tuple(Card(rank, suit) for suit in Suit for rank in Rank)


def parse_cards(text: str) -> List[Card]:
    """Parse a whitespace separated list of cards, e.g. "As Kd 7c"."""
    return [Card.from_string(token) for token in text.split()]


class Deck:
    """
    The ordered 52-card deck for one round.

    The deck is created in suit-major order and shuffled with a uniform random
    permutation. Cards are always removed from the front.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self._cards: List[Card] = list(FULL_DECK)
        if rng is not None:
            self.shuffle(rng)

    def shuffle(self, rng: np.random.Generator) -> None:
        """Reorder the remaining cards with a uniform random permutation."""
        order = rng.permutation(len(self._cards))
        self._cards = [self._cards[i] for i in order]

    def deal(self, num_cards: int = 1) -> List[Card]:
        """
        Remove cards from the front of the deck.

        Args:
            num_cards: Number of cards to deal

        Returns:
            List of dealt cards, in deck order
        """
        if num_cards > len(self._cards):
            raise ValueError(f"Cannot deal {num_cards} cards from a deck with {len(self._cards)} cards.")

        dealt = self._cards[:num_cards]
        del self._cards[:num_cards]
        return dealt

    def deal_one(self) -> Card:
        return self.deal(1)[0]

    @property
    def cards(self) -> Sequence[Card]:
        return tuple(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(tuple(self._cards))
