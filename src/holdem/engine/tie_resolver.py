"""
tie_resolver.py - Kicker comparisons for hands sharing a category

Given several hands already known to share the same HandCategory, the
TieResolver narrows them to the hand(s) that are actually best by walking an
ordered list of category specific discriminators. Each discriminator maps a
seven-card hand to a comparable value; candidates below the maximum are
dropped and the walk stops once a single candidate remains.
"""

import logging
from collections import Counter
from typing import Callable, Dict, Hashable, List, Mapping, Sequence, Tuple

from holdem.engine.cards import Card, Rank
from holdem.engine.evaluator import HandCategory
from holdem.engine.errors import EngineInvariantError


Discriminator = Callable[[Sequence[Card]], object]


def _ranks_desc(cards: Sequence[Card]) -> List[int]:
    return sorted((int(card.rank) for card in cards), reverse=True)


def _rank_counts(cards: Sequence[Card]) -> Counter:
    return Counter(int(card.rank) for card in cards)


def _ranks_with_count(cards: Sequence[Card], minimum: int) -> List[int]:
    """Ranks held at least `minimum` times, highest first."""
    counts = _rank_counts(cards)
    return sorted((rank for rank, count in counts.items() if count >= minimum), reverse=True)


def straight_top(ranks) -> int:
    """
    Top card of the highest straight among the given rank values.

    Args:
        ranks: Iterable of rank values (2-14)

    Returns:
        Rank value of the straight's top card (5 for the wheel), or 0 if none
    """
    present = set(int(rank) for rank in ranks)
    if Rank.ACE in present:
        present.add(1)
    for top in range(int(Rank.ACE), 4, -1):
        if all(rank in present for rank in range(top - 4, top + 1)):
            return top
    return 0


def _flush_cards(cards: Sequence[Card]) -> List[Card]:
    by_suit: Dict[int, List[Card]] = {}
    for card in cards:
        by_suit.setdefault(int(card.suit), []).append(card)
    for suited in by_suit.values():
        if len(suited) >= 5:
            return suited
    return []


def _straight_flush_top(cards: Sequence[Card]) -> int:
    return straight_top(card.rank for card in _flush_cards(cards))


def _straight_high(cards: Sequence[Card]) -> int:
    return straight_top(card.rank for card in cards)


def _flush_ranks(cards: Sequence[Card]) -> Tuple[int, ...]:
    return tuple(_ranks_desc(_flush_cards(cards))[:5])


def _top_group(cards: Sequence[Card], size: int) -> int:
    groups = _ranks_with_count(cards, size)
    return groups[0] if groups else 0


def _kickers(cards: Sequence[Card], excluded: Sequence[int], count: int) -> Tuple[int, ...]:
    return tuple(rank for rank in _ranks_desc(cards) if rank not in excluded)[:count]


def _quad_rank(cards):
    return _top_group(cards, 4)


def _quad_kicker(cards):
    return _kickers(cards, [_quad_rank(cards)], 1)


def _trip_rank(cards):
    return _top_group(cards, 3)


def _full_house_pair(cards):
    trip = _trip_rank(cards)
    pairs = [rank for rank in _ranks_with_count(cards, 2) if rank != trip]
    return pairs[0] if pairs else 0


def _trip_kickers(cards):
    return _kickers(cards, [_trip_rank(cards)], 2)


def _two_pair_ranks(cards) -> List[int]:
    return (_ranks_with_count(cards, 2) + [0, 0])[:2]


def _high_pair(cards):
    return _two_pair_ranks(cards)[0]


def _low_pair(cards):
    return _two_pair_ranks(cards)[1]


def _two_pair_kicker(cards):
    return _kickers(cards, _two_pair_ranks(cards), 1)


def _pair_rank(cards):
    return _top_group(cards, 2)


def _pair_kickers(cards):
    return _kickers(cards, [_pair_rank(cards)], 3)


def _high_cards(cards):
    return tuple(_ranks_desc(cards)[:5])


DISCRIMINATORS: Dict[HandCategory, List[Discriminator]] = {
    HandCategory.ROYAL_FLUSH: [_straight_flush_top],
    HandCategory.STRAIGHT_FLUSH: [_straight_flush_top],
    HandCategory.FOUR_OF_A_KIND: [_quad_rank, _quad_kicker],
    HandCategory.FULL_HOUSE: [_trip_rank, _full_house_pair],
    HandCategory.FLUSH: [_flush_ranks],
    HandCategory.STRAIGHT: [_straight_high],
    HandCategory.THREE_OF_A_KIND: [_trip_rank, _trip_kickers],
    HandCategory.TWO_PAIR: [_high_pair, _low_pair, _two_pair_kicker],
    HandCategory.PAIR: [_pair_rank, _pair_kickers],
    HandCategory.HIGH_CARD: [_high_cards],
}


class TieResolver:
    """
    Narrows a set of same-category hands to the true winner(s).

    Hands are given as a mapping from any hashable key (a participant, a
    name, a seat index) to the full card list (hole plus community cards).
    More than one key is returned only when every discriminator is equal.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def discriminators(self, category: int) -> List[Discriminator]:
        try:
            return DISCRIMINATORS[HandCategory(category)]
        except ValueError:
            self.logger.error(f"Tie resolution requested for unknown category id: {category}")
            raise EngineInvariantError(f"Unrecognized hand category id: {category}") from None

    def resolve(self, hands: Mapping[Hashable, Sequence[Card]], category: int) -> List[Hashable]:
        """
        Find the best hand(s) among hands sharing a category.

        Args:
            hands: Mapping from key to the hand's cards (up to seven)
            category: The shared HandCategory

        Returns:
            The winning keys, in the mapping's iteration order
        """
        candidates = list(hands.keys())
        for discriminator in self.discriminators(category):
            if len(candidates) <= 1:
                break
            values = {key: discriminator(hands[key]) for key in candidates}
            best = max(values.values())
            candidates = [key for key in candidates if values[key] == best]

        if len(candidates) > 1:
            self.logger.debug(f"Exact tie after all kickers between {len(candidates)} hands")
        return candidates

    def resolve_participants(self, participants: Sequence, community_cards: Sequence[Card],
                             category: int) -> List:
        """
        Resolve a tie between participants holding hole cards.

        Args:
            participants: Participants sharing the category
            community_cards: Community cards on the board
            category: The shared HandCategory

        Returns:
            The winning participants, in seat order
        """
        hands = {participant: list(participant.hole_cards) + list(community_cards)
                 for participant in participants}
        return self.resolve(hands, category)
