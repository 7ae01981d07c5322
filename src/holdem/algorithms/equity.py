"""
equity.py - Hand strength and hand potential by exhaustive enumeration

The EquityEstimator measures how a participant's hand fares against every
two-card holding an opponent could have:

- hand strength: share of opponent holdings the hand currently beats, with
  ties counted as half
- hand potential: over every way the remaining community cards can fall,
  how often the hand moves from behind (or tied) to ahead, and from ahead
  (or tied) to behind

Comparisons use hand categories only. Each enumeration is vectorised with
the HandEvaluator; the opponent holdings of the potential enumeration are
split into chunks that run on a thread pool. Chunks return integer count
matrices that are summed in chunk order, so the result does not depend on
the number of workers.
"""

import logging
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

import numpy as np

from holdem.engine.cards import Card
from holdem.engine.evaluator import HandEvaluator
from holdem.engine.game_state import Participant, UNCOMPUTED
from holdem.utils.parallel import resolve_worker_count

# Relative standing of our hand against one opponent holding
AHEAD, TIED, BEHIND = 0, 1, 2


@dataclass(frozen=True, eq=False)
class HandPotential:
    """
    Transition counts between standings now and after the board completes.

    counts[now][after] counts (opponent holding, board completion) pairs,
    with rows and columns ordered ahead, tied, behind.
    """
    counts: np.ndarray

    @property
    def totals(self) -> np.ndarray:
        return self.counts.sum(axis=1)

    @property
    def positive(self) -> float:
        """Chance of ending ahead when currently behind or tied."""
        hp, total = self.counts, self.totals
        denominator = total[BEHIND] + .5 * total[TIED]
        if denominator == 0:
            return 0.0
        return float((hp[BEHIND][AHEAD] + .5 * hp[BEHIND][TIED] + .5 * hp[TIED][AHEAD]) / denominator)

    @property
    def negative(self) -> float:
        """Chance of ending behind when currently ahead or tied."""
        hp, total = self.counts, self.totals
        denominator = total[AHEAD] + .5 * total[TIED]
        if denominator == 0:
            return 0.0
        return float((hp[AHEAD][BEHIND] + .5 * hp[TIED][BEHIND] + .5 * hp[AHEAD][TIED]) / denominator)

    def as_tuple(self) -> Tuple[float, float]:
        return self.positive, self.negative


class EquityEstimator:
    """
    Class for estimating a hand's equity against unknown opponent cards.

    Potential results are memoised per (hole cards, board) in a small LRU
    cache, so repeated decisions on the same street cost nothing.
    """

    def __init__(self, evaluator: Optional[HandEvaluator] = None, max_workers: Optional[int] = None,
                 chunk_size: int = 64, cache_size: int = 256):
        """
        Initialize the estimator.

        Args:
            evaluator: Hand evaluator (default: new HandEvaluator)
            max_workers: Thread count for the potential enumeration (default: auto)
            chunk_size: Opponent holdings per work item (default: 64)
            cache_size: Number of memoised potential results (default: 256)
        """
        self.logger = logging.getLogger(__name__)

        self.evaluator = evaluator or HandEvaluator()
        self.max_workers = resolve_worker_count(max_workers)
        self.chunk_size = max(1, int(chunk_size))
        self.cache_size = max(0, int(cache_size))
        self._cache: "OrderedDict[Tuple, HandPotential]" = OrderedDict()

    @staticmethod
    def _indices(cards: Sequence[Card]) -> List[int]:
        return [card.index for card in cards]

    @staticmethod
    def unseen_cards(known: Sequence[int]) -> np.ndarray:
        """Indices of the cards not in `known`, ascending."""
        mask = np.ones(52, dtype=bool)
        mask[list(known)] = False
        return np.flatnonzero(mask)

    @staticmethod
    def opponent_holdings(unseen: np.ndarray) -> np.ndarray:
        """Every two-card holding drawn from the unseen cards, shape (N, 2)."""
        first, second = np.triu_indices(len(unseen), k=1)
        return np.stack([unseen[first], unseen[second]], axis=1)

    @staticmethod
    def _standing(mine, theirs) -> np.ndarray:
        return np.where(mine > theirs, AHEAD, np.where(mine == theirs, TIED, BEHIND))

    def _with_board(self, holdings: np.ndarray, board: Sequence[int]) -> np.ndarray:
        board_cols = np.broadcast_to(np.asarray(board, dtype=np.intp), (len(holdings), len(board)))
        return np.concatenate([holdings, board_cols], axis=1)

    def hand_strength(self, hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> float:
        """
        Share of opponent holdings the hand currently beats, ties counting half.

        Args:
            hole_cards: The participant's two hole cards
            community_cards: Community cards revealed so far

        Returns:
            Hand strength in [0, 1]
        """
        hole, board = self._indices(hole_cards), self._indices(community_cards)
        opponents = self.opponent_holdings(self.unseen_cards(hole + board))

        mine = self.evaluator.categorize_indices([hole + board])[0]
        theirs = self.evaluator.categorize_indices(self._with_board(opponents, board))

        ahead = np.count_nonzero(mine > theirs)
        tied = np.count_nonzero(mine == theirs)
        strength = (ahead + .5 * tied) / len(opponents)

        self.logger.debug(f"Hand strength of {hole_cards} on {community_cards}: {strength:.6f}")
        return float(strength)

    def hand_potential(self, hole_cards: Sequence[Card],
                       community_cards: Sequence[Card]) -> Optional[HandPotential]:
        """
        Enumerate how the hand's standing changes as the board completes.

        Args:
            hole_cards: The participant's two hole cards
            community_cards: Community cards revealed so far

        Returns:
            HandPotential, or None before the flop; on the river every count is zero
        """
        if not community_cards:
            return None

        hole, board = self._indices(hole_cards), self._indices(community_cards)
        key = (tuple(sorted(hole)), tuple(sorted(board)))
        if key in self._cache:
            self._cache.move_to_end(key)
            return self._cache[key]

        if len(board) >= 5:
            potential = HandPotential(np.zeros((3, 3), dtype=np.int64))
        else:
            potential = HandPotential(self._enumerate_potential(hole, board))

        if self.cache_size:
            self._cache[key] = potential
            if len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)

        self.logger.debug(f"Potential of {hole_cards} on {community_cards}: "
                          f"ppot={potential.positive:.6f}, npot={potential.negative:.6f}")
        return potential

    def _enumerate_potential(self, hole: List[int], board: List[int]) -> np.ndarray:
        unseen = self.unseen_cards(hole + board)
        remaining = 5 - len(board)

        completions = np.array(list(combinations(unseen, remaining)), dtype=np.intp)
        my_future = self.evaluator.categorize_indices(
            np.concatenate([np.broadcast_to(np.asarray(hole + board, dtype=np.intp),
                                            (len(completions), len(hole) + len(board))),
                            completions], axis=1))
        mine_now = self.evaluator.categorize_indices([hole + board])[0]

        # membership[card, j] is True when completion j uses the card
        membership = np.zeros((52, len(completions)), dtype=bool)
        columns = np.arange(len(completions))
        for slot in range(remaining):
            membership[completions[:, slot], columns] = True

        opponents = self.opponent_holdings(unseen)
        chunks = [opponents[start:start + self.chunk_size]
                  for start in range(0, len(opponents), self.chunk_size)]
        work = partial(self._potential_chunk, board=board, completions=completions,
                       my_future=my_future, mine_now=mine_now, membership=membership)

        if self.max_workers == 1:
            results = [work(chunk) for chunk in chunks]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(work, chunks))

        counts = np.zeros((3, 3), dtype=np.int64)
        for result in results:
            counts += result
        return counts

    def _potential_chunk(self, holdings: np.ndarray, board: List[int], completions: np.ndarray,
                         my_future: np.ndarray, mine_now: int, membership: np.ndarray) -> np.ndarray:
        """Transition counts for one chunk of opponent holdings."""
        num_holdings, num_completions = len(holdings), len(completions)

        now = self._standing(mine_now, self.evaluator.categorize_indices(self._with_board(holdings, board)))

        hands = np.concatenate([
            np.broadcast_to(holdings[:, np.newaxis, :], (num_holdings, num_completions, 2)),
            np.broadcast_to(np.asarray(board, dtype=np.intp), (num_holdings, num_completions, len(board))),
            np.broadcast_to(completions[np.newaxis, :, :], (num_holdings,) + completions.shape),
        ], axis=2).reshape(num_holdings * num_completions, -1)
        their_future = self.evaluator.categorize_indices(hands).reshape(num_holdings, num_completions)
        after = self._standing(my_future[np.newaxis, :], their_future)

        # Completions that reuse one of the opponent's cards are impossible
        valid = ~(membership[holdings[:, 0]] | membership[holdings[:, 1]])
        cells = (now[:, np.newaxis] * 3 + after)[valid]
        return np.bincount(cells, minlength=9).reshape(3, 3).astype(np.int64)

    def effective_hand_strength(self, participant: Participant, community_cards: Sequence[Card]) -> float:
        """
        Hand strength adjusted by positive potential, cached on the participant.

        The cache lives in participant.ehs and is cleared by the orchestrator
        at every street reset.

        Args:
            participant: Participant holding two hole cards
            community_cards: Community cards revealed so far

        Returns:
            hs + (1 - hs) * ppot, or hs before the flop
        """
        if participant.ehs != UNCOMPUTED:
            return participant.ehs

        strength = self.hand_strength(participant.hole_cards, community_cards)
        potential = self.hand_potential(participant.hole_cards, community_cards)
        if potential is None:
            ehs = strength
        else:
            ehs = strength + (1 - strength) * potential.positive

        participant.ehs = ehs
        return ehs

    def clear_cache(self) -> None:
        self._cache.clear()
