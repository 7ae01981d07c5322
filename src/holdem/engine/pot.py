"""
pot.py - Main pot and side pot accounting

The PotManager turns the amounts participants posted during a street into
one or more pots. An all-in participant caps how much of everyone else's
posted money can go into the pot they are eligible for; the rest spills into
a new side pot. After each collection the pots are cleaned up: folded
participants lose eligibility, identical pots merge, and pots left with a
single claimant are paid out immediately.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from holdem.engine.game_state import Participant, PotView
from holdem.engine.rules import PokerRules

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Pot:
    """
    A pot and the participants who may win it.

    contributions records who put how much into the pot during the latest
    collection only; it is cleared at the start of every collection.
    """
    value: int = 0
    eligible: List[Participant] = field(default_factory=list)
    contributions: Dict[Participant, int] = field(default_factory=dict)

    def add(self, participant: Participant, amount: int) -> None:
        self.value += amount
        if amount:
            self.contributions[participant] = self.contributions.get(participant, 0) + amount
        if not participant.folded and participant not in self.eligible:
            self.eligible.append(participant)

    def claimants(self) -> List[Participant]:
        """Eligible participants who have not folded."""
        return [p for p in self.eligible if not p.folded]

    def has_all_in_member(self) -> bool:
        return any(p.stack == 0 for p in self.eligible)

    def same_eligibility(self, other: 'Pot') -> bool:
        return set(map(id, self.eligible)) == set(map(id, other.eligible))

    def view(self) -> PotView:
        return PotView(value=self.value, eligible=tuple(p.name for p in self.eligible))

    def __repr__(self) -> str:
        names = ", ".join(p.name for p in self.eligible)
        return f"Pot(${self.value} between {names})"


@dataclass(frozen=True)
class PotAward:
    """A payout made by the pot manager or at showdown."""
    pot: PotView
    winners: Tuple[str, ...]
    amounts: Tuple[int, ...]
    category_name: str = ""


class PotManager:
    """
    Owns the pots of a single round.

    The manager keeps a running total of chips already paid back to stacks so
    the conservation invariant can be checked at any point of the round:
    pots + posted amounts + paid out == chips contributed this round.
    """

    def __init__(self):
        self.pots: List[Pot] = [Pot()]
        self.paid_out = 0
        self.auto_advance = False

    def reset(self) -> None:
        """Start a new round with a single empty pot."""
        self.pots = [Pot()]
        self.paid_out = 0
        self.auto_advance = False

    @property
    def total(self) -> int:
        return sum(pot.value for pot in self.pots)

    def views(self) -> Tuple[PotView, ...]:
        return tuple(pot.view() for pot in self.pots)

    def collect(self, participants: Sequence[Participant]) -> List[PotAward]:
        """
        Move every posted amount into the pots.

        Posters are processed in order of (stack, posted) ascending, which
        puts all-in participants first, smallest all-in first. Each all-in
        poster closes the current pot at their posted level; the first poster
        with chips behind sweeps all remaining posted money into the last pot.

        Args:
            participants: All seated participants, in seat order

        Returns:
            Awards made while cleaning up the pots
        """
        if not self.pots:
            self.pots.append(Pot())
        for pot in self.pots:
            pot.contributions.clear()

        posters = sorted((p for p in participants if p.posted > 0),
                         key=lambda p: (p.stack, p.posted))

        for position, poster in enumerate(posters):
            waterline = poster.posted
            if waterline == 0:
                continue

            # A participant who exactly matched the bet last street with
            # nothing behind needs a fresh pot for any further money
            if self.pots[-1].has_all_in_member():
                self.pots.append(Pot())

            current = self.pots[-1]
            if poster.stack == 0:
                for other in posters[position:]:
                    amount = min(other.posted, waterline)
                    other.posted -= amount
                    current.add(other, amount)
                self.pots.append(Pot())
            else:
                for other in posters[position:]:
                    amount = other.posted
                    other.posted = 0
                    current.add(other, amount)
                break

        awards = self._clean_up()
        self.auto_advance = PokerRules.count_in_hand(participants) <= 1

        logger.debug(f"Pots after collection: {self.pots}; auto advance: {self.auto_advance}")
        return awards

    def _clean_up(self) -> List[PotAward]:
        for pot in self.pots:
            pot.eligible = pot.claimants()
        self.pots = [pot for pot in self.pots if pot.value > 0]

        self._merge_identical()
        self._settle_unclaimed()

        awards = []
        for pot in self.pots:
            if len(pot.eligible) == 1 and pot.value > 0:
                awards.append(self.pay(pot, [pot.eligible[0]], [pot.value]))
                pot.value = 0

        self.pots = [pot for pot in self.pots if pot.value > 0]
        return awards

    def _merge_identical(self) -> None:
        """Merge adjacent pots whose eligible sets are the same."""
        index = 0
        while index < len(self.pots) - 1:
            first, second = self.pots[index], self.pots[index + 1]
            if first.same_eligibility(second):
                first.value += second.value
                for participant, amount in second.contributions.items():
                    first.contributions[participant] = first.contributions.get(participant, 0) + amount
                del self.pots[index + 1]
            else:
                index += 1

    def _settle_unclaimed(self) -> None:
        """
        Deal with pots nobody unfolded is eligible for.

        An uncalled excess (one contributor during this collection) goes back
        to that contributor. With several contributors, the top contributor
        gets back whatever nobody matched and the rest joins the neighbouring
        pot.
        """
        index = 0
        while index < len(self.pots):
            pot = self.pots[index]
            if pot.eligible or pot.value == 0:
                index += 1
                continue

            if len(pot.contributions) == 1:
                contributor = next(iter(pot.contributions))
                self._return_uncalled(pot, contributor, pot.value)
                del self.pots[index]
                continue

            if len(pot.contributions) > 1:
                ranked = sorted(pot.contributions.items(), key=lambda item: item[1], reverse=True)
                (top, top_amount), (_, second_amount) = ranked[0], ranked[1]
                self._return_uncalled(pot, top, top_amount - second_amount)

            if len(self.pots) > 1:
                target = self.pots[index - 1] if index > 0 else self.pots[index + 1]
                target.value += pot.value
                del self.pots[index]
                index = max(index - 1, 0)
            else:
                index += 1

    def _return_uncalled(self, pot: Pot, contributor: Participant, amount: int) -> None:
        if amount <= 0:
            return
        logger.debug(f"Returning uncalled ${amount} to {contributor.name}")
        pot.value -= amount
        pot.contributions[contributor] -= amount
        contributor.stack += amount
        self.paid_out += amount

    def fold_resolves_side_pot(self) -> bool:
        """True when side pots exist and the last one has a single claimant left."""
        return len(self.pots) > 1 and len(self.pots[-1].claimants()) == 1

    def pay(self, pot: Pot, winners: Sequence[Participant], amounts: Sequence[int],
            category_name: str = "") -> PotAward:
        """Credit winners' stacks and record the award."""
        award = PotAward(
            pot=pot.view(),
            winners=tuple(w.name for w in winners),
            amounts=tuple(int(a) for a in amounts),
            category_name=category_name,
        )
        for winner, amount in zip(winners, amounts):
            winner.stack += int(amount)
            self.paid_out += int(amount)
        logger.info(f"{', '.join(award.winners)} won ${pot.value}"
                    + (f" with {category_name}" if category_name else ""))
        return award

    @staticmethod
    def split(value: int, num_winners: int, rng: Optional[np.random.Generator] = None) -> List[int]:
        """
        Split a pot between winners.

        Every winner gets value // num_winners; the remaining odd chips are
        handed out one at a time to uniformly chosen winners.

        Args:
            value: Pot value
            num_winners: Number of winners
            rng: Generator for the odd chips (default: a fresh generator)

        Returns:
            List of amounts, one per winner, summing to value
        """
        if num_winners <= 0:
            raise ValueError("A pot needs at least one winner")
        rng = rng if rng is not None else np.random.default_rng()

        share, remainder = divmod(int(value), num_winners)
        amounts = [share] * num_winners
        for _ in range(remainder):
            amounts[int(rng.integers(num_winners))] += 1
        return amounts

    def distribute(self, pot: Pot, winners: Sequence[Participant], category_name: str = "",
                   rng: Optional[np.random.Generator] = None) -> PotAward:
        """Split a pot among its winners and remove it from play."""
        amounts = self.split(pot.value, len(winners), rng)
        award = self.pay(pot, winners, amounts, category_name)
        pot.value = 0
        if pot in self.pots:
            self.pots.remove(pot)
        return award
