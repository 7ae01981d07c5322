"""
rules.py - Texas Hold'em table rules and decision validation

This module defines the table parameters of a no-limit hold 'em game (blinds,
starting stacks, seat count), validates them at setup, and validates raise
decisions. Invalid raises are reported as ValidationResult values, never as
exceptions, so the betting round can simply ask the participant again.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List

from holdem.engine.errors import ConfigurationError
from holdem.engine.game_state import Participant, Street


class RaiseStatus(Enum):
    """Outcome of validating a raise increment."""
    ACCEPTED = auto()
    CANCELLED = auto()
    NEGATIVE = auto()
    EXCEEDS_STACK = auto()
    CANNOT_AFFORD = auto()


@dataclass(frozen=True)
class ValidationResult:
    """Typed result of a decision validation."""
    status: RaiseStatus
    reason: str = ""

    @property
    def legal(self) -> bool:
        return self.status is RaiseStatus.ACCEPTED


class PokerRules:
    """
    Encapsulates the rules of a no-limit Texas Hold'em table.

    The small blind is half the big blind (integer division). Blinds are
    capped at the poster's stack.
    """

    MIN_PARTICIPANTS = 2

    def __init__(self, big_blind: int = 10, starting_stack: int = 1000,
                 num_participants: int = 4):
        """
        Initialize poker rules with specified parameters.

        Args:
            big_blind: Big blind amount (default: 10)
            starting_stack: Chips each participant starts with (default: 1000)
            num_participants: Number of seats (default: 4)
        """
        self.logger = logging.getLogger(__name__)

        if num_participants < self.MIN_PARTICIPANTS:
            raise ConfigurationError(
                f"At least {self.MIN_PARTICIPANTS} participants are required, got {num_participants}")
        if starting_stack <= 0:
            raise ConfigurationError(f"Starting stack must be positive, got {starting_stack}")
        if big_blind <= 0:
            raise ConfigurationError(f"Big blind must be positive, got {big_blind}")

        self.big_blind = int(big_blind)
        self.starting_stack = int(starting_stack)
        self.num_participants = int(num_participants)

    @property
    def small_blind(self) -> int:
        return self.big_blind // 2

    def get_betting_rounds(self) -> List[Street]:
        """Get the betting streets of a round, in order."""
        return list(Street)

    def validate_raise(self, amount: int, bet_level: int, participant: Participant) -> ValidationResult:
        """
        Check a raise increment against the participant's stack.

        Args:
            amount: Proposed increment over the current bet level
            bet_level: Current bet level of the street
            participant: The raising participant

        Returns:
            ValidationResult; anything but ACCEPTED means the participant is asked again
        """
        headroom = self.max_raise(bet_level, participant)

        if amount == 0:
            result = ValidationResult(RaiseStatus.CANCELLED, "Raise cancelled")
        elif amount < 0:
            result = ValidationResult(RaiseStatus.NEGATIVE, "Cannot raise a negative amount")
        elif headroom <= 0:
            result = ValidationResult(RaiseStatus.CANNOT_AFFORD,
                                      f"{participant.name} cannot cover more than the call")
        elif amount > headroom:
            result = ValidationResult(RaiseStatus.EXCEEDS_STACK,
                                      f"Cannot raise ${amount}; at most ${headroom} is available")
        else:
            result = ValidationResult(RaiseStatus.ACCEPTED)

        if not result.legal:
            self.logger.debug(f"Rejected raise of {amount} by {participant.name}: {result.reason}")
        return result

    def max_raise(self, bet_level: int, participant: Participant) -> int:
        """Largest increment the participant can afford after calling."""
        return max(0, participant.stack - max(0, bet_level - participant.posted))

    @staticmethod
    def count_unfolded(participants: List[Participant]) -> int:
        return sum(1 for p in participants if not p.folded)

    @staticmethod
    def count_in_hand(participants: List[Participant]) -> int:
        """Participants who are unfolded and still hold chips."""
        return sum(1 for p in participants if p.in_hand)

    @staticmethod
    def count_with_chips(participants: List[Participant]) -> int:
        return sum(1 for p in participants if p.stack > 0)
