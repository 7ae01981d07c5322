"""
errors.py - Exception hierarchy for the hold 'em engine

Invalid participant decisions are not represented here: they are reported
through ValidationResult objects and retried by the betting round.
"""


class HoldemError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(HoldemError, ValueError):
    """Raised at setup for an unplayable table (too few seats, empty stacks)."""


class EngineInvariantError(HoldemError, RuntimeError):
    """Raised when internal state is inconsistent, e.g. an unknown hand category."""


class DegenerateShowdownError(EngineInvariantError):
    """Raised when a contested pot cannot produce a winner at showdown."""
