"""
Engine module for the hold 'em project.

This module contains the core game engine components:
- Card, Deck: The card model
- HandEvaluator: Classifies hands into categories
- TieResolver: Breaks ties between hands of the same category
- PotManager: Main pot and side pot accounting
- BettingRound: The betting state machine for one street
- HoldemGame: Round orchestration and the game loop
"""

from holdem.engine.cards import Card, Deck, Rank, Suit, FULL_DECK
from holdem.engine.errors import (
    HoldemError, ConfigurationError, EngineInvariantError, DegenerateShowdownError
)
from holdem.engine.evaluator import HandCategory, HandEvaluator, category_name
from holdem.engine.tie_resolver import TieResolver
from holdem.engine.game_state import Street, Action, Decision, Participant
from holdem.engine.pot import Pot, PotAward, PotManager
from holdem.engine.rules import PokerRules, RaiseStatus, ValidationResult
from holdem.engine.decisions import DecisionProvider, ScriptedDecisionProvider
from holdem.engine.betting import BettingRound
from holdem.engine.game import HoldemGame, RoundResult

__all__ = [
    'Card', 'Deck', 'Rank', 'Suit', 'FULL_DECK',
    'HoldemError', 'ConfigurationError', 'EngineInvariantError', 'DegenerateShowdownError',
    'HandCategory', 'HandEvaluator', 'category_name', 'TieResolver',
    'Street', 'Action', 'Decision', 'Participant',
    'Pot', 'PotAward', 'PotManager',
    'PokerRules', 'RaiseStatus', 'ValidationResult',
    'DecisionProvider', 'ScriptedDecisionProvider',
    'BettingRound', 'HoldemGame', 'RoundResult',
]
