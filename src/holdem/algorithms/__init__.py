"""
Algorithms module for the hold 'em project.

This module contains the automated decision making components:
- EquityEstimator: Hand strength and hand potential by enumeration
- AutomatedStrategy: Threshold based decisions for non-human participants
"""

from holdem.algorithms.equity import EquityEstimator, HandPotential
from holdem.algorithms.strategy import AutomatedStrategy, hole_card_score

__all__ = ['EquityEstimator', 'HandPotential', 'AutomatedStrategy', 'hole_card_score']
