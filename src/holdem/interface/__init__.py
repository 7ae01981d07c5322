"""
Interface module for the hold 'em project.

Text collaborators that sit outside the engine: a console observer that
narrates events and a keyboard decision provider for the human participant.
"""

from holdem.interface.console import ConsoleObserver, ConsoleDecisionProvider, describe_table

__all__ = ['ConsoleObserver', 'ConsoleDecisionProvider', 'describe_table']
