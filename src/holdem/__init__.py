"""
HoldemEngine - a multi-participant Texas hold 'em game engine.

Subpackages:
- engine: cards, hand evaluation, tie resolution, pots, betting and rounds
- algorithms: equity estimation and automated decision making
- interface: console collaborator (observer and keyboard decision provider)
- utils: logging, visualization and worker setup helpers
"""

__version__ = '0.1.0'
