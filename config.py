"""
HoldemEngine Configuration Settings

This module contains the configuration parameters used by the runnable
scripts (play.py, simulate.py): table parameters, equity estimator settings,
simulation settings, logging and file paths. Library code never imports it.
"""

import os
from pathlib import Path

# Project directory structure
PROJECT_ROOT = Path(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = PROJECT_ROOT / "data"
LOG_DIR = DATA_DIR / "game_logs"
REPORTS_DIR = DATA_DIR / "reports"

# Game parameters
GAME_PARAMS = {
    "num_players": 4,                  # Number of seats
    "starting_stack": 1000,            # Chips each participant starts with
    "big_blind": 10,                   # Big blind size; small blind is half
    "human_seat": 0,                   # Seat of the human participant
}

# Equity estimator
EQUITY_PARAMS = {
    "max_workers": None,               # Threads for hand potential (None = auto)
    "chunk_size": 64,                  # Opponent holdings per work item
    "cache_size": 256,                 # Memoised potential results
}

# Self-play simulation
SIMULATION_PARAMS = {
    "num_games": 20,                   # Number of games to play
    "max_rounds": 200,                 # Round limit per game
    "plot_interval": 5,                # Save charts every N games
}

# Logging settings
LOGGING = {
    "level": "INFO",                   # Logging level (DEBUG, INFO, WARNING, ERROR)
    "file": LOG_DIR / "holdem.log",    # Engine log of interactive play
}
