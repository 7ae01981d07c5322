#!/usr/bin/env python
"""
play.py - Interactive hold 'em against automated participants

This script seats one human participant, driven from the keyboard, at a table
of automated participants and plays until one participant holds every chip.
"""

import os
import sys
import argparse
import logging
from pathlib import Path

# Add the source directory to the path so we can import our modules
project_root = Path(os.path.dirname(os.path.abspath(__file__)))
if str(project_root / "src") not in sys.path:
    sys.path.append(str(project_root / "src"))

from holdem.algorithms.equity import EquityEstimator
from holdem.engine.errors import HoldemError
from holdem.engine.evaluator import HandEvaluator
from holdem.engine.game import HoldemGame
from holdem.interface.console import ConsoleDecisionProvider, ConsoleObserver
from holdem.utils.logging import configure_global_logging, log_system_info
import config


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Play Texas hold \'em against automated participants.')
    parser.add_argument('--players', type=int, default=config.GAME_PARAMS['num_players'],
                        help='Number of participants, including you')
    parser.add_argument('--stack', type=int, default=config.GAME_PARAMS['starting_stack'],
                        help='Starting stack of every participant')
    parser.add_argument('--big_blind', type=int, default=config.GAME_PARAMS['big_blind'],
                        help='Big blind amount')
    parser.add_argument('--rounds', type=int, default=None,
                        help='Stop after this many rounds')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for shuffling and automated decisions')
    parser.add_argument('--workers', type=int, default=config.EQUITY_PARAMS['max_workers'],
                        help='Threads for the equity estimator')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Path to save the engine log (default: data/game_logs/holdem.log)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args()


def main():
    """Main function to run interactive play."""
    args = parse_args()

    # Engine messages go to the log file; the table talk goes to the console
    log_level = logging.DEBUG if args.debug else getattr(logging, config.LOGGING['level'])
    configure_global_logging(log_level, str(args.log_file or config.LOGGING['file']), console=False)
    logger = logging.getLogger("play")
    if args.debug:
        log_system_info(logger)

    try:
        evaluator = HandEvaluator()
        equity = EquityEstimator(evaluator=evaluator,
                                 max_workers=args.workers,
                                 chunk_size=config.EQUITY_PARAMS['chunk_size'],
                                 cache_size=config.EQUITY_PARAMS['cache_size'])

        game = HoldemGame(
            num_participants=args.players,
            starting_stack=args.stack,
            big_blind=args.big_blind,
            human_seat=config.GAME_PARAMS['human_seat'],
            human_provider=ConsoleDecisionProvider(),
            observer=ConsoleObserver(),
            seed=args.seed,
            evaluator=evaluator,
            equity=equity,
        )

        game.play(max_rounds=args.rounds)
        return 0

    except KeyboardInterrupt:
        print("\nGoodbye!")
        return 0
    except HoldemError as e:
        logger.exception(f"Error during play: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
