#!/usr/bin/env python
"""
simulate.py - Self-play between automated participants

This script plays complete games between automated participants only,
tracks chip stacks, showdown hand categories, action frequencies and
effective hand strengths, and saves charts of the results.
"""

import os
import sys
import time
import argparse
import logging
from collections import Counter, defaultdict
from pathlib import Path

import matplotlib.pyplot as plt
from tqdm import tqdm

# Add the source directory to the path so we can import our modules
project_root = Path(os.path.dirname(os.path.abspath(__file__)))
if str(project_root / "src") not in sys.path:
    sys.path.append(str(project_root / "src"))

from holdem.algorithms.equity import EquityEstimator
from holdem.algorithms.strategy import AutomatedStrategy
from holdem.engine.events import (
    ActionTaken, CommunityCardRevealed, CompositeObserver, RoundObserver, RoundStarted,
)
from holdem.engine.evaluator import HandEvaluator
from holdem.engine.game import HoldemGame
from holdem.engine.game_state import Street, UNCOMPUTED
from holdem.interface.console import ConsoleObserver
from holdem.utils.logging import get_log_path, setup_logger, log_system_info
from holdem.utils.visualization import (
    plot_action_frequencies, plot_category_frequencies,
    plot_hand_strength_distribution, plot_stack_history,
)
import config


class SimulationStats(RoundObserver):
    """Counts actions per street from the event stream."""

    STREET_BY_BOARD = {0: Street.PREFLOP, 3: Street.FLOP, 4: Street.TURN, 5: Street.RIVER}

    def __init__(self):
        self.board_size = 0
        self.actions = defaultdict(Counter)

    def notify(self, event):
        if isinstance(event, RoundStarted):
            self.board_size = 0
        elif isinstance(event, CommunityCardRevealed):
            self.board_size += 1
        elif isinstance(event, ActionTaken):
            street = self.STREET_BY_BOARD.get(self.board_size, Street.FLOP)
            self.actions[street.name.title()][event.action.name.lower()] += 1


class RecordingStrategy(AutomatedStrategy):
    """AutomatedStrategy that keeps every effective hand strength it computes."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.strengths = []

    def decide(self, participant, bet_level, street, table):
        cached = participant.ehs != UNCOMPUTED
        decision = super().decide(participant, bet_level, street, table)
        if not cached and participant.ehs != UNCOMPUTED:
            self.strengths.append(participant.ehs)
        return decision


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Run self-play games between automated participants.')
    parser.add_argument('--games', type=int, default=config.SIMULATION_PARAMS['num_games'],
                        help='Number of games to play')
    parser.add_argument('--max_rounds', type=int, default=config.SIMULATION_PARAMS['max_rounds'],
                        help='Round limit per game')
    parser.add_argument('--players', type=int, default=config.GAME_PARAMS['num_players'],
                        help='Number of participants')
    parser.add_argument('--stack', type=int, default=config.GAME_PARAMS['starting_stack'],
                        help='Starting stack of every participant')
    parser.add_argument('--big_blind', type=int, default=config.GAME_PARAMS['big_blind'],
                        help='Big blind amount')
    parser.add_argument('--seed', type=int, default=None,
                        help='Base seed; game k uses seed + k')
    parser.add_argument('--workers', type=int, default=config.EQUITY_PARAMS['max_workers'],
                        help='Threads for the equity estimator')
    parser.add_argument('--plot_interval', type=int, default=config.SIMULATION_PARAMS['plot_interval'],
                        help='Save charts every N games')
    parser.add_argument('--save_path', type=str, default=str(config.REPORTS_DIR),
                        help='Directory for the charts')
    parser.add_argument('--narrate', action='store_true',
                        help='Print the table commentary of every game')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Path to save the log file (default: data/game_logs/simulate.log)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args()


def save_reports(save_path, suffix, stack_history, categories, actions, strengths):
    """Save every chart for the games played so far."""
    figures = [
        plot_stack_history(stack_history, save_path / f"stacks_{suffix}.png"),
        plot_category_frequencies(categories, save_path / f"categories_{suffix}.png"),
        plot_action_frequencies(actions, save_path / f"actions_{suffix}.png"),
        plot_hand_strength_distribution(strengths, save_path / f"hand_strength_{suffix}.png"),
    ]
    for fig in figures:
        plt.close(fig)


def run_simulation(args, logger):
    """Play the requested games and report the results."""
    logger.info(f"Starting {args.games} self-play games with {args.players} participants")

    save_path = Path(args.save_path)
    save_path.mkdir(parents=True, exist_ok=True)

    evaluator = HandEvaluator()
    equity = EquityEstimator(evaluator=evaluator,
                             max_workers=args.workers,
                             chunk_size=config.EQUITY_PARAMS['chunk_size'],
                             cache_size=config.EQUITY_PARAMS['cache_size'])
    strategy = RecordingStrategy(equity=equity)
    stats = SimulationStats()
    observer = CompositeObserver([stats])
    if args.narrate:
        observer.add(ConsoleObserver(print_fn=lambda *parts: tqdm.write(" ".join(map(str, parts)))))

    start_time = time.time()
    wins = Counter()
    categories = Counter()
    total_rounds = 0

    pbar = tqdm(range(1, args.games + 1), desc="Self-play")
    for game_number in pbar:
        seed = args.seed + game_number if args.seed is not None else None
        game = HoldemGame(num_participants=args.players, starting_stack=args.stack,
                          big_blind=args.big_blind, human_seat=None,
                          automated_provider=strategy, observer=observer, seed=seed,
                          evaluator=evaluator)

        stack_history = {p.name: [] for p in game.roster}
        while len(game.participants_with_chips()) > 1 and game.rounds_played < args.max_rounds:
            result = game.play_round()
            for name, stack in result.stacks.items():
                stack_history[name].append(stack)
            categories.update(result.showdown_categories.values())

        total_rounds += game.rounds_played
        leader = max(game.roster, key=lambda p: p.stack)
        wins[leader.name] += 1

        elapsed = time.time() - start_time
        pbar.set_postfix({
            'Rounds': game.rounds_played,
            'Leader': leader.name,
            'Rounds/s': f"{total_rounds / elapsed:.1f}" if elapsed > 0 else "-",
        })
        logger.info(f"Game {game_number}/{args.games}: {leader.name} finished with "
                    f"${leader.stack} after {game.rounds_played} rounds")

        if game_number % args.plot_interval == 0 or game_number == args.games:
            suffix = "final" if game_number == args.games else f"game_{game_number}"
            save_reports(save_path, suffix, stack_history, categories, stats.actions, strategy.strengths)

    total_time = time.time() - start_time
    logger.info(f"Simulation completed in {total_time:.2f} seconds ({total_rounds} rounds)")
    for name, count in wins.most_common():
        logger.info(f"{name}: {count} game(s) won")
    logger.info(f"Charts saved to {save_path}")

    return wins


def main():
    """Main function to run the simulation."""
    args = parse_args()

    log_level = logging.DEBUG if args.debug else getattr(logging, config.LOGGING['level'])
    logger = setup_logger("simulate", log_level, str(args.log_file or get_log_path("simulate", config.LOG_DIR)))
    log_system_info(logger)

    try:
        run_simulation(args, logger)
        logger.info("Simulation completed successfully")
        return 0

    except Exception as e:
        logger.exception(f"Error during simulation: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
