"""
visualization.py - Charts for self-play reports

This module provides functions to plot chip stacks over a game, the
distribution of effective hand strengths, how often each hand category
reached showdown, and how often automated participants chose each action.
"""

import matplotlib.pyplot as plt
import numpy as np
from pathlib import Path
from typing import Dict, List, Optional

from holdem.engine.evaluator import CATEGORY_NAMES, HandCategory


def setup_plotting_style():
    """Set up the plotting style for consistent visualizations."""
    plt.style.use('ggplot')
    plt.rcParams['figure.figsize'] = (10, 6)
    plt.rcParams['font.size'] = 12
    plt.rcParams['axes.labelsize'] = 14
    plt.rcParams['axes.titlesize'] = 16
    plt.rcParams['legend.fontsize'] = 12


def _finish(fig: plt.Figure, save_path: Optional[Path]) -> plt.Figure:
    fig.tight_layout()
    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
    return fig


def plot_stack_history(stack_history: Dict[str, List[int]],
                       save_path: Optional[Path] = None) -> plt.Figure:
    """
    Plot each participant's chip stack after every round.

    Args:
        stack_history: Mapping from participant name to stack per round
        save_path: Optional path to save the figure

    Returns:
        Matplotlib figure object
    """
    setup_plotting_style()
    fig, ax = plt.subplots()

    for name, stacks in stack_history.items():
        ax.plot(range(1, len(stacks) + 1), stacks, linewidth=2, label=name)

    ax.set_xlabel('Round')
    ax.set_ylabel('Chips')
    ax.set_title('Chip Stacks by Round')
    ax.grid(True, alpha=0.3)
    if stack_history:
        ax.legend()

    return _finish(fig, save_path)


def plot_hand_strength_distribution(hand_strengths: List[float],
                                    save_path: Optional[Path] = None) -> plt.Figure:
    """
    Plot the distribution of effective hand strengths.

    Args:
        hand_strengths: List of hand strength values in [0, 1]
        save_path: Optional path to save the figure

    Returns:
        Matplotlib figure object
    """
    setup_plotting_style()
    fig, ax = plt.subplots()

    ax.hist(hand_strengths, bins=np.linspace(0, 1, 31), color='blue', alpha=0.7)
    if hand_strengths:
        mean = float(np.mean(hand_strengths))
        ax.axvline(mean, color='red', linestyle='--', linewidth=2, label=f'Mean: {mean:.3f}')
        ax.legend()

    ax.set_xlabel('Effective Hand Strength')
    ax.set_ylabel('Frequency')
    ax.set_title('Distribution of Hand Strengths')
    ax.grid(True, alpha=0.3)

    return _finish(fig, save_path)


def plot_category_frequencies(category_counts: Dict[str, int],
                              save_path: Optional[Path] = None) -> plt.Figure:
    """
    Plot how often each hand category was shown at showdown.

    Args:
        category_counts: Mapping from category display name to count
        save_path: Optional path to save the figure

    Returns:
        Matplotlib figure object
    """
    setup_plotting_style()
    fig, ax = plt.subplots(figsize=(12, 6))

    labels = [CATEGORY_NAMES[category] for category in HandCategory]
    counts = [category_counts.get(label, 0) for label in labels]
    total = sum(counts)

    bars = ax.bar(np.arange(len(labels)), counts, color='green', alpha=0.7)
    for bar, count in zip(bars, counts):
        if count and total:
            ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(),
                    f'{count / total * 100:.1f}%', ha='center', va='bottom', fontsize=8)

    ax.set_xticks(np.arange(len(labels)))
    ax.set_xticklabels(labels, rotation=30, ha='right')
    ax.set_ylabel('Showdowns')
    ax.set_title('Hand Categories at Showdown')
    ax.grid(True, alpha=0.3, axis='y')

    return _finish(fig, save_path)


def plot_action_frequencies(action_history: Dict[str, Dict[str, int]],
                            save_path: Optional[Path] = None) -> plt.Figure:
    """
    Plot the frequency of different actions across different streets.

    Args:
        action_history: Dictionary mapping streets to action frequency dictionaries
        save_path: Optional path to save the figure

    Returns:
        Matplotlib figure object
    """
    setup_plotting_style()
    fig, ax = plt.subplots(figsize=(12, 8))

    streets = list(action_history.keys())
    all_actions = sorted({action for counts in action_history.values() for action in counts})
    if not all_actions:
        return _finish(fig, save_path)

    bar_width = 0.8 / len(all_actions)
    positions = np.arange(len(streets))

    for i, action in enumerate(all_actions):
        street_totals = [sum(action_history[street].values()) for street in streets]
        percentages = [action_history[street].get(action, 0) / total * 100 if total > 0 else 0
                       for street, total in zip(streets, street_totals)]

        offset = bar_width * (i - len(all_actions) / 2 + 0.5)
        ax.bar(positions + offset, percentages, bar_width, label=action, alpha=0.7)

    ax.set_xticks(positions)
    ax.set_xticklabels(streets)
    ax.set_ylabel('Percentage (%)')
    ax.set_title('Action Frequencies by Street')
    ax.legend(title='Actions')
    ax.grid(True, alpha=0.3, axis='y')
    ax.set_ylim(0, 100)

    return _finish(fig, save_path)
