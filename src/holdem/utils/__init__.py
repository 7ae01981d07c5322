"""
Utilities module for the hold 'em project.

This module contains various utility functions:
- Logging utilities for consistent logging
- Worker setup for the equity enumeration
- Visualization utilities for self-play reports
"""

from holdem.utils.logging import setup_logger, get_log_path, configure_global_logging, log_system_info
from holdem.utils.parallel import get_parallel_info, resolve_worker_count
from holdem.utils.visualization import (
    plot_stack_history, plot_hand_strength_distribution,
    plot_category_frequencies, plot_action_frequencies
)

__all__ = [
    'setup_logger', 'get_log_path', 'configure_global_logging', 'log_system_info',
    'get_parallel_info', 'resolve_worker_count',
    'plot_stack_history', 'plot_hand_strength_distribution',
    'plot_category_frequencies', 'plot_action_frequencies'
]
