"""
parallel.py - Worker setup for the equity enumeration

This module inspects the machine's CPU resources and picks the worker count
used by the equity estimator's thread pool.
"""

import logging
import os
from typing import Any, Dict, Optional


def get_parallel_info() -> Dict[str, Any]:
    """
    Get information about available CPU resources.

    Returns:
        Dictionary with CPU information
    """
    info = {
        "cpu_count": os.cpu_count() or 1,
    }

    # Respect CPU affinity (containers, taskset) where the platform exposes it
    if hasattr(os, "sched_getaffinity"):
        info["usable_cpus"] = len(os.sched_getaffinity(0))
    else:
        info["usable_cpus"] = info["cpu_count"]

    return info


def resolve_worker_count(requested: Optional[int] = None, upper_bound: int = 8) -> int:
    """
    Choose the number of worker threads.

    Args:
        requested: Explicit worker count, or None for auto-selection
        upper_bound: Cap for the automatic choice (default: 8)

    Returns:
        Worker count, at least 1
    """
    if requested is not None:
        if requested < 1:
            raise ValueError(f"Worker count must be at least 1, got {requested}")
        return int(requested)

    workers = max(1, min(get_parallel_info()["usable_cpus"], upper_bound))
    logging.getLogger(__name__).debug(f"Using {workers} equity workers")
    return workers
