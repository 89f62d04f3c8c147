"""Deterministic scoring for a run."""

import datetime
import math

from .models import Stats

BASE_SCORE = 1000
NEXT_LEVEL_BONUS = 200  # reward: climbing levels efficiently
SAME_LEVEL_PENALTY = 100  # penalty: wasting an infection on the same tier
ATTEMPT_PENALTY = 10
SECONDS_PER_POINT = 2


def calculate_score(stats: Stats, elapsed) -> int:
    """
    Maps the run's counters and elapsed time to a score, never below zero.

    Pure: calling it again with the same inputs gives the same result.

    Args:
        stats (Stats): The run's counters.
        elapsed (float | datetime.timedelta): Time since the run started, in seconds.

    Returns:
        int: The score.
    """
    if isinstance(elapsed, datetime.timedelta):
        elapsed = elapsed.total_seconds()
    seconds = max(float(elapsed), 0.0)

    score = BASE_SCORE
    score += NEXT_LEVEL_BONUS * stats.next_level_infections
    score -= SAME_LEVEL_PENALTY * stats.same_level_infections
    score -= ATTEMPT_PENALTY * stats.attempts
    score -= math.floor(seconds / SECONDS_PER_POINT)
    return max(score, 0)
