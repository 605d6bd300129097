"""
Latency Statistics

Summarises inter-keystroke latencies into mean, spread and nearest-rank
percentiles. Pure: the caller's sequence is never modified.
"""

import math
from typing import List, Sequence

from integrity.schemas.outputs import LatencyStats


# Percentile ranks reported in LatencyStats
P50 = 0.50
P95 = 0.95


def _mean(values: Sequence[float]) -> float:
    """Calculate mean of values."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def _std(values: Sequence[float], mean: float) -> float:
    """Population standard deviation around a precomputed mean."""
    if not values:
        return 0.0
    variance = sum((x - mean) ** 2 for x in values) / len(values)
    return math.sqrt(variance)


def nearest_rank(sorted_values: List[float], p: float) -> float:
    """
    Nearest-rank percentile of an ascending list (no interpolation).

    Index is ``ceil(p * n) - 1`` clamped to ``[0, n - 1]``.
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    index = math.ceil(p * n) - 1
    index = max(0, min(n - 1, index))
    return float(sorted_values[index])


def calculate_latency_stats(latencies: Sequence[float]) -> LatencyStats:
    """
    Calculate latency statistics from a sequence of latencies.

    Args:
        latencies: Per-keystroke latencies in milliseconds, in any order

    Returns:
        LatencyStats; every field is 0 for an empty input

    Example:
        >>> calculate_latency_stats([100, 150, 120, 130]).p50_latency_ms
        120.0
    """
    if not latencies:
        return LatencyStats()

    ordered = sorted(float(x) for x in latencies)
    avg = _mean(ordered)

    return LatencyStats(
        avg_latency_ms=avg,
        min_latency_ms=ordered[0],
        max_latency_ms=ordered[-1],
        std_dev_latency_ms=_std(ordered, avg),
        p50_latency_ms=nearest_rank(ordered, P50),
        p95_latency_ms=nearest_rank(ordered, P95),
    )
