"""Default summary statistics for scenario samples.

Percentiles use the Weibull plotting position (rank ``p * (n + 1) / 100``),
standard deviation is the sample (n - 1) deviation, and confidence is derived
from a two-sided Mann-Whitney U test against a baseline sample.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np

from buildbench.report.models import Statistics

logger = logging.getLogger(__name__)

PERCENTILES: tuple[int, ...] = (25, 50, 75)


def compute_statistics(
    values: Sequence[float],
    baseline: Optional[Sequence[float]] = None,
) -> Statistics:
    """Compute :class:`Statistics` over millisecond *values*.

    Args:
        values: Sample durations in milliseconds.
        baseline: Optional baseline durations used for the confidence figure.

    Returns:
        The statistics. Every field except confidence is NaN when *values*
        is empty.
    """
    if len(values) == 0:
        nan = float("nan")
        return Statistics(
            mean=nan,
            min=nan,
            max=nan,
            median=nan,
            percentiles={p: nan for p in PERCENTILES},
            standard_deviation=nan,
            confidence_percent=0.0,
        )

    data = np.asarray(values, dtype=float)
    percentiles = {
        p: float(np.percentile(data, p, method="weibull")) for p in PERCENTILES
    }
    stddev = float(np.std(data, ddof=1)) if data.size > 1 else 0.0

    confidence = 0.0
    if baseline is not None:
        confidence = confidence_percent(baseline, values)

    return Statistics(
        mean=float(np.mean(data)),
        min=float(np.min(data)),
        max=float(np.max(data)),
        median=percentiles[50],
        percentiles=percentiles,
        standard_deviation=stddev,
        confidence_percent=confidence,
    )


def confidence_percent(baseline: Sequence[float], values: Sequence[float]) -> float:
    """Confidence (0-100) that *values* differ from *baseline*.

    Returns 0.0 when either side is empty or the U statistic has no variance.
    """
    p_value = mann_whitney_p_value(baseline, values)
    if p_value is None:
        return 0.0
    return (1.0 - p_value) * 100.0


def mann_whitney_p_value(
    first: Sequence[float], second: Sequence[float]
) -> Optional[float]:
    """Two-sided Mann-Whitney U p-value using the normal approximation."""
    n1 = len(first)
    n2 = len(second)
    if n1 == 0 or n2 == 0:
        return None

    ranks = _average_ranks(np.concatenate([np.asarray(first, dtype=float),
                                           np.asarray(second, dtype=float)]))
    u1 = float(np.sum(ranks[:n1])) - n1 * (n1 + 1) / 2.0
    u2 = n1 * n2 - u1
    u_min = min(u1, u2)

    n1n2 = float(n1 * n2)
    variance = n1n2 * (n1 + n2 + 1) / 12.0
    if variance <= 0.0:
        return None

    z = (u_min - n1n2 / 2.0) / math.sqrt(variance)
    p_value = math.erfc(-z / math.sqrt(2.0))
    logger.debug("Mann-Whitney U=%s z=%.4f p=%.6f", u_min, z, p_value)
    return min(p_value, 1.0)


def _average_ranks(data: np.ndarray) -> np.ndarray:
    """1-based ranks of *data*, with ties sharing their average rank."""
    order = np.argsort(data, kind="mergesort")
    sorted_data = data[order]
    ranks = np.empty(len(data), dtype=float)

    start = 0
    while start < len(sorted_data):
        end = start
        while end + 1 < len(sorted_data) and sorted_data[end + 1] == sorted_data[start]:
            end += 1
        # positions start..end share ranks start+1..end+1
        ranks[order[start:end + 1]] = (start + end) / 2.0 + 1.0
        start = end + 1
    return ranks
