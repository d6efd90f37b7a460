"""
Baseline Computation for Regression Detection

Estimates the "normal" performance level of a benchmark from a window of
historical runs. Each run's median is already robust to single-sample
outliers (GC pauses, scheduler jitter); taking the median across runs also
discounts whole-run outliers such as a noisy CI machine.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..core.errors import InputValidationError, InsufficientDataError
from ..stats.summary import RunSummary
from ..stats.tables import t_critical_95

logger = logging.getLogger(__name__)

# Below this many valid runs the between-run variance decomposition is
# unreliable and the sampling variance of the median estimator is used.
RANDOM_EFFECTS_MIN_RUNS = 10


@dataclass(frozen=True)
class BaselineStats:
    """Baseline estimate derived from historical runs"""
    reference_run_id: int
    median: float
    variance: float
    ci_lower: float
    ci_upper: float
    coefficient_of_variation: float

    def contains(self, value: float) -> bool:
        """Check if value falls inside the 95% confidence band"""
        return self.ci_lower <= value <= self.ci_upper

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'reference_run_id': self.reference_run_id,
            'median': self.median,
            'variance': self.variance,
            'ci_lower': self.ci_lower,
            'ci_upper': self.ci_upper,
            'coefficient_of_variation': self.coefficient_of_variation,
        }


def is_ordered_newest_first(history: Sequence[RunSummary]) -> bool:
    """True when run ids never increase along history"""
    return all(history[i].run_id <= history[i - 1].run_id for i in range(1, len(history)))


def compute_baseline(
    history: Sequence[RunSummary],
    min_points: int,
    baseline_offset: int = 0
) -> BaselineStats:
    """
    Compute a baseline from historical runs using median-based statistics.

    Args:
        history: Run summaries for one benchmark; newest-first when
            baseline_offset > 0
        min_points: Minimum number of valid runs required
        baseline_offset: Number of most recent runs to exclude from the window

    Returns:
        BaselineStats for the window

    Raises:
        InsufficientDataError: if fewer than min_points valid runs remain, or
            if an offset is requested on history that is not newest-first
        InputValidationError: if min_points < 1
    """
    if min_points < 1:
        raise InputValidationError("min_points", "an integer >= 1", str(min_points))
    baseline_offset = max(0, baseline_offset)

    if baseline_offset > 0 and not is_ordered_newest_first(history):
        raise InsufficientDataError(0, min_points, reason="unordered_history")
    if baseline_offset >= len(history):
        raise InsufficientDataError(0, min_points, reason="empty_window")

    window = history[baseline_offset:]
    if len(window) < min_points:
        raise InsufficientDataError(len(window), min_points)

    valid = [s for s in window if s.is_valid]
    if len(valid) < min_points:
        raise InsufficientDataError(len(valid), min_points)

    medians = np.array([s.median for s in valid], dtype=float)
    sem2s = np.array([s.sem * s.sem for s in valid], dtype=float)
    n = len(valid)

    # Median of medians
    baseline_median = float(np.median(medians))

    # Run-to-run variance of medians
    mean_of_medians = float(np.mean(medians))
    s2 = float(np.var(medians, ddof=1)) if n > 1 else 0.0

    # Within-run noise estimate
    mean_sem2 = float(np.mean(sem2s))

    # tau^2: between-run variance not explained by within-run noise
    tau2 = max(0.0, s2 - mean_sem2)
    if n >= RANDOM_EFFECTS_MIN_RUNS:
        combined_variance = mean_sem2 + tau2
    else:
        combined_variance = s2 / n

    cv = math.sqrt(s2) / mean_of_medians if mean_of_medians > 0 else 0.0

    se = math.sqrt(combined_variance)
    t_crit = t_critical_95(n - 1)
    ci_lower = max(0.0, baseline_median - t_crit * se)
    ci_upper = baseline_median + t_crit * se

    # Reference run: closest median, first occurrence wins ties
    reference = min(valid, key=lambda s: abs(s.median - baseline_median))

    logger.debug(
        "Baseline from %d runs: median=%.1f cv=%.4f ci=[%.1f, %.1f]",
        n, baseline_median, cv, ci_lower, ci_upper
    )

    return BaselineStats(
        reference_run_id=reference.run_id,
        median=baseline_median,
        variance=combined_variance,
        ci_lower=ci_lower,
        ci_upper=ci_upper,
        coefficient_of_variation=cv,
    )
