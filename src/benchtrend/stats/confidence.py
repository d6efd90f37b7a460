"""Confidence intervals for single-run integer timings."""

import math

from .summary import RunSummary
from .tables import T_CRITICAL_95, Z_CRITICAL_95


def _round_ns(value: float) -> int:
    # Inputs are non-negative; rounds half away from zero
    return int(math.floor(value + 0.5))


def ci95(value_ns: int, std_dev_ns: int, sample_count: int) -> tuple[int, int, int]:
    """
    Compute a 95% confidence interval around a run's timing.

    Uses the standard error of the sample standard deviation, which is a
    reasonable approximation for both mean and median at the sample sizes
    benchmarks usually collect (3-30 samples).

    Args:
        value_ns: Point estimate in nanoseconds (mean or median)
        std_dev_ns: Sample standard deviation in nanoseconds
        sample_count: Number of samples behind the estimate

    Returns:
        (lower_ns, upper_ns, sem_ns), lower bound clamped at 0
    """
    if sample_count < 2 or std_dev_ns == 0:
        return value_ns, value_ns, 0

    sem = std_dev_ns / math.sqrt(sample_count)
    t_crit = Z_CRITICAL_95
    if sample_count < 30:
        df = sample_count - 1
        if 0 < df < len(T_CRITICAL_95):
            t_crit = T_CRITICAL_95[df]

    margin = t_crit * sem
    lower = max(0.0, value_ns - margin)
    upper = value_ns + margin
    return _round_ns(lower), _round_ns(upper), _round_ns(sem)


def run_ci95(summary: RunSummary) -> tuple[int, int, int]:
    """95% confidence interval of a run summary's median, in whole nanoseconds"""
    return ci95(_round_ns(summary.median), _round_ns(summary.std_dev), summary.sample_count)
