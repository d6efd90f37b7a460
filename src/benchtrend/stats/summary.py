"""
Summary Statistics for repeated benchmark samples

Reduces the repeated samples collected for one benchmark within one run to
a RunSummary: the median of the per-sample averages as the point estimate,
plus the spread needed for hypothesis testing downstream.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from ..core.errors import InputValidationError


@dataclass(frozen=True)
class Sample:
    """One raw timing observation for a benchmark within a single run"""
    min_ns: int
    avg_ns: int
    max_ns: int
    total_ns: int = 0
    iterations: int = 0
    mem_stats: dict[str, int] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class RunSummary:
    """Statistical summary of one benchmark in one run"""
    run_id: int
    median: float
    std_dev: float = 0.0
    sem: float = 0.0
    sample_count: int = 1

    @property
    def is_valid(self) -> bool:
        """True when the summary carries a usable variance estimate"""
        return self.sample_count >= 2 and self.std_dev > 0 and self.sem > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            'run_id': self.run_id,
            'median': self.median,
            'std_dev': self.std_dev,
            'sem': self.sem,
            'sample_count': self.sample_count,
        }


def percentile(values: Sequence[float], p: float) -> float:
    """
    Interpolated percentile of values.

    Sorts the values, takes index p*(n-1) and interpolates linearly
    between the two bracketing order statistics.
    """
    if len(values) == 0:
        return 0.0
    return float(np.percentile(np.asarray(values, dtype=float), p * 100.0))


def sample_std_dev(values: Sequence[float]) -> float:
    """Sample standard deviation with Bessel's correction; 0 for n < 2"""
    if len(values) < 2:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float), ddof=1))


def aggregate(samples: Sequence[Sample], run_id: int = 0) -> RunSummary:
    """
    Aggregate repeated samples into a RunSummary.

    Args:
        samples: Samples for the same (category, name) within one run
        run_id: Identifier of the parent run

    Returns:
        RunSummary with median, std_dev, sem and sample_count

    Raises:
        InputValidationError: if samples is empty
    """
    n = len(samples)
    if n == 0:
        raise InputValidationError("samples", "at least one sample", "0 samples")

    if n == 1:
        return RunSummary(run_id=run_id, median=float(samples[0].avg_ns), sample_count=1)

    avgs = [s.avg_ns for s in samples]
    std_dev = sample_std_dev(avgs)
    return RunSummary(
        run_id=run_id,
        median=percentile(avgs, 0.50),
        std_dev=std_dev,
        sem=std_dev / math.sqrt(n),
        sample_count=n,
    )
