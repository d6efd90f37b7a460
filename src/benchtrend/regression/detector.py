"""
Regression Detection Engine

Classifies a run against a baseline with a one-sided t-test combined with a
variance-tuned minimum effect size. A run is flagged only when the slowdown
is both statistically significant and practically significant.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..stats.summary import RunSummary
from ..stats.tables import approximate_p_value, t_critical_one_sided
from .baseline import BaselineStats

DEFAULT_ALPHA = 0.01

# Floor for the dynamic minimum effect, in percent
MIN_EFFECT_FLOOR_PERCENT = 1.0
# Multiplier applied to the baseline coefficient of variation
EFFECT_CV_MULTIPLIER = 2.0


class RegressionStatus(Enum):
    """Outcome of regression detection for a single run"""
    OK = "ok"                        # Indistinguishable from or faster than baseline
    REGRESSED = "regressed"          # Significantly and meaningfully slower
    INSUFFICIENT = "insufficient"    # Not enough information to judge
    BASELINE = "baseline"            # Reference run of the baseline window


@dataclass(frozen=True)
class RegressionResult:
    """Result of regression detection; optional fields are None unless populated"""
    status: RegressionStatus
    baseline_run_id: int | None = None
    baseline_ci_lower: float | None = None
    baseline_ci_upper: float | None = None
    change_percent: float | None = None
    min_effect_percent: float = 0.0
    p_value: float | None = None

    def is_regression(self) -> bool:
        """Check if this represents a performance regression"""
        return self.status == RegressionStatus.REGRESSED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'status': self.status.value,
            'baseline_run_id': self.baseline_run_id,
            'baseline_ci_lower': self.baseline_ci_lower,
            'baseline_ci_upper': self.baseline_ci_upper,
            'change_percent': self.change_percent,
            'min_effect_percent': self.min_effect_percent,
            'p_value': self.p_value,
        }


def min_effect_percent(baseline: BaselineStats) -> float:
    """Noisier benchmarks need a larger relative change before being flagged"""
    return max(MIN_EFFECT_FLOOR_PERCENT, EFFECT_CV_MULTIPLIER * baseline.coefficient_of_variation * 100.0)


def detect_regression(
    latest: RunSummary,
    baseline: BaselineStats | None,
    alpha: float = DEFAULT_ALPHA
) -> RegressionResult:
    """
    Test whether a run is slower than the baseline.

    Args:
        latest: Summary of the run under test
        baseline: Baseline to compare against, or None when unavailable
        alpha: One-sided significance level

    Returns:
        RegressionResult with status ok, regressed or insufficient
    """
    if latest.sample_count < 2 or latest.std_dev <= 0 or baseline is None:
        return RegressionResult(status=RegressionStatus.INSUFFICIENT)

    min_effect = min_effect_percent(baseline)
    diff = latest.median - baseline.median
    se_diff = math.sqrt(latest.sem * latest.sem + baseline.variance)

    if se_diff == 0:
        return RegressionResult(
            status=RegressionStatus.OK,
            baseline_run_id=baseline.reference_run_id,
            baseline_ci_lower=baseline.ci_lower,
            baseline_ci_upper=baseline.ci_upper,
            min_effect_percent=min_effect,
        )

    t = diff / se_diff
    # The latest run's own sample count stands in for the
    # Welch-Satterthwaite degrees of freedom.
    df = max(1, latest.sample_count - 1)
    t_crit = t_critical_one_sided(df, alpha)

    effect = diff / baseline.median * 100.0 if baseline.median > 0 else 0.0
    p_value = approximate_p_value(t, df)

    regressed = t > t_crit and effect >= min_effect

    return RegressionResult(
        status=RegressionStatus.REGRESSED if regressed else RegressionStatus.OK,
        baseline_run_id=baseline.reference_run_id,
        baseline_ci_lower=baseline.ci_lower,
        baseline_ci_upper=baseline.ci_upper,
        change_percent=effect if regressed else None,
        min_effect_percent=min_effect,
        p_value=p_value,
    )


def find_introducing_run(
    history: Sequence[RunSummary],
    baseline: BaselineStats | None,
    alpha: float = DEFAULT_ALPHA
) -> int | None:
    """
    Find the first run, oldest-first, that regressed against a fixed baseline.

    Args:
        history: Run summaries in chronological order (oldest first)
        baseline: Baseline to compare each run against
        alpha: One-sided significance level

    Returns:
        run_id of the first regressed run, or None
    """
    if baseline is None or not history:
        return None

    for run in history:
        if detect_regression(run, baseline, alpha).is_regression():
            return run.run_id

    return None
