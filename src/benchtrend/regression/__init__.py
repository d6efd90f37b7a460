"""
Performance Regression Detection

Baseline estimation from historical runs, one-sided significance testing
with a variance-tuned effect size gate, and introducing-run search.
"""

from .analyzer import (
    BenchmarkAnalysis,
    RegressionAnalyzer,
    RegressionReport,
    RunComparison,
    RunInfo,
    TrendAnnotation,
    TrendPoint,
    build_history,
    comparable_window,
    compare_runs,
)
from .baseline import BaselineStats, compute_baseline, is_ordered_newest_first
from .detector import (
    RegressionResult,
    RegressionStatus,
    detect_regression,
    find_introducing_run,
    min_effect_percent,
)

__all__ = [
    'BaselineStats',
    'BenchmarkAnalysis',
    'RegressionAnalyzer',
    'RegressionReport',
    'RegressionResult',
    'RegressionStatus',
    'RunComparison',
    'RunInfo',
    'TrendAnnotation',
    'TrendPoint',
    'build_history',
    'comparable_window',
    'compare_runs',
    'compute_baseline',
    'detect_regression',
    'find_introducing_run',
    'is_ordered_newest_first',
    'min_effect_percent',
]
