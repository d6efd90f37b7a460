"""Statistical summaries of benchmark samples."""

from .confidence import ci95, run_ci95
from .record import (
    BenchmarkResult,
    parse_benchmark_output,
    summarize_output,
    summarize_samples,
)
from .summary import RunSummary, Sample, aggregate, percentile, sample_std_dev
from .tables import approximate_p_value, t_critical_95, t_critical_one_sided

__all__ = [
    "BenchmarkResult",
    "RunSummary",
    "Sample",
    "aggregate",
    "approximate_p_value",
    "ci95",
    "parse_benchmark_output",
    "percentile",
    "run_ci95",
    "sample_std_dev",
    "summarize_output",
    "summarize_samples",
    "t_critical_95",
    "t_critical_one_sided",
]
