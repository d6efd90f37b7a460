"""
benchtrend: Benchmark Regression Detection

Decides whether a new benchmark measurement is a genuine performance
regression or run-to-run noise, from a history of per-run summaries.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("benchtrend")
except PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development

from .core.config import RegressionConfig, configure, get_config, set_config
from .core.errors import (
    BenchTrendError,
    ConfigValidationError,
    InputValidationError,
    InsufficientDataError,
)
from .regression import (
    BaselineStats,
    BenchmarkAnalysis,
    RegressionAnalyzer,
    RegressionReport,
    RegressionResult,
    RegressionStatus,
    TrendAnnotation,
    compute_baseline,
    detect_regression,
    find_introducing_run,
)
from .stats import BenchmarkResult, RunSummary, Sample, aggregate

__all__ = [
    "__version__",
    # Configuration
    "RegressionConfig",
    "configure",
    "get_config",
    "set_config",
    # Errors
    "BenchTrendError",
    "ConfigValidationError",
    "InputValidationError",
    "InsufficientDataError",
    # Statistics
    "BenchmarkResult",
    "RunSummary",
    "Sample",
    "aggregate",
    # Regression engine
    "BaselineStats",
    "BenchmarkAnalysis",
    "RegressionAnalyzer",
    "RegressionReport",
    "RegressionResult",
    "RegressionStatus",
    "TrendAnnotation",
    "compute_baseline",
    "detect_regression",
    "find_introducing_run",
]
