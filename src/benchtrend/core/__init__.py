"""
benchtrend Core Module

Configuration and the exception hierarchy shared by the statistics and
regression packages.
"""

from .config import (
    RegressionConfig,
    configure,
    get_config,
    load_config,
    set_config,
)
from .errors import (
    AnalysisError,
    BenchmarkOutputParseError,
    BenchTrendError,
    ConfigValidationError,
    InputValidationError,
    InsufficientDataError,
    RecordError,
    ValidationError,
)

__all__ = [
    # Configuration
    "RegressionConfig",
    "configure",
    "get_config",
    "load_config",
    "set_config",
    # Errors
    "AnalysisError",
    "BenchmarkOutputParseError",
    "BenchTrendError",
    "ConfigValidationError",
    "InputValidationError",
    "InsufficientDataError",
    "RecordError",
    "ValidationError",
]
