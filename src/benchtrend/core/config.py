"""
Configuration for benchtrend

Operator-facing parameters accepted by the regression engine and the
multi-benchmark analyzer. The engine functions take these as plain
arguments; RegressionConfig bundles them for callers that analyze many
benchmarks with the same settings.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from .errors import ConfigValidationError


@dataclass
class RegressionConfig:
    """Parameters for baseline estimation and regression detection."""

    # Minimum number of valid historical runs required for a baseline
    min_points: int = 3
    # Most recent runs excluded from the baseline window
    baseline_offset: int = 0
    # One-sided significance level
    alpha: float = 0.01
    # Size of the comparable-run window requested from the history provider
    window: int = 30

    # Analyzer settings
    max_workers: int = 4
    compare_threshold_percent: float = 10.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise ConfigValidationError when a parameter is out of range."""
        if self.min_points < 1:
            raise ConfigValidationError("regression", "min_points", self.min_points, "must be >= 1")
        if self.baseline_offset < 0:
            raise ConfigValidationError("regression", "baseline_offset", self.baseline_offset, "must be >= 0")
        if not 0.0 < self.alpha < 1.0:
            raise ConfigValidationError("regression", "alpha", self.alpha, "must be in (0, 1)")
        if self.window < self.min_points:
            raise ConfigValidationError("regression", "window", self.window, "must be >= min_points")
        if self.max_workers < 1:
            raise ConfigValidationError("regression", "max_workers", self.max_workers, "must be >= 1")
        if self.compare_threshold_percent < 0:
            raise ConfigValidationError(
                "regression", "compare_threshold_percent", self.compare_threshold_percent, "must be >= 0"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'RegressionConfig':
        """Create from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                raise ConfigValidationError("regression", key, data[key], "unknown configuration parameter")
        return cls(**data)

    def update(self, **kwargs) -> None:
        """
        Update configuration with keyword arguments.

        The new values are validated together before any field changes, so
        a rejected update leaves the configuration untouched.
        """
        known = {f.name for f in fields(self)}
        for key, value in kwargs.items():
            if key not in known:
                raise ConfigValidationError("regression", key, value, "unknown configuration parameter")

        candidate = replace(self, **kwargs)
        for key in kwargs:
            setattr(self, key, getattr(candidate, key))


def load_config(path: str | Path) -> RegressionConfig:
    """Load a RegressionConfig from a JSON file."""
    with open(path) as f:
        data = json.load(f)
    return RegressionConfig.from_dict(data)


# Global default configuration instance
default_config = RegressionConfig()


def get_config() -> RegressionConfig:
    """Get the global default configuration."""
    return default_config


def set_config(config: RegressionConfig) -> None:
    """Set the global default configuration."""
    global default_config
    default_config = config


def configure(**kwargs) -> RegressionConfig:
    """Configure benchtrend with keyword arguments."""
    config = RegressionConfig()
    config.update(**kwargs)
    set_config(config)
    return config
