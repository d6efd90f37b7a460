"""
Shared pytest fixtures for the benchtrend test suite.

This module provides reusable fixtures for:
- Run summary construction
- Stable and regressed benchmark histories
- Isolated global configuration
"""

import math

import pytest

from benchtrend.core import config as config_module
from benchtrend.core.config import RegressionConfig
from benchtrend.stats.summary import RunSummary


def make_summary(run_id: int, median: float, std_dev: float = 5.0, sample_count: int = 5) -> RunSummary:
    """Build a RunSummary with sem derived from std_dev and sample_count."""
    sem = std_dev / math.sqrt(sample_count) if sample_count >= 2 else 0.0
    if sample_count < 2:
        std_dev = 0.0
    return RunSummary(run_id=run_id, median=median, std_dev=std_dev, sem=sem, sample_count=sample_count)


# ============================================================================
# History Fixtures
# ============================================================================

@pytest.fixture
def summary_factory():
    """Factory for RunSummary values."""
    return make_summary


@pytest.fixture
def stable_history():
    """Five quiet runs around 100ns, newest first (run ids 5..1)."""
    medians = [100, 102, 98, 101, 99]
    return [make_summary(run_id, median) for run_id, median in zip(range(5, 0, -1), medians)]


@pytest.fixture
def regressed_run():
    """A run 30% slower than the stable history."""
    return make_summary(6, 130)


@pytest.fixture
def chronological_history():
    """Ten runs oldest first; the last three are 30% slower."""
    medians = [100, 102, 98, 101, 99, 100, 101, 130, 131, 129]
    return [make_summary(run_id, median) for run_id, median in enumerate(medians, start=1)]


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sequential_config():
    """Configuration that analyzes benchmarks without a thread pool."""
    return RegressionConfig(max_workers=1)


@pytest.fixture(autouse=True)
def isolated_global_config():
    """Restore the global default configuration after each test."""
    saved = config_module.get_config()
    yield
    config_module.set_config(saved)
