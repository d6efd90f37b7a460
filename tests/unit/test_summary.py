#!/usr/bin/env python3
"""
Tests for sample aggregation into run summaries
"""

import math

import pytest

from benchtrend.core.errors import InputValidationError
from benchtrend.stats.summary import (
    RunSummary,
    Sample,
    aggregate,
    percentile,
    sample_std_dev,
)


def _samples(*avgs):
    return [Sample(min_ns=a - 5, avg_ns=a, max_ns=a + 5, total_ns=a * 10, iterations=10) for a in avgs]


class TestPercentile:
    """Test interpolated percentile"""

    def test_median_of_even_count_interpolates(self):
        """Median of an even-sized set lies between the middle values"""
        assert percentile([40, 10, 30, 20], 0.50) == pytest.approx(25.0)

    def test_high_percentile_interpolates(self):
        """p95 of four values interpolates between the top two"""
        # index = 0.95 * 3 = 2.85
        assert percentile([10, 20, 30, 40], 0.95) == pytest.approx(38.5)

    def test_single_value(self):
        """Any percentile of one value is that value"""
        assert percentile([7], 0.99) == 7.0

    def test_empty(self):
        """Empty input yields zero"""
        assert percentile([], 0.5) == 0.0


class TestSampleStdDev:
    """Test sample standard deviation"""

    def test_uses_bessel_correction(self):
        """Sum of squared deviations is divided by n-1"""
        assert sample_std_dev([10, 20, 30, 40]) == pytest.approx(math.sqrt(500 / 3))

    def test_single_value_is_zero(self):
        """No variance can be estimated from one value"""
        assert sample_std_dev([42]) == 0.0


class TestAggregate:
    """Test aggregate()"""

    def test_single_sample(self):
        """A single sample has no variance"""
        summary = aggregate(_samples(120), run_id=3)

        assert summary.run_id == 3
        assert summary.median == 120.0
        assert summary.std_dev == 0.0
        assert summary.sem == 0.0
        assert summary.sample_count == 1
        assert not summary.is_valid

    def test_multiple_samples(self):
        """Median of averages and Bessel-corrected spread"""
        summary = aggregate(_samples(10, 20, 30, 40), run_id=1)

        assert summary.median == pytest.approx(25.0)
        assert summary.std_dev == pytest.approx(math.sqrt(500 / 3))
        assert summary.sample_count == 4
        assert summary.is_valid

    @pytest.mark.parametrize("avgs", [(100, 110), (5, 5, 9), (1000, 1200, 900, 1100, 1050)])
    def test_sem_is_std_dev_over_root_n(self, avgs):
        """sem equals std_dev / sqrt(n)"""
        summary = aggregate(_samples(*avgs))

        assert summary.std_dev >= 0
        assert summary.sem == summary.std_dev / math.sqrt(len(avgs))

    def test_median_resists_outlier(self):
        """One GC pause does not move the median"""
        summary = aggregate(_samples(100, 101, 99, 100, 5000))
        assert summary.median == pytest.approx(100.0)

    def test_identical_samples_are_not_valid(self):
        """Zero spread makes the summary unusable for baselines"""
        summary = aggregate(_samples(50, 50, 50))

        assert summary.std_dev == 0.0
        assert summary.sample_count == 3
        assert not summary.is_valid

    def test_empty_samples_raise(self):
        """Empty input is a caller error"""
        with pytest.raises(InputValidationError):
            aggregate([])


class TestRunSummary:
    """Test RunSummary validity rules"""

    def test_valid_requires_spread(self):
        """Valid needs sample_count >= 2, std_dev > 0 and sem > 0"""
        assert RunSummary(run_id=1, median=100, std_dev=5, sem=2, sample_count=5).is_valid
        assert not RunSummary(run_id=1, median=100, std_dev=5, sem=0, sample_count=5).is_valid
        assert not RunSummary(run_id=1, median=100, std_dev=0, sem=0, sample_count=5).is_valid
        assert not RunSummary(run_id=1, median=100, sample_count=1).is_valid

    def test_to_dict(self):
        """Serialization keeps every field"""
        data = RunSummary(run_id=9, median=1.5, std_dev=0.5, sem=0.25, sample_count=4).to_dict()
        assert data == {'run_id': 9, 'median': 1.5, 'std_dev': 0.5, 'sem': 0.25, 'sample_count': 4}


class TestSample:
    """Test Sample value behaviour"""

    def test_hashable_with_memory_stats(self):
        """Samples can be hashed and deduplicated despite the counters dict"""
        plain = Sample(min_ns=1, avg_ns=2, max_ns=3)
        with_mem = Sample(min_ns=1, avg_ns=2, max_ns=3, mem_stats={"peak": 4096})

        assert isinstance(hash(plain), int)
        assert hash(plain) == hash(with_mem)
        assert len({plain, with_mem, Sample(min_ns=1, avg_ns=2, max_ns=3)}) == 2
