#!/usr/bin/env python3
"""
Tests for introducing-run search
"""

from benchtrend.regression.baseline import compute_baseline
from benchtrend.regression.detector import (
    RegressionStatus,
    detect_regression,
    find_introducing_run,
)


class TestFindIntroducingRun:
    """Test find_introducing_run()"""

    def test_returns_earliest_regressed_run(self, chronological_history):
        """Only the last three runs regress; the first of them is reported"""
        baseline = compute_baseline(chronological_history[:7], min_points=3)

        flagged = [
            run.run_id for run in chronological_history
            if detect_regression(run, baseline).status == RegressionStatus.REGRESSED
        ]
        assert flagged == [8, 9, 10]

        assert find_introducing_run(chronological_history, baseline, alpha=0.01) == 8

    def test_no_regression(self, chronological_history):
        baseline = compute_baseline(chronological_history[:7], min_points=3)
        assert find_introducing_run(chronological_history[:7], baseline) is None

    def test_missing_baseline(self, chronological_history):
        assert find_introducing_run(chronological_history, None) is None

    def test_empty_history(self, chronological_history):
        baseline = compute_baseline(chronological_history[:7], min_points=3)
        assert find_introducing_run([], baseline) is None

    def test_skips_insufficient_runs(self, chronological_history, summary_factory):
        """Single-sample runs are never reported, even when slow"""
        baseline = compute_baseline(chronological_history[:7], min_points=3)
        history = [summary_factory(20, 500, sample_count=1), summary_factory(21, 130)]

        assert find_introducing_run(history, baseline) == 21
