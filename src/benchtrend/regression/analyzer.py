"""
Multi-benchmark Regression Analysis

Runs the baseline and detection engine across every benchmark of a run:
selects the comparable window of runs, builds per-benchmark histories, and
collects the classification of the latest run together with the run that
introduced a regression. Also annotates a whole trend line against one
baseline.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from ..core.config import RegressionConfig, get_config
from ..core.errors import InputValidationError, InsufficientDataError
from ..stats.confidence import run_ci95
from ..stats.record import BenchmarkKey, BenchmarkResult
from ..stats.summary import RunSummary
from .baseline import BaselineStats, compute_baseline
from .detector import (
    RegressionResult,
    RegressionStatus,
    detect_regression,
    find_introducing_run,
)

logger = logging.getLogger(__name__)

DEFAULT_BUILD_PROFILE = "ReleaseFast"


@dataclass(frozen=True)
class RunInfo:
    """Identity of a run as far as comparability is concerned"""
    run_id: int
    branch: str = ""
    machine_id: str = ""
    build_profile: str = DEFAULT_BUILD_PROFILE

    def is_comparable(self, other: 'RunInfo') -> bool:
        """Same branch, machine and build profile"""
        return (
            self.branch == other.branch
            and self.machine_id == other.machine_id
            and self.build_profile == other.build_profile
        )


def comparable_window(runs: Iterable[RunInfo], target_run_id: int, window: int) -> list[RunInfo]:
    """
    Select the runs comparable to a target run.

    Args:
        runs: All known runs
        target_run_id: Run under test
        window: Maximum number of runs to return, target included

    Returns:
        Comparable runs at or before the target, newest first

    Raises:
        InputValidationError: if the target run is unknown
    """
    runs = list(runs)
    target = next((r for r in runs if r.run_id == target_run_id), None)
    if target is None:
        raise InputValidationError("target_run_id", "a known run id", str(target_run_id))

    comparable = [r for r in runs if r.run_id <= target_run_id and r.is_comparable(target)]
    comparable.sort(key=lambda r: r.run_id, reverse=True)
    return comparable[:window]


def build_history(
    run_ids: Sequence[int],
    results_by_run: Mapping[int, BenchmarkResult]
) -> list[RunSummary]:
    """Convert one benchmark's stored results to summaries, keeping the order of run_ids"""
    return [results_by_run[run_id].to_run_summary(run_id) for run_id in run_ids if run_id in results_by_run]


@dataclass
class BenchmarkAnalysis:
    """Regression analysis of one benchmark"""
    name: str
    latest: RunSummary | None
    baseline: BaselineStats | None
    result: RegressionResult
    introducing_run_id: int | None = None
    latest_ci_lower: int | None = None
    latest_ci_upper: int | None = None

    def is_regression(self) -> bool:
        return self.result.is_regression()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'name': self.name,
            'latest': self.latest.to_dict() if self.latest else None,
            'latest_ci_lower': self.latest_ci_lower,
            'latest_ci_upper': self.latest_ci_upper,
            'baseline': self.baseline.to_dict() if self.baseline else None,
            'result': self.result.to_dict(),
            'introducing_run_id': self.introducing_run_id,
        }


@dataclass
class RegressionReport:
    """Regression analysis of every benchmark recorded in one run"""
    run_id: int
    window: int
    min_points: int
    insufficient_history: bool
    analyses: list[BenchmarkAnalysis]

    @property
    def regressions(self) -> list[BenchmarkAnalysis]:
        return [a for a in self.analyses if a.is_regression()]

    def to_dict(self) -> dict[str, Any]:
        return {
            'run_id': self.run_id,
            'window': self.window,
            'min_points': self.min_points,
            'insufficient_history': self.insufficient_history,
            'regressions': [a.to_dict() for a in self.regressions],
        }


@dataclass(frozen=True)
class TrendPoint:
    """One run on a benchmark's trend line, classified against a shared baseline"""
    run_id: int
    median: float
    ci_lower: int
    ci_upper: int
    sem: int
    status: RegressionStatus
    baseline_run_id: int | None = None
    change_percent: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'run_id': self.run_id,
            'median': self.median,
            'ci_lower': self.ci_lower,
            'ci_upper': self.ci_upper,
            'sem': self.sem,
            'status': self.status.value,
            'baseline_run_id': self.baseline_run_id,
            'change_percent': self.change_percent,
        }


@dataclass
class TrendAnnotation:
    """A benchmark's history annotated point by point"""
    points: list[TrendPoint]
    baseline: BaselineStats | None = None

    @property
    def baseline_run_id(self) -> int | None:
        return self.baseline.reference_run_id if self.baseline else None

    def to_dict(self) -> dict[str, Any]:
        return {
            'points': [p.to_dict() for p in self.points],
            'baseline_run_id': self.baseline_run_id,
            'baseline_ci_lower': self.baseline.ci_lower if self.baseline else None,
            'baseline_ci_upper': self.baseline.ci_upper if self.baseline else None,
        }


class RegressionAnalyzer:
    """
    Analyzes benchmark histories for regressions.

    The latest run of each history is compared against a baseline that
    excludes it, so a regressed run never poisons its own baseline.
    Benchmarks are independent and are analyzed in parallel when
    max_workers > 1.
    """

    def __init__(self, config: RegressionConfig | None = None):
        self.config = config or get_config()

    def compute_baseline(
        self,
        history: Sequence[RunSummary],
        baseline_offset: int | None = None,
        name: str | None = None
    ) -> BaselineStats | None:
        """
        Compute a baseline, returning None when there is not enough data.

        Args:
            history: Run summaries, newest first
            baseline_offset: Runs to skip; defaults to the configured offset
            name: Benchmark name used in log messages

        Returns:
            BaselineStats, or None on insufficient data
        """
        if baseline_offset is None:
            baseline_offset = self.config.baseline_offset
        try:
            return compute_baseline(history, self.config.min_points, baseline_offset)
        except InsufficientDataError as e:
            logger.debug("No baseline for %s: %s", name or "benchmark", e)
            return None

    def analyze_benchmark(self, name: str, history: Sequence[RunSummary]) -> BenchmarkAnalysis:
        """
        Classify the latest run of one benchmark.

        Args:
            name: Benchmark name
            history: Run summaries, newest first; history[0] is the run under test

        Returns:
            BenchmarkAnalysis for the benchmark
        """
        if not history:
            return BenchmarkAnalysis(
                name=name,
                latest=None,
                baseline=None,
                result=RegressionResult(status=RegressionStatus.INSUFFICIENT),
            )

        latest = history[0]
        offset = max(1, self.config.baseline_offset)
        baseline = self.compute_baseline(history, offset, name)
        result = detect_regression(latest, baseline, self.config.alpha)

        introducing_run_id = None
        if result.is_regression():
            # Runs left out of the baseline, oldest first
            recent = list(reversed(history[:offset]))
            introducing_run_id = find_introducing_run(recent, baseline, self.config.alpha)

        latest_ci_lower, latest_ci_upper, _ = run_ci95(latest)

        return BenchmarkAnalysis(
            name=name,
            latest=latest,
            baseline=baseline,
            result=result,
            introducing_run_id=introducing_run_id,
            latest_ci_lower=latest_ci_lower,
            latest_ci_upper=latest_ci_upper,
        )

    def analyze(self, histories: Mapping[str, Sequence[RunSummary]]) -> list[BenchmarkAnalysis]:
        """
        Analyze many benchmarks.

        Args:
            histories: Mapping of benchmark name to newest-first history

        Returns:
            List of BenchmarkAnalysis in the mapping's order
        """
        items = list(histories.items())

        if self.config.max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                analyses = list(pool.map(lambda item: self.analyze_benchmark(*item), items))
        else:
            analyses = [self.analyze_benchmark(name, history) for name, history in items]

        regressed = sum(1 for a in analyses if a.is_regression())
        insufficient = sum(1 for a in analyses if a.result.status == RegressionStatus.INSUFFICIENT)
        logger.info(
            "Analyzed %d benchmarks: %d regressed, %d insufficient",
            len(analyses), regressed, insufficient
        )
        return analyses

    def analyze_run(
        self,
        runs: Iterable[RunInfo],
        target_run_id: int,
        results_by_run: Mapping[int, Iterable[BenchmarkResult]]
    ) -> RegressionReport:
        """
        Analyze every benchmark of one run against its comparable history.

        Args:
            runs: All known runs
            target_run_id: Run under test
            results_by_run: Stored benchmark results keyed by run_id

        Returns:
            RegressionReport covering the benchmarks recorded in the target run

        Raises:
            InputValidationError: if the target run is unknown
        """
        window = comparable_window(runs, target_run_id, self.config.window)
        run_ids = [r.run_id for r in window]

        by_key: dict[BenchmarkKey, dict[int, BenchmarkResult]] = {}
        for run_id in run_ids:
            for result in results_by_run.get(run_id, ()):
                by_key.setdefault(result.key, {})[run_id] = result

        histories = {
            f"{category}/{name}": build_history(run_ids, per_run)
            for (category, name), per_run in by_key.items()
            if target_run_id in per_run
        }

        return RegressionReport(
            run_id=target_run_id,
            window=self.config.window,
            min_points=self.config.min_points,
            insufficient_history=len(run_ids) <= self.config.min_points,
            analyses=self.analyze(histories),
        )

    def annotate_trend(self, history: Sequence[RunSummary]) -> TrendAnnotation:
        """
        Classify every run of a benchmark's history against one baseline.

        The baseline is computed once with the configured offset; the run it
        is anchored to is marked as the baseline rather than tested.

        Args:
            history: Run summaries, newest first

        Returns:
            TrendAnnotation with one point per run, in history order
        """
        baseline = self.compute_baseline(history)
        points = []

        for run in history:
            ci_lower, ci_upper, sem = run_ci95(run)
            if baseline is not None and run.run_id == baseline.reference_run_id:
                status, change = RegressionStatus.BASELINE, None
            else:
                result = detect_regression(run, baseline, self.config.alpha)
                status, change = result.status, result.change_percent
            points.append(TrendPoint(
                run_id=run.run_id,
                median=run.median,
                ci_lower=ci_lower,
                ci_upper=ci_upper,
                sem=sem,
                status=status,
                baseline_run_id=baseline.reference_run_id if baseline else None,
                change_percent=change,
            ))

        return TrendAnnotation(points=points, baseline=baseline)

    @staticmethod
    def regressions(analyses: Iterable[BenchmarkAnalysis]) -> list[BenchmarkAnalysis]:
        """Filter analyses down to regressed benchmarks"""
        return [a for a in analyses if a.is_regression()]


@dataclass(frozen=True)
class RunComparison:
    """Direct comparison of one benchmark between two runs"""
    category: str
    name: str
    baseline_ns: int
    current_ns: int
    change_percent: float
    is_regression: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            'category': self.category,
            'name': self.name,
            'baseline_ns': self.baseline_ns,
            'current_ns': self.current_ns,
            'change_percent': self.change_percent,
            'is_regression': self.is_regression,
        }


def compare_runs(
    baseline_results: Iterable[BenchmarkResult],
    current_results: Iterable[BenchmarkResult],
    threshold_percent: float | None = None
) -> list[RunComparison]:
    """
    Compare average timings of two runs benchmark by benchmark.

    This is a plain percentage comparison without any noise model; use
    RegressionAnalyzer for statistically sound decisions.

    Args:
        baseline_results: Results of the reference run
        current_results: Results of the run under test
        threshold_percent: Slowdown above which a benchmark counts as
            regressed; defaults to the configured compare threshold

    Returns:
        One RunComparison per benchmark present in both runs, in baseline order
    """
    if threshold_percent is None:
        threshold_percent = get_config().compare_threshold_percent

    current_by_key = {r.key: r.avg_ns for r in current_results}
    comparisons = []

    for base in baseline_results:
        if base.key not in current_by_key:
            continue
        current_ns = current_by_key[base.key]
        change = (current_ns - base.avg_ns) / base.avg_ns * 100.0 if base.avg_ns != 0 else 0.0
        comparisons.append(RunComparison(
            category=base.category,
            name=base.name,
            baseline_ns=base.avg_ns,
            current_ns=current_ns,
            change_percent=change,
            is_regression=change > threshold_percent,
        ))

    return comparisons
