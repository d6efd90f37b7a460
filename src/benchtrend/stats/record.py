"""
Benchmark output ingestion.

Reads the JSON-lines output of an external benchmark binary, groups the
results into samples per (category, name), and reduces each group to an
integer-nanosecond BenchmarkResult suitable for storage.
"""

import json
import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..core.errors import BenchmarkOutputParseError, InputValidationError
from .summary import RunSummary, Sample, percentile, sample_std_dev

logger = logging.getLogger(__name__)

MEMORY_STATS_BANNER = "Memory stats enabled"

BenchmarkKey = tuple[str, str]


@dataclass(frozen=True)
class BenchmarkResult:
    """Aggregated result of one benchmark in one run, in integer nanoseconds"""
    category: str
    name: str
    min_ns: int
    avg_ns: int
    max_ns: int
    std_dev_ns: int
    p50_ns: int
    p95_ns: int
    p99_ns: int
    total_ns: int
    iterations: int
    sample_count: int
    mem_stats: dict[str, int] = field(default_factory=dict, hash=False)

    @property
    def key(self) -> BenchmarkKey:
        return (self.category, self.name)

    def to_run_summary(self, run_id: int) -> RunSummary:
        """Convert to the floating-point summary used by the regression engine"""
        if self.sample_count < 2:
            return RunSummary(run_id=run_id, median=float(self.p50_ns), sample_count=max(1, self.sample_count))
        std_dev = float(self.std_dev_ns)
        return RunSummary(
            run_id=run_id,
            median=float(self.p50_ns),
            std_dev=std_dev,
            sem=std_dev / math.sqrt(self.sample_count),
            sample_count=self.sample_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'category': self.category,
            'name': self.name,
            'min_ns': self.min_ns,
            'avg_ns': self.avg_ns,
            'max_ns': self.max_ns,
            'std_dev_ns': self.std_dev_ns,
            'p50_ns': self.p50_ns,
            'p95_ns': self.p95_ns,
            'p99_ns': self.p99_ns,
            'total_ns': self.total_ns,
            'iterations': self.iterations,
            'sample_count': self.sample_count,
            'mem_stats': dict(self.mem_stats),
        }


def _sample_from_json(result: dict[str, Any]) -> Sample:
    mem_stats = {m['name']: int(m['bytes']) for m in result.get('mem_stats') or []}
    return Sample(
        min_ns=int(result.get('min_ns', 0)),
        avg_ns=int(result.get('avg_ns', 0)),
        max_ns=int(result.get('max_ns', 0)),
        total_ns=int(result.get('total_ns', 0)),
        iterations=int(result.get('iterations', 0)),
        mem_stats=mem_stats,
    )


def parse_benchmark_output(lines: Iterable[str]) -> dict[BenchmarkKey, list[Sample]]:
    """
    Group benchmark output lines into samples per (category, name).

    Each JSON line holds {"benchmark": category, "results": [...]}. Repeated
    invocations of the benchmark binary append further lines, and every
    occurrence of a (category, name) pair becomes one more sample. Keys keep
    first-seen order.

    Raises:
        BenchmarkOutputParseError: on a line that starts with '{' but is not valid JSON
    """
    samples: dict[BenchmarkKey, list[Sample]] = {}

    for line_number, line in enumerate(lines, start=1):
        trimmed = line.strip()
        if not trimmed or trimmed == MEMORY_STATS_BANNER:
            continue
        if not trimmed.startswith('{'):
            continue

        try:
            bench = json.loads(trimmed)
            category = bench['benchmark']
            for result in bench.get('results') or []:
                key = (category, result['name'])
                samples.setdefault(key, []).append(_sample_from_json(result))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise BenchmarkOutputParseError(line_number, e) from e

    logger.debug("Parsed %d benchmarks from output", len(samples))
    return samples


def summarize_samples(category: str, name: str, samples: Sequence[Sample]) -> BenchmarkResult:
    """
    Reduce one benchmark's samples to an integer-nanosecond BenchmarkResult.

    Raises:
        InputValidationError: if samples is empty
    """
    n = len(samples)
    if n == 0:
        raise InputValidationError("samples", "at least one sample", "0 samples", f"benchmark {category}/{name}")

    first = samples[0]
    if n == 1:
        return BenchmarkResult(
            category=category,
            name=name,
            min_ns=first.min_ns,
            avg_ns=first.avg_ns,
            max_ns=first.max_ns,
            std_dev_ns=0,
            p50_ns=first.avg_ns,
            p95_ns=first.avg_ns,
            p99_ns=first.avg_ns,
            total_ns=first.total_ns,
            iterations=first.iterations,
            sample_count=1,
            mem_stats=dict(first.mem_stats),
        )

    avgs = [s.avg_ns for s in samples]
    return BenchmarkResult(
        category=category,
        name=name,
        min_ns=min(s.min_ns for s in samples),
        avg_ns=sum(avgs) // n,
        max_ns=max(s.max_ns for s in samples),
        std_dev_ns=int(sample_std_dev(avgs)),
        p50_ns=int(percentile(avgs, 0.50)),
        p95_ns=int(percentile(avgs, 0.95)),
        p99_ns=int(percentile(avgs, 0.99)),
        total_ns=sum(s.total_ns for s in samples),
        iterations=sum(s.iterations for s in samples),
        sample_count=n,
        mem_stats=dict(first.mem_stats),
    )


def summarize_output(lines: Iterable[str]) -> list[BenchmarkResult]:
    """Parse benchmark output and summarize every benchmark found, in first-seen order"""
    grouped = parse_benchmark_output(lines)
    return [summarize_samples(category, name, samples) for (category, name), samples in grouped.items()]
