#!/usr/bin/env python3
"""
Tests for benchmark output parsing and integer summaries
"""

import json
import math

import pytest

from benchtrend.core.errors import BenchmarkOutputParseError, InputValidationError
from benchtrend.stats.record import (
    BenchmarkResult,
    parse_benchmark_output,
    summarize_output,
    summarize_samples,
)
from benchtrend.stats.summary import Sample


def _line(category, *results):
    return json.dumps({"benchmark": category, "results": list(results)})


def _result(name, avg, mem_stats=None):
    data = {
        "name": name,
        "min_ns": avg - 10,
        "avg_ns": avg,
        "max_ns": avg + 10,
        "total_ns": avg * 100,
        "iterations": 100,
    }
    if mem_stats:
        data["mem_stats"] = mem_stats
    return data


class TestParseBenchmarkOutput:
    """Test parse_benchmark_output()"""

    def test_groups_repeated_invocations(self):
        """Each repeated invocation adds one sample per benchmark"""
        lines = [
            _line("render", _result("frame", 100), _result("layout", 50)),
            _line("render", _result("frame", 110), _result("layout", 55)),
        ]
        grouped = parse_benchmark_output(lines)

        assert list(grouped) == [("render", "frame"), ("render", "layout")]
        assert [s.avg_ns for s in grouped[("render", "frame")]] == [100, 110]
        assert len(grouped[("render", "layout")]) == 2

    def test_skips_noise_lines(self):
        """Blank lines, the memory banner and non-JSON chatter are ignored"""
        lines = [
            "",
            "Memory stats enabled",
            "building...",
            _line("text", _result("wrap", 300)),
            "   ",
        ]
        grouped = parse_benchmark_output(lines)
        assert list(grouped) == [("text", "wrap")]

    def test_reads_memory_stats(self):
        """Named memory counters land on the sample"""
        lines = [_line("buffer", _result("alloc", 10, [{"name": "peak", "bytes": 4096}]))]
        sample = parse_benchmark_output(lines)[("buffer", "alloc")][0]
        assert sample.mem_stats == {"peak": 4096}

    def test_invalid_json_reports_line_number(self):
        """Malformed JSON fails with its 1-based line number"""
        lines = [_line("a", _result("x", 1)), "", "{not json"]

        with pytest.raises(BenchmarkOutputParseError) as exc_info:
            parse_benchmark_output(lines)

        assert exc_info.value.line_number == 3
        assert exc_info.value.cause is not None


class TestSummarizeSamples:
    """Test summarize_samples()"""

    def test_single_sample(self):
        """One sample is copied through with zero spread"""
        sample = Sample(min_ns=90, avg_ns=100, max_ns=120, total_ns=1000, iterations=10, mem_stats={"peak": 1})
        result = summarize_samples("cat", "bench", [sample])

        assert result.sample_count == 1
        assert result.std_dev_ns == 0
        assert result.p50_ns == result.p95_ns == result.p99_ns == 100
        assert result.min_ns == 90
        assert result.max_ns == 120
        assert result.mem_stats == {"peak": 1}

    def test_multiple_samples(self):
        """Extremes, sums and interpolated percentiles over sample averages"""
        samples = [
            Sample(min_ns=80, avg_ns=100, max_ns=150, total_ns=1000, iterations=10),
            Sample(min_ns=70, avg_ns=200, max_ns=250, total_ns=2000, iterations=10),
            Sample(min_ns=90, avg_ns=300, max_ns=350, total_ns=3000, iterations=10),
        ]
        result = summarize_samples("cat", "bench", samples)

        assert result.key == ("cat", "bench")
        assert result.min_ns == 70
        assert result.max_ns == 350
        assert result.avg_ns == 200
        assert result.std_dev_ns == 100
        assert result.p50_ns == 200
        assert 289 <= result.p95_ns <= 290
        assert 297 <= result.p99_ns <= 298
        assert result.total_ns == 6000
        assert result.iterations == 30
        assert result.sample_count == 3

    def test_empty_samples_raise(self):
        with pytest.raises(InputValidationError):
            summarize_samples("cat", "bench", [])

    def test_summarize_output(self):
        """Output parsing and summarizing in one step"""
        lines = [
            _line("render", _result("frame", 100)),
            _line("render", _result("frame", 120)),
        ]
        results = summarize_output(lines)

        assert len(results) == 1
        assert results[0].name == "frame"
        assert results[0].sample_count == 2
        assert results[0].p50_ns == 110


class TestBenchmarkResult:
    """Test conversion to run summaries"""

    def _result(self, **overrides):
        values = dict(
            category="cat", name="bench", min_ns=90, avg_ns=100, max_ns=110,
            std_dev_ns=8, p50_ns=99, p95_ns=108, p99_ns=109,
            total_ns=1000, iterations=10, sample_count=4,
        )
        values.update(overrides)
        return BenchmarkResult(**values)

    def test_to_run_summary_uses_p50(self):
        summary = self._result().to_run_summary(run_id=12)

        assert summary.run_id == 12
        assert summary.median == 99.0
        assert summary.std_dev == 8.0
        assert summary.sem == 8.0 / math.sqrt(4)
        assert summary.is_valid

    def test_single_sample_summary_has_no_spread(self):
        summary = self._result(sample_count=1, std_dev_ns=0).to_run_summary(run_id=1)

        assert summary.sample_count == 1
        assert summary.sem == 0.0
        assert not summary.is_valid

    def test_to_dict(self):
        data = self._result().to_dict()
        assert data["p50_ns"] == 99
        assert data["mem_stats"] == {}

    def test_hashable(self):
        """Results can key dictionaries even with memory counters"""
        result = self._result(mem_stats={"peak": 1})
        lookup = {result: "frame"}
        assert lookup[self._result(mem_stats={"peak": 1})] == "frame"
