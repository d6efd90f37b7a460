"""
Unified Error Handling for benchtrend

This module provides the exception hierarchy for the package:
- BenchTrendError: Base exception for all benchtrend errors
- ValidationError: Configuration and input validation errors
- AnalysisError: Baseline and regression analysis outcomes
- RecordError: Benchmark output ingestion errors

InsufficientDataError is a routine outcome (a brand-new benchmark has no
history), so callers are expected to handle it as a normal branch.
"""

from typing import Any


class BenchTrendError(Exception):
    """
    Base exception for all benchtrend errors.

    Carries a stable machine-readable code plus structured details, so an
    analysis service can hand the error to its clients unchanged.
    """

    code = "benchtrend_error"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None
    ):
        """
        Initialize benchtrend error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context
            cause: Optional underlying exception
        """
        self.message = message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def _present_details(self) -> dict[str, Any]:
        return {k: v for k, v in self.details.items() if v is not None and v != ""}

    def __str__(self) -> str:
        text = self.message
        if self.cause:
            text = f"{text}: {type(self.cause).__name__}: {self.cause}"
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, details={self.details!r})"

    def to_dict(self) -> dict[str, Any]:
        """Error payload: code, message, and the details that are set."""
        payload = {"error": self.code, "message": self.message}
        payload.update(self._present_details())
        if self.cause:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(BenchTrendError):
    """Base exception for validation failures."""
    code = "invalid"


class ConfigValidationError(ValidationError):
    """Raised when configuration validation fails."""

    code = "invalid_config"

    def __init__(
        self,
        config_name: str,
        parameter: str,
        value: Any,
        reason: str
    ):
        message = f"Invalid {config_name} configuration: '{parameter}' = {value!r} - {reason}"
        super().__init__(message, {
            "config": config_name,
            "parameter": parameter,
            "value": value,
            "reason": reason
        })


class InputValidationError(ValidationError):
    """Raised when a caller passes input that breaks a function contract."""

    code = "invalid_input"

    def __init__(
        self,
        input_name: str,
        expected: str,
        actual: str,
        reason: str = ""
    ):
        message = f"Invalid input '{input_name}': expected {expected}, got {actual}"
        if reason:
            message = f"{message}. {reason}"
        super().__init__(message, {
            "input": input_name,
            "expected": expected,
            "actual": actual,
            "reason": reason
        })


# =============================================================================
# Analysis Errors
# =============================================================================

class AnalysisError(BenchTrendError):
    """Base exception for baseline and regression analysis."""
    code = "analysis_failed"


class InsufficientDataError(AnalysisError):
    """Raised when a baseline cannot be computed from the supplied history."""

    code = "insufficient_data"

    def __init__(
        self,
        available: int,
        required: int,
        reason: str = "too_few_valid_runs",
        benchmark: str | None = None
    ):
        message = f"Insufficient data for regression analysis: {available} usable runs, {required} required"
        if benchmark:
            message = f"{message} for '{benchmark}'"
        super().__init__(message, {
            "available": available,
            "required": required,
            "reason": reason,
            "benchmark": benchmark
        })
        self.available = available
        self.required = required
        self.reason = reason
        self.benchmark = benchmark


# =============================================================================
# Record Errors
# =============================================================================

class RecordError(BenchTrendError):
    """Base exception for benchmark output ingestion."""
    code = "record_failed"


class BenchmarkOutputParseError(RecordError):
    """Raised when a line of benchmark output is not valid JSON."""

    code = "unparseable_output"

    def __init__(self, line_number: int, cause: Exception | None = None):
        message = f"Failed to parse benchmark JSON on line {line_number}"
        super().__init__(message, {"line": line_number}, cause)
        self.line_number = line_number


__all__ = [
    "BenchTrendError",
    "ValidationError",
    "ConfigValidationError",
    "InputValidationError",
    "AnalysisError",
    "InsufficientDataError",
    "RecordError",
    "BenchmarkOutputParseError",
]
