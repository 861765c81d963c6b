"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ForecastValidationError(DomainError):
    """Raised when forecast inputs or domain invariants are violated."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class InvalidConsumptionValueError(ForecastValidationError):
    """Raised when a consumption amount is negative or malformed."""


class UnknownUtilityTypeError(ForecastValidationError):
    """Raised when a text value does not name a supported utility type."""

    def __init__(self, value: str):
        super().__init__(f"Unknown utility type: '{value}'", {"value": value})


class InvalidForecastIdError(ForecastValidationError):
    """Raised when a forecast identifier cannot be parsed."""

    def __init__(self, value: str):
        super().__init__(f"Invalid ForecastId format: '{value}'", {"value": value})


class InvalidForecastHorizonError(ForecastValidationError):
    """Raised when the requested forecast horizon is not a positive integer."""

    def __init__(self, horizon: Any):
        super().__init__(
            f"Forecast horizon must be positive: {horizon}", {"horizon": horizon}
        )


class EmptyHistoricalDataError(ForecastValidationError):
    """Raised when no historical observations are available."""

    def __init__(self, message: str = "Historical data cannot be empty"):
        super().__init__(message)


class InsufficientHistoricalDataError(ForecastValidationError):
    """Raised when history covers too small a share of history plus horizon."""

    def __init__(self, required_percent: int, actual_percent: int):
        self.required_percent = required_percent
        self.actual_percent = actual_percent
        super().__init__(
            "Insufficient historical data for the requested horizon. "
            f"At least {required_percent}% historical (got {actual_percent}%).",
            {"required_percent": required_percent, "actual_percent": actual_percent},
        )


class InsufficientTrainingDataError(ForecastValidationError):
    """Raised when history is too short to build a single training window."""

    def __init__(self, historical_count: int, window_size: int):
        super().__init__(
            f"At least {window_size + 1} historical points are required to train "
            f"with a window of {window_size} (got {historical_count}).",
            {"historical_count": historical_count, "window_size": window_size},
        )


class InvalidDateRangeError(ForecastValidationError):
    """Raised when a date range ends before it starts."""


class EmptyForecastError(ForecastValidationError):
    """Raised when a forecast is built without any daily prediction."""

    def __init__(self) -> None:
        super().__init__("Forecast must contain at least one daily prediction")


class ForecastOperationError(DomainError):
    """Raised when a persistence operation on a forecast fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
