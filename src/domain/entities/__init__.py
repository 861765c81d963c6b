"""
Domain Entities Package

This package contains the core domain entities and business logic.
"""

from .errors import (
    DomainError,
    EmptyForecastError,
    EmptyHistoricalDataError,
    ForecastOperationError,
    ForecastValidationError,
    InsufficientHistoricalDataError,
    InsufficientTrainingDataError,
    InvalidConsumptionValueError,
    InvalidDateRangeError,
    InvalidForecastHorizonError,
    InvalidForecastIdError,
    UnknownUtilityTypeError,
)
from .forecast import ForecastedConsumption
from .health import DependencyStatus, ServiceStatus, SystemHealth
from .time_series import HistoricalData
from .values import (
    ConsumptionValue,
    ForecastedDataPoint,
    ForecastId,
    PeriodType,
    UtilityType,
)

__all__ = [
    "ConsumptionValue",
    "UtilityType",
    "PeriodType",
    "ForecastId",
    "ForecastedDataPoint",
    "HistoricalData",
    "ForecastedConsumption",
    "SystemHealth",
    "DependencyStatus",
    "ServiceStatus",
    "DomainError",
    "ForecastValidationError",
    "InvalidConsumptionValueError",
    "UnknownUtilityTypeError",
    "InvalidForecastIdError",
    "InvalidForecastHorizonError",
    "EmptyHistoricalDataError",
    "InsufficientHistoricalDataError",
    "InsufficientTrainingDataError",
    "InvalidDateRangeError",
    "EmptyForecastError",
    "ForecastOperationError",
]
