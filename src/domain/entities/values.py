"""
Domain Entities - Value Objects

Immutable value types shared by the forecasting domain: validated
consumption amounts, utility and period enumerations, forecast identifiers
and single forecasted points.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict
from uuid import UUID, uuid4

from src.domain.entities.errors import (
    InvalidConsumptionValueError,
    InvalidForecastIdError,
    UnknownUtilityTypeError,
)


@dataclass(frozen=True, order=True, slots=True)
class ConsumptionValue:
    """Non-negative consumption amount.

    Every arithmetic operation returns a new validated instance, so an
    amount below zero can never be observed.
    """

    amount: float

    def __post_init__(self) -> None:
        try:
            amount = float(self.amount)
        except (TypeError, ValueError) as exc:
            raise InvalidConsumptionValueError(
                f"Consumption amount must be numeric: {self.amount!r}"
            ) from exc
        if not math.isfinite(amount):
            raise InvalidConsumptionValueError(
                f"Consumption amount must be finite: {amount}"
            )
        if amount < 0.0:
            raise InvalidConsumptionValueError(
                f"Consumption amount cannot be negative: {amount}",
                {"amount": amount},
            )
        object.__setattr__(self, "amount", amount)

    @classmethod
    def of(cls, amount: float) -> "ConsumptionValue":
        return cls(amount)

    def __add__(self, other: "ConsumptionValue") -> "ConsumptionValue":
        if not isinstance(other, ConsumptionValue):
            return NotImplemented
        return ConsumptionValue(self.amount + other.amount)

    def __sub__(self, other: "ConsumptionValue") -> "ConsumptionValue":
        if not isinstance(other, ConsumptionValue):
            return NotImplemented
        result = self.amount - other.amount
        if result < 0.0:
            raise InvalidConsumptionValueError(
                f"Consumption value cannot be negative after subtraction: {result}",
                {"amount": result},
            )
        return ConsumptionValue(result)

    def __mul__(self, multiplier: float) -> "ConsumptionValue":
        if multiplier < 0.0:
            raise InvalidConsumptionValueError(
                f"Multiplier cannot be negative: {multiplier}",
                {"multiplier": multiplier},
            )
        return ConsumptionValue(self.amount * multiplier)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "ConsumptionValue":
        if divisor <= 0.0:
            raise InvalidConsumptionValueError(
                f"Divisor must be positive: {divisor}", {"divisor": divisor}
            )
        return ConsumptionValue(self.amount / divisor)

    def to_formatted_string(self, decimals: int = 2) -> str:
        """Render the amount with a fixed number of decimal places."""
        return f"{self.amount:.{decimals}f}"

    def __str__(self) -> str:
        return self.to_formatted_string()


class UtilityType(str, Enum):
    """Category of metered consumption."""

    ELECTRICITY = "ELECTRICITY"
    GAS = "GAS"
    WATER = "WATER"

    @property
    def unit(self) -> str:
        return _UTILITY_UNITS[self]

    @classmethod
    def from_string(cls, value: str) -> "UtilityType":
        """Parse a utility type, ignoring case and surrounding whitespace.

        Raises:
            UnknownUtilityTypeError: If the value is not a known utility type.
        """
        normalized = value.strip().upper() if isinstance(value, str) else value
        try:
            return cls(normalized)
        except ValueError as exc:
            raise UnknownUtilityTypeError(str(value)) from exc


_UTILITY_UNITS: Dict[UtilityType, str] = {
    UtilityType.ELECTRICITY: "Wh",
    UtilityType.GAS: "m³",
    UtilityType.WATER: "m³",
}


class PeriodType(str, Enum):
    """Aggregation periods reported to the threshold service."""

    ONE_DAY = "ONE_DAY"
    ONE_WEEK = "ONE_WEEK"
    ONE_MONTH = "ONE_MONTH"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]


_PERIOD_DAYS: Dict[PeriodType, int] = {
    PeriodType.ONE_DAY: 1,
    PeriodType.ONE_WEEK: 7,
    PeriodType.ONE_MONTH: 30,
}


@dataclass(frozen=True, slots=True)
class ForecastId:
    """Strongly-typed identifier for forecasts."""

    value: UUID

    @classmethod
    def generate(cls) -> "ForecastId":
        return cls(uuid4())

    @classmethod
    def from_string(cls, value: Any) -> "ForecastId":
        """Parse a forecast identifier from its UUID text form.

        Raises:
            InvalidForecastIdError: If the value is not a valid UUID.
        """
        try:
            return cls(UUID(str(value)))
        except (TypeError, ValueError) as exc:
            raise InvalidForecastIdError(str(value)) from exc

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class ForecastedDataPoint:
    """Predicted consumption for a single day."""

    date: date
    predicted_value: ConsumptionValue
