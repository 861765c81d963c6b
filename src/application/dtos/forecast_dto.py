"""
Application DTOs - Forecast

Data Transfer Objects exposing computed forecasts to the presentation layer.
"""

from __future__ import annotations

import datetime as dt
from datetime import date, datetime
from typing import List, Sequence

from pydantic import BaseModel, Field

from src.domain.entities.forecast import ForecastedConsumption
from src.domain.entities.values import ForecastedDataPoint, UtilityType


class DataPointResponseDTO(BaseModel):
    """Predicted consumption for one day."""

    date: dt.date
    predicted_consumption: float = Field(ge=0, description="Predicted amount")

    @classmethod
    def from_domain(cls, point: ForecastedDataPoint) -> "DataPointResponseDTO":
        return cls(date=point.date, predicted_consumption=point.predicted_value.amount)


class ForecastResponseDTO(BaseModel):
    """Forecast of a utility type."""

    id: str
    utility_type: UtilityType
    unit: str = Field(description="Measurement unit of the utility type")
    data_points: List[DataPointResponseDTO]
    computed_at: datetime
    start_date: date
    end_date: date
    duration_days: int = Field(ge=1)

    @classmethod
    def from_domain(cls, forecast: ForecastedConsumption) -> "ForecastResponseDTO":
        return cls(
            id=str(forecast.id),
            utility_type=forecast.utility_type,
            unit=forecast.utility_type.unit,
            data_points=[
                DataPointResponseDTO.from_domain(point)
                for point in forecast.data_points
            ],
            computed_at=forecast.computed_at,
            start_date=forecast.start_date,
            end_date=forecast.end_date,
            duration_days=forecast.duration_days,
        )


class ForecastListResponseDTO(BaseModel):
    """Collection of forecasts."""

    forecasts: List[ForecastResponseDTO] = Field(default_factory=list)
    count: int = 0

    @classmethod
    def from_domain(
        cls, forecasts: Sequence[ForecastedConsumption]
    ) -> "ForecastListResponseDTO":
        items = [ForecastResponseDTO.from_domain(forecast) for forecast in forecasts]
        return cls(forecasts=items, count=len(items))
