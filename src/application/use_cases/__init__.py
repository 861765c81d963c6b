"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application. Use cases orchestrate the flow of data to and from
the entities and implement the business rules of the application.
"""

from .compute_forecast_use_case import ComputeForecastUseCase
from .get_forecasts_use_case import GetForecastsUseCase
from .health_use_cases import GetHealthStatusUseCase

__all__ = [
    "ComputeForecastUseCase",
    "GetForecastsUseCase",
    "GetHealthStatusUseCase",
]
