"""Domain ports package."""

from .forecasting_algorithm import IForecastingAlgorithm
from .health_check import IHealthCheckService

__all__ = ["IForecastingAlgorithm", "IHealthCheckService"]
