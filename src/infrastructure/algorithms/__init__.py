"""Forecasting algorithm implementations."""

from .random_forest_forecast import RandomForestForecast

__all__ = ["RandomForestForecast"]
