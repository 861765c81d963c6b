"""Domain services package."""

from .forecast_planning import calculate_aggregations, calculate_optimal_horizon

__all__ = ["calculate_aggregations", "calculate_optimal_horizon"]
