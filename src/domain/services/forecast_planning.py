"""Domain service helpers for sizing forecasts and aggregating predictions."""

from datetime import timedelta
from typing import Dict, Sequence

from src.domain.entities.errors import EmptyHistoricalDataError
from src.domain.entities.values import ForecastedDataPoint, PeriodType

HORIZON_RATIO = 0.3
MIN_HORIZON = 1


def calculate_optimal_horizon(historical_count: int) -> int:
    """Size the forecast horizon as 30% of the available history.

    Raises:
        EmptyHistoricalDataError: If no historical point is available.
    """

    if historical_count <= 0:
        raise EmptyHistoricalDataError(
            f"Historical data points must be more than 0, got: {historical_count}"
        )
    return max(int(historical_count * HORIZON_RATIO), MIN_HORIZON)


def calculate_aggregations(
    data_points: Sequence[ForecastedDataPoint],
) -> Dict[PeriodType, float]:
    """Sum predicted amounts over each period starting at the first prediction.

    Predictions are expected in ascending date order.
    """

    if not data_points:
        return {}

    start_date = data_points[0].date
    aggregations: Dict[PeriodType, float] = {}
    for period in PeriodType:
        end_date = start_date + timedelta(days=period.days - 1)
        total = 0.0
        for point in data_points:
            if point.date > end_date:
                break
            total += point.predicted_value.amount
        aggregations[period] = total
    return aggregations
