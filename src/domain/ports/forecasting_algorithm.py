"""
Domain Port - Forecasting Algorithm

Strategy contract for the algorithms turning historical daily observations
into a multi-day consumption forecast.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence

from src.domain.entities.errors import (
    EmptyHistoricalDataError,
    InsufficientHistoricalDataError,
    InvalidForecastHorizonError,
)
from src.domain.entities.time_series import HistoricalData
from src.domain.entities.values import ForecastedDataPoint

MIN_HISTORICAL_RATIO = 0.7
PERCENT = 100


class IForecastingAlgorithm(ABC):
    """Interface for forecasting algorithm implementations."""

    name: str = ""

    @abstractmethod
    async def forecast(
        self,
        historical_data: Sequence[HistoricalData],
        horizon: int,
    ) -> List[ForecastedDataPoint]:
        """
        Forecast the ``horizon`` days following the last historical date.

        Args:
            historical_data: Daily observations; implementations sort them by
                date and do not rely on the caller's ordering
            horizon: Number of future days to predict (must be > 0)

        Returns:
            One forecasted point per day, in date order

        Raises:
            ForecastValidationError: When inputs are invalid
        """
        pass

    def validate_inputs(
        self,
        historical_data: Sequence[HistoricalData],
        horizon: int,
    ) -> None:
        """Check the inputs shared by every forecasting algorithm."""

        if isinstance(horizon, bool) or not isinstance(horizon, int) or horizon <= 0:
            raise InvalidForecastHorizonError(horizon)
        if not historical_data:
            raise EmptyHistoricalDataError()

        count = len(historical_data)
        ratio = count / (count + horizon)
        if ratio < MIN_HISTORICAL_RATIO:
            raise InsufficientHistoricalDataError(
                required_percent=int(MIN_HISTORICAL_RATIO * PERCENT),
                actual_percent=int(ratio * PERCENT),
            )
