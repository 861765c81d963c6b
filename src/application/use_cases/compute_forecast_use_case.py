"""
Application Use Case - Compute Forecast

Coordinates one end-to-end forecast per utility type:
  * Retrieval of the daily consumption history
  * Sizing of the forecast horizon from the available history
  * Prediction through the configured forecasting algorithm
  * Aggregation of predictions per period and threshold notification
  * Persistence of the resulting forecast
"""

from __future__ import annotations

import asyncio
from typing import List

import structlog

from src.domain.entities.forecast import ForecastedConsumption
from src.domain.entities.values import UtilityType
from src.domain.gateways.historical_data_gateway import IHistoricalDataProvider
from src.domain.gateways.threshold_gateway import IThresholdNotifier
from src.domain.ports.forecasting_algorithm import IForecastingAlgorithm
from src.domain.repositories.forecast_repository import IForecastRepository
from src.domain.services.forecast_planning import (
    calculate_aggregations,
    calculate_optimal_horizon,
)

logger = structlog.get_logger(__name__)


class ComputeForecastUseCase:
    """Computes, notifies and persists consumption forecasts."""

    def __init__(
        self,
        repository: IForecastRepository,
        historical_data_provider: IHistoricalDataProvider,
        forecasting_algorithm: IForecastingAlgorithm,
        threshold_notifier: IThresholdNotifier,
    ):
        self.repository = repository
        self.historical_data_provider = historical_data_provider
        self.forecasting_algorithm = forecasting_algorithm
        self.threshold_notifier = threshold_notifier

    async def compute_all(self) -> List[ForecastedConsumption]:
        """Compute forecasts for every utility type concurrently.

        A failure for one utility type is logged and leaves it out of the
        result; the other computations are not affected.
        """

        utility_types = list(UtilityType)
        outcomes = await asyncio.gather(
            *(self.compute_one(utility_type) for utility_type in utility_types),
            return_exceptions=True,
        )

        forecasts: List[ForecastedConsumption] = []
        for utility_type, outcome in zip(utility_types, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.warning(
                    "forecast.compute_all.utility_failed",
                    utility_type=utility_type.value,
                    error=str(outcome),
                    error_type=type(outcome).__name__,
                )
                continue
            forecasts.append(outcome)

        logger.info(
            "forecast.compute_all.completed",
            requested=len(utility_types),
            computed=len(forecasts),
        )
        return forecasts

    async def compute_one(self, utility_type: UtilityType) -> ForecastedConsumption:
        """Compute and persist the forecast of a single utility type.

        Raises:
            ForecastValidationError: When the history cannot support a forecast
            DomainError: When a downstream service or the repository fails
        """

        logger.info("forecast.compute.start", utility_type=utility_type.value)

        historical_data = await self.historical_data_provider.fetch_historical_data(
            utility_type
        )
        horizon = calculate_optimal_horizon(len(historical_data))
        data_points = await self.forecasting_algorithm.forecast(
            historical_data, horizon
        )

        aggregations = calculate_aggregations(data_points)
        await self.threshold_notifier.notify_forecast_aggregations(
            utility_type, aggregations
        )

        forecast = ForecastedConsumption.create(utility_type, data_points)
        persisted = await self.repository.save(forecast)

        logger.info(
            "forecast.compute.completed",
            utility_type=utility_type.value,
            forecast_id=str(persisted.id),
            historical_points=len(historical_data),
            horizon=horizon,
            algorithm=self.forecasting_algorithm.name,
        )
        return persisted
