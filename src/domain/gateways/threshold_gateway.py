"""
Domain Gateway - Threshold Notifier

This module defines the gateway interface used to forward aggregated
forecast totals to the threshold evaluation service.
"""

from abc import ABC, abstractmethod
from typing import Mapping

from src.domain.entities.values import PeriodType, UtilityType


class IThresholdNotifier(ABC):
    """Interface for threshold notification implementations."""

    @abstractmethod
    async def notify_forecast_aggregations(
        self,
        utility_type: UtilityType,
        aggregations: Mapping[PeriodType, float],
    ) -> None:
        """
        Deliver the aggregated forecast totals of a utility type.

        Args:
            utility_type: Utility the aggregations belong to
            aggregations: Aggregated predicted consumption per period
        """
        pass
