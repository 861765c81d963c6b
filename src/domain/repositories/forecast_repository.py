"""
Forecast Repository Interface

This module defines the interface for forecast repositories following
the repository pattern. It abstracts the data access operations
for forecast entities, decoupling them from specific implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities.forecast import ForecastedConsumption
from src.domain.entities.values import ForecastId, UtilityType


class IForecastRepository(ABC):
    """Interface for ForecastedConsumption repository implementations."""

    @abstractmethod
    async def save(self, forecast: ForecastedConsumption) -> ForecastedConsumption:
        """
        Persist a forecast, replacing any stored forecast of the same utility.

        Args:
            forecast: The forecast to persist

        Returns:
            The persisted forecast
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[ForecastedConsumption]:
        """
        Find all stored forecasts.

        Returns:
            List of persisted forecasts
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, forecast_id: ForecastId
    ) -> Optional[ForecastedConsumption]:
        """
        Find a forecast by its ID.

        Args:
            forecast_id: The unique identifier of the forecast to find

        Returns:
            The forecast if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_utility(
        self, utility_type: UtilityType
    ) -> Optional[ForecastedConsumption]:
        """
        Find the current forecast of a utility type.

        Args:
            utility_type: Utility to look up

        Returns:
            The forecast if found, None otherwise
        """
        pass

    @abstractmethod
    async def remove(self, forecast: ForecastedConsumption) -> bool:
        """Remove a forecast. Returns True when a document was deleted."""
        pass

    @abstractmethod
    async def remove_by_id(self, forecast_id: ForecastId) -> bool:
        """Remove a forecast by ID. Returns True when a document was deleted."""
        pass

    @abstractmethod
    async def remove_by_utility(self, utility_type: UtilityType) -> bool:
        """Remove the forecast of a utility. Returns True when one was deleted."""
        pass
