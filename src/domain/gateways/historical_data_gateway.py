"""
Domain Gateway - Historical Data

This module defines the gateway interface used to retrieve the daily
consumption history of a utility type.
"""

from abc import ABC, abstractmethod
from typing import List

from src.domain.entities.time_series import HistoricalData
from src.domain.entities.values import UtilityType


class IHistoricalDataProvider(ABC):
    """Interface for historical consumption providers."""

    @abstractmethod
    async def fetch_historical_data(
        self, utility_type: UtilityType
    ) -> List[HistoricalData]:
        """
        Fetch daily observations for a utility type.

        Args:
            utility_type: Utility whose history is requested

        Returns:
            Observations in ascending date order, possibly empty
        """
        pass
