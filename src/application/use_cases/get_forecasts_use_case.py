"""Use cases for reading stored forecasts."""

from typing import List, Optional

from src.domain.entities.forecast import ForecastedConsumption
from src.domain.entities.values import UtilityType
from src.domain.repositories.forecast_repository import IForecastRepository


class GetForecastsUseCase:
    """Read access to persisted forecasts."""

    def __init__(self, repository: IForecastRepository) -> None:
        self._repository = repository

    async def get_all(self) -> List[ForecastedConsumption]:
        return await self._repository.find_all()

    async def get_by_utility(
        self, utility_type: UtilityType
    ) -> Optional[ForecastedConsumption]:
        return await self._repository.find_by_utility(utility_type)
