"""
MongoDB Forecast Repository - Infrastructure Layer

This module implements the IForecastRepository interface using MongoDB
as the underlying data store. One document is kept per utility type.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

import structlog

from src.domain.entities.errors import DomainError, ForecastOperationError
from src.domain.entities.forecast import ForecastedConsumption
from src.domain.entities.values import (
    ConsumptionValue,
    ForecastedDataPoint,
    ForecastId,
    UtilityType,
)
from src.domain.repositories.forecast_repository import IForecastRepository
from src.infrastructure.database import MongoDatabase

logger = structlog.get_logger(__name__)


class ForecastRepository(IForecastRepository):
    """MongoDB implementation of the ForecastRepository."""

    COLLECTION_NAME = "forecasts"

    def __init__(self, mongo_database: MongoDatabase):
        """
        Initialize the MongoDB forecast repository.

        Args:
            mongo_database: MongoDB database client
        """
        self.db = mongo_database

    def _to_document(self, forecast: ForecastedConsumption) -> Dict[str, Any]:
        """Convert a ForecastedConsumption entity to a MongoDB document."""
        return {
            "id": str(forecast.id),
            "utility_type": forecast.utility_type.value,
            "data_points": [
                {
                    "date": point.date.isoformat(),
                    "predicted_value": point.predicted_value.amount,
                }
                for point in forecast.data_points
            ],
            "computed_at": forecast.computed_at,
        }

    def _to_entity(self, document: Dict[str, Any]) -> ForecastedConsumption:
        """Convert a MongoDB document to a ForecastedConsumption entity."""
        computed_at = document["computed_at"]
        if isinstance(computed_at, str):
            computed_at = datetime.fromisoformat(computed_at)
        if computed_at.tzinfo is None:
            computed_at = computed_at.replace(tzinfo=timezone.utc)

        return ForecastedConsumption.from_persistence(
            forecast_id=ForecastId.from_string(document["id"]),
            utility_type=UtilityType.from_string(document["utility_type"]),
            data_points=[
                ForecastedDataPoint(
                    date=date.fromisoformat(point["date"]),
                    predicted_value=ConsumptionValue.of(point["predicted_value"]),
                )
                for point in document.get("data_points", [])
            ],
            computed_at=computed_at,
        )

    async def save(self, forecast: ForecastedConsumption) -> ForecastedConsumption:
        """Store the forecast, replacing any previous one for its utility type."""
        document = self._to_document(forecast)
        try:
            await self.db.replace_one(
                self.COLLECTION_NAME,
                {"utility_type": document["utility_type"]},
                document,
                upsert=True,
            )
        except Exception as e:
            raise ForecastOperationError(
                f"Failed to save forecast: {str(e)}",
                {"utility_type": document["utility_type"], "id": document["id"]},
            ) from e

        logger.debug(
            "forecast.repository.saved",
            utility_type=document["utility_type"],
            forecast_id=document["id"],
        )
        return forecast

    async def find_all(self) -> List[ForecastedConsumption]:
        try:
            documents = await self.db.find_many(
                self.COLLECTION_NAME, {}, sort_by="utility_type", limit=0
            )
            return [self._to_entity(doc) for doc in documents]
        except DomainError:
            raise
        except Exception as e:
            raise ForecastOperationError(
                f"Failed to list forecasts: {str(e)}"
            ) from e

    async def find_by_id(
        self, forecast_id: ForecastId
    ) -> Optional[ForecastedConsumption]:
        try:
            document = await self.db.find_one(
                self.COLLECTION_NAME, {"id": str(forecast_id)}
            )
        except Exception as e:
            raise ForecastOperationError(
                f"Failed to get forecast: {str(e)}", {"id": str(forecast_id)}
            ) from e
        return self._to_entity(document) if document else None

    async def find_by_utility(
        self, utility_type: UtilityType
    ) -> Optional[ForecastedConsumption]:
        try:
            document = await self.db.find_one(
                self.COLLECTION_NAME, {"utility_type": utility_type.value}
            )
        except Exception as e:
            raise ForecastOperationError(
                f"Failed to get forecast: {str(e)}",
                {"utility_type": utility_type.value},
            ) from e
        return self._to_entity(document) if document else None

    async def remove(self, forecast: ForecastedConsumption) -> bool:
        return await self.remove_by_id(forecast.id)

    async def remove_by_id(self, forecast_id: ForecastId) -> bool:
        return await self._delete({"id": str(forecast_id)})

    async def remove_by_utility(self, utility_type: UtilityType) -> bool:
        return await self._delete({"utility_type": utility_type.value})

    async def _delete(self, query: Dict[str, Any]) -> bool:
        try:
            return await self.db.delete_one(self.COLLECTION_NAME, query)
        except Exception as e:
            raise ForecastOperationError(
                f"Failed to delete forecast: {str(e)}", dict(query)
            ) from e
