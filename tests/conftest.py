from __future__ import annotations

import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Mapping, Sequence

import pytest

from src.domain.entities.forecast import ForecastedConsumption
from src.domain.entities.time_series import HistoricalData
from src.domain.entities.values import (
    ConsumptionValue,
    ForecastedDataPoint,
    PeriodType,
    UtilityType,
)
from src.domain.gateways.historical_data_gateway import IHistoricalDataProvider
from src.domain.gateways.threshold_gateway import IThresholdNotifier
from src.domain.ports.forecasting_algorithm import IForecastingAlgorithm

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def make_history(
    count: int, start: date = date(2025, 1, 1), base: float = 100.0
) -> List[HistoricalData]:
    return [
        HistoricalData(
            timestamp=start + timedelta(days=offset),
            value=ConsumptionValue.of(base + offset),
        )
        for offset in range(count)
    ]


def make_points(
    count: int, start: date = date(2025, 2, 1), base: float = 100.0
) -> List[ForecastedDataPoint]:
    return [
        ForecastedDataPoint(
            date=start + timedelta(days=offset),
            predicted_value=ConsumptionValue.of(base + offset),
        )
        for offset in range(count)
    ]


class StubHistoricalDataProvider(IHistoricalDataProvider):
    def __init__(
        self,
        histories: Mapping[UtilityType, List[HistoricalData]] | None = None,
        failures: Mapping[UtilityType, Exception] | None = None,
        default_count: int = 70,
    ) -> None:
        self._histories = dict(histories or {})
        self._failures = dict(failures or {})
        self._default_count = default_count
        self.calls: List[UtilityType] = []

    async def fetch_historical_data(
        self, utility_type: UtilityType
    ) -> List[HistoricalData]:
        self.calls.append(utility_type)
        if utility_type in self._failures:
            raise self._failures[utility_type]
        return self._histories.get(utility_type, make_history(self._default_count))


class StubForecastingAlgorithm(IForecastingAlgorithm):
    """Predicts ``100 + step`` for each day after the last observation."""

    name = "Stub"

    def __init__(self) -> None:
        self.calls: List[tuple[int, int]] = []

    async def forecast(
        self, historical_data: Sequence[HistoricalData], horizon: int
    ) -> List[ForecastedDataPoint]:
        self.validate_inputs(historical_data, horizon)
        self.calls.append((len(historical_data), horizon))
        last = historical_data[-1].timestamp
        return make_points(horizon, start=last + timedelta(days=1))


class RecordingThresholdNotifier(IThresholdNotifier):
    def __init__(self) -> None:
        self.notifications: List[tuple[UtilityType, Dict[PeriodType, float]]] = []

    async def notify_forecast_aggregations(
        self, utility_type: UtilityType, aggregations: Mapping[PeriodType, float]
    ) -> None:
        self.notifications.append((utility_type, dict(aggregations)))


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self._skip = 0
        self._limit = 0

    def sort(self, key: str | None = None, direction: int = 1) -> "FakeCursor":
        if key:
            self._documents.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    def skip(self, amount: int) -> "FakeCursor":
        self._skip = amount
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return iter(docs)


class FakeCollection:
    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.last_query: Dict[str, Any] | None = None
        self.created_indexes: List[tuple[Any, ...]] = []

    def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        self.last_query = query
        return next((doc for doc in self.documents if self._matches(doc, query)), None)

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self.last_query = query
        return FakeCursor([doc for doc in self.documents if self._matches(doc, query)])

    def replace_one(
        self, query: Dict[str, Any], document: Dict[str, Any], upsert: bool = False
    ) -> Any:
        for index, existing in enumerate(self.documents):
            if self._matches(existing, query):
                self.documents[index] = dict(document)
                return SimpleNamespace(matched_count=1, acknowledged=True)
        if upsert:
            self.documents.append(dict(document))
        return SimpleNamespace(matched_count=0, acknowledged=True)

    def delete_one(self, query: Dict[str, Any]) -> Any:
        for index, existing in enumerate(self.documents):
            if self._matches(existing, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1, acknowledged=True)
        return SimpleNamespace(deleted_count=0, acknowledged=True)

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in query.items())


class FakeMongoDatabase:
    """In-memory stand-in for MongoDatabase with the same async surface."""

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.fail_with: Exception | None = None
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def find_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        self._check()
        return self.get_collection(collection_name).find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: str | None = None,
        sort_direction: int = 1,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Dict[str, Any]]:
        self._check()
        cursor = self.get_collection(collection_name).find(query)
        return list(cursor.sort(sort_by, sort_direction).skip(skip).limit(limit))

    async def replace_one(
        self,
        collection_name: str,
        query: Dict[str, Any],
        document: Dict[str, Any],
        upsert: bool = False,
    ) -> Dict[str, Any]:
        self._check()
        result = self.get_collection(collection_name).replace_one(
            query, document, upsert=upsert
        )
        if not upsert and result.matched_count == 0:
            raise Exception(f"Document not found in {collection_name}")
        return document

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> bool:
        self._check()
        return self.get_collection(collection_name).delete_one(query).deleted_count > 0

    async def create_indexes(self) -> None:
        return None

    def ping(self) -> None:
        self._check()

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def sample_forecast() -> ForecastedConsumption:
    return ForecastedConsumption.create(
        UtilityType.WATER,
        make_points(5),
        computed_at=datetime(2025, 1, 31, 0, 0, tzinfo=timezone.utc),
    )
