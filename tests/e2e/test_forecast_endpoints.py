from __future__ import annotations

from typing import cast

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from src.application.use_cases.compute_forecast_use_case import (
    ComputeForecastUseCase,
)
from src.application.use_cases.get_forecasts_use_case import GetForecastsUseCase
from src.application.use_cases.health_use_cases import GetHealthStatusUseCase
from src.domain.entities.errors import DomainError
from src.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth
from src.domain.entities.values import UtilityType
from src.infrastructure.database import MongoDatabase
from src.infrastructure.repositories.forecast_repository import ForecastRepository
from src.main.app import create_app
from src.main.config import AppSettings, SchedulerSettings
from src.main.container import get_container
from tests.conftest import (
    FakeMongoDatabase,
    RecordingThresholdNotifier,
    StubForecastingAlgorithm,
    StubHistoricalDataProvider,
    make_history,
)


class _HealthCheckService:
    async def evaluate(self) -> SystemHealth:
        return SystemHealth(
            status=ServiceStatus.UP,
            dependencies=[DependencyStatus(name="mongo", status=ServiceStatus.UP)],
        )


@pytest.fixture()
def notifier() -> RecordingThresholdNotifier:
    return RecordingThresholdNotifier()


@pytest.fixture()
def client(monkeypatch, notifier):
    monkeypatch.setattr(
        "src.main.app.get_settings",
        lambda: AppSettings(scheduler=SchedulerSettings(enabled=False)),
    )
    app = create_app()
    container = get_container()

    database = FakeMongoDatabase()
    repository = ForecastRepository(cast(MongoDatabase, database))
    provider = StubHistoricalDataProvider(
        histories={UtilityType.WATER: make_history(70)},
        failures={UtilityType.GAS: DomainError("monitoring down")},
    )

    container.mongo_database.override(providers.Object(database))
    container.compute_forecast_use_case.override(
        providers.Object(
            ComputeForecastUseCase(
                repository=repository,
                historical_data_provider=provider,
                forecasting_algorithm=StubForecastingAlgorithm(),
                threshold_notifier=notifier,
            )
        )
    )
    container.get_forecasts_use_case.override(
        providers.Object(GetForecastsUseCase(repository))
    )
    container.get_health_status_use_case.override(
        providers.Object(GetHealthStatusUseCase(_HealthCheckService()))
    )

    with TestClient(app) as test_client:
        yield test_client


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "up"


def test_forecasts_are_empty_before_computation(client):
    response = client.get("/api/forecasts")
    assert response.status_code == 200
    assert response.json() == {"forecasts": [], "count": 0}


def test_compute_all_then_list(client, notifier):
    response = client.post("/api/forecasts/compute")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert sorted(f["utility_type"] for f in body["forecasts"]) == [
        "ELECTRICITY",
        "WATER",
    ]
    assert len(notifier.notifications) == 2

    listed = client.get("/api/forecasts").json()
    assert listed["count"] == 2

    water = client.get("/api/forecasts", params={"utility_type": "water"}).json()
    assert water["count"] == 1
    assert water["forecasts"][0]["unit"] == "m³"
    assert len(water["forecasts"][0]["data_points"]) == 21


def test_compute_one_replaces_stored_forecast(client):
    first = client.post("/api/forecasts/WATER/compute")
    second = client.post("/api/forecasts/water/compute")

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["id"] != second.json()["id"]

    stored = client.get("/api/forecasts/WATER").json()
    assert stored["count"] == 1
    assert stored["forecasts"][0]["id"] == second.json()["id"]
    assert stored["forecasts"][0]["data_points"][0]["predicted_consumption"] == 100.0


def test_compute_one_failure_is_reported(client):
    response = client.post("/api/forecasts/GAS/compute")
    assert response.status_code == 500


def test_unknown_utility_type_is_rejected(client):
    assert client.get("/api/forecasts/steam").status_code == 400
    assert client.post("/api/forecasts/steam/compute").status_code == 400
    assert client.get("/api/forecasts", params={"utility_type": "x"}).status_code == 400
